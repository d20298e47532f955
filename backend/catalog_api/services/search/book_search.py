"""
Search predicates for books.
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import ColumnElement

from catalog_api.models import Book, Title
from shared.config.constants import BookType
from shared.config.logging import get_logger

from .keywords import KEYWORD_FLAGS, keywords_from_flags
from .where_builder import WhereBuilder

logger = get_logger(__name__)


class BookWhereBuilder(WhereBuilder):
    """
    Book search parameters:

    - isbn: exact
    - title: case-insensitive substring of the title
    - rating: at least
    - price: at most
    - discount: at least
    - book_type: one of BookType, exact
    - available: "true" / "false"
    - release_date: ISO date, on or after
    - homepage: exact
    - javascript, typescript, java, python: "true" requires the keyword
    """

    ALLOWED_KEYS = frozenset({
        "isbn",
        "title",
        "rating",
        "price",
        "discount",
        "book_type",
        "available",
        "release_date",
        "homepage",
        *KEYWORD_FLAGS,
    })
    ENUM_KEYS = {"book_type": BookType}

    def build(self, params: Mapping[str, Any] | None) -> tuple[ColumnElement[bool], ...]:
        params = params or {}
        logger.debug("BookWhereBuilder.build", params=dict(params))
        self.validate(params)

        clauses: list[ColumnElement[bool]] = []
        for key, value in params.items():
            if value is None or key in KEYWORD_FLAGS:
                continue
            if key == "isbn":
                clauses.append(Book.isbn == value)
            elif key == "title":
                clauses.append(Book.title.has(Title.title.icontains(value, autoescape=True)))
            elif key == "rating":
                clauses.append(Book.rating >= self.parse_int(key, value))
            elif key == "price":
                clauses.append(Book.price <= self.parse_decimal(key, value))
            elif key == "discount":
                clauses.append(Book.discount >= self.parse_decimal(key, value))
            elif key == "book_type":
                clauses.append(Book.book_type == BookType(value))
            elif key == "available":
                clauses.append(Book.available.is_(self.parse_bool(key, value)))
            elif key == "release_date":
                clauses.append(Book.release_date >= self.parse_date(key, value))
            elif key == "homepage":
                clauses.append(Book.homepage == value)

        keyword_clause = self.contains_all(Book.keywords, keywords_from_flags(params))
        if keyword_clause is not None:
            clauses.append(keyword_clause)

        return tuple(clauses)
