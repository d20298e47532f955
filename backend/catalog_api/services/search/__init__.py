"""
Search predicate builders.

Usage:
    from catalog_api.services.search import BookWhereBuilder

    clauses = BookWhereBuilder().build({"title": "alpha", "python": "true"})
    rows = db.scalars(select(Book).where(*clauses))
"""

from .book_search import BookWhereBuilder
from .club_search import ClubWhereBuilder
from .keywords import KEYWORD_FLAGS, keywords_from_flags
from .where_builder import WhereBuilder

__all__ = [
    "WhereBuilder",
    "BookWhereBuilder",
    "ClubWhereBuilder",
    "KEYWORD_FLAGS",
    "keywords_from_flags",
]
