"""
Search predicates for clubs.
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import ColumnElement

from catalog_api.models import Club, Stadium
from shared.config.logging import get_logger

from .where_builder import WhereBuilder

logger = get_logger(__name__)


class ClubWhereBuilder(WhereBuilder):
    """
    Club search parameters:

    - name, phone: case-insensitive substring
    - city: case-insensitive substring of the stadium city
    - capacity: stadium capacity, at least
    - member_count: at least
    - founded: ISO date, on or after
    - website, email: exact
    """

    ALLOWED_KEYS = frozenset({
        "name",
        "founded",
        "city",
        "capacity",
        "website",
        "email",
        "phone",
        "member_count",
    })

    def build(self, params: Mapping[str, Any] | None) -> tuple[ColumnElement[bool], ...]:
        params = params or {}
        logger.debug("ClubWhereBuilder.build", params=dict(params))
        self.validate(params)

        clauses: list[ColumnElement[bool]] = []
        for key, value in params.items():
            if value is None:
                continue
            if key == "name":
                clauses.append(Club.name.icontains(value, autoescape=True))
            elif key == "founded":
                clauses.append(Club.founded >= self.parse_date(key, value))
            elif key == "city":
                clauses.append(Club.stadium.has(Stadium.city.icontains(value, autoescape=True)))
            elif key == "capacity":
                clauses.append(Club.stadium.has(Stadium.capacity >= self.parse_int(key, value)))
            elif key == "website":
                clauses.append(Club.website == value)
            elif key == "email":
                clauses.append(Club.email == value)
            elif key == "phone":
                clauses.append(Club.phone.icontains(value, autoescape=True))
            elif key == "member_count":
                clauses.append(Club.member_count >= self.parse_int(key, value))

        return tuple(clauses)
