"""
Base class of the search predicate builders.

A builder turns a flat mapping of string search parameters into a tuple of
SQLAlchemy boolean clauses. The repositories AND-combine them with
`select(...).where(*clauses)`, and use the same clauses for the count.

Rules shared by every entity family:
- keys outside the allow-list reject the whole search
- values that cannot be parsed reject the whole search
- enum values outside the vocabulary reject the whole search
All rejections raise InvalidSearchParametersError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, Iterable, Mapping

from sqlalchemy import ColumnElement, Text, cast

from shared.config.logging import get_logger
from shared.utils.exceptions import InvalidSearchParametersError

logger = get_logger(__name__)


class WhereBuilder(ABC):
    """
    Subclasses declare ALLOWED_KEYS and ENUM_KEYS and implement build().

    ENUM_KEYS maps a parameter name to the Enum whose values it accepts.
    """

    ALLOWED_KEYS: ClassVar[frozenset[str]] = frozenset()
    ENUM_KEYS: ClassVar[dict[str, type[Enum]]] = {}

    @abstractmethod
    def build(self, params: Mapping[str, Any] | None) -> tuple[ColumnElement[bool], ...]:
        """Translate search parameters into boolean clauses."""
        ...

    # =========================================================================
    # Checks
    # =========================================================================

    def check_keys(self, params: Mapping[str, Any]) -> None:
        unknown = sorted(key for key in params if key not in self.ALLOWED_KEYS)
        if unknown:
            raise InvalidSearchParametersError(f"unknown keys: {', '.join(unknown)}")

    def check_enums(self, params: Mapping[str, Any]) -> None:
        for key, enum_cls in self.ENUM_KEYS.items():
            value = params.get(key)
            if value is None:
                continue
            if value not in {member.value for member in enum_cls}:
                raise InvalidSearchParametersError(f"invalid value for {key}: {value}")

    def validate(self, params: Mapping[str, Any]) -> None:
        self.check_keys(params)
        self.check_enums(params)

    # =========================================================================
    # Value parsers
    # =========================================================================

    @staticmethod
    def parse_int(key: str, value: Any) -> int:
        try:
            return int(str(value).strip())
        except ValueError:
            raise InvalidSearchParametersError(f"{key} is not an integer: {value}") from None

    @staticmethod
    def parse_decimal(key: str, value: Any) -> Decimal:
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidSearchParametersError(f"{key} is not a number: {value}") from None
        if not parsed.is_finite():
            raise InvalidSearchParametersError(f"{key} is not a number: {value}")
        return parsed

    @staticmethod
    def parse_bool(key: str, value: Any) -> bool:
        text = str(value).strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
        raise InvalidSearchParametersError(f"{key} is not a boolean: {value}")

    @staticmethod
    def parse_date(key: str, value: Any) -> date:
        text = str(value).strip()
        try:
            if "T" in text or " " in text:
                return datetime.fromisoformat(text).date()
            return date.fromisoformat(text)
        except ValueError:
            raise InvalidSearchParametersError(f"{key} is not an ISO date: {value}") from None

    # =========================================================================
    # Clauses
    # =========================================================================

    @staticmethod
    def contains_all(column: Any, labels: Iterable[str]) -> ColumnElement[bool] | None:
        """
        Clause matching rows whose JSON array column holds every label.

        Labels come from a closed vocabulary of upper-case identifiers, so
        a match on the quoted label inside the serialized array is exact.
        """
        conditions = [cast(column, Text).like(f'%"{label}"%') for label in labels]
        if not conditions:
            return None
        clause = conditions[0]
        for condition in conditions[1:]:
            clause = clause & condition
        return clause
