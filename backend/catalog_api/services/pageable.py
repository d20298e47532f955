"""
Pagination normalizer.

Turns raw, untrusted page/size query values into a valid 0-based Pageable.
Never raises: anything unusable falls back to the defaults.

Usage:
    from catalog_api.services.pageable import create_pageable

    pageable = create_pageable(number="2", size="10")
    # Pageable(number=1, size=10)
    query = query.offset(pageable.offset).limit(pageable.size)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Sequence, TypeVar

from shared.config.constants import Limits

T = TypeVar("T")


@dataclass(frozen=True)
class Pageable:
    """
    Normalized paging request.

    Attributes:
        number: 0-based page number
        size: rows per page, 1..MAX_PAGE_SIZE
    """

    number: int = Limits.DEFAULT_PAGE_NUMBER
    size: int = Limits.DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return self.number * self.size


@dataclass
class Slice(Generic[T]):
    """One page of results plus the number of rows matching the whole query."""

    content: Sequence[T] = field(default_factory=list)
    total_elements: int = 0


def _parse_int(value: Any) -> int | None:
    """Parse an integral value from int or string. Floats like "2.0" count."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        parsed = float(str(value).strip())
    except ValueError:
        return None
    if not parsed.is_integer():
        return None
    return int(parsed)


def create_pageable(number: str | int | None = None, size: str | int | None = None) -> Pageable:
    """
    Build a Pageable from a 1-based page number and a page size.

    - number: integral and >= 1 gives number - 1, anything else gives 0
    - size: integral and within 1..MAX_PAGE_SIZE is kept, anything else
      gives DEFAULT_PAGE_SIZE
    """
    parsed_number = _parse_int(number)
    if parsed_number is None or parsed_number < 1:
        page_number = Limits.DEFAULT_PAGE_NUMBER
    else:
        page_number = parsed_number - 1

    parsed_size = _parse_int(size)
    if parsed_size is None or parsed_size < 1 or parsed_size > Limits.MAX_PAGE_SIZE:
        page_size = Limits.DEFAULT_PAGE_SIZE
    else:
        page_size = parsed_size

    return Pageable(number=page_number, size=page_size)
