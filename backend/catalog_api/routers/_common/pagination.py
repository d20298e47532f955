"""
Standardized pagination for the list endpoints.

Page and size arrive as raw query strings and are normalised by
create_pageable(), so a bad value falls back to the defaults instead of
failing validation.

Usage:
    from catalog_api.routers._common.pagination import get_pageable, page_output

    @router.get("")
    def list_books(pageable: Pageable = Depends(get_pageable), ...):
        result = service.find(params, pageable)
        return page_output(items, pageable, result.total_elements)
"""

import math
from typing import Any, Generic, TypeVar

from fastapi import Query, Request
from pydantic import BaseModel, ConfigDict, Field

from catalog_api.services.pageable import Pageable, create_pageable

T = TypeVar("T")

# Query parameters that steer the listing and are not search criteria
RESERVED_QUERY_PARAMS = frozenset({"page", "size", "only"})


class PageMetadata(BaseModel):
    """Paging information of a list response."""

    model_config = ConfigDict(populate_by_name=True)

    size: int
    number: int
    total_elements: int = Field(alias="totalElements")
    total_pages: int = Field(alias="totalPages")


class PageOutput(BaseModel, Generic[T]):
    """One page of entities plus paging information."""

    content: list[T]
    page: PageMetadata


class CountOutput(BaseModel):
    count: int


def get_pageable(
    page: str | None = Query(default=None, description="Page number, starting at 1"),
    size: str | None = Query(default=None, description="Rows per page"),
) -> Pageable:
    """FastAPI dependency for pagination."""
    return create_pageable(number=page, size=size)


def get_search_params(request: Request) -> dict[str, Any]:
    """FastAPI dependency: every query parameter except the paging ones."""
    return {
        key: value
        for key, value in request.query_params.items()
        if key not in RESERVED_QUERY_PARAMS
    }


def page_output(items: list[T], pageable: Pageable, total_elements: int) -> PageOutput[T]:
    """Wrap a page of output models with its paging information."""
    return PageOutput(
        content=items,
        page=PageMetadata(
            size=pageable.size,
            number=pageable.number,
            total_elements=total_elements,
            total_pages=math.ceil(total_elements / pageable.size),
        ),
    )
