"""
Book read endpoints. Public, no authentication.
"""

from typing import Any

from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.orm import Session

from catalog_api.routers._common import (
    CountOutput,
    PageOutput,
    etag_for,
    file_response,
    get_pageable,
    get_search_params,
    not_modified,
    page_output,
)
from catalog_api.routers.books.schemas import BookListOutput, BookOutput
from catalog_api.services.domain import BookReadService
from catalog_api.services.pageable import Pageable
from shared.infrastructure.db import get_db
from shared.utils.exceptions import NotFoundError


router = APIRouter()


@router.get("/{book_id}", response_model=BookOutput)
def get_book(
    book_id: int,
    response: Response,
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
    db: Session = Depends(get_db),
):
    """Get a book with its title and illustrations. 304 if the client holds the current version."""
    book = BookReadService(db).find_by_id(book_id, with_illustrations=True)

    cached = not_modified(if_none_match, book.version)
    if cached is not None:
        return cached

    response.headers["ETag"] = etag_for(book.version)
    return BookOutput.model_validate(book)


@router.get("", response_model=PageOutput[BookListOutput] | CountOutput)
def list_books(
    only: str | None = None,
    pageable: Pageable = Depends(get_pageable),
    params: dict[str, Any] = Depends(get_search_params),
    db: Session = Depends(get_db),
):
    """
    Search books. Every query parameter except page, size and only is a
    search criterion; with only=count just the number of matches is returned.
    """
    service = BookReadService(db)
    if only == "count":
        return CountOutput(count=service.count(params))

    result = service.find(params, pageable)
    items = [BookListOutput.model_validate(b) for b in result.content]
    return page_output(items, pageable, result.total_elements)


@router.get("/file/{book_id}")
def get_book_file(book_id: int, db: Session = Depends(get_db)):
    """Stream the attachment of a book inline."""
    book_file = BookReadService(db).find_file(book_id)
    if book_file is None:
        raise NotFoundError("Book file", book_id)
    return file_response(book_file.data, book_file.filename, book_file.mimetype)
