"""
Club read endpoints. Public, no authentication.
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
from catalog_api.routers.clubs.schemas import ClubListOutput, ClubOutput
from catalog_api.services.domain import ClubReadService
from catalog_api.services.pageable import Pageable
from shared.infrastructure.db import get_db
from shared.utils.exceptions import NotFoundError


router = APIRouter()


@router.get("/{club_id}", response_model=ClubOutput)
def get_club(
    club_id: int,
    response: Response,
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
    db: Session = Depends(get_db),
):
    """Get a club with stadium and players. 304 if the client holds the current version."""
    club = ClubReadService(db).find_by_id(club_id, with_players=True)

    cached = not_modified(if_none_match, club.version)
    if cached is not None:
        return cached

    response.headers["ETag"] = etag_for(club.version)
    return ClubOutput.model_validate(club)


@router.get("", response_model=PageOutput[ClubListOutput] | CountOutput)
def list_clubs(
    only: str | None = None,
    pageable: Pageable = Depends(get_pageable),
    params: dict[str, Any] = Depends(get_search_params),
    db: Session = Depends(get_db),
):
    """Search clubs. With only=count just the number of matches is returned."""
    service = ClubReadService(db)
    if only == "count":
        return CountOutput(count=service.count(params))

    result = service.find(params, pageable)
    items = [ClubListOutput.model_validate(c) for c in result.content]
    return page_output(items, pageable, result.total_elements)


@router.get("/file/{club_id}")
def get_club_logo(club_id: int, db: Session = Depends(get_db)):
    """Stream the logo of a club inline."""
    logo = ClubReadService(db).find_file(club_id)
    if logo is None:
        raise NotFoundError("Club logo", club_id)
    return file_response(logo.data, logo.filename, logo.mimetype)
