"""
Club write endpoints.

Create, update and upload require the admin or user role, delete requires admin.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, File, Header, Request, Response, UploadFile, status
from sqlalchemy.orm import Session

from catalog_api.routers._common import etag_for, read_upload, require_if_match
from catalog_api.routers.clubs.schemas import ClubCreate, ClubUpdate
from catalog_api.services.domain import ClubWriteService
from shared.config.constants import DELETE_ROLES, WRITE_ROLES
from shared.infrastructure.db import get_db
from shared.security import require_roles


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_club(
    body: ClubCreate,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user: dict = Depends(require_roles(*WRITE_ROLES)),
) -> Response:
    """Create a club. The Location header points to the new club."""
    club_id = ClubWriteService(db).create(body.to_values(), background_tasks=background_tasks)
    location = f"{str(request.url).rstrip('/')}/{club_id}"
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.post("/{club_id}", status_code=status.HTTP_204_NO_CONTENT)
def upload_club_logo(
    club_id: int,
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: dict = Depends(require_roles(*WRITE_ROLES)),
) -> Response:
    """Store the club logo. Replaces an existing one."""
    data = read_upload(file)
    ClubWriteService(db).add_file(club_id, data, file.filename or f"club-{club_id}", len(data))
    location = str(request.url_for("get_club_logo", club_id=club_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"Location": location})


@router.put("/{club_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_club(
    club_id: int,
    body: ClubUpdate,
    if_match: str | None = Header(default=None, alias="If-Match"),
    db: Session = Depends(get_db),
    user: dict = Depends(require_roles(*WRITE_ROLES)),
) -> Response:
    """Update a club. Requires If-Match with the current version; returns the new ETag."""
    version = require_if_match(if_match)
    new_version = ClubWriteService(db).update(club_id, body.to_values(), version)
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"ETag": etag_for(new_version)})


@router.delete("/{club_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_club(
    club_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_roles(*DELETE_ROLES)),
) -> Response:
    """Delete a club. Succeeds whether or not it existed."""
    ClubWriteService(db).delete(club_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
