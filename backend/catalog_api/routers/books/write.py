"""
Book write endpoints.

Create, update and upload require the admin or user role, delete requires admin.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, File, Header, Request, Response, UploadFile, status
from sqlalchemy.orm import Session

from catalog_api.routers._common import etag_for, read_upload, require_if_match
from catalog_api.routers.books.schemas import BookCreate, BookUpdate
from catalog_api.services.domain import BookWriteService
from shared.config.constants import DELETE_ROLES, WRITE_ROLES
from shared.infrastructure.db import get_db
from shared.security import require_roles


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_book(
    body: BookCreate,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user: dict = Depends(require_roles(*WRITE_ROLES)),
) -> Response:
    """Create a book. The Location header points to the new book."""
    book_id = BookWriteService(db).create(body.to_values(), background_tasks=background_tasks)
    location = f"{str(request.url).rstrip('/')}/{book_id}"
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.post("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def upload_book_file(
    book_id: int,
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: dict = Depends(require_roles(*WRITE_ROLES)),
) -> Response:
    """Store a cover image or trailer. Replaces an existing attachment."""
    data = read_upload(file)
    BookWriteService(db).add_file(book_id, data, file.filename or f"book-{book_id}", len(data))
    location = str(request.url_for("get_book_file", book_id=book_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"Location": location})


@router.put("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_book(
    book_id: int,
    body: BookUpdate,
    if_match: str | None = Header(default=None, alias="If-Match"),
    db: Session = Depends(get_db),
    user: dict = Depends(require_roles(*WRITE_ROLES)),
) -> Response:
    """Update a book. Requires If-Match with the current version; returns the new ETag."""
    version = require_if_match(if_match)
    new_version = BookWriteService(db).update(book_id, body.to_values(), version)
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"ETag": etag_for(new_version)})


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(
    book_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(require_roles(*DELETE_ROLES)),
) -> Response:
    """Delete a book. Succeeds whether or not it existed."""
    BookWriteService(db).delete(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
