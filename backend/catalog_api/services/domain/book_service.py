"""
Book Services - read and write side of the book aggregate.

Handles:
- Lookup by ID, optionally with illustrations
- Search with pagination and count
- Create with title and illustrations, ISBN uniqueness
- Optimistic-locking update (scalar fields, optionally the title)
- Cover/trailer attachment and delete

Usage:
    from catalog_api.services.domain import BookReadService, BookWriteService

    book = BookReadService(db).find_by_id(1, with_illustrations=True)
    new_version = BookWriteService(db).update(1, {"rating": 4}, '"0"')
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value

from catalog_api.models import Book, BookFile, Illustration, Title
from catalog_api.repositories import BookRepository
from catalog_api.services.base_service import ReadService, WriteService
from catalog_api.services.search import BookWhereBuilder
from shared.config.logging import get_logger
from shared.utils.exceptions import IsbnExistsError

logger = get_logger(__name__)


class BookReadService(ReadService[Book, BookFile]):
    """
    Read access to books.

    Missing keywords are returned as an empty list.
    """

    entity_name = "Book"

    def __init__(self, db: Session):
        super().__init__(db, BookRepository(db), BookWhereBuilder())

    def _prepare(self, entity: Book) -> Book:
        if entity.keywords is None:
            set_committed_value(entity, "keywords", [])
        return entity


class BookWriteService(WriteService[Book, BookFile]):
    """
    Write access to books.

    Business rules:
    - ISBN is unique
    - A book is created together with its title and illustrations
    - An update may replace title and subtitle, never the illustrations
    """

    CHILD_KEYS = frozenset({"title", "illustrations"})

    def __init__(self, db: Session):
        super().__init__(db, BookReadService(db))

    def _find_duplicate(self, values: Mapping[str, Any], exclude_id: int | None) -> IsbnExistsError | None:
        isbn = values.get("isbn")
        if isbn is not None and self._repo.exists_by_isbn(isbn, exclude_id):
            return IsbnExistsError(isbn)
        return None

    def _build(self, data: Mapping[str, Any]) -> Book:
        values = {k: v for k, v in data.items() if k not in self.CHILD_KEYS}
        book = Book(**values)

        title = data.get("title")
        if title is not None:
            book.title = Title(title=title["title"], subtitle=title.get("subtitle"))
        book.illustrations = [
            Illustration(caption=item["caption"], content_type=item["content_type"])
            for item in data.get("illustrations") or []
        ]
        return book

    def _apply_children(self, entity: Book, children: Mapping[str, Any]) -> None:
        title = children.get("title")
        if title is None:
            return
        if entity.title is None:
            entity.title = Title(title=title["title"], subtitle=title.get("subtitle"))
        else:
            entity.title.title = title["title"]
            entity.title.subtitle = title.get("subtitle")

    def _label(self, entity: Book) -> str:
        return entity.title.title if entity.title is not None else "N/A"

    def _new_file(self, entity_id: int, data: bytes, filename: str, mimetype: str | None) -> BookFile:
        return BookFile(book_id=entity_id, data=data, filename=filename, mimetype=mimetype)
