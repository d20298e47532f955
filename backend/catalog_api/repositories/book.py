"""
Book Repository.
"""

from typing import Any

from sqlalchemy.orm import selectinload

from catalog_api.models import Book, BookFile
from .base import BaseRepository


class BookRepository(BaseRepository[Book, BookFile]):
    """Data access for books. Title is always joined, illustrations on request."""

    @property
    def model(self) -> type[Book]:
        return Book

    @property
    def file_model(self) -> type[BookFile]:
        return BookFile

    @property
    def file_parent_column(self) -> Any:
        return BookFile.book_id

    def _load_options(self, *, with_illustrations: bool = False, **_: bool) -> list[Any]:
        options: list[Any] = []
        if with_illustrations:
            options.append(selectinload(Book.illustrations))
        return options

    def exists_by_isbn(self, isbn: str, exclude_id: int | None = None) -> bool:
        return self.exists_by(Book.isbn, isbn, exclude_id)
