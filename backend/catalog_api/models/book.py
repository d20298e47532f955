"""
Book Models: Book, Title, Illustration, BookFile.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import BookType, Limits

from .base import Base, FileMixin, VersionedMixin


class Book(VersionedMixin, Base):
    """
    A book. Written with optimistic locking.
    Inherits: version, created_at, updated_at from VersionedMixin.
    """

    __tablename__ = "book"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    isbn: Mapped[str] = mapped_column(String(17), nullable=False, unique=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    book_type: Mapped[Optional[BookType]] = mapped_column(
        Enum(BookType, name="book_type", native_enum=False), nullable=True
    )
    price: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    discount: Mapped[Decimal] = mapped_column(Numeric(4, 3), nullable=False, default=Decimal(0))
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    release_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    homepage: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_URL_LENGTH), nullable=True)
    # Keyword labels as JSON array, e.g. ["JAVASCRIPT", "TYPESCRIPT"]
    keywords: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)

    # Relationships
    title: Mapped["Title"] = relationship(
        back_populates="book",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="joined",
    )
    illustrations: Mapped[list["Illustration"]] = relationship(
        back_populates="book",
        cascade="all, delete-orphan",
        order_by="Illustration.id",
    )
    file: Mapped[Optional["BookFile"]] = relationship(
        back_populates="book",
        uselist=False,
        cascade="all, delete-orphan",
    )


class Title(Base):
    """Title and subtitle of a book (1:1)."""

    __tablename__ = "title"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(Limits.MAX_TITLE_LENGTH), nullable=False)
    subtitle: Mapped[Optional[str]] = mapped_column(String(Limits.MAX_SUBTITLE_LENGTH), nullable=True)
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("book.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    book: Mapped["Book"] = relationship(back_populates="title")


class Illustration(Base):
    """Caption and content type of an illustration in a book (1:N)."""

    __tablename__ = "illustration"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    caption: Mapped[str] = mapped_column(String(Limits.MAX_CAPTION_LENGTH), nullable=False)
    content_type: Mapped[str] = mapped_column(String(Limits.MAX_CONTENT_TYPE_LENGTH), nullable=False)
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("book.id", ondelete="CASCADE"), nullable=False, index=True
    )

    book: Mapped["Book"] = relationship(back_populates="illustrations")


class BookFile(FileMixin, Base):
    """Binary attachment of a book, e.g. a cover image or a trailer (0..1)."""

    __tablename__ = "book_file"

    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("book.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    book: Mapped["Book"] = relationship(back_populates="file")
