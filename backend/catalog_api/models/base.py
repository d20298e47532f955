"""
Base class and mixins for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Integer, LargeBinary, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

from shared.config.constants import Limits


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class VersionedMixin:
    """
    Mixin for aggregate roots that are written with optimistic locking.

    Fields added:
    - version: concurrency token, 0 on insert, +1 on every accepted update
    - created_at, updated_at: audit timestamps
    """

    version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=True
    )

    @declared_attr.directive
    def __table_args__(cls) -> tuple:
        return (
            CheckConstraint("version >= 0", name=f"ck_{cls.__tablename__}_version"),
        )

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        id_val = getattr(self, "id", None)
        return f"<{class_name}(id={id_val}, version={self.version})>"


class FileMixin:
    """
    Mixin for binary attachments (image, video, logo).

    A parent has at most one attachment: the foreign key column of the
    concrete class is UNIQUE and uploads replace the row.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    filename: Mapped[str] = mapped_column(String(Limits.MAX_FILENAME_LENGTH), nullable=False)
    mimetype: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        return f"<{class_name}(id={self.id}, filename={self.filename!r}, mimetype={self.mimetype!r})>"
