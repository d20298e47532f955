"""
Base Service Classes for the versioned aggregates.

Provides the read side (lookup, search with pagination, count, attachment)
and the write side (create, optimistic-locking update, attachment upload,
delete) shared by books and clubs.

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Usage:
    from catalog_api.services.base_service import ReadService, WriteService

    class BookReadService(ReadService[Book, BookFile]):
        entity_name = "Book"

        def __init__(self, db: Session):
            super().__init__(db, BookRepository(db), BookWhereBuilder())
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Mapping, TypeVar, TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_api.models import Base
from catalog_api.repositories.base import BaseRepository
from catalog_api.services.events import notify_entity_created
from catalog_api.services.pageable import Pageable, Slice
from catalog_api.services.search import WhereBuilder
from shared.config.constants import VERSION_PATTERN, Limits
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.db import transaction
from shared.utils.exceptions import (
    AlreadyExistsError,
    NoResultsError,
    NotFoundError,
    VersionInvalidError,
    VersionOutdatedError,
)
from shared.utils.files import sniff_mimetype

if TYPE_CHECKING:
    from fastapi import BackgroundTasks

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
FileT = TypeVar("FileT", bound=Base)

_VERSION_RE = re.compile(VERSION_PATTERN)


def parse_version(token: str | None) -> int:
    """
    Parse a quoted version token such as "3" (with the quotes).

    Raises:
        VersionInvalidError: If the token is not a quoted 1-3 digit integer.
    """
    if token is None or not _VERSION_RE.fullmatch(token):
        raise VersionInvalidError(token)
    return int(token[1:-1])


class ReadService(ABC, Generic[ModelT, FileT]):
    """
    Read side of an aggregate.

    Subclasses set entity_name and may override _prepare() to normalise
    entities before they leave the service.
    """

    entity_name: ClassVar[str] = "Entity"

    def __init__(self, db: Session, repo: BaseRepository[ModelT, FileT], where_builder: WhereBuilder):
        self._db = db
        self._repo = repo
        self._where_builder = where_builder

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> BaseRepository[ModelT, FileT]:
        """Repository for data access."""
        return self._repo

    def _prepare(self, entity: ModelT) -> ModelT:
        """Hook to normalise an entity before returning it."""
        return entity

    def find_by_id(self, entity_id: int, **relations: bool) -> ModelT:
        """
        Get entity by ID.

        Args:
            entity_id: Entity primary key.
            relations: with_<relation>=True to eager-load a 1:N relation.

        Raises:
            NotFoundError: If entity not found.
        """
        logger.debug("find_by_id", entity=self.entity_name, entity_id=entity_id, **relations)
        entity = self._repo.find_by_id(entity_id, **relations)
        if entity is None:
            raise NotFoundError(self.entity_name, entity_id)
        return self._prepare(entity)

    def find(self, params: Mapping[str, Any] | None, pageable: Pageable) -> Slice[ModelT]:
        """
        Search with pagination.

        No parameters list everything. total_elements counts all rows
        matching the same parameters.

        Raises:
            InvalidSearchParametersError: Unknown key or unusable value.
            NoResultsError: The requested page is empty.
        """
        logger.debug("find", entity=self.entity_name, params=dict(params or {}), number=pageable.number, size=pageable.size)
        clauses = self._where_builder.build(params)

        if pageable.offset + pageable.size > Limits.MAX_ROW_OFFSET:
            raise NoResultsError(f'Invalid page "{pageable.number}".')

        rows = self._repo.find_page(clauses, offset=pageable.offset, limit=pageable.size)
        if not rows:
            if params:
                raise NoResultsError(
                    f"No {self.entity_name.lower()}s found for {dict(params)}, page {pageable.number}."
                )
            raise NoResultsError(f'Invalid page "{pageable.number}".')

        total_elements = self._repo.count(clauses)
        return Slice(content=[self._prepare(row) for row in rows], total_elements=total_elements)

    def count(self, params: Mapping[str, Any] | None = None) -> int:
        """Count entities, optionally filtered by search parameters."""
        clauses = self._where_builder.build(params)
        total = self._repo.count(clauses)
        logger.debug("count", entity=self.entity_name, count=total)
        return total

    def find_file(self, entity_id: int) -> FileT | None:
        """Get the attachment of an entity, None if it has none."""
        file = self._repo.find_file(entity_id)
        logger.debug("find_file", entity=self.entity_name, entity_id=entity_id, found=file is not None)
        return file


class WriteService(ABC, Generic[ModelT, FileT]):
    """
    Write side of an aggregate.

    Subclasses implement:
    - _find_duplicate(): uniqueness of the natural key
    - _build(): construct the aggregate with its children
    - _apply_children(): update 1:1 children during an update
    - _label(): human-readable name for notifications
    - _new_file(): construct an attachment row
    """

    def __init__(self, db: Session, read_service: ReadService[ModelT, FileT]):
        self._db = db
        self._read_service = read_service
        self._repo = read_service.repo

    @property
    def entity_name(self) -> str:
        return self._read_service.entity_name

    # =========================================================================
    # Commands
    # =========================================================================

    def create(self, data: Mapping[str, Any], *, background_tasks: "BackgroundTasks | None" = None) -> int:
        """
        Create the aggregate with its children in one transaction.

        Returns:
            ID of the new entity.

        Raises:
            AlreadyExistsError: If the natural key is already taken, also when
                a concurrent create takes it first.
        """
        logger.debug("create", entity=self.entity_name)
        self._validate_create(data)

        try:
            with transaction(self._db):
                entity = self._build(data)
                entity.version = 0
                self._repo.add(entity)
                entity_id = entity.id
                label = self._label(entity)
        except IntegrityError:
            self._raise_duplicate(data)
            raise

        logger.info(f"{self.entity_name} created", entity_id=entity_id)
        notify_entity_created(self.entity_name, entity_id, label, background_tasks=background_tasks)
        return entity_id

    def update(self, entity_id: int, data: Mapping[str, Any], version: str | None) -> int:
        """
        Update scalar fields (and 1:1 children) under optimistic locking.

        Args:
            entity_id: Entity ID.
            data: New field values.
            version: Quoted version token from If-Match, e.g. '"0"'.

        Returns:
            The new version.

        Raises:
            VersionInvalidError: Token is not a quoted 1-3 digit integer.
            NotFoundError: Entity not found.
            VersionOutdatedError: Token does not match the stored version,
                or another writer updated the row concurrently.
            AlreadyExistsError: The new natural key is taken by another entity.
        """
        logger.debug("update", entity=self.entity_name, entity_id=entity_id, version=version)
        expected = parse_version(version)

        entity = self._read_service.find_by_id(entity_id)
        self._check_version(expected, entity.version)
        loaded_version = entity.version

        values, children = self._split_update(data)
        self._validate_update(entity, values)
        try:
            with transaction(self._db):
                self._apply_children(entity, children)
                self._db.flush()
                rowcount = self._repo.update_versioned(entity_id, loaded_version, values)
                if rowcount != 1:
                    raise VersionOutdatedError(expected)
        except IntegrityError:
            self._raise_duplicate(values, exclude_id=entity_id)
            raise

        self._db.expire(entity)
        new_version = loaded_version + 1
        logger.debug("update done", entity=self.entity_name, entity_id=entity_id, version=new_version)
        return new_version

    def add_file(self, entity_id: int, data: bytes, filename: str, size: int) -> FileT:
        """
        Store an attachment, replacing an existing one.

        The stored MIME type is sniffed from the content.

        Raises:
            NotFoundError: Entity not found.
        """
        logger.debug("add_file", entity=self.entity_name, entity_id=entity_id, filename=filename, size=size)
        filename = filename[: Limits.MAX_FILENAME_LENGTH]
        with transaction(self._db):
            if not self._repo.exists(entity_id):
                raise NotFoundError(self.entity_name, entity_id)
            self._repo.delete_file(entity_id)
            mimetype = sniff_mimetype(data)
            file = self._new_file(entity_id, data, filename, mimetype)
            self._db.add(file)
            self._db.flush()

        logger.debug(
            "add_file done",
            file_id=file.id,
            byte_length=len(data),
            filename=filename,
            mimetype=mimetype,
        )
        return file

    def delete(self, entity_id: int) -> bool:
        """
        Delete the aggregate with its children and attachment.

        Returns:
            False if no such entity existed, True after deleting it.
        """
        logger.debug("delete", entity=self.entity_name, entity_id=entity_id)
        entity = self._repo.find_by_id(entity_id)
        if entity is None:
            return False

        with transaction(self._db):
            self._repo.delete(entity)

        logger.info(f"{self.entity_name} deleted", entity_id=entity_id)
        return True

    # =========================================================================
    # Optimistic locking
    # =========================================================================

    @staticmethod
    def _check_version(expected: int, stored: int) -> None:
        """
        Strict mode accepts only the stored version. Lenient mode rejects
        only tokens older than the stored version.
        """
        if settings.version_check_strict:
            outdated = expected != stored
        else:
            outdated = expected < stored
        if outdated:
            raise VersionOutdatedError(expected)

    # =========================================================================
    # Hooks (override in subclasses)
    # =========================================================================

    CHILD_KEYS: ClassVar[frozenset[str]] = frozenset()

    def _split_update(self, data: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        """Separate scalar column values from 1:1 child payloads."""
        values = {k: v for k, v in data.items() if k not in self.CHILD_KEYS}
        children = {k: v for k, v in data.items() if k in self.CHILD_KEYS}
        return values, children

    def _validate_create(self, data: Mapping[str, Any]) -> None:
        self._raise_duplicate(data)

    def _validate_update(self, entity: ModelT, values: Mapping[str, Any]) -> None:
        self._raise_duplicate(values, exclude_id=entity.id)

    def _find_duplicate(self, values: Mapping[str, Any], exclude_id: int | None) -> AlreadyExistsError | None:
        """The error for a natural key in values that another entity holds, if any."""
        return None

    def _raise_duplicate(self, values: Mapping[str, Any], exclude_id: int | None = None) -> None:
        """
        Raise the domain error if a natural key in values is taken. Checked
        before a write and again after a constraint violation rolled it back.
        """
        error = self._find_duplicate(values, exclude_id)
        if error is not None:
            raise error

    @abstractmethod
    def _build(self, data: Mapping[str, Any]) -> ModelT:
        ...

    def _apply_children(self, entity: ModelT, children: Mapping[str, Any]) -> None:
        pass

    @abstractmethod
    def _label(self, entity: ModelT) -> str:
        ...

    @abstractmethod
    def _new_file(self, entity_id: int, data: bytes, filename: str, mimetype: str | None) -> FileT:
        ...
