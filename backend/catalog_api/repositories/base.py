"""
Base Repository implementation.
Provides the common data access patterns of the versioned aggregates.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import ColumnElement, Select, func, select, update
from sqlalchemy.orm import Session

from catalog_api.models import Base


ModelT = TypeVar("ModelT", bound=Base)
FileT = TypeVar("FileT", bound=Base)


class BaseRepository(ABC, Generic[ModelT, FileT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: the aggregate root model class
    - file_model: the attachment model class
    - file_parent_column: FK column of the attachment pointing to the root
    - _load_options(): eager loading for detail reads
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @property
    @abstractmethod
    def file_model(self) -> type[FileT]:
        """Return the attachment model class."""
        ...

    @property
    @abstractmethod
    def file_parent_column(self) -> Any:
        """Return the attachment FK column."""
        ...

    def _load_options(self, **relations: bool) -> list[Any]:
        """Loader options for the requested relations. Override in subclasses."""
        return []

    def _base_query(self) -> Select:
        return select(self.model)

    # =========================================================================
    # Reads
    # =========================================================================

    def find_by_id(self, entity_id: int, **relations: bool) -> ModelT | None:
        """
        Find entity by ID.

        Args:
            entity_id: Entity ID
            relations: with_<relation>=True flags for eager loading

        Returns:
            Entity or None
        """
        query = (
            self._base_query()
            .where(self.model.id == entity_id)
            .options(*self._load_options(**relations))
        )
        return self._db.execute(query).unique().scalar_one_or_none()

    def find_page(
        self,
        clauses: Sequence[ColumnElement[bool]] = (),
        *,
        offset: int = 0,
        limit: int | None = None,
    ) -> Sequence[ModelT]:
        """
        Find one page of entities matching all clauses, ordered by ID.

        Args:
            clauses: Boolean clauses, AND-combined
            offset: Rows to skip
            limit: Maximum rows, None for all

        Returns:
            List of entities
        """
        query = self._base_query().where(*clauses).order_by(self.model.id).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return self._db.execute(query).scalars().unique().all()

    def count(self, clauses: Sequence[ColumnElement[bool]] = ()) -> int:
        """Count entities matching all clauses."""
        query = select(func.count()).select_from(self.model).where(*clauses)
        return self._db.scalar(query) or 0

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists."""
        query = select(func.count()).select_from(self.model).where(self.model.id == entity_id)
        return (self._db.scalar(query) or 0) > 0

    def exists_by(self, column: Any, value: Any, exclude_id: int | None = None) -> bool:
        """Check if an entity with column == value exists, other than exclude_id."""
        query = select(func.count()).select_from(self.model).where(column == value)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        return (self._db.scalar(query) or 0) > 0

    def find_file(self, entity_id: int) -> FileT | None:
        """Find the attachment of an entity."""
        query = select(self.file_model).where(self.file_parent_column == entity_id)
        return self._db.scalar(query)

    # =========================================================================
    # Writes (caller owns the transaction)
    # =========================================================================

    def add(self, entity: ModelT) -> ModelT:
        """Stage a new entity and flush to obtain its ID."""
        self._db.add(entity)
        self._db.flush()
        return entity

    def update_versioned(self, entity_id: int, expected_version: int, values: dict[str, Any]) -> int:
        """
        Update scalar columns and increment the version in one statement.

        The row is only touched while its version still equals
        expected_version.

        Returns:
            Number of rows updated (0 or 1)
        """
        statement = (
            update(self.model)
            .where(self.model.id == entity_id, self.model.version == expected_version)
            .values(**values, version=self.model.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = self._db.execute(statement)
        return result.rowcount

    def delete_file(self, entity_id: int) -> bool:
        """Delete the attachment of an entity. Returns False if it had none."""
        file = self.find_file(entity_id)
        if file is None:
            return False
        self._db.delete(file)
        self._db.flush()
        return True

    def delete(self, entity: ModelT) -> None:
        self._db.delete(entity)
        self._db.flush()
