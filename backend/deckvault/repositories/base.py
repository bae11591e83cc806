"""Base repository with shared get-by-ID patterns.

Subclasses set ``model_class`` and ``resource_name``; override
``_base_query()`` to apply default filters. Content repositories use it to
hide soft-deleted rows, so callers never filter on ``deleted_at``.
"""

from typing import TypeVar, Generic, Optional, Type

import sqlalchemy.exc
from sqlalchemy.orm import Session, Query

from ..database import Base
from ..exceptions import ConflictError, NotFoundError

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:   The SQLAlchemy model (e.g., Folder)
        id_column:     Name of the primary-key column (default "id")
        resource_name: Noun used in NotFoundError messages
    """

    model_class: Type[ModelT]
    id_column: str = "id"
    resource_name: str = "resource"

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        return self.db.query(self.model_class)

    def get_by_id(self, entity_id: str) -> ModelT:
        """Get entity by primary key. Raises NotFoundError if missing."""
        entity = self.get_by_id_optional(entity_id)
        if entity is None:
            raise NotFoundError(self.resource_name, entity_id)
        return entity

    def get_by_id_optional(self, entity_id: str) -> Optional[ModelT]:
        col = getattr(self.model_class, self.id_column)
        return self._base_query().filter(col == entity_id).first()

    def _flush(self, conflict_message: str) -> None:
        """Flush pending writes, translating constraint violations into ConflictError."""
        try:
            self.db.flush()
        except sqlalchemy.exc.IntegrityError as e:
            self.db.rollback()
            raise ConflictError(conflict_message, details={"constraint": str(e.orig)}) from e


class SoftDeleteRepository(BaseRepository[ModelT]):
    """Repository over a table with a ``deleted_at`` column."""

    def _base_query(self) -> Query:
        return self.db.query(self.model_class).filter(self.model_class.deleted_at.is_(None))
