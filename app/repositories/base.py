"""Session-bound repository base: inserts, atomic partial updates and deletes."""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.models.base import Base
from app.services.updates import ChangeSet, UpdateBuilder

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    Wraps one table. Reads return None when nothing matches; "not found" is
    never raised from here. Unique-constraint violations surface as
    ConflictError with conflict_message.
    """

    model: type[ModelT]
    conflict_message = "Resource already exists."

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, entity_id: int) -> ModelT | None:
        return self.db.get(self.model, entity_id)

    def new_builder(self) -> UpdateBuilder:
        return UpdateBuilder(self.model)

    def insert(self, entity: ModelT) -> ModelT:
        """Stamp created_at/updated_at, persist, and return the entity with its store-assigned id."""
        now = datetime.now(UTC)
        entity.created_at = now
        entity.updated_at = now
        self.db.add(entity)
        try:
            self.db.flush()
            # Read back inside the inserting transaction.
            self.db.refresh(entity)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Insert into %s rejected by constraint", self.model.__tablename__)
            raise ConflictError(self.conflict_message) from e
        return entity

    def apply_partial_update(
        self,
        criteria: Sequence[ColumnElement[bool]],
        change_set: ChangeSet,
    ) -> ModelT | None:
        """
        Apply change_set to the single row matching criteria in one statement
        and return its post-image, or None when no row matches.
        """
        stmt = (
            update(self.model)
            .where(*criteria)
            .values(change_set.values(self.model))
            .returning(self.model)
        )
        try:
            updated = self.db.scalars(
                stmt,
                execution_options={"synchronize_session": False, "populate_existing": True},
            ).one_or_none()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Update of %s rejected by constraint", self.model.__tablename__)
            raise ConflictError(self.conflict_message) from e
        return updated

    def commit_builder(
        self,
        criteria: Sequence[ColumnElement[bool]],
        builder: UpdateBuilder,
    ) -> ModelT | None:
        """Touch, build and apply builder: the standard path for every partial update."""
        return self.apply_partial_update(criteria, builder.touch().build())

    def delete_where(self, criteria: Sequence[ColumnElement[bool]], commit: bool = True) -> int:
        result = self.db.execute(
            delete(self.model).where(*criteria),
            execution_options={"synchronize_session": "fetch"},
        )
        if commit:
            self.db.commit()
        return result.rowcount or 0

    def _first(self, *criteria: ColumnElement[bool], order_by: Any = None) -> ModelT | None:
        query = self.db.query(self.model).filter(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        return query.first()
