"""Base repository providing common SQLAlchemy CRUD helpers."""

import uuid
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy import delete as sql_delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.base import Base
from app.repositories.errors import StorageError, StorageErrorKind, translate_db_error
from app.repositories.partial import FieldUpdate, changed_values

ModelT = TypeVar("ModelT", bound=Base)


class SQLRepository(Generic[ModelT]):
    """
    CRUD over one ORM model. Every method either returns a model instance or
    raises StorageError; driver errors never leak past this class.

    Subclasses set model and entity (used in error messages) and may override
    _to_key when the primary key is not a UUID.
    """

    model: type[ModelT]
    entity: str = "record"

    def __init__(self, session: Session) -> None:
        self.session = session

    @property
    def _pk(self) -> Any:
        return self.model.__mapper__.primary_key[0]

    def _to_key(self, entity_id: Any) -> Any | None:
        """Coerce an external id to the primary key type; None when it cannot match any row."""
        if isinstance(entity_id, uuid.UUID):
            return entity_id
        try:
            return uuid.UUID(str(entity_id))
        except (TypeError, ValueError):
            return None

    def _not_found(self) -> StorageError:
        return StorageError(StorageErrorKind.NOT_FOUND, self.entity)

    def _fail(self, err: SQLAlchemyError) -> StorageError:
        self.session.rollback()
        return translate_db_error(err, self.entity)

    def get(self, entity_id: Any) -> ModelT:
        key = self._to_key(entity_id)
        if key is None:
            raise self._not_found()
        try:
            row = self.session.get(self.model, key)
        except SQLAlchemyError as e:
            raise self._fail(e) from e
        if row is None:
            raise self._not_found()
        return row

    def find_one(self, **criteria: Any) -> ModelT | None:
        try:
            return self.session.scalars(select(self.model).filter_by(**criteria).limit(1)).first()
        except SQLAlchemyError as e:
            raise self._fail(e) from e

    def list_all(self, *order_by: Any, **criteria: Any) -> list[ModelT]:
        stmt = select(self.model).filter_by(**criteria)
        if order_by:
            stmt = stmt.order_by(*order_by)
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise self._fail(e) from e

    def create(self, values: Mapping[str, Any]) -> ModelT:
        row = self.model(**values)
        try:
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail(e) from e
        return row

    def replace(self, entity_id: Any, values: Mapping[str, Any]) -> ModelT:
        """Full-replace update: every column in values is overwritten, whatever the client sent."""
        return self._update(entity_id, dict(values))

    def update_partial(self, entity_id: Any, changes: Mapping[str, FieldUpdate[Any]]) -> ModelT:
        """
        PATCH update: only SetTo fields are written, in one UPDATE ... RETURNING.

        With no SetTo fields this is a plain read of the current row. Unique violations
        come back from the database constraint as StorageError(CONFLICT) and the row is
        left untouched.
        """
        values = changed_values(changes)
        if not values:
            return self.get(entity_id)
        return self._update(entity_id, values)

    def _update(self, entity_id: Any, values: dict[str, Any]) -> ModelT:
        key = self._to_key(entity_id)
        if key is None:
            raise self._not_found()
        stmt = (
            update(self.model)
            .where(self._pk == key)
            .values(**values)
            .returning(self.model)
        )
        try:
            row = self.session.scalars(stmt).one_or_none()
            if row is None:
                self.session.rollback()
                raise self._not_found()
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail(e) from e
        return row

    def delete(self, entity_id: Any) -> None:
        key = self._to_key(entity_id)
        if key is None:
            raise self._not_found()
        try:
            result = self.session.execute(sql_delete(self.model).where(self._pk == key))
            if result.rowcount == 0:
                self.session.rollback()
                raise self._not_found()
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(e) from e
