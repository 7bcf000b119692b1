import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from receptionist.database import Base
from receptionist.storage.base import ModelT, Repository, active_filters

logger = logging.getLogger(__name__)


class SqlAlchemyRepository(Repository[ModelT]):
    """Repository backed by one SQLAlchemy table.

    Column names match the pydantic field names of ``schema``.
    """

    def __init__(self, session_factory: sessionmaker, record_type: type[Base], schema: type[ModelT]) -> None:
        self._session_factory = session_factory
        self._record_type = record_type
        self._schema = schema

    def _to_schema(self, record) -> ModelT:
        return self._schema.model_validate(
            {column.name: getattr(record, column.name) for column in record.__table__.columns}
        )

    def add(self, item: ModelT) -> ModelT:
        db = self._session_factory()
        try:
            record = self._record_type(**item.model_dump())
            db.add(record)
            db.commit()
            db.refresh(record)
            return self._to_schema(record)
        except SQLAlchemyError:
            db.rollback()
            logger.exception('Failed to store %s %s', self._record_type.__tablename__, item.id)
            raise
        finally:
            db.close()

    def get(self, item_id: str) -> ModelT | None:
        db = self._session_factory()
        try:
            record = db.get(self._record_type, item_id)
            return self._to_schema(record) if record is not None else None
        finally:
            db.close()

    def update(self, item_id: str, changes: dict[str, Any]) -> ModelT | None:
        db = self._session_factory()
        try:
            record = db.get(self._record_type, item_id)
            if record is None:
                return None

            merged = self._schema.model_validate(
                {**self._to_schema(record).model_dump(), **changes, 'id': item_id}
            )
            for field_name, value in merged.model_dump().items():
                setattr(record, field_name, value)
            db.commit()
            db.refresh(record)
            return self._to_schema(record)
        except SQLAlchemyError:
            db.rollback()
            logger.exception('Failed to update %s %s', self._record_type.__tablename__, item_id)
            raise
        finally:
            db.close()

    def list(self, **filters: Any) -> list[ModelT]:
        db = self._session_factory()
        try:
            query = db.query(self._record_type)
            for field_name, value in active_filters(filters).items():
                query = query.filter(getattr(self._record_type, field_name) == value)
            return [self._to_schema(record) for record in query.order_by(self._record_type.id.asc()).all()]
        finally:
            db.close()
