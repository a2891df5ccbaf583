"""Generic record store over the three persisted collections.

Each collection maps to one SQLModel table keyed by ``id``. Every write opens
its own session and commits before returning, so writes are atomic per
record but there is no isolation across calls.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Tuple, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from ..errors import (
    DuplicateKeyError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from ..logging_config import get_logger
from ..models import AppSettings, Category, Transaction
from .database import SessionFactory

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=SQLModel)

COLLECTIONS: dict[str, type[SQLModel]] = {
    "categories": Category,
    "transactions": Transaction,
    "settings": AppSettings,
}

IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


class RecordStore:
    """Keyed CRUD for the categories, transactions and settings collections."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    @staticmethod
    def model_for(collection: str) -> type[SQLModel]:
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValidationError(f"Unknown collection: {collection!r}") from None

    @staticmethod
    def _check_fields(model: type[SQLModel], fields: Iterable[str]) -> None:
        unknown = sorted(set(fields) - set(model.model_fields))
        if unknown:
            raise ValidationError(f"Unknown field(s) for {model.__name__}: {', '.join(unknown)}")

    @contextmanager
    def _session(self, collection: str, action: str) -> Iterator[Session]:
        """Open a session and translate driver errors into the store taxonomy."""
        try:
            with self.session_factory() as session:
                yield session
        except IntegrityError as exc:
            logger.warning(f"{action} on {collection} violated a constraint: {exc.orig}")
            raise DuplicateKeyError(collection, str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            logger.error(f"{action} on {collection} failed: {exc}", exc_info=True)
            raise StorageUnavailableError(f"{action} on {collection} failed") from exc

    def get_all(self, collection: str) -> list[SQLModel]:
        """Return every record in the collection, in no particular order."""
        model = self.model_for(collection)
        with self._session(collection, "get_all") as session:
            rows = list(session.exec(select(model)).all())
            session.expunge_all()
            return rows

    def get_by_id(self, collection: str, record_id: str) -> SQLModel:
        """Return one record or raise NotFoundError."""
        model = self.model_for(collection)
        with self._session(collection, "get_by_id") as session:
            obj = session.get(model, record_id)
            if obj is None:
                raise NotFoundError(collection, record_id)
            session.expunge(obj)
            return obj

    def find(
        self,
        collection: str,
        *,
        where: Optional[Mapping[str, Any]] = None,
        between: Optional[Mapping[str, Tuple[Any, Any]]] = None,
    ) -> list[SQLModel]:
        """Filter a collection by exact field values and inclusive ranges.

        ``between`` maps a field to ``(low, high)``; either bound may be None.
        """
        model = self.model_for(collection)
        where = where or {}
        between = between or {}
        self._check_fields(model, where.keys())
        self._check_fields(model, between.keys())

        statement = select(model)
        for field, value in where.items():
            statement = statement.where(getattr(model, field) == value)
        for field, (low, high) in between.items():
            column = getattr(model, field)
            if low is not None:
                statement = statement.where(column >= low)
            if high is not None:
                statement = statement.where(column <= high)

        with self._session(collection, "find") as session:
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def count(self, collection: str) -> int:
        model = self.model_for(collection)
        with self._session(collection, "count") as session:
            return session.exec(select(func.count(model.id))).one()

    def insert(self, collection: str, record: RecordT) -> RecordT:
        """Insert a new record; duplicate ids or unique fields raise DuplicateKeyError."""
        model = self.model_for(collection)
        if not isinstance(record, model):
            raise ValidationError(f"{collection} expects {model.__name__}, got {type(record).__name__}")
        with self._session(collection, "insert") as session:
            if session.get(model, record.id) is not None:  # type: ignore[attr-defined]
                raise DuplicateKeyError(collection, f"id {record.id!r} already exists")  # type: ignore[attr-defined]
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
        logger.debug(f"Inserted {collection} record {record.id}")  # type: ignore[attr-defined]
        return record

    def insert_many(self, collection: str, records: Sequence[RecordT]) -> list[RecordT]:
        """Insert several records in one transaction: all are stored or none are."""
        model = self.model_for(collection)
        for record in records:
            if not isinstance(record, model):
                raise ValidationError(f"{collection} expects {model.__name__}, got {type(record).__name__}")
        with self._session(collection, "insert_many") as session:
            for record in records:
                if session.get(model, record.id) is not None:  # type: ignore[attr-defined]
                    raise DuplicateKeyError(collection, f"id {record.id!r} already exists")  # type: ignore[attr-defined]
                session.add(record)
            session.commit()
            for record in records:
                session.refresh(record)
                session.expunge(record)
        logger.debug(f"Inserted {len(records)} {collection} records")
        return list(records)

    def update(self, collection: str, record_id: str, changes: Mapping[str, Any]) -> SQLModel:
        """Merge partial fields over an existing record and return the result."""
        model = self.model_for(collection)
        frozen = IMMUTABLE_FIELDS.intersection(changes)
        if frozen:
            raise ValidationError(f"Cannot change immutable field(s): {', '.join(sorted(frozen))}")
        self._check_fields(model, changes.keys())

        with self._session(collection, "update") as session:
            obj = session.get(model, record_id)
            if obj is None:
                raise NotFoundError(collection, record_id)
            for field, value in changes.items():
                setattr(obj, field, value)
            session.add(obj)
            session.commit()
            session.refresh(obj)
            session.expunge(obj)
            return obj

    def delete(self, collection: str, record_id: str) -> None:
        """Remove a record; nothing referencing it is touched."""
        model = self.model_for(collection)
        with self._session(collection, "delete") as session:
            obj = session.get(model, record_id)
            if obj is None:
                raise NotFoundError(collection, record_id)
            session.delete(obj)
            session.commit()
        logger.debug(f"Deleted {collection} record {record_id}")


__all__ = ["COLLECTIONS", "RecordStore"]
