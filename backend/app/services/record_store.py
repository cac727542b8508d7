"""Generic record store used by the business services.

The services only talk to the store through the collection level operations
below, so the persistence backend can be swapped without touching them.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models

LOGGER = logging.getLogger(__name__)

COMPANIES = "companies"
MONTHLY_BUSINESS_DATA = "monthly_business_data"
BUSINESS_TARGETS = "business_targets"

COLLECTION_MODELS = {
    COMPANIES: models.Company,
    MONTHLY_BUSINESS_DATA: models.MonthlyBusinessData,
    BUSINESS_TARGETS: models.BusinessTarget,
}


def _is_identifier(value: Any) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class StoreError(RuntimeError):
    """Raised when the record store cannot complete an operation."""


class RecordNotFoundError(StoreError):
    """Raised when an update or delete targets an unknown identifier."""

    def __init__(self, collection: str, record_id: str) -> None:
        super().__init__(f"No record {record_id} in {collection}")
        self.collection = collection
        self.record_id = record_id


class RecordStore(ABC):
    """Collection oriented persistence operations."""

    @abstractmethod
    def list_records(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[str] = (),
    ) -> list[Any]:
        """Return the records matching ``filters``.

        ``order_by`` holds column names; a leading ``-`` sorts descending.
        """

    @abstractmethod
    def get_record(self, collection: str, record_id: str) -> Optional[Any]:
        ...

    @abstractmethod
    def insert_record(self, collection: str, fields: Mapping[str, Any]) -> Any:
        ...

    @abstractmethod
    def upsert_record(
        self,
        collection: str,
        key_fields: Sequence[str],
        fields: Mapping[str, Any],
    ) -> Any:
        """Insert ``fields`` or update the record sharing the ``key_fields`` values."""

    @abstractmethod
    def update_record(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> Any:
        ...

    @abstractmethod
    def delete_record(self, collection: str, record_id: str) -> None:
        ...


class SqlAlchemyRecordStore(RecordStore):
    """Record store backed by a SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @staticmethod
    def _model(collection: str):
        try:
            return COLLECTION_MODELS[collection]
        except KeyError as exc:
            raise ValueError(f"Unknown collection '{collection}'") from exc

    @staticmethod
    def _column(model, name: str):
        column = getattr(model, name, None)
        if column is None:
            raise ValueError(f"Unknown field '{name}' for {model.__tablename__}")
        return column

    @contextmanager
    def _guard(self, action: str, collection: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            LOGGER.warning("Record store %s on %s failed: %s", action, collection, exc)
            raise StoreError(f"Unable to {action} {collection}") from exc

    def list_records(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[str] = (),
    ) -> list[Any]:
        model = self._model(collection)
        query = self.db.query(model)
        for name, value in (filters or {}).items():
            query = query.filter(self._column(model, name) == value)
        for name in order_by:
            descending = name.startswith("-")
            column = self._column(model, name.lstrip("-"))
            query = query.order_by(column.desc() if descending else column.asc())
        with self._guard("list", collection):
            return query.all()

    def get_record(self, collection: str, record_id: str) -> Optional[Any]:
        model = self._model(collection)
        if not _is_identifier(record_id):
            return None
        with self._guard("read", collection):
            return self.db.query(model).filter(model.id == record_id).first()

    def insert_record(self, collection: str, fields: Mapping[str, Any]) -> Any:
        model = self._model(collection)
        with self._guard("insert", collection):
            record = model(**fields)
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        return record

    def upsert_record(
        self,
        collection: str,
        key_fields: Sequence[str],
        fields: Mapping[str, Any],
    ) -> Any:
        model = self._model(collection)
        missing = [name for name in key_fields if name not in fields]
        if missing:
            raise ValueError(f"Upsert on {collection} requires {', '.join(missing)}")

        with self._guard("upsert", collection):
            query = self.db.query(model)
            for name in key_fields:
                query = query.filter(self._column(model, name) == fields[name])
            record = query.with_for_update().first()
            if record is None:
                record = model(**fields)
                self.db.add(record)
            else:
                for name, value in fields.items():
                    setattr(record, name, value)
            self.db.commit()
            self.db.refresh(record)
        return record

    def update_record(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> Any:
        record = self.get_record(collection, record_id)
        if record is None:
            raise RecordNotFoundError(collection, record_id)
        with self._guard("update", collection):
            for name, value in fields.items():
                setattr(record, name, value)
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        return record

    def delete_record(self, collection: str, record_id: str) -> None:
        record = self.get_record(collection, record_id)
        if record is None:
            raise RecordNotFoundError(collection, record_id)
        with self._guard("delete", collection):
            self.db.delete(record)
            self.db.commit()
