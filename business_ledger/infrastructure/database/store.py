"""Persistent store - sole owner of the ledger dataset

Every mutation is a full read-modify-write of the dataset inside one
database transaction, serialized by a process-wide lock.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from business_ledger.infrastructure.database.repositories import DatasetRepository
from business_ledger.domain.models import Dataset, Record
from business_ledger.domain.metrics import compute_metrics
from business_ledger.domain.exceptions import NotFoundError, StorageError, ValidationError
from business_ledger.utils.ids import generate_id
from business_ledger.utils.date_utils import now_iso

logger = logging.getLogger(__name__)

# Fields the store assigns itself; callers cannot set or overwrite them
PROTECTED_FIELDS = ("id", "createdAt", "updatedAt")


def _clean(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in (fields or {}).items() if k not in PROTECTED_FIELDS}


class LedgerStore:
    """Read/create/update/delete over the dataset collections"""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[Dataset]:
        """
        Yield the current dataset for in-memory mutation.

        On clean exit metrics are recomputed and the whole dataset is written
        and committed once. If the block raises, nothing is written and the
        stored dataset stays exactly as it was.

        Raises:
            StorageError: On database read/write failure or an unreadable
                stored dataset
        """
        with self._lock:
            db = self._session_factory()
            try:
                repo = DatasetRepository(db)
                dataset = repo.load_or_initialize()

                yield dataset

                dataset.metrics = compute_metrics(dataset.transactions)
                repo.save(dataset)
                db.commit()

            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Dataset write failed", extra={"error": str(e)})
                raise StorageError("Could not persist dataset") from e

            except Exception:
                db.rollback()
                raise

            finally:
                db.close()

    def read_all(self) -> Dataset:
        """Entire dataset (initialized empty on first use)"""
        with self._lock:
            db = self._session_factory()
            try:
                dataset = DatasetRepository(db).load_or_initialize()
                db.commit()
                return dataset

            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Dataset read failed", extra={"error": str(e)})
                raise StorageError("Could not read dataset") from e

            finally:
                db.close()

    def get_all(self, collection: str) -> List[Record]:
        """Items of a collection in insertion order; unknown collections are empty"""
        return self.read_all().collection(collection) or []

    def add(self, collection: str, fields: Dict[str, Any]) -> Record:
        """Append a new record with a fresh id and creation timestamp"""
        with self.transaction() as dataset:
            record = self.append_record(dataset, collection, fields)

        logger.info("Record added", extra={"collection": collection, "record_id": record["id"]})
        return record

    def update(self, collection: str, record_id: str, fields: Dict[str, Any]) -> Record:
        """Merge fields over an existing record and stamp updatedAt"""
        with self.transaction() as dataset:
            merged = self.merge_record(dataset, collection, record_id, fields)

        logger.info("Record updated", extra={"collection": collection, "record_id": record_id})
        return merged

    def delete(self, collection: str, record_id: str) -> None:
        """Remove a record by id"""
        with self.transaction() as dataset:
            self.remove_record(dataset, collection, record_id)

        logger.info("Record deleted", extra={"collection": collection, "record_id": record_id})

    # Helpers below operate on an already-open transaction so that several
    # mutations can be committed together.

    @staticmethod
    def merge_record(dataset: Dataset, collection: str, record_id: str, fields: Dict[str, Any]) -> Record:
        items = dataset.collection(collection) or []
        for index, item in enumerate(items):
            if item.get("id") == record_id:
                merged = {**item, **_clean(fields), "updatedAt": now_iso()}
                items[index] = merged
                return merged
        raise NotFoundError(collection, record_id)

    @staticmethod
    def append_record(dataset: Dataset, collection: str, fields: Dict[str, Any]) -> Record:
        items = dataset.collection(collection)
        if items is None:
            raise ValidationError([f"Unknown collection: {collection}"])
        record = {"id": generate_id(), "createdAt": now_iso(), **_clean(fields)}
        items.append(record)
        return record

    @staticmethod
    def remove_record(dataset: Dataset, collection: str, record_id: str) -> None:
        items = dataset.collection(collection)
        if items is None:
            raise NotFoundError(collection, record_id)
        remaining = [item for item in items if item.get("id") != record_id]
        if len(remaining) == len(items):
            raise NotFoundError(collection, record_id)
        items[:] = remaining

