"""Data access layer for the ledger dataset row"""

import json
import logging
from typing import Optional
from sqlalchemy.orm import Session
from business_ledger.infrastructure.database.models import LedgerDataset, DATASET_ROW_ID
from business_ledger.domain.models import Dataset
from business_ledger.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class DatasetRepository:
    """Repository for the single persisted dataset document"""

    def __init__(self, db: Session):
        self.db = db

    def load(self) -> Optional[Dataset]:
        """
        Read and decode the stored dataset.

        Returns None when nothing has been stored yet.

        Raises:
            StorageError: The stored payload exists but cannot be decoded.
                It is left untouched so the data can be recovered by hand.
        """
        row = self.db.get(LedgerDataset, DATASET_ROW_ID)
        if row is None:
            return None

        try:
            data = json.loads(row.payload)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Stored dataset is unreadable: {e}") from e
        if not isinstance(data, dict):
            raise StorageError("Stored dataset is not a JSON object")

        return Dataset.from_dict(data)

    def load_or_initialize(self) -> Dataset:
        """Load the dataset, writing an empty one first if none exists"""
        dataset = self.load()
        if dataset is None:
            logger.info("No stored dataset found, initializing an empty one")
            dataset = Dataset()
            self.save(dataset)
        return dataset

    def save(self, dataset: Dataset) -> None:
        """Serialize the whole dataset over the stored row (flushed, not committed)"""
        try:
            payload = json.dumps(dataset.to_dict(), indent=2)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Dataset is not serializable: {e}") from e

        row = self.db.get(LedgerDataset, DATASET_ROW_ID)
        if row is None:
            self.db.add(LedgerDataset(id=DATASET_ROW_ID, payload=payload))
        else:
            row.payload = payload
        self.db.flush()
