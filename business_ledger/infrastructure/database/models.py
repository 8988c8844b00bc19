"""SQLAlchemy ORM models for the persisted ledger dataset"""

from sqlalchemy import Column, DateTime, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

# The whole dataset lives in a single row
DATASET_ROW_ID = 1


class LedgerDataset(Base):
    """Full ledger dataset serialized as JSON text, rewritten on every mutation"""

    __tablename__ = "ledger_dataset"

    id = Column(Integer, primary_key=True)
    payload = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
