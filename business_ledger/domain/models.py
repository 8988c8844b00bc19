"""Domain models - plain dataclasses for the ledger dataset

Records inside the collections stay plain dicts with camelCase keys, the
same layout that is persisted and returned by the API.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

TRANSACTIONS = "transactions"
CUSTOMERS = "customers"
DEBTS = "debts"

COLLECTIONS = (TRANSACTIONS, CUSTOMERS, DEBTS)

Record = Dict[str, Any]


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class DebtStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


@dataclass
class Metrics:
    """Aggregate figures derived from the transaction collection"""

    total_revenue: float = 0
    total_expenses: float = 0
    net_income: float = 0

    def to_dict(self) -> Dict[str, float]:
        return {
            "totalRevenue": self.total_revenue,
            "totalExpenses": self.total_expenses,
            "netIncome": self.net_income,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Metrics":
        return cls(
            total_revenue=data.get("totalRevenue", 0),
            total_expenses=data.get("totalExpenses", 0),
            net_income=data.get("netIncome", 0),
        )


@dataclass
class Dataset:
    """Root aggregate: all collections plus metrics, persisted as one unit"""

    transactions: List[Record] = field(default_factory=list)
    customers: List[Record] = field(default_factory=list)
    debts: List[Record] = field(default_factory=list)
    metrics: Metrics = field(default_factory=Metrics)

    def collection(self, name: str) -> List[Record] | None:
        """Live list for a known collection name, None otherwise"""
        if name not in COLLECTIONS:
            return None
        return getattr(self, name)

    def find(self, name: str, record_id: str) -> Record | None:
        for item in self.collection(name) or []:
            if item.get("id") == record_id:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            TRANSACTIONS: self.transactions,
            CUSTOMERS: self.customers,
            DEBTS: self.debts,
            "metrics": self.metrics.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dataset":
        return cls(
            transactions=list(data.get(TRANSACTIONS) or []),
            customers=list(data.get(CUSTOMERS) or []),
            debts=list(data.get(DEBTS) or []),
            metrics=Metrics.from_dict(data.get("metrics") or {}),
        )


@dataclass
class AssistantReply:
    """Reply text plus where it came from (simulated | openai | fallback-simulated)"""

    reply: str
    mode: str
