"""Aggregate metrics derived from the transaction collection"""

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from business_ledger.domain.models import Metrics, Record, TransactionType


def to_decimal(value: Any) -> Decimal:
    """Amount as Decimal; anything non-numeric counts as zero"""
    if isinstance(value, bool) or value is None:
        return Decimal(0)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal(0)
    return amount if amount.is_finite() else Decimal(0)


def as_number(value: Decimal) -> float | int:
    return int(value) if value == value.to_integral_value() else float(value)


def compute_metrics(transactions: Iterable[Record]) -> Metrics:
    """
    Fold the full transaction set into revenue, expenses and net income.

    Always computed from scratch so stored metrics can never drift from
    the transactions they summarize. Sums are accumulated as Decimal to
    avoid float error building up across many records.
    """
    revenue = Decimal(0)
    expenses = Decimal(0)

    for txn in transactions:
        if txn.get("type") == TransactionType.INCOME.value:
            revenue += to_decimal(txn.get("amount"))
        elif txn.get("type") == TransactionType.EXPENSE.value:
            expenses += to_decimal(txn.get("amount"))

    return Metrics(
        total_revenue=as_number(revenue),
        total_expenses=as_number(expenses),
        net_income=as_number(revenue - expenses),
    )
