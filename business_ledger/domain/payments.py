"""Debt payment rules - pure functions over debt records"""

from typing import Any, Dict

from business_ledger.domain.models import DebtStatus, Record, TransactionType
from business_ledger.domain.metrics import to_decimal, as_number

DEBT_REPAYMENT_CATEGORY = "Debt Repayment"


def resolve_status(paid_amount: Any, debt_amount: Any) -> DebtStatus:
    """
    Status after a payment: paid once the accumulated amount covers the debt,
    partial otherwise. A payment never moves a debt back to unpaid, even when
    the accumulated amount is zero or negative.
    """
    if to_decimal(paid_amount) >= to_decimal(debt_amount):
        return DebtStatus.PAID
    return DebtStatus.PARTIAL


def apply_payment(debt: Record, amount: float | int) -> Dict[str, Any]:
    """
    Compute the field updates for paying `amount` towards `debt`.

    Overpayment is accepted: paidAmount may exceed the debt amount.
    """
    paid = to_decimal(debt.get("paidAmount") or 0) + to_decimal(amount)
    return {
        "paidAmount": as_number(paid),
        "status": resolve_status(paid, debt.get("amount")).value,
    }


def repayment_transaction(debt: Record, amount: float | int, paid_at: str) -> Dict[str, Any]:
    """Income transaction fields recording a payment against `debt`"""
    return {
        "amount": amount,
        "type": TransactionType.INCOME.value,
        "category": DEBT_REPAYMENT_CATEGORY,
        "description": f"Payment for debt: {debt.get('description') or 'Debt'} ({debt.get('customerName')})",
        "date": paid_at,
        "debtId": debt.get("id"),
    }


def remaining_balance(debt: Record) -> float | int:
    """Amount still owed on a debt, never below zero"""
    remaining = to_decimal(debt.get("amount")) - to_decimal(debt.get("paidAmount") or 0)
    return as_number(max(remaining, 0))
