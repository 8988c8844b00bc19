"""Payload validation for records entering the ledger

Validators are pure: they inspect the payload and return a list of
human-readable messages. An empty list means the payload is valid.
"""

import math
from typing import Any, Callable, Dict, List

from business_ledger.domain.models import CUSTOMERS, DEBTS, TRANSACTIONS, TransactionType
from business_ledger.domain.exceptions import ValidationError

AMOUNT_REQUIRED = "Valid amount is required"


def parse_amount(value: Any) -> float | int | None:
    """
    Parse a numeric amount from a number or numeric string.

    Returns None for anything that is not a finite number. Booleans are not
    amounts. No range check is applied: negative values parse fine.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return value if math.isfinite(value) else None
        except OverflowError:
            # int beyond float range
            return None
    if isinstance(value, str):
        text = value.strip()
        # "_" digit separators are Python syntax, not amounts
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() and "." not in text and "e" not in text.lower() else number
    return None


def require_amount(value: Any) -> float | int:
    """parse_amount that raises ValidationError instead of returning None"""
    amount = parse_amount(value)
    if amount is None:
        raise ValidationError([AMOUNT_REQUIRED])
    return amount


def _has_amount(payload: Dict[str, Any]) -> bool:
    # Zero is falsy and therefore rejected, like a missing amount
    amount = parse_amount(payload.get("amount"))
    return amount is not None and amount != 0


def validate_transaction(payload: Dict[str, Any]) -> List[str]:
    errors = []
    if not _has_amount(payload):
        errors.append(AMOUNT_REQUIRED)
    if payload.get("type") not in (TransactionType.INCOME.value, TransactionType.EXPENSE.value):
        errors.append("Type must be income or expense")
    if not payload.get("category"):
        errors.append("Category is required")
    return errors


def validate_customer(payload: Dict[str, Any]) -> List[str]:
    errors = []
    if not payload.get("name"):
        errors.append("Name is required")
    if not payload.get("phone"):
        errors.append("Phone is required")
    return errors


def validate_debt(payload: Dict[str, Any]) -> List[str]:
    errors = []
    if not payload.get("customerName"):
        errors.append("Customer name is required")
    if not _has_amount(payload):
        errors.append(AMOUNT_REQUIRED)
    if not payload.get("dueDate"):
        errors.append("Due date is required")
    return errors


_VALIDATORS: Dict[str, Callable[[Dict[str, Any]], List[str]]] = {
    TRANSACTIONS: validate_transaction,
    CUSTOMERS: validate_customer,
    DEBTS: validate_debt,
}


def validate(entity_kind: str, payload: Dict[str, Any]) -> List[str]:
    """Validate a payload for the given collection; unknown kinds have no rules"""
    validator = _VALIDATORS.get(entity_kind)
    if validator is None:
        return []
    return validator(payload or {})
