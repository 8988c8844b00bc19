"""Unit tests for debt payment rules"""

from business_ledger.domain.models import DebtStatus
from business_ledger.domain.payments import (
    DEBT_REPAYMENT_CATEGORY,
    apply_payment,
    remaining_balance,
    repayment_transaction,
    resolve_status,
)


def _debt(**overrides):
    debt = {"id": "d1", "customerName": "Ali", "amount": 500, "paidAmount": 0, "status": "unpaid"}
    debt.update(overrides)
    return debt


def test_partial_payment():
    assert apply_payment(_debt(), 200) == {"paidAmount": 200, "status": "partial"}


def test_full_payment_marks_paid():
    assert apply_payment(_debt(paidAmount=200), 300) == {"paidAmount": 500, "status": "paid"}


def test_overpayment_is_not_capped():
    assert apply_payment(_debt(), 750) == {"paidAmount": 750, "status": "paid"}


def test_missing_paid_amount_defaults_to_zero():
    debt = _debt()
    del debt["paidAmount"]
    assert apply_payment(debt, 100)["paidAmount"] == 100


def test_zero_payment_still_moves_to_partial():
    assert apply_payment(_debt(), 0) == {"paidAmount": 0, "status": "partial"}


def test_negative_payment_is_applied_as_is():
    assert apply_payment(_debt(paidAmount=100), -40) == {"paidAmount": 60, "status": "partial"}


def test_resolve_status_threshold():
    assert resolve_status(499.99, 500) is DebtStatus.PARTIAL
    assert resolve_status(500, 500) is DebtStatus.PAID


def test_repayment_transaction_fields():
    txn = repayment_transaction(_debt(description="Product purchase debt"), 200, "2025-01-01T10:00:00.000Z")
    assert txn == {
        "amount": 200,
        "type": "income",
        "category": DEBT_REPAYMENT_CATEGORY,
        "description": "Payment for debt: Product purchase debt (Ali)",
        "date": "2025-01-01T10:00:00.000Z",
        "debtId": "d1",
    }


def test_repayment_description_defaults_to_debt():
    txn = repayment_transaction(_debt(), 50, "2025-01-01T10:00:00.000Z")
    assert txn["description"] == "Payment for debt: Debt (Ali)"


def test_remaining_balance():
    assert remaining_balance(_debt(paidAmount=200)) == 300
    assert remaining_balance(_debt(paidAmount=900)) == 0
