"""Unit tests for ledger operations"""

import pytest
from unittest.mock import patch
from business_ledger.infrastructure.database.store import LedgerStore
from business_ledger.services.ledger import LedgerService
from business_ledger.domain.exceptions import NotFoundError, StorageError, ValidationError


@pytest.fixture
def debt(ledger: LedgerService) -> dict:
    return ledger.create_record("debts", {"customerName": "Ali", "amount": 500, "dueDate": "2025-01-01"})


def test_create_transaction_rejects_falsy_amount(ledger: LedgerService):
    with pytest.raises(ValidationError) as exc_info:
        ledger.create_record("transactions", {"amount": 0, "type": "income", "category": "X"})

    assert exc_info.value.messages == ["Valid amount is required"]
    assert ledger.list_collection("transactions") == []


def test_create_customer_without_phone_fails(ledger: LedgerService):
    with pytest.raises(ValidationError) as exc_info:
        ledger.create_record("customers", {"name": "A"})
    assert exc_info.value.messages == ["Phone is required"]


def test_create_parses_numeric_string_amount(ledger: LedgerService):
    txn = ledger.create_record("transactions", {"amount": "120.50", "type": "income", "category": "Sales"})

    assert txn["amount"] == 120.5
    assert ledger.read_dataset().metrics.total_revenue == 120.5


def test_metrics_follow_every_transaction_creation(ledger: LedgerService):
    payloads = [
        {"amount": 100, "type": "income", "category": "Sales"},
        {"amount": 35.5, "type": "expense", "category": "Supplies"},
        {"amount": 12, "type": "income", "category": "Tips"},
        {"amount": 80, "type": "expense", "category": "Rent"},
    ]
    for payload in payloads:
        ledger.create_record("transactions", payload)

        dataset = ledger.read_dataset()
        revenue = sum(t["amount"] for t in dataset.transactions if t["type"] == "income")
        expenses = sum(t["amount"] for t in dataset.transactions if t["type"] == "expense")
        assert dataset.metrics.total_revenue == revenue
        assert dataset.metrics.total_expenses == expenses
        assert dataset.metrics.net_income == revenue - expenses


def test_new_debt_starts_unpaid(ledger: LedgerService):
    debt = ledger.create_record(
        "debts",
        {"customerName": "Ali", "amount": 500, "dueDate": "2025-01-01", "status": "paid", "paidAmount": 500},
    )
    assert debt["status"] == "unpaid"
    assert debt["paidAmount"] == 0


def test_update_debt_keeps_amount_and_status(ledger: LedgerService, debt: dict):
    updated = ledger.update_record(
        "debts", debt["id"], {"amount": 1, "status": "paid", "paidAmount": 1, "dueDate": "2025-02-01"}
    )

    assert updated["amount"] == 500
    assert updated["status"] == "unpaid"
    assert updated["paidAmount"] == 0
    assert updated["dueDate"] == "2025-02-01"


def test_update_and_delete_unknown_ids(ledger: LedgerService):
    with pytest.raises(NotFoundError):
        ledger.update_record("transactions", "missing", {"amount": 5})
    with pytest.raises(NotFoundError):
        ledger.delete_record("customers", "missing")


def test_pay_full_balance_marks_paid(ledger: LedgerService, debt: dict):
    updated = ledger.pay_debt(debt["id"], 500)

    assert updated["status"] == "paid"
    assert updated["paidAmount"] == 500

    transactions = ledger.list_collection("transactions")
    assert len(transactions) == 1
    assert transactions[0]["type"] == "income"
    assert transactions[0]["amount"] == 500
    assert transactions[0]["category"] == "Debt Repayment"
    assert transactions[0]["debtId"] == debt["id"]


def test_pay_less_than_balance_marks_partial(ledger: LedgerService, debt: dict):
    ledger.pay_debt(debt["id"], 100)

    updated = ledger.pay_debt(debt["id"], 150)

    assert updated["status"] == "partial"
    assert updated["paidAmount"] == 250
    assert len(ledger.list_collection("transactions")) == 2
    assert ledger.read_dataset().metrics.total_revenue == 250


def test_overpayment_is_accepted(ledger: LedgerService, debt: dict):
    updated = ledger.pay_debt(debt["id"], "650")

    assert updated["status"] == "paid"
    assert updated["paidAmount"] == 650


def test_pay_unknown_debt_changes_nothing(ledger: LedgerService, debt: dict):
    before = ledger.read_dataset().to_dict()

    with pytest.raises(NotFoundError):
        ledger.pay_debt("missing", 100)

    assert ledger.read_dataset().to_dict() == before


def test_pay_with_non_numeric_amount_fails(ledger: LedgerService, debt: dict):
    with pytest.raises(ValidationError):
        ledger.pay_debt(debt["id"], "a lot")
    assert ledger.list_collection("transactions") == []


def test_payment_is_all_or_nothing(ledger: LedgerService, debt: dict):
    """A failure while recording the repayment leaves the debt untouched"""
    with patch.object(LedgerStore, "append_record", side_effect=StorageError("disk full")):
        with pytest.raises(StorageError):
            ledger.pay_debt(debt["id"], 200)

    dataset = ledger.read_dataset()
    assert dataset.debts == [debt]
    assert dataset.transactions == []
    assert dataset.metrics.total_revenue == 0


def test_assistant_context_summarizes_ledger(ledger: LedgerService, debt: dict):
    ledger.create_record("customers", {"name": "Ali", "phone": "1"})
    ledger.create_record("transactions", {"amount": 100, "type": "income", "category": "Sales"})
    ledger.pay_debt(debt["id"], 200)

    context = ledger.assistant_context()

    assert context["metrics"] == {"totalRevenue": 300, "totalExpenses": 0, "netIncome": 300}
    assert context["openDebts"] == 1
    assert context["outstandingDebt"] == 300
    assert context["customers"] == 1
