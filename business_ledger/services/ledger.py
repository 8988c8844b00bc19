"""Ledger operations - the data contract the API and assistant layers call into

Flow for every mutation:
    validate payload -> apply business rules -> store read-modify-write
    -> metrics recompute -> return record
"""

import logging
from typing import Any, Dict, List

from business_ledger.infrastructure.database.store import LedgerStore
from business_ledger.infrastructure.observability.metrics import record_mutation, record_payment
from business_ledger.domain.models import Dataset, DebtStatus, Record, DEBTS, TRANSACTIONS
from business_ledger.domain.validation import validate, parse_amount, require_amount
from business_ledger.domain.payments import apply_payment, repayment_transaction, remaining_balance
from business_ledger.domain.exceptions import NotFoundError, ValidationError
from business_ledger.utils.date_utils import now_iso

logger = logging.getLogger(__name__)

# Derived or immutable once a debt exists; only payments change them
DEBT_LOCKED_FIELDS = ("amount", "paidAmount", "status")


class LedgerService:
    """Validated CRUD over the ledger collections plus debt payments"""

    def __init__(self, store: LedgerStore):
        self.store = store

    def list_collection(self, name: str) -> List[Record]:
        return self.store.get_all(name)

    def read_dataset(self) -> Dataset:
        return self.store.read_all()

    def create_record(self, name: str, fields: Dict[str, Any]) -> Record:
        """
        Validate and store a new record.

        Debts always start unpaid with nothing paid, whatever the payload says.

        Raises:
            ValidationError: With every failed rule's message
        """
        fields = dict(fields or {})
        errors = validate(name, fields)
        if errors:
            raise ValidationError(errors)

        if "amount" in fields:
            fields["amount"] = parse_amount(fields["amount"])
        if name == DEBTS:
            fields.update(status=DebtStatus.UNPAID.value, paidAmount=0)

        record = self.store.add(name, fields)
        record_mutation(name, "create")
        return record

    def update_record(self, name: str, record_id: str, fields: Dict[str, Any]) -> Record:
        """
        Merge fields over an existing record.

        Raises:
            NotFoundError: No record with that id in the collection
        """
        fields = dict(fields or {})
        if name == DEBTS:
            dropped = [k for k in DEBT_LOCKED_FIELDS if k in fields]
            for key in dropped:
                fields.pop(key)
            if dropped:
                logger.debug("Ignored locked debt fields on update", extra={"fields": dropped, "record_id": record_id})
        elif name == TRANSACTIONS and parse_amount(fields.get("amount")) is not None:
            fields["amount"] = parse_amount(fields["amount"])

        record = self.store.update(name, record_id, fields)
        record_mutation(name, "update")
        return record

    def delete_record(self, name: str, record_id: str) -> None:
        """
        Raises:
            NotFoundError: No record with that id in the collection
        """
        self.store.delete(name, record_id)
        record_mutation(name, "delete")

    def pay_debt(self, debt_id: str, amount: Any) -> Record:
        """
        Apply a payment to a debt and record it as income.

        The debt update and the repayment transaction are committed in one
        store transaction: either both are stored or neither is.

        Raises:
            NotFoundError: Unknown debt id
            ValidationError: Amount is not numeric
        """
        amount = require_amount(amount)

        with self.store.transaction() as dataset:
            debt = dataset.find(DEBTS, debt_id)
            if debt is None:
                raise NotFoundError(DEBTS, debt_id)

            updated = self.store.merge_record(dataset, DEBTS, debt_id, apply_payment(debt, amount))
            txn = self.store.append_record(dataset, TRANSACTIONS, repayment_transaction(debt, amount, now_iso()))

        logger.debug(
            "Debt payment applied",
            extra={"debt_id": debt_id, "amount": amount, "debt_status": updated["status"], "transaction_id": txn["id"]},
        )
        record_payment(updated["status"])
        record_mutation(DEBTS, "update")
        record_mutation(TRANSACTIONS, "create")
        return updated

    def assistant_context(self) -> Dict[str, Any]:
        """Business figures handed to the assistant when the caller sends none"""
        dataset = self.store.read_all()
        open_debts = [d for d in dataset.debts if d.get("status") != DebtStatus.PAID.value]
        return {
            "metrics": dataset.metrics.to_dict(),
            "openDebts": len(open_debts),
            "outstandingDebt": sum(remaining_balance(d) for d in open_debts),
            "customers": len(dataset.customers),
        }
