"""Ledger endpoints - dataset, collection CRUD and debt payments"""

import time
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, Request

from business_ledger.api.dependencies import get_ledger_service, get_request_id
from business_ledger.api.responses import send_response
from business_ledger.api.routes.schemas import PaymentRequest
from business_ledger.services.ledger import LedgerService
from business_ledger.domain.models import COLLECTIONS
from business_ledger.domain.exceptions import NotFoundError
from business_ledger.infrastructure.observability.logging import log_payment

router = APIRouter()

ENTITY_NAMES = {"transactions": "Transaction", "customers": "Customer", "debts": "Debt"}


def _known(collection: str) -> str:
    """Reject collection names outside the ledger with a 404"""
    if collection not in COLLECTIONS:
        raise NotFoundError(collection, "")
    return collection


@router.get("/data")
def get_data(ledger: LedgerService = Depends(get_ledger_service)):
    """Full dataset: transactions, customers, debts and metrics"""
    return send_response(200, True, ledger.read_dataset().to_dict())


@router.get("/{collection}")
def list_records(collection: str, ledger: LedgerService = Depends(get_ledger_service)):
    return send_response(200, True, ledger.list_collection(_known(collection)))


@router.post("/{collection}")
def create_record(
    collection: str,
    fields: Dict[str, Any] = Body(...),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Validate and store a new transaction, customer or debt"""
    record = ledger.create_record(_known(collection), fields)
    return send_response(201, True, record, f"{ENTITY_NAMES[collection]} created")


@router.patch("/{collection}/{record_id}")
def update_record(
    collection: str,
    record_id: str,
    fields: Dict[str, Any] = Body(...),
    ledger: LedgerService = Depends(get_ledger_service),
):
    record = ledger.update_record(_known(collection), record_id, fields)
    return send_response(200, True, record, f"{ENTITY_NAMES[collection]} updated")


@router.delete("/{collection}/{record_id}")
def delete_record(collection: str, record_id: str, ledger: LedgerService = Depends(get_ledger_service)):
    ledger.delete_record(_known(collection), record_id)
    return send_response(200, True, None, f"{ENTITY_NAMES[collection]} deleted")


@router.post("/debts/{debt_id}/pay")
def pay_debt(
    debt_id: str,
    payment: PaymentRequest,
    request: Request,
    ledger: LedgerService = Depends(get_ledger_service),
):
    """
    Apply a payment to a debt.

    Flow:
    1. Add the amount to the debt's paidAmount and derive its status
    2. Record the payment as a "Debt Repayment" income transaction
    3. Commit both in one write and recompute metrics
    """
    start_time = time.time()
    updated = ledger.pay_debt(debt_id, payment.amount)

    duration_ms = (time.time() - start_time) * 1000
    log_payment(get_request_id(request), debt_id, payment.amount, updated["status"], duration_ms)

    return send_response(200, True, updated, "Payment recorded")

