"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache
from fastapi import Depends, Request
from business_ledger.infrastructure.database.session import SessionLocal
from business_ledger.infrastructure.database.store import LedgerStore
from business_ledger.services.ledger import LedgerService
from business_ledger.services.assistant import AssistantService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache()
def get_ledger_store() -> LedgerStore:
    """Process-wide store; one instance so its lock covers every request"""
    return LedgerStore(SessionLocal)


def get_ledger_service(store: LedgerStore = Depends(get_ledger_store)) -> LedgerService:
    """Provide ledger operations bound to the store"""
    return LedgerService(store)


def get_assistant_service() -> AssistantService:
    """Provide assistant reply generator"""
    return AssistantService()
