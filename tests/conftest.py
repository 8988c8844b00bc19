"""Pytest fixtures for testing"""

import random
import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from business_ledger.api.main import create_app
from business_ledger.api.dependencies import get_assistant_service, get_ledger_store
from business_ledger.infrastructure.clients.completions import CompletionClient
from business_ledger.infrastructure.database.session import init_db, make_engine
from business_ledger.infrastructure.database.store import LedgerStore
from business_ledger.services.assistant import AssistantService
from business_ledger.services.ledger import LedgerService


@pytest.fixture
def engine(tmp_path) -> Generator[Engine, None, None]:
    """Fresh SQLite database file per test"""
    engine = make_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def store(session_factory: sessionmaker) -> LedgerStore:
    return LedgerStore(session_factory)


@pytest.fixture
def ledger(store: LedgerStore) -> LedgerService:
    return LedgerService(store)


@pytest.fixture
def assistant() -> AssistantService:
    """Scripted assistant with no delay and a seeded picker"""
    return AssistantService(
        client=CompletionClient(api_key=""),
        mode="simulated",
        delay_seconds=0,
        rng=random.Random(7),
    )


@pytest.fixture
def client(store: LedgerStore, assistant: AssistantService) -> TestClient:
    """Create FastAPI test client backed by the test store"""
    app = create_app()
    app.dependency_overrides[get_ledger_store] = lambda: store
    app.dependency_overrides[get_assistant_service] = lambda: assistant
    return TestClient(app)
