"""Shared pytest fixtures for unit, integration and E2E tests."""

import os
from decimal import Decimal

import pytest
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient

from app.api import deps
from app.config import settings
from app.main import app
from app.schemas.ledger import BursaryRecord, StudentRecord
from app.services.store import InMemoryLedgerStore
from tests.factories import make_student

# Load .env so DATABASE_URL is visible to the requires_db check
load_dotenv()

# Skip tests that talk to Postgres unless a database is configured
requires_db = pytest.mark.skipif(
    not os.getenv("DATABASE_URL"),
    reason="DATABASE_URL must be set",
)


@pytest.fixture
def student() -> StudentRecord:
    return make_student()


@pytest.fixture
def bursaries():
    return [BursaryRecord(id="half", name="Half Bursary", value=Decimal("500"))]


@pytest.fixture
def memory_store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
async def async_client(api_base: str, memory_store: InMemoryLedgerStore):
    """API client backed by the in-memory ledger store fixture."""
    app.dependency_overrides[deps.get_ledger_store] = lambda: memory_store
    transport = ASGITransport(app=app)
    client = AsyncClient(transport=transport, base_url=api_base, timeout=30.0)
    yield client
    await client.aclose()
    app.dependency_overrides.clear()
