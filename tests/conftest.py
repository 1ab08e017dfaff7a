"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path
from typing import Any, Callable

import pytest

from moneyboard.api.gateway import TransactionGateway
from moneyboard.api.session import Session
from moneyboard.core.config import reload_config
from moneyboard.core.models import Transaction, TransactionStatus, TransactionType
from moneyboard.core.money import Money
from tests.fixtures.fake_api import TEST_BASE_URL, FakeApi


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_api_transaction() -> dict[str, Any]:
    """Sample transaction record as sent by the API."""
    return {
        "id": "tx-123",
        "date": "2024-08-15T00:00:00",
        "description": "Supermarket",
        "categoryName": "Food",
        "type": 1,
        "amount": 45.99,
        "status": 1,
        "isRecurring": False,
        "notes": "weekly shop",
    }


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for canonical transactions with sensible defaults."""
    counter = {"n": 0}

    def _make(
        amount: str | int = "10.00",
        type: TransactionType = TransactionType.EXPENSE,
        category: str = "Food",
        date: str = "2024-01-15",
        description: str = "",
        status: TransactionStatus = TransactionStatus.COMPLETED,
        id: str | None = None,
    ) -> Transaction:
        counter["n"] += 1
        return Transaction(
            id=id or f"t{counter['n']}",
            date=date,
            description=description or f"Transaction {counter['n']}",
            category_name=category,
            type=type,
            amount=Money.from_cents(amount) if isinstance(amount, int) else Money.from_dollars(amount),
            status=status,
        )

    return _make


@pytest.fixture
def api_records() -> list[dict[str, Any]]:
    """A small server-side collection."""
    return [
        {"id": 1, "date": "2024-01-05", "description": "Salary", "categoryName": "Salary",
         "type": 0, "amount": 1000, "status": 1},
        {"id": 2, "date": "2024-01-10", "description": "Rent", "categoryName": "Housing",
         "type": 1, "amount": 250, "status": 1},
        {"id": 3, "date": "2024-02-02", "description": "Groceries", "categoryName": "Food",
         "type": 1, "amount": 50, "status": 0},
    ]


@pytest.fixture
def fake_api(api_records) -> FakeApi:
    """Fake API preloaded with ``api_records``."""
    return FakeApi(api_records)


@pytest.fixture
def session() -> Session:
    """An already authenticated session."""
    return Session(token="test-token", user_name="Test User", user_email="test@example.com")


@pytest.fixture
def make_gateway(fake_api, session) -> Callable[..., TransactionGateway]:
    """Build gateways wired to ``fake_api``; close them with ``aclose``."""

    def _make(gateway_session: Session | None = None, timeout: float = 5.0) -> TransactionGateway:
        return TransactionGateway(
            gateway_session or session,
            base_url=TEST_BASE_URL,
            timeout=timeout,
            transport=fake_api.transport(),
        )

    return _make


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests never talk to a real server or write into the working tree
    monkeypatch.setenv("MONEYBOARD_ENV", "test")
    monkeypatch.setenv("MONEYBOARD_API_BASE_URL", TEST_BASE_URL)
    monkeypatch.setenv("MONEYBOARD_OUTPUT_DIR", str(tmp_path / "reports"))
    monkeypatch.delenv("MONEYBOARD_API_TOKEN", raising=False)
    monkeypatch.delenv("MONEYBOARD_LOCALE", raising=False)
    monkeypatch.delenv("MONEYBOARD_EMAIL", raising=False)
    monkeypatch.delenv("MONEYBOARD_PASSWORD", raising=False)
    reload_config()


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "currency: Tests for currency handling and precision"
    )
    config.addinivalue_line(
        "markers", "api: Tests for the HTTP gateway and session"
    )
    config.addinivalue_line(
        "markers", "store: Tests for the transaction store"
    )
    config.addinivalue_line(
        "markers", "analysis: Tests for aggregations, export and charts"
    )
    config.addinivalue_line(
        "markers", "cli: Tests for the command-line interface"
    )
