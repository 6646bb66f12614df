"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from datetime import date
from pathlib import Path

import pytest

from tests.fixtures.transaction_files import SAMPLE_ROWS, write_transactions_csv
from txsummary.core import config as config_module
from txsummary.core.models import Transaction, parse_transaction


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def reference_today() -> date:
    """Fixed 'today' so yearless dates resolve to 2024."""
    return date(2024, 9, 1)


@pytest.fixture
def sample_transactions(reference_today) -> list[Transaction]:
    """The five reference transactions, all dated 2024."""
    return [parse_transaction(*row, today=reference_today) for row in SAMPLE_ROWS]


@pytest.fixture
def sample_csv(temp_dir) -> Path:
    """Reference transaction file with ISO dates so the year is fixed."""
    return write_transactions_csv(
        temp_dir / "txns.csv",
        [
            ("1", "2024-07-15", "+60.5"),
            ("2", "2024-07-28", "-10.3"),
            ("3", "2024-08-02", "-20.46"),
            ("4", "2024-08-13", "+10"),
            ("5", "2024-07-18", "+15.25"),
        ],
    )


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("TXSUMMARY_ENV", "test")
    monkeypatch.setenv("LOG_LEVEL", "INFO")

    # Never talk to real infrastructure from tests
    for name in ("DATABASE_URL", "SMTP_USERNAME", "SMTP_PASSWORD", "RECIPIENT_EMAIL", "WATCH_DIRECTORY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SMTP_HOST", "localhost")
    monkeypatch.setenv("SMTP_PORT", "2525")

    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for decimal money handling and precision")
    config.addinivalue_line("markers", "e2e: End-to-end tests through the command line")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
