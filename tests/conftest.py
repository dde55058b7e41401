"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from decimal import Decimal
from pathlib import Path
import tempfile

import pytest

from messledger.core.models import Deposit, MealLog, Member, Purchase

from tests.fixtures.synthetic_data import build_ledger_dict, daily_meal_logs


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def two_members() -> list[Member]:
    """Members A and B, in that order."""
    return [Member(id="a", name="Alice"), Member(id="b", name="Bashir", phone="01700000000")]


@pytest.fixture
def scenario_c(two_members):
    """
    Two members, 500 deposited each, 600 of purchases, 30 meals in 2024-01.

    A eats lunch and dinner for ten days (20 meals), B eats lunch only (10).
    A bought 400 of the bazar, B bought 200.
    """
    deposits = [
        Deposit(id="d-a", member_id="a", month="2024-01", amount=Decimal("500")),
        Deposit(id="d-b", member_id="b", month="2024-01", amount=Decimal("500")),
    ]
    purchases = [
        Purchase(id="p1", member_id="a", date="2024-01-02", amount=Decimal("250")),
        Purchase(id="p2", member_id="b", date="2024-01-05", amount=Decimal("200")),
        Purchase(id="p3", member_id="a", date="2024-01-09", amount=Decimal("150")),
    ]
    meal_logs = daily_meal_logs("a", "2024-01-01", days=10, lunch=1, dinner=1) + daily_meal_logs(
        "b", "2024-01-01", days=10, lunch=1, dinner=0
    )
    return two_members, deposits, purchases, meal_logs


@pytest.fixture
def ledger_dict() -> dict:
    """A small two-month ledger in file format."""
    return build_ledger_dict()


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path_factory):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv("MESSLEDGER_ENV", "test")
    monkeypatch.setenv("MESSLEDGER_DATA_DIR", str(tmp_path_factory.getbasetemp() / "messledger_data"))


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "amounts: Tests for decimal amount handling and precision")
    config.addinivalue_line("markers", "settlement: Tests for the settlement engine")
    config.addinivalue_line("markers", "partition: Tests for month partitioning")
    config.addinivalue_line("markers", "ledger: Tests for ledger loading and the write boundary")
