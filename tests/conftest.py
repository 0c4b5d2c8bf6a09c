"""Shared pytest fixtures for subtrack tests."""

import tempfile
import os
from datetime import datetime, UTC
from decimal import Decimal
import pytest

from subtrack.database.factories import create_sqlite_database
from subtrack.domain.entities import AutoPay, BillingCycle, Category, Manual, Subscription
from subtrack.domain.store import DashboardStore
from subtrack.domain.subscription import SubscriptionService
from subtrack.domain.user import UserService

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now():
    """Fixed reference time used by time-dependent tests."""
    return NOW


@pytest.fixture
def make_subscription():
    """Factory for in-memory Subscription entities."""
    counter = {"value": 0}

    def factory(
        name: str = "Netflix",
        amount="199",
        billing_cycle: BillingCycle = BillingCycle.MONTHLY,
        category: Category = Category.ENTERTAINMENT,
        auto_pay: bool = True,
        date=None,
        reminder_time: int = 1,
        is_active: bool = True,
        currency: str = "INR",
        provider=None,
        id=None,
    ) -> Subscription:
        counter["value"] += 1
        schedule = (
            AutoPay(next_billing_date=date)
            if auto_pay
            else Manual(expiry_date=date, reminder_time=reminder_time)
        )
        return Subscription(
            id=id or f"sub-{counter['value']}",
            name=name,
            category=category,
            amount=Decimal(str(amount)),
            currency=currency,
            billing_cycle=billing_cycle,
            schedule=schedule,
            is_active=is_active,
            created_at=NOW,
            updated_at=NOW,
            provider=provider,
        )

    return factory


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def store():
    """Create an empty DashboardStore with a fixed clock."""
    return DashboardStore(clock=lambda: NOW)


@pytest.fixture
def subscription_service(temp_db, store):
    """Create a SubscriptionService with a temporary database."""
    return SubscriptionService(temp_db, store)


@pytest.fixture
def user_service(temp_db, store):
    """Create a UserService with a temporary database."""
    return UserService(temp_db, store)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
