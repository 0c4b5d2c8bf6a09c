"""Tests for the dashboard store lifecycle."""

import asyncio
import time
from dataclasses import replace
from datetime import datetime, timedelta, UTC
from decimal import Decimal

import pytest

from subtrack.domain.entities import AutoPay, DashboardSummary, ReminderPlan, User, Theme
from subtrack.domain.errors import StorageError
from subtrack.domain.reminders import ReminderScheduler
from subtrack.domain.store import DashboardStore

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


class RecordingScheduler(ReminderScheduler):
    def __init__(self):
        self.plans: list[ReminderPlan] = []

    def apply(self, plan: ReminderPlan) -> None:
        self.plans.append(plan)


class FakeDatabase:
    """Stands in for the storage collaborator during loads."""

    def __init__(self, subscriptions=(), user=None, error=None):
        self.subscriptions = list(subscriptions)
        self.user = user
        self.error = error

    def list_subscriptions(self):
        if self.error is not None:
            raise self.error
        return list(self.subscriptions)

    def get_user(self):
        return self.user


class SlowDatabase(FakeDatabase):
    """Blocks the event loop while listing, like a synchronous SQLite read."""

    def __init__(self, subscriptions=(), delay=0.0):
        super().__init__(subscriptions)
        self.delay = delay

    def list_subscriptions(self):
        time.sleep(self.delay)
        return super().list_subscriptions()


def test_initial_state_is_loading_without_summary():
    store = DashboardStore(clock=lambda: NOW)

    assert store.is_loading is True
    assert store.summary is None
    assert store.subscriptions == ()
    assert store.display_summary() == DashboardSummary.empty()


def test_on_subscriptions_changed_publishes_new_summary(make_subscription):
    store = DashboardStore(clock=lambda: NOW)
    first = store.on_subscriptions_changed([make_subscription(amount="100")])
    second = store.on_subscriptions_changed(
        [make_subscription(amount="100"), make_subscription(amount="50")]
    )

    assert first.total_monthly_spending == Decimal("100")
    assert second.total_monthly_spending == Decimal("150")
    assert store.summary is second
    assert first is not second
    # The earlier snapshot is never modified in place
    assert first.active_subscriptions == 1


def test_listeners_receive_each_summary(make_subscription):
    store = DashboardStore(clock=lambda: NOW)
    received = []
    unsubscribe = store.subscribe(received.append)

    store.on_subscriptions_changed([make_subscription()])
    unsubscribe()
    store.on_subscriptions_changed([])

    assert len(received) == 1
    assert received[0].active_subscriptions == 1


def test_empty_set_and_absent_summary_display_the_same():
    store = DashboardStore(clock=lambda: NOW)
    before = store.display_summary()
    store.on_subscriptions_changed([])

    assert store.summary is not None
    assert store.display_summary() == before


def test_load_populates_user_and_summary(make_subscription):
    user = User(
        id="u1", name="Asha", email="asha@example.com",
        default_reminder_time=2, theme=Theme.DARK, currency="INR",
    )
    db = FakeDatabase([make_subscription(amount="199")], user=user)
    store = DashboardStore(clock=lambda: NOW)

    summary = asyncio.run(store.load(db))

    assert store.is_loading is False
    assert store.user == user
    assert summary.total_monthly_spending == Decimal("199")
    assert store.summary is summary


def test_load_waits_for_minimum_splash(make_subscription):
    db = FakeDatabase([make_subscription()])
    store = DashboardStore(clock=lambda: NOW)

    started = time.monotonic()
    asyncio.run(store.load(db, min_splash_seconds=0.05))

    elapsed = time.monotonic() - started
    assert 0.04 <= elapsed < 0.5
    assert store.is_loading is False


def test_splash_overlaps_slow_read(make_subscription):
    """Readiness takes the longer of the read and the splash, not their sum."""
    db = SlowDatabase([make_subscription()], delay=0.3)
    store = DashboardStore(clock=lambda: NOW)

    started = time.monotonic()
    asyncio.run(store.load(db, min_splash_seconds=0.3))
    elapsed = time.monotonic() - started

    assert 0.28 <= elapsed < 0.5
    assert len(store.subscriptions) == 1


def test_failed_load_leaves_empty_dashboard():
    db = FakeDatabase(error=RuntimeError("disk unavailable"))
    store = DashboardStore(clock=lambda: NOW)

    with pytest.raises(StorageError, match="disk unavailable"):
        asyncio.run(store.load(db))

    assert store.is_loading is False
    assert isinstance(store.load_error, RuntimeError)
    assert store.summary == DashboardSummary.empty()
    assert store.subscriptions == ()


def test_reminder_plan_pushed_after_each_change(make_subscription):
    scheduler = RecordingScheduler()
    store = DashboardStore(reminder_scheduler=scheduler, clock=lambda: NOW)
    manual = make_subscription(
        id="gym", name="Gym", auto_pay=False, date=NOW + timedelta(days=10), reminder_time=2
    )

    store.on_subscriptions_changed([manual])
    store.on_subscriptions_changed([replace(manual, schedule=AutoPay(next_billing_date=None))])

    assert len(scheduler.plans) == 2
    first, second = scheduler.plans
    assert [r.subscription_id for r in first.reminders] == ["gym"]
    assert first.reminders[0].fire_at == NOW + timedelta(days=8)
    assert first.cancellations == ()
    assert second.reminders == ()
    assert second.cancellations == ("gym",)


def test_get_subscription(make_subscription):
    store = DashboardStore(clock=lambda: NOW)
    sub = make_subscription(id="abc")
    store.on_subscriptions_changed([sub])

    assert store.get_subscription("abc") == sub
    assert store.get_subscription("missing") is None
