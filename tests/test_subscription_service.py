"""Tests for the subscription domain service."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal

import pytest

from subtrack.domain.entities import BillingCycle, Category, LifecycleStatus
from subtrack.domain.errors import NotFoundError, StorageError, ValidationError
from subtrack.domain.status import classify_lifecycle
from subtrack.database.models import Subscription as ORMSubscription

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


def _add_manual(service, name="Gym", days=5, reminder_time=2, amount="500"):
    return service.add_subscription(
        name=name,
        category="fitness",
        amount=amount,
        billing_cycle="monthly",
        auto_pay=False,
        renewal_date=NOW + timedelta(days=days),
        reminder_time=reminder_time,
    )


def test_add_subscription_refreshes_store(subscription_service, store):
    subscription_id = subscription_service.add_subscription(
        name="Netflix",
        category=Category.ENTERTAINMENT,
        amount=Decimal("199"),
        billing_cycle=BillingCycle.MONTHLY,
        auto_pay=True,
        renewal_date=NOW + timedelta(days=10),
        provider="Netflix Inc.",
    )

    assert len(store.subscriptions) == 1
    sub = store.subscriptions[0]
    assert sub.id == subscription_id
    assert sub.amount == Decimal("199")
    assert sub.currency == "INR"
    assert sub.is_auto_pay_enabled
    assert sub.next_billing_date == NOW + timedelta(days=10)
    assert sub.reminder_time == 0
    assert sub.provider == "Netflix Inc."
    assert sub.created_at == sub.updated_at
    assert store.summary.total_monthly_spending == Decimal("199")
    assert [s.id for s in store.summary.upcoming_renewals] == [subscription_id]


def test_add_manual_subscription(subscription_service, store):
    subscription_id = _add_manual(subscription_service)

    sub = subscription_service.get_subscription(subscription_id)
    assert not sub.is_auto_pay_enabled
    assert sub.expiry_date == NOW + timedelta(days=5)
    assert sub.reminder_time == 2
    assert [s.id for s in store.summary.expiring_soon] == [subscription_id]


def test_add_manual_uses_default_reminder(subscription_service):
    subscription_id = subscription_service.add_subscription(
        name="Paper",
        category="news",
        amount="99",
        billing_cycle="monthly",
        auto_pay=False,
        renewal_date=NOW + timedelta(days=20),
    )

    assert subscription_service.get_subscription(subscription_id).reminder_time == 1


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"name": "  "}, "name is required"),
        ({"amount": "0"}, "greater than zero"),
        ({"amount": "-5"}, "greater than zero"),
        ({"amount": "abc"}, "greater than zero"),
        ({"category": "games"}, "Invalid category"),
        ({"billing_cycle": "daily"}, "Invalid billing cycle"),
        ({"auto_pay": False, "renewal_date": None}, "needs an expiry date"),
        ({"auto_pay": False, "reminder_time": -1}, "cannot be negative"),
    ],
)
def test_add_subscription_validation(subscription_service, store, overrides, message):
    fields = {
        "name": "Netflix",
        "category": "entertainment",
        "amount": "199",
        "billing_cycle": "monthly",
        "auto_pay": True,
        "renewal_date": NOW + timedelta(days=3),
    }
    fields.update(overrides)

    with pytest.raises(ValidationError, match=message):
        subscription_service.add_subscription(**fields)

    assert store.subscriptions == ()


@pytest.mark.parametrize("amount", ["0.004", "4.999", Decimal("12.345")])
def test_add_rejects_fractions_of_a_cent(subscription_service, store, amount):
    with pytest.raises(ValidationError, match="at most two decimal places"):
        subscription_service.add_subscription(
            name="Tiny", category="other", amount=amount, billing_cycle="monthly"
        )

    assert store.subscriptions == ()


def test_whole_cent_amount_is_stored_exactly(subscription_service):
    subscription_id = subscription_service.add_subscription(
        name="Music", category="entertainment", amount="4.990", billing_cycle="monthly"
    )

    assert subscription_service.get_subscription(subscription_id).amount == Decimal("4.99")


def test_update_rejects_fractions_of_a_cent(subscription_service):
    subscription_id = _add_manual(subscription_service)

    with pytest.raises(ValidationError, match="at most two decimal places"):
        subscription_service.update_subscription(subscription_id, amount="4.999")

    assert subscription_service.get_subscription(subscription_id).amount == Decimal("500")


def test_update_preserves_id_and_created_at(subscription_service):
    subscription_id = _add_manual(subscription_service)
    original = subscription_service.get_subscription(subscription_id)

    updated = subscription_service.update_subscription(
        subscription_id, name="Gym Plus", amount="650", billing_cycle="quarterly"
    )

    assert updated.id == original.id
    assert updated.created_at == original.created_at
    assert updated.updated_at >= original.updated_at
    assert updated.name == "Gym Plus"
    assert updated.amount == Decimal("650")
    assert updated.billing_cycle == BillingCycle.QUARTERLY
    assert updated.expiry_date == original.expiry_date


def test_switch_to_auto_pay_forces_reminder_zero(subscription_service, store, temp_db):
    subscription_id = _add_manual(subscription_service, days=3, reminder_time=2)
    assert len(store.summary.expiring_soon) == 1

    updated = subscription_service.set_auto_pay(subscription_id, True)

    assert updated.is_auto_pay_enabled
    assert updated.reminder_time == 0
    assert updated.expiry_date is None
    assert store.summary.expiring_soon == ()

    # The old expiry is still stored but no longer read
    row = temp_db._get_session().get(ORMSubscription, subscription_id)
    assert row.expiry_date is not None
    assert row.reminder_time == 0


def test_switch_to_manual_requires_expiry(subscription_service):
    subscription_id = subscription_service.add_subscription(
        name="Music", category="entertainment", amount="119", billing_cycle="monthly"
    )

    with pytest.raises(ValidationError, match="needs an expiry date"):
        subscription_service.set_auto_pay(subscription_id, False)

    updated = subscription_service.set_auto_pay(
        subscription_id, False, renewal_date=NOW + timedelta(days=12)
    )
    assert updated.expiry_date == NOW + timedelta(days=12)
    assert updated.reminder_time == 1


def test_update_reminder_time_keeps_expiry(subscription_service):
    subscription_id = _add_manual(subscription_service, days=9, reminder_time=1)

    updated = subscription_service.update_subscription(subscription_id, reminder_time=4)

    assert updated.reminder_time == 4
    assert updated.expiry_date == NOW + timedelta(days=9)


def test_cancel_and_reactivate(subscription_service, store):
    subscription_id = _add_manual(subscription_service)

    cancelled = subscription_service.cancel_subscription(subscription_id)

    assert not cancelled.is_active
    assert classify_lifecycle(cancelled, NOW) == LifecycleStatus.CANCELLED
    assert len(store.subscriptions) == 1
    assert store.summary.active_subscriptions == 0
    assert store.summary.total_monthly_spending == 0
    assert store.summary.expiring_soon == ()

    reactivated = subscription_service.reactivate_subscription(subscription_id)

    assert reactivated.is_active
    assert store.summary.active_subscriptions == 1


def test_delete_subscription(subscription_service, store):
    keep = _add_manual(subscription_service, name="Keep")
    drop = _add_manual(subscription_service, name="Drop")

    subscription_service.delete_subscription(drop)

    assert [s.id for s in store.subscriptions] == [keep]
    assert subscription_service.get_subscription(drop) is None


def test_missing_subscription(subscription_service):
    with pytest.raises(NotFoundError):
        subscription_service.update_subscription("missing", name="x")
    with pytest.raises(NotFoundError):
        subscription_service.delete_subscription("missing")


def test_storage_failure_keeps_last_good_state(subscription_service, store, temp_db, monkeypatch):
    _add_manual(subscription_service)
    before = store.summary

    from sqlalchemy.exc import OperationalError

    def broken(**kwargs):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(temp_db, "create_subscription", broken)

    with pytest.raises(StorageError):
        _add_manual(subscription_service, name="Another")

    assert store.summary is before
    assert len(store.subscriptions) == 1


def test_clear_all(subscription_service, user_service, store):
    _add_manual(subscription_service)
    user_service.save_settings(name="Asha")

    subscription_service.clear_all()

    assert store.subscriptions == ()
    assert store.user is None
    assert store.summary.active_subscriptions == 0
