"""Mapper functions to convert between domain models and SQLAlchemy models.

SQLite drops timezone information, so datetimes read back are treated as
UTC. Only the date column matching the auto-pay flag is read.
"""

from datetime import datetime, UTC
from typing import Optional

from subtrack.domain import entities as domain
from subtrack.database.models import (
    Subscription as ORMSubscription,
    User as ORMUser,
)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def schedule_to_domain(orm_subscription: ORMSubscription) -> domain.BillingSchedule:
    """Build the billing schedule variant from the stored columns."""
    if orm_subscription.is_auto_pay_enabled:
        return domain.AutoPay(next_billing_date=as_utc(orm_subscription.next_billing_date))
    return domain.Manual(
        expiry_date=as_utc(orm_subscription.expiry_date),
        reminder_time=orm_subscription.reminder_time or 0,
    )


def schedule_to_columns(schedule: domain.BillingSchedule) -> dict:
    """Column values written for a billing schedule.

    Switching to auto-pay leaves any old expiry date in place; it is never
    read again while the flag is set.
    """
    if isinstance(schedule, domain.AutoPay):
        return {
            "is_auto_pay_enabled": True,
            "next_billing_date": as_utc(schedule.next_billing_date),
            "reminder_time": 0,
        }
    return {
        "is_auto_pay_enabled": False,
        "expiry_date": as_utc(schedule.expiry_date),
        "reminder_time": schedule.reminder_time,
    }


def subscription_to_domain(orm_subscription: ORMSubscription) -> domain.Subscription:
    """Convert SQLAlchemy Subscription model to domain Subscription entity."""
    return domain.Subscription(
        id=orm_subscription.id,
        name=orm_subscription.name,
        category=domain.Category(orm_subscription.category),
        amount=orm_subscription.amount,
        currency=orm_subscription.currency,
        billing_cycle=domain.BillingCycle(orm_subscription.billing_cycle),
        schedule=schedule_to_domain(orm_subscription),
        is_active=orm_subscription.is_active,
        created_at=as_utc(orm_subscription.created_at),
        updated_at=as_utc(orm_subscription.updated_at),
        provider=orm_subscription.provider,
        description=orm_subscription.description,
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        email=orm_user.email,
        default_reminder_time=orm_user.default_reminder_time,
        theme=domain.Theme(orm_user.theme),
        currency=orm_user.currency,
    )
