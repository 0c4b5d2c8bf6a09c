"""Reminder planning for manually paid subscriptions.

The planner only describes what to remind about and when. Delivering the
notifications is the job of a :class:`ReminderScheduler` implementation.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Iterable

from subtrack.domain.entities import Reminder, ReminderPlan, Subscription
from subtrack.utils.formatting import format_currency

REMINDER_TITLE = "Subscription Reminder"


class ReminderScheduler(ABC):
    """Notification collaborator fed by the dashboard store."""

    @abstractmethod
    def apply(self, plan: ReminderPlan) -> None:
        """Cancel the listed reminders and schedule the new ones."""
        pass


def needs_reminder(subscription: Subscription) -> bool:
    """Only active manual subscriptions with an expiry date get reminders."""
    return (
        subscription.is_active
        and not subscription.is_auto_pay_enabled
        and subscription.expiry_date is not None
    )


def reminder_body(subscription: Subscription) -> str:
    amount = format_currency(subscription.amount, subscription.currency)
    days = subscription.reminder_time
    if days == 0:
        due = "today"
    elif days == 1:
        due = "tomorrow"
    else:
        due = f"in {days} days"
    return f"{subscription.name} payment of {amount} due {due}!"


def plan_reminders(subscriptions: Iterable[Subscription], now: datetime) -> list[Reminder]:
    """Build reminders that still lie in the future, earliest first."""
    reminders = []
    for sub in subscriptions:
        if not needs_reminder(sub):
            continue
        fire_at = sub.expiry_date - timedelta(days=sub.reminder_time)
        if fire_at <= now:
            continue
        reminders.append(
            Reminder(
                subscription_id=sub.id,
                fire_at=fire_at,
                title=REMINDER_TITLE,
                body=reminder_body(sub),
            )
        )
    return sorted(reminders, key=lambda reminder: reminder.fire_at)


def reminder_cancellations(
    previous: Iterable[Subscription], current: Iterable[Subscription]
) -> list[str]:
    """IDs that needed a reminder before but no longer do.

    Covers deleted subscriptions, cancelled ones and ones switched to
    auto-pay.
    """
    still_needed = {sub.id for sub in current if needs_reminder(sub)}
    return sorted(
        sub.id for sub in previous if needs_reminder(sub) and sub.id not in still_needed
    )


def build_reminder_plan(
    previous: Iterable[Subscription], current: Iterable[Subscription], now: datetime
) -> ReminderPlan:
    current = list(current)
    return ReminderPlan(
        reminders=tuple(plan_reminders(current, now)),
        cancellations=tuple(reminder_cancellations(previous, current)),
    )
