"""Dashboard aggregation over a subscription set.

Every function here is pure: the same subscriptions and ``now`` always give
the same result, and records missing the date their billing mode needs are
left out of the date-windowed lists rather than raising.
"""

from collections import defaultdict
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Sequence

from subtrack.config import EXPIRING_SOON_WINDOW_DAYS, UPCOMING_RENEWAL_WINDOW_DAYS
from subtrack.domain.entities import (
    Category,
    CategoryBreakdown,
    DashboardSummary,
    Subscription,
)
from subtrack.domain.spend import monthly_equivalent, yearly_equivalent

CATEGORY_COLORS: dict[Category, str] = {
    Category.ENTERTAINMENT: "#E91E63",
    Category.PRODUCTIVITY: "#2196F3",
    Category.FITNESS: "#4CAF50",
    Category.NEWS: "#FF9800",
    Category.CLOUD: "#00BCD4",
    Category.OTHER: "#607D8B",
}

_CATEGORY_ORDER = {category: index for index, category in enumerate(Category)}


def category_label(category: Category) -> str:
    """Display label for a category, e.g. ``Entertainment``."""
    return category.value.capitalize()


def active_only(subscriptions: Iterable[Subscription]) -> list[Subscription]:
    return [sub for sub in subscriptions if sub.is_active]


def total_monthly_spending(subscriptions: Iterable[Subscription]) -> Decimal:
    """Sum of monthly equivalents over active subscriptions."""
    return sum(
        (monthly_equivalent(sub.amount, sub.billing_cycle) for sub in active_only(subscriptions)),
        Decimal("0"),
    )


def total_yearly_spending(subscriptions: Iterable[Subscription]) -> Decimal:
    """Sum of yearly equivalents over active subscriptions."""
    return sum(
        (yearly_equivalent(sub.amount, sub.billing_cycle) for sub in active_only(subscriptions)),
        Decimal("0"),
    )


def select_upcoming_renewals(
    subscriptions: Iterable[Subscription],
    now: datetime,
    window_days: int = UPCOMING_RENEWAL_WINDOW_DAYS,
) -> list[Subscription]:
    """Active auto-pay subscriptions billing within ``[now, now + window]``.

    Manual subscriptions are never upcoming renewals; they show up in
    :func:`select_expiring_soon` instead.
    """
    window_end = now + timedelta(days=window_days)
    selected = [
        sub
        for sub in active_only(subscriptions)
        if sub.is_auto_pay_enabled
        and sub.next_billing_date is not None
        and now <= sub.next_billing_date <= window_end
    ]
    return sorted(selected, key=lambda sub: sub.next_billing_date)


def select_expiring_soon(
    subscriptions: Iterable[Subscription],
    now: datetime,
    window_days: int = EXPIRING_SOON_WINDOW_DAYS,
) -> list[Subscription]:
    """Active manual subscriptions expiring within ``[now, now + window]``."""
    window_end = now + timedelta(days=window_days)
    selected = [
        sub
        for sub in active_only(subscriptions)
        if not sub.is_auto_pay_enabled
        and sub.expiry_date is not None
        and now <= sub.expiry_date <= window_end
    ]
    return sorted(selected, key=lambda sub: sub.expiry_date)


def build_category_breakdown(subscriptions: Iterable[Subscription]) -> list[CategoryBreakdown]:
    """Group active subscriptions by category, largest monthly spend first."""
    totals: dict[Category, dict] = defaultdict(lambda: {"amount": Decimal("0"), "count": 0})

    for sub in active_only(subscriptions):
        totals[sub.category]["amount"] += monthly_equivalent(sub.amount, sub.billing_cycle)
        totals[sub.category]["count"] += 1

    breakdown = [
        CategoryBreakdown(
            category=category,
            label=category_label(category),
            amount=data["amount"],
            count=data["count"],
            color=CATEGORY_COLORS[category],
        )
        for category, data in totals.items()
    ]
    return sorted(breakdown, key=lambda item: (-item.amount, _CATEGORY_ORDER[item.category]))


def summarize(subscriptions: Sequence[Subscription], now: datetime) -> DashboardSummary:
    """Fold a subscription set into a dashboard summary."""
    active = active_only(subscriptions)
    return DashboardSummary(
        total_monthly_spending=total_monthly_spending(active),
        total_yearly_spending=total_yearly_spending(active),
        active_subscriptions=len(active),
        upcoming_renewals=tuple(select_upcoming_renewals(active, now)),
        expiring_soon=tuple(select_expiring_soon(active, now)),
        monthly_breakdown=tuple(build_category_breakdown(active)),
    )
