"""Subscription status classification."""

import math
from datetime import datetime, timedelta
from typing import Optional

from subtrack.config import EXPIRING_SOON_WINDOW_DAYS
from subtrack.domain.entities import BillingMode, LifecycleStatus, Subscription

STATUS_COLORS: dict[LifecycleStatus, str] = {
    LifecycleStatus.ACTIVE: "#4CAF50",
    LifecycleStatus.EXPIRING_SOON: "#FF9800",
    LifecycleStatus.EXPIRED: "#F44336",
    LifecycleStatus.CANCELLED: "#9E9E9E",
}

BILLING_MODE_COLORS: dict[BillingMode, str] = {
    BillingMode.AUTO_PAY: "#4CAF50",
    BillingMode.MANUAL: "#FF9800",
    BillingMode.EXPIRED: "#9E9E9E",
}

FALLBACK_COLOR = "#2196F3"

_ONE_DAY = timedelta(days=1)


def days_until(target: datetime, now: datetime) -> int:
    """Whole days from ``now`` to ``target``, rounded up."""
    return math.ceil((target - now) / _ONE_DAY)


def days_until_next_billing(subscription: Subscription, now: datetime) -> Optional[int]:
    """Days until the renewal or expiry date, or None when there is no date."""
    target = subscription.target_date
    if target is None:
        return None
    return days_until(target, now)


def classify_lifecycle(subscription: Subscription, now: datetime) -> LifecycleStatus:
    """Map a subscription to its lifecycle status at ``now``.

    Auto-pay subscriptions never expire here, and a manual subscription
    without an expiry date counts as active.
    """
    if not subscription.is_active:
        return LifecycleStatus.CANCELLED
    if subscription.is_auto_pay_enabled:
        return LifecycleStatus.ACTIVE

    expiry = subscription.expiry_date
    if expiry is None:
        return LifecycleStatus.ACTIVE

    remaining = days_until(expiry, now)
    if remaining < 0:
        return LifecycleStatus.EXPIRED
    if remaining <= EXPIRING_SOON_WINDOW_DAYS:
        return LifecycleStatus.EXPIRING_SOON
    return LifecycleStatus.ACTIVE


def classify_billing_mode(subscription: Subscription) -> BillingMode:
    """Map a subscription to its billing mode."""
    if not subscription.is_active:
        return BillingMode.EXPIRED
    if subscription.is_auto_pay_enabled:
        return BillingMode.AUTO_PAY
    return BillingMode.MANUAL


def status_color(status: LifecycleStatus) -> str:
    return STATUS_COLORS.get(status, FALLBACK_COLOR)


def billing_mode_color(mode: BillingMode) -> str:
    return BILLING_MODE_COLORS.get(mode, FALLBACK_COLOR)
