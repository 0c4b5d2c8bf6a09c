"""Domain model entities for subtrack.

These are pure data classes representing business concepts, independent of
database schema. The billing schedule is a tagged variant: an auto-pay
subscription only carries a next billing date, a manual one only carries an
expiry date and a reminder lead time.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class Category(str, Enum):
    """Fixed set of subscription categories."""

    ENTERTAINMENT = "entertainment"
    PRODUCTIVITY = "productivity"
    FITNESS = "fitness"
    NEWS = "news"
    CLOUD = "cloud"
    OTHER = "other"


class BillingCycle(str, Enum):
    """How often a subscription amount is charged."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class Theme(str, Enum):
    """Display theme preference."""

    LIGHT = "light"
    DARK = "dark"


class LifecycleStatus(str, Enum):
    """Lifecycle status of a subscription at a point in time."""

    ACTIVE = "active"
    EXPIRING_SOON = "expiring-soon"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class BillingMode(str, Enum):
    """Billing mode status of a subscription."""

    AUTO_PAY = "auto-pay"
    MANUAL = "manual"
    EXPIRED = "expired"


@dataclass(frozen=True)
class AutoPay:
    """Renews automatically; tracked by the next charge date."""

    next_billing_date: Optional[datetime]


@dataclass(frozen=True)
class Manual:
    """Needs a manual renewal before ``expiry_date``."""

    expiry_date: Optional[datetime]
    reminder_time: int = 1


BillingSchedule = Union[AutoPay, Manual]


@dataclass(frozen=True)
class Subscription:
    """Subscription domain entity.

    ``amount`` is denominated per billing cycle in ``currency``.
    """

    id: str
    name: str
    category: Category
    amount: Decimal
    currency: str
    billing_cycle: BillingCycle
    schedule: BillingSchedule
    is_active: bool
    created_at: datetime
    updated_at: datetime
    provider: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_auto_pay_enabled(self) -> bool:
        return isinstance(self.schedule, AutoPay)

    @property
    def next_billing_date(self) -> Optional[datetime]:
        if isinstance(self.schedule, AutoPay):
            return self.schedule.next_billing_date
        return None

    @property
    def expiry_date(self) -> Optional[datetime]:
        if isinstance(self.schedule, Manual):
            return self.schedule.expiry_date
        return None

    @property
    def reminder_time(self) -> int:
        """Days before expiry to remind; always 0 for auto-pay."""
        if isinstance(self.schedule, Manual):
            return self.schedule.reminder_time
        return 0

    @property
    def target_date(self) -> Optional[datetime]:
        """The date that matters for this subscription's billing mode."""
        if isinstance(self.schedule, AutoPay):
            return self.schedule.next_billing_date
        return self.schedule.expiry_date


@dataclass(frozen=True)
class User:
    """Local profile and settings."""

    id: str
    name: str
    email: str
    default_reminder_time: int
    theme: Theme
    currency: str


@dataclass(frozen=True)
class CategoryBreakdown:
    """Monthly spend and member count for one category."""

    category: Category
    label: str
    amount: Decimal
    count: int
    color: str


@dataclass(frozen=True)
class DashboardSummary:
    """Derived snapshot of the current subscription set.

    Totals are a plain sum across records; mixed currencies are not converted.
    """

    total_monthly_spending: Decimal
    total_yearly_spending: Decimal
    active_subscriptions: int
    upcoming_renewals: tuple[Subscription, ...] = ()
    expiring_soon: tuple[Subscription, ...] = ()
    monthly_breakdown: tuple[CategoryBreakdown, ...] = ()

    @classmethod
    def empty(cls) -> "DashboardSummary":
        """Summary of an empty subscription set."""
        return cls(
            total_monthly_spending=Decimal("0"),
            total_yearly_spending=Decimal("0"),
            active_subscriptions=0,
        )


@dataclass(frozen=True)
class Reminder:
    """A reminder the notification collaborator should schedule."""

    subscription_id: str
    fire_at: datetime
    title: str
    body: str


@dataclass(frozen=True)
class ReminderPlan:
    """Reminders to schedule and subscription IDs whose reminders to cancel."""

    reminders: tuple[Reminder, ...] = ()
    cancellations: tuple[str, ...] = field(default_factory=tuple)
