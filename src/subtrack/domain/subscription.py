"""Subscription domain service.

All writes go to the database first; on success the full subscription set
is reloaded and handed to the dashboard store, which recomputes the summary.
A failed write leaves the store untouched.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from subtrack.config import DEFAULT_CURRENCY, DEFAULT_REMINDER_DAYS
from subtrack.database.base import Database
from subtrack.domain.entities import (
    AutoPay,
    BillingCycle,
    BillingSchedule,
    Category,
    Manual,
    Subscription,
)
from subtrack.domain.errors import (
    NotFoundError,
    StorageError,
    ValidationError,
    invalid_amount,
    invalid_choice,
    missing_expiry_date,
    subscription_not_found,
    too_precise_amount,
)
from subtrack.domain.store import DashboardStore
from subtrack.utils.logger import get_logger

logger = get_logger(__name__)

# Amounts are stored with two decimal places
CENT = Decimal("0.01")


def coerce_category(value: Union[Category, str]) -> Category:
    try:
        return Category(str(getattr(value, "value", value)).lower())
    except ValueError:
        raise ValidationError(invalid_choice("category", value, [c.value for c in Category]))


def coerce_billing_cycle(value: Union[BillingCycle, str]) -> BillingCycle:
    try:
        return BillingCycle(str(getattr(value, "value", value)).lower())
    except ValueError:
        raise ValidationError(
            invalid_choice("billing cycle", value, [c.value for c in BillingCycle])
        )


def validate_amount(amount: Union[Decimal, int, float, str]) -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError(invalid_amount(amount))
    if not value.is_finite() or value <= 0:
        raise ValidationError(invalid_amount(amount))
    if value % CENT != 0:
        raise ValidationError(too_precise_amount(amount))
    return value


def validate_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError("Subscription name is required")
    return name.strip()


def validate_reminder_time(reminder_time: int) -> int:
    if reminder_time < 0:
        raise ValidationError(f"Reminder time cannot be negative, got {reminder_time}")
    return reminder_time


def validate_currency(currency: Optional[str]) -> str:
    if currency is None or not currency.strip():
        raise ValidationError("Currency code is required")
    return currency.strip().upper()


class SubscriptionService:
    """Service for managing subscriptions."""

    def __init__(self, db: Database, store: DashboardStore):
        """Initialize subscription service.

        Args:
            db: Database instance
            store: Dashboard store to refresh after each change
        """
        self.db = db
        self.store = store

    def _default_currency(self) -> str:
        if self.store.user is not None:
            return self.store.user.currency
        return DEFAULT_CURRENCY

    def _default_reminder_time(self) -> int:
        if self.store.user is not None:
            return self.store.user.default_reminder_time
        return DEFAULT_REMINDER_DAYS

    def _build_schedule(
        self,
        name: str,
        auto_pay: bool,
        renewal_date: Optional[datetime],
        reminder_time: Optional[int],
    ) -> BillingSchedule:
        if auto_pay:
            return AutoPay(next_billing_date=renewal_date)
        if renewal_date is None:
            raise ValidationError(missing_expiry_date(name))
        if reminder_time is None:
            reminder_time = self._default_reminder_time()
        return Manual(expiry_date=renewal_date, reminder_time=validate_reminder_time(reminder_time))

    def _require(self, subscription_id: str) -> Subscription:
        subscription = self.get_subscription(subscription_id)
        if subscription is None:
            raise NotFoundError(subscription_not_found(subscription_id))
        return subscription

    def reload(self) -> tuple[Subscription, ...]:
        """Reload every subscription from storage and republish the summary."""
        try:
            subscriptions = self.db.list_subscriptions()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load subscriptions: {e}") from e
        self.store.on_subscriptions_changed(subscriptions)
        return self.store.subscriptions

    def get_subscription(self, subscription_id: str) -> Optional[Subscription]:
        """Get subscription by ID.

        Returns:
            Subscription entity or None if not found
        """
        try:
            return self.db.get_subscription(subscription_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read subscription {subscription_id}: {e}") from e

    def list_subscriptions(self) -> tuple[Subscription, ...]:
        """Subscriptions as last published by the store."""
        return self.store.subscriptions

    def add_subscription(
        self,
        name: str,
        category: Union[Category, str],
        amount: Union[Decimal, int, str],
        billing_cycle: Union[BillingCycle, str],
        auto_pay: bool = True,
        renewal_date: Optional[datetime] = None,
        reminder_time: Optional[int] = None,
        currency: Optional[str] = None,
        provider: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        """Add a subscription.

        Args:
            name: Display name
            category: Category value
            amount: Amount charged per billing cycle
            billing_cycle: Billing cycle value
            auto_pay: True if the subscription renews on its own
            renewal_date: Next billing date (auto-pay) or expiry date (manual)
            reminder_time: Days before expiry to remind; ignored for auto-pay
            currency: Currency code, defaults to the user's home currency
            provider: Optional vendor name
            description: Optional free text

        Returns:
            Subscription ID

        Raises:
            ValidationError: If any field is invalid or a manual subscription
                has no expiry date
            StorageError: If the database write fails
        """
        name = validate_name(name)
        schedule = self._build_schedule(name, auto_pay, renewal_date, reminder_time)
        try:
            subscription_id = self.db.create_subscription(
                name=name,
                category=coerce_category(category),
                amount=validate_amount(amount),
                currency=validate_currency(currency or self._default_currency()),
                billing_cycle=coerce_billing_cycle(billing_cycle),
                schedule=schedule,
                is_active=True,
                provider=provider or None,
                description=description or None,
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to save subscription '{name}': {e}") from e

        logger.info("Added subscription %s (%s)", subscription_id, name)
        self.reload()
        return subscription_id

    def update_subscription(
        self,
        subscription_id: str,
        name: Optional[str] = None,
        category: Optional[Union[Category, str]] = None,
        amount: Optional[Union[Decimal, int, str]] = None,
        billing_cycle: Optional[Union[BillingCycle, str]] = None,
        auto_pay: Optional[bool] = None,
        renewal_date: Optional[datetime] = None,
        reminder_time: Optional[int] = None,
        is_active: Optional[bool] = None,
        currency: Optional[str] = None,
        provider: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Subscription:
        """Update subscription fields.

        Switching to auto-pay drops the manual reminder (reminder time 0) and
        the old expiry date stops counting. Switching to manual needs an
        expiry date, either passed in or already on the record.

        Returns:
            The updated subscription

        Raises:
            NotFoundError: If the subscription does not exist
            ValidationError: If any field is invalid
            StorageError: If the database write fails
        """
        current = self._require(subscription_id)

        schedule = None
        if auto_pay is not None or renewal_date is not None or reminder_time is not None:
            schedule = self._resolve_schedule(current, auto_pay, renewal_date, reminder_time)

        try:
            self.db.update_subscription(
                subscription_id,
                name=validate_name(name) if name is not None else None,
                category=coerce_category(category) if category is not None else None,
                amount=validate_amount(amount) if amount is not None else None,
                currency=validate_currency(currency) if currency is not None else None,
                billing_cycle=(
                    coerce_billing_cycle(billing_cycle) if billing_cycle is not None else None
                ),
                schedule=schedule,
                is_active=is_active,
                provider=provider,
                description=description,
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to update subscription {subscription_id}: {e}") from e

        logger.info("Updated subscription %s", subscription_id)
        self.reload()
        return self._require(subscription_id)

    def _resolve_schedule(
        self,
        current: Subscription,
        auto_pay: Optional[bool],
        renewal_date: Optional[datetime],
        reminder_time: Optional[int],
    ) -> BillingSchedule:
        """Merge requested schedule changes into the current schedule."""
        wants_auto_pay = current.is_auto_pay_enabled if auto_pay is None else auto_pay
        if wants_auto_pay:
            date = renewal_date if renewal_date is not None else current.next_billing_date
            return AutoPay(next_billing_date=date)

        date = renewal_date if renewal_date is not None else current.expiry_date
        if reminder_time is None and not current.is_auto_pay_enabled:
            reminder_time = current.reminder_time
        return self._build_schedule(current.name, False, date, reminder_time)

    def set_auto_pay(
        self, subscription_id: str, enabled: bool, renewal_date: Optional[datetime] = None
    ) -> Subscription:
        """Switch a subscription between auto-pay and manual payment."""
        return self.update_subscription(
            subscription_id, auto_pay=enabled, renewal_date=renewal_date
        )

    def cancel_subscription(self, subscription_id: str) -> Subscription:
        """Mark a subscription inactive. The record is kept."""
        return self.update_subscription(subscription_id, is_active=False)

    def reactivate_subscription(self, subscription_id: str) -> Subscription:
        """Mark a cancelled subscription active again."""
        return self.update_subscription(subscription_id, is_active=True)

    def delete_subscription(self, subscription_id: str) -> None:
        """Delete a subscription permanently.

        Raises:
            NotFoundError: If the subscription does not exist
            StorageError: If the database write fails
        """
        try:
            self.db.delete_subscription(subscription_id)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete subscription {subscription_id}: {e}") from e

        logger.info("Deleted subscription %s", subscription_id)
        self.reload()

    def clear_all(self) -> None:
        """Delete every subscription and the user profile."""
        try:
            self.db.clear_all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to clear data: {e}") from e

        logger.info("Cleared all data")
        self.store.user = None
        self.reload()
