"""Abstract database interface."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from subtrack.domain.entities import (
    BillingCycle,
    BillingSchedule,
    Category,
    Subscription,
    User,
)


class Database(ABC):
    """Abstract database interface for subtrack.

    Every call is atomic: a write is visible to the next read or not at all.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Subscription operations
    @abstractmethod
    def create_subscription(
        self,
        name: str,
        category: Category,
        amount: Decimal,
        currency: str,
        billing_cycle: BillingCycle,
        schedule: BillingSchedule,
        is_active: bool = True,
        provider: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        """Create a subscription. Returns the new subscription ID."""
        pass

    @abstractmethod
    def get_subscription(self, subscription_id: str) -> Optional[Subscription]:
        """Get subscription by ID."""
        pass

    @abstractmethod
    def list_subscriptions(self) -> list[Subscription]:
        """List all subscriptions, active or not."""
        pass

    @abstractmethod
    def update_subscription(
        self,
        subscription_id: str,
        name: Optional[str] = None,
        category: Optional[Category] = None,
        amount: Optional[Decimal] = None,
        currency: Optional[str] = None,
        billing_cycle: Optional[BillingCycle] = None,
        schedule: Optional[BillingSchedule] = None,
        is_active: Optional[bool] = None,
        provider: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update the given subscription fields and refresh ``updated_at``.

        Fields left as None are not changed.

        Raises:
            NotFoundError: If the subscription does not exist
        """
        pass

    @abstractmethod
    def delete_subscription(self, subscription_id: str) -> None:
        """Delete a subscription permanently.

        Raises:
            NotFoundError: If the subscription does not exist
        """
        pass

    # User operations
    @abstractmethod
    def get_user(self) -> Optional[User]:
        """Get the local user profile, if one has been saved."""
        pass

    @abstractmethod
    def save_user(self, user: User) -> None:
        """Insert or replace the local user profile."""
        pass

    @abstractmethod
    def clear_all(self) -> None:
        """Delete all subscriptions and users."""
        pass
