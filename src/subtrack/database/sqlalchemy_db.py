"""Generic SQLAlchemy database implementation."""

from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Session

from subtrack.database.base import Database
from subtrack.database.models import (
    Subscription,
    User,
    create_session_factory,
    new_id,
    utc_now,
)
from subtrack.database.mappers import (
    schedule_to_columns,
    subscription_to_domain,
    user_to_domain,
)
from subtrack.domain.entities import (
    BillingCycle,
    BillingSchedule,
    Category,
    Subscription as DomainSubscription,
    User as DomainUser,
)
from subtrack.domain.errors import NotFoundError, subscription_not_found


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def _require_subscription(self, session: Session, subscription_id: str) -> Subscription:
        subscription = (
            session.query(Subscription).filter(Subscription.id == subscription_id).first()
        )
        if subscription is None:
            raise NotFoundError(subscription_not_found(subscription_id))
        return subscription

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    # Subscription operations
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
        session = self._get_session()
        now = utc_now()
        subscription = Subscription(
            id=new_id(),
            name=name,
            category=Category(category).value,
            amount=amount,
            currency=currency,
            billing_cycle=BillingCycle(billing_cycle).value,
            is_active=is_active,
            provider=provider,
            description=description,
            created_at=now,
            updated_at=now,
            **schedule_to_columns(schedule),
        )
        session.add(subscription)
        session.commit()
        return subscription.id

    def get_subscription(self, subscription_id: str) -> Optional[DomainSubscription]:
        """Get subscription by ID."""
        session = self._get_session()
        subscription = (
            session.query(Subscription).filter(Subscription.id == subscription_id).first()
        )
        if subscription is None:
            return None
        return subscription_to_domain(subscription)

    def list_subscriptions(self) -> list[DomainSubscription]:
        """List all subscriptions ordered by next billing date, then expiry date."""
        session = self._get_session()
        subscriptions = (
            session.query(Subscription)
            .order_by(
                Subscription.next_billing_date,
                Subscription.expiry_date,
                Subscription.created_at,
            )
            .all()
        )
        return [subscription_to_domain(sub) for sub in subscriptions]

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

        An empty string for ``provider`` or ``description`` clears the field.
        """
        session = self._get_session()
        subscription = self._require_subscription(session, subscription_id)

        if name is not None:
            subscription.name = name
        if category is not None:
            subscription.category = Category(category).value
        if amount is not None:
            subscription.amount = amount
        if currency is not None:
            subscription.currency = currency
        if billing_cycle is not None:
            subscription.billing_cycle = BillingCycle(billing_cycle).value
        if schedule is not None:
            for column, value in schedule_to_columns(schedule).items():
                setattr(subscription, column, value)
        if is_active is not None:
            subscription.is_active = is_active
        if provider is not None:
            subscription.provider = provider or None
        if description is not None:
            subscription.description = description or None

        subscription.updated_at = utc_now()
        session.commit()

    def delete_subscription(self, subscription_id: str) -> None:
        """Delete a subscription permanently."""
        session = self._get_session()
        subscription = self._require_subscription(session, subscription_id)
        session.delete(subscription)
        session.commit()

    # User operations
    def get_user(self) -> Optional[DomainUser]:
        """Get the local user profile, if one has been saved."""
        session = self._get_session()
        user = session.query(User).first()
        if user is None:
            return None
        return user_to_domain(user)

    def save_user(self, user: DomainUser) -> None:
        """Insert or replace the local user profile."""
        session = self._get_session()
        session.merge(
            User(
                id=user.id,
                name=user.name,
                email=user.email,
                default_reminder_time=user.default_reminder_time,
                theme=user.theme.value,
                currency=user.currency,
            )
        )
        session.commit()

    def clear_all(self) -> None:
        """Delete all subscriptions and users."""
        session = self._get_session()
        session.query(Subscription).delete()
        session.query(User).delete()
        session.commit()
