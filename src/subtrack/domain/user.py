"""User settings domain service."""

from dataclasses import replace
from typing import Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from subtrack.config import DEFAULT_CURRENCY, DEFAULT_REMINDER_DAYS
from subtrack.database.base import Database
from subtrack.domain.entities import Theme, User
from subtrack.domain.errors import StorageError, ValidationError, invalid_choice
from subtrack.domain.store import DashboardStore
from subtrack.domain.subscription import validate_currency, validate_reminder_time

# There is one local profile, so its id is fixed
LOCAL_USER_ID = "local"


def default_user() -> User:
    """Settings used before the user has saved a profile."""
    return User(
        id=LOCAL_USER_ID,
        name="",
        email="",
        default_reminder_time=DEFAULT_REMINDER_DAYS,
        theme=Theme.LIGHT,
        currency=DEFAULT_CURRENCY,
    )


class UserService:
    """Service for the single local user profile."""

    def __init__(self, db: Database, store: DashboardStore):
        """Initialize user service.

        Args:
            db: Database instance
            store: Dashboard store holding the loaded user
        """
        self.db = db
        self.store = store

    def get_settings(self) -> User:
        """Return the stored profile, or defaults when none exists."""
        if self.store.user is not None:
            return self.store.user
        try:
            user = self.db.get_user()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load user: {e}") from e
        return user if user is not None else default_user()

    def save_settings(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        default_reminder_time: Optional[int] = None,
        theme: Optional[Union[Theme, str]] = None,
        currency: Optional[str] = None,
    ) -> User:
        """Update and persist settings. Fields left as None keep their value.

        Raises:
            ValidationError: If the theme, currency or reminder time is invalid
            StorageError: If the database write fails
        """
        user = self.get_settings()
        changes = {}
        if name is not None:
            changes["name"] = name.strip()
        if email is not None:
            changes["email"] = email.strip()
        if default_reminder_time is not None:
            changes["default_reminder_time"] = validate_reminder_time(default_reminder_time)
        if theme is not None:
            try:
                changes["theme"] = Theme(str(getattr(theme, "value", theme)).lower())
            except ValueError:
                raise ValidationError(invalid_choice("theme", theme, [t.value for t in Theme]))
        if currency is not None:
            changes["currency"] = validate_currency(currency)

        updated = replace(user, **changes)
        try:
            self.db.save_user(updated)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to save user: {e}") from e

        self.store.user = updated
        return updated
