"""SQLAlchemy models for subtrack database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from subtrack.config import DEFAULT_CURRENCY, DEFAULT_REMINDER_DAYS, DEFAULT_THEME

Base = declarative_base()


def new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(UTC)


class Subscription(Base):
    """Subscription model.

    Both date columns exist; ``is_auto_pay_enabled`` decides which one is
    meaningful.
    """

    __tablename__ = "subscriptions"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String, nullable=False, default=DEFAULT_CURRENCY)
    billing_cycle = Column(String, nullable=False)
    next_billing_date = Column(DateTime, nullable=True)
    expiry_date = Column(DateTime, nullable=True)
    is_auto_pay_enabled = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    reminder_time = Column(Integer, default=DEFAULT_REMINDER_DAYS, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, nullable=False)
    description = Column(String, nullable=True)
    provider = Column(String, nullable=True)


class User(Base):
    """Local user profile model."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    default_reminder_time = Column(Integer, default=DEFAULT_REMINDER_DAYS, nullable=False)
    theme = Column(String, default=DEFAULT_THEME, nullable=False)
    currency = Column(String, default=DEFAULT_CURRENCY, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
