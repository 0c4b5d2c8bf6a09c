"""Date parsing utilities."""

import re
from datetime import date, datetime, time, timedelta, UTC
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_IN_PERIOD = re.compile(r"^in (\d+) (day|days|week|weeks|month|months|year|years)$")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "tomorrow", "next month", "in 3 days", etc.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Renewals are usually "a month from now", not "first of next month"
    if date_str.startswith("next "):
        period = date_str[5:]
        if period == "week":
            return today + timedelta(weeks=1)
        elif period == "month":
            return today + relativedelta(months=1)
        elif period == "quarter":
            return today + relativedelta(months=3)
        elif period == "year":
            return today + relativedelta(years=1)

    match = _IN_PERIOD.match(date_str)
    if match:
        count = int(match.group(1))
        unit = match.group(2).rstrip("s")
        if unit == "day":
            return today + timedelta(days=count)
        elif unit == "week":
            return today + timedelta(weeks=count)
        elif unit == "month":
            return today + relativedelta(months=count)
        return today + relativedelta(years=count)

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def to_utc_datetime(value: date) -> datetime:
    """Midnight UTC at the start of ``value``."""
    return datetime.combine(value, time.min, tzinfo=UTC)


def parse_renewal_date(date_str: str, today: Optional[date] = None) -> datetime:
    """Parse a renewal or expiry date into a UTC datetime."""
    return to_utc_datetime(parse_date(date_str, today=today))
