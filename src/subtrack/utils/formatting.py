"""Display formatting helpers for amounts, dates and billing cycles."""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from subtrack.config import DEFAULT_CURRENCY

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CHF": "CHF",
}


def _group_indian(whole: int) -> str:
    """Group digits the Indian way: 12,34,567."""
    digits = str(whole)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: Union[Decimal, int, float], currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount for display.

    Rupees are shown without decimals using lakh/crore grouping; every other
    currency gets two decimals. Unknown currency codes fall back to the
    rupee symbol.
    """
    value = Decimal(str(amount))
    currency = (currency or DEFAULT_CURRENCY).upper()
    sign = "-" if value < 0 else ""
    value = abs(value)

    if currency == "INR":
        whole = int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return f"{sign}₹{_group_indian(whole)}"

    symbol = CURRENCY_SYMBOLS.get(currency, "₹")
    rounded = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{sign}{symbol}{rounded:,.2f}"


def format_date(value: Union[date, datetime]) -> str:
    """Format a date like ``Jan 15, 2024``."""
    return f"{value:%b} {value.day}, {value.year}"


def billing_cycle_text(cycle) -> str:
    """Human label for a billing cycle value."""
    raw = getattr(cycle, "value", cycle)
    return str(raw).capitalize()
