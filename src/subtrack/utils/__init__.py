"""Utility functions for subtrack."""

from subtrack.utils.date_parser import parse_date
from subtrack.utils.amount_parser import parse_amount
from subtrack.utils.formatting import format_currency, format_date

__all__ = ["parse_date", "parse_amount", "format_currency", "format_date"]
