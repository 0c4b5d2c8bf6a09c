"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a subscription amount string into a positive Decimal.

    Handles various formats:
    - "199"
    - "₹199"
    - "$9.99"
    - "1,299.00"
    - "9.99 USD"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is not positive
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols and trailing currency codes
    amount_str = re.sub(r"[$€£¥₹]", "", amount_str)
    amount_str = re.sub(r"\s*[A-Za-z]{3}$", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not amount.is_finite() or amount <= 0:
        raise ValueError(f"Amount must be greater than zero, got '{amount_str}'")
    if amount % Decimal("0.01") != 0:
        raise ValueError(f"Amount must have at most two decimal places, got '{amount_str}'")
    return amount
