"""Normalize per-cycle amounts to monthly and yearly equivalents.

The weekly factor is an average of 4.33 weeks per month, so a weekly
subscription's yearly equivalent (x52) is not twelve times its monthly one.
"""

from decimal import Decimal

from subtrack.domain.entities import BillingCycle

WEEKS_PER_MONTH = Decimal("4.33")


def monthly_equivalent(amount: Decimal, billing_cycle: BillingCycle) -> Decimal:
    """Convert a per-cycle amount into a monthly amount. No rounding."""
    if billing_cycle == BillingCycle.WEEKLY:
        return amount * WEEKS_PER_MONTH
    if billing_cycle == BillingCycle.MONTHLY:
        return amount
    if billing_cycle == BillingCycle.QUARTERLY:
        return amount / 3
    if billing_cycle == BillingCycle.YEARLY:
        return amount / 12
    raise ValueError(f"Unknown billing cycle: {billing_cycle}")


def yearly_equivalent(amount: Decimal, billing_cycle: BillingCycle) -> Decimal:
    """Convert a per-cycle amount into a yearly amount. No rounding."""
    if billing_cycle == BillingCycle.WEEKLY:
        return amount * 52
    if billing_cycle == BillingCycle.MONTHLY:
        return amount * 12
    if billing_cycle == BillingCycle.QUARTERLY:
        return amount * 4
    if billing_cycle == BillingCycle.YEARLY:
        return amount
    raise ValueError(f"Unknown billing cycle: {billing_cycle}")
