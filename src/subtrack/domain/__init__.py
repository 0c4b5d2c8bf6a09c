"""Domain layer for subtrack application.

Only the pure modules are re-exported here; services that talk to the
database are imported from their own modules.
"""

from subtrack.domain.spend import monthly_equivalent, yearly_equivalent
from subtrack.domain.status import classify_billing_mode, classify_lifecycle
from subtrack.domain.summary import summarize

__all__ = [
    "monthly_equivalent",
    "yearly_equivalent",
    "classify_billing_mode",
    "classify_lifecycle",
    "summarize",
]
