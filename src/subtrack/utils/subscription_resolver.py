"""Utility for resolving subscription names to IDs."""

from typing import Iterable

from subtrack.domain.entities import Subscription
from subtrack.domain.errors import NotFoundError, ValidationError


def resolve_subscription(subscriptions: Iterable[Subscription], reference: str) -> str:
    """Resolve a subscription ID, ID prefix or name to a subscription ID.

    Args:
        subscriptions: Subscriptions to search
        reference: Full ID, unique ID prefix, or name (case-insensitive)

    Returns:
        Subscription ID

    Raises:
        NotFoundError: If nothing matches
        ValidationError: If the reference matches more than one subscription
    """
    subscriptions = list(subscriptions)
    reference = reference.strip()

    for sub in subscriptions:
        if sub.id == reference:
            return sub.id

    by_name = [sub for sub in subscriptions if sub.name.lower() == reference.lower()]
    if len(by_name) == 1:
        return by_name[0].id
    if len(by_name) > 1:
        raise ValidationError(
            f"Several subscriptions are named '{reference}'; use the ID instead"
        )

    by_prefix = [sub for sub in subscriptions if sub.id.startswith(reference)]
    if len(by_prefix) == 1:
        return by_prefix[0].id
    if len(by_prefix) > 1:
        raise ValidationError(f"ID prefix '{reference}' is ambiguous")

    raise NotFoundError(f"Subscription '{reference}' not found")
