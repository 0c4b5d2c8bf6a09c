"""CLI helpers for subscription resolution."""

from __future__ import annotations

import click

from subtrack.cli.error_handling import handle_domain_error
from subtrack.domain.errors import DomainError
from subtrack.domain.store import DashboardStore
from subtrack.utils.subscription_resolver import resolve_subscription


def resolve_subscription_or_exit(ctx: click.Context, store: DashboardStore, reference: str) -> str:
    """Resolve a subscription reference, or exit with a CLI error."""
    try:
        return resolve_subscription(store.subscriptions, reference)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
