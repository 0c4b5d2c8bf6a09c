"""Subscription management commands."""

import click
from subtrack.cli.error_handling import handle_domain_error
from subtrack.cli.subscription_resolution import resolve_subscription_or_exit
from subtrack.domain.entities import BillingCycle, Category
from subtrack.domain.errors import DomainError
from subtrack.domain.spend import monthly_equivalent, yearly_equivalent
from subtrack.domain.status import (
    classify_billing_mode,
    classify_lifecycle,
    days_until_next_billing,
)
from subtrack.domain.subscription import SubscriptionService
from subtrack.utils.amount_parser import parse_amount
from subtrack.utils.date_parser import parse_renewal_date
from subtrack.utils.formatting import billing_cycle_text, format_currency, format_date

CATEGORY_CHOICES = [category.value for category in Category]
CYCLE_CHOICES = [cycle.value for cycle in BillingCycle]


def _parse_date_or_exit(ctx, value: str | None):
    if value is None:
        return None
    try:
        return parse_renewal_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str | None):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.command("add")
@click.argument("name")
@click.option("--amount", required=True, help="Amount charged per billing cycle (e.g., 199 or 9.99)")
@click.option("--cycle", type=click.Choice(CYCLE_CHOICES, case_sensitive=False), default="monthly", help="Billing cycle (default: monthly)")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False), default="other", help="Category (default: other)")
@click.option("--auto-pay/--manual", "auto_pay", default=True, help="Renews automatically (default) or needs manual renewal")
@click.option("--date", "date_str", help="Next billing date (auto-pay) or expiry date (manual), e.g. 2024-02-01 or 'next month'")
@click.option("--reminder", type=click.IntRange(min=0), help="Days before expiry to remind (manual only)")
@click.option("--currency", help="Currency code (defaults to your home currency)")
@click.option("--provider", help="Provider name (e.g., Netflix)")
@click.option("--description", help="Description")
@click.pass_context
def add_subscription(
    ctx,
    name: str,
    amount: str,
    cycle: str,
    category: str,
    auto_pay: bool,
    date_str: str | None,
    reminder: int | None,
    currency: str | None,
    provider: str | None,
    description: str | None,
):
    """Add a subscription.

    Examples:
        subtrack add Netflix --amount 199 --category entertainment --date "next month"
        subtrack add "Gym pass" --amount 3000 --cycle quarterly --manual --date 2024-03-31 --reminder 3
    """
    service = SubscriptionService(ctx.obj["db"], ctx.obj["store"])
    renewal_date = _parse_date_or_exit(ctx, date_str)
    parsed_amount = _parse_amount_or_exit(ctx, amount)

    try:
        subscription_id = service.add_subscription(
            name=name,
            category=category,
            amount=parsed_amount,
            billing_cycle=cycle,
            auto_pay=auto_pay,
            renewal_date=renewal_date,
            reminder_time=reminder,
            currency=currency,
            provider=provider,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    subscription = service.get_subscription(subscription_id)
    click.echo(f"Created subscription '{subscription.name}' (ID: {subscription.id})")
    click.echo(f"  Amount: {format_currency(subscription.amount, subscription.currency)} {billing_cycle_text(subscription.billing_cycle).lower()}")
    if subscription.target_date is not None:
        label = "Renews" if subscription.is_auto_pay_enabled else "Expires"
        click.echo(f"  {label}: {format_date(subscription.target_date)}")


@click.command("list")
@click.option("--active", "active_only", is_flag=True, help="Only show active subscriptions")
@click.pass_context
def list_subscriptions(ctx, active_only: bool):
    """List subscriptions with their status."""
    store = ctx.obj["store"]
    now = store.clock()

    subscriptions = [
        sub for sub in store.subscriptions if sub.is_active or not active_only
    ]
    if not subscriptions:
        click.echo("No subscriptions found. Use 'add' to create one.")
        return

    click.echo(f"\n{'ID':<10} {'Name':<24} {'Amount':>14} {'Cycle':<10} {'Mode':<9} {'Status':<14} Date")
    click.echo("-" * 100)
    for sub in subscriptions:
        amount = format_currency(sub.amount, sub.currency)
        target = format_date(sub.target_date) if sub.target_date else "-"
        click.echo(
            f"{sub.id[:8]:<10} {sub.name[:24]:<24} {amount:>14} "
            f"{billing_cycle_text(sub.billing_cycle):<10} "
            f"{classify_billing_mode(sub).value:<9} "
            f"{classify_lifecycle(sub, now).value:<14} {target}"
        )


@click.command("show")
@click.argument("subscription")
@click.pass_context
def show_subscription(ctx, subscription: str):
    """Show details for one subscription (ID, ID prefix or name)."""
    store = ctx.obj["store"]
    subscription_id = resolve_subscription_or_exit(ctx, store, subscription)
    sub = store.get_subscription(subscription_id)
    now = store.clock()

    click.echo(f"\n{sub.name}")
    click.echo(f"  ID: {sub.id}")
    if sub.provider:
        click.echo(f"  Provider: {sub.provider}")
    click.echo(f"  Category: {sub.category.value.capitalize()}")
    click.echo(f"  Amount: {format_currency(sub.amount, sub.currency)} ({billing_cycle_text(sub.billing_cycle)})")
    click.echo(f"  Monthly: {format_currency(monthly_equivalent(sub.amount, sub.billing_cycle), sub.currency)}")
    click.echo(f"  Yearly: {format_currency(yearly_equivalent(sub.amount, sub.billing_cycle), sub.currency)}")
    click.echo(f"  Status: {classify_lifecycle(sub, now).value}")
    click.echo(f"  Billing: {classify_billing_mode(sub).value}")

    if sub.target_date is not None:
        label = "Renews" if sub.is_auto_pay_enabled else "Expires"
        days = days_until_next_billing(sub, now)
        click.echo(f"  {label}: {format_date(sub.target_date)} ({days} days)")
    if not sub.is_auto_pay_enabled:
        click.echo(f"  Reminder: {sub.reminder_time} day(s) before")
    if sub.description:
        click.echo(f"  Description: {sub.description}")


@click.command("edit")
@click.argument("subscription")
@click.option("--name", help="New name")
@click.option("--amount", help="New amount per billing cycle")
@click.option("--cycle", type=click.Choice(CYCLE_CHOICES, case_sensitive=False), help="New billing cycle")
@click.option("--category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False), help="New category")
@click.option("--auto-pay/--manual", "auto_pay", default=None, help="Switch payment mode")
@click.option("--date", "date_str", help="New billing or expiry date")
@click.option("--reminder", type=click.IntRange(min=0), help="Days before expiry to remind (manual only)")
@click.option("--currency", help="New currency code")
@click.option("--provider", help="New provider (empty string clears it)")
@click.option("--description", help="New description (empty string clears it)")
@click.pass_context
def edit_subscription(
    ctx,
    subscription: str,
    name: str | None,
    amount: str | None,
    cycle: str | None,
    category: str | None,
    auto_pay: bool | None,
    date_str: str | None,
    reminder: int | None,
    currency: str | None,
    provider: str | None,
    description: str | None,
):
    """Edit a subscription.

    Examples:
        subtrack edit Netflix --amount 249
        subtrack edit "Gym pass" --auto-pay --date 2024-04-01
    """
    store = ctx.obj["store"]
    service = SubscriptionService(ctx.obj["db"], store)
    subscription_id = resolve_subscription_or_exit(ctx, store, subscription)

    try:
        updated = service.update_subscription(
            subscription_id,
            name=name,
            category=category,
            amount=_parse_amount_or_exit(ctx, amount),
            billing_cycle=cycle,
            auto_pay=auto_pay,
            renewal_date=_parse_date_or_exit(ctx, date_str),
            reminder_time=reminder,
            currency=currency,
            provider=provider,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated subscription '{updated.name}' (ID: {updated.id})")


@click.command("cancel")
@click.argument("subscription")
@click.pass_context
def cancel_subscription(ctx, subscription: str):
    """Cancel a subscription. It stays in the list but stops counting."""
    store = ctx.obj["store"]
    service = SubscriptionService(ctx.obj["db"], store)
    subscription_id = resolve_subscription_or_exit(ctx, store, subscription)

    try:
        updated = service.cancel_subscription(subscription_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Cancelled subscription '{updated.name}'")


@click.command("activate")
@click.argument("subscription")
@click.pass_context
def activate_subscription(ctx, subscription: str):
    """Reactivate a cancelled subscription."""
    store = ctx.obj["store"]
    service = SubscriptionService(ctx.obj["db"], store)
    subscription_id = resolve_subscription_or_exit(ctx, store, subscription)

    try:
        updated = service.reactivate_subscription(subscription_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Reactivated subscription '{updated.name}'")


@click.command("delete")
@click.argument("subscription")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_subscription(ctx, subscription: str, yes: bool):
    """Delete a subscription permanently."""
    store = ctx.obj["store"]
    service = SubscriptionService(ctx.obj["db"], store)
    subscription_id = resolve_subscription_or_exit(ctx, store, subscription)
    name = store.get_subscription(subscription_id).name

    if not yes and not click.confirm(f"Delete subscription '{name}'?"):
        click.echo("Cancelled.")
        return

    try:
        service.delete_subscription(subscription_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted subscription '{name}'")


def register_commands(cli):
    """Register subscription commands with main CLI."""
    cli.add_command(add_subscription)
    cli.add_command(list_subscriptions)
    cli.add_command(show_subscription)
    cli.add_command(edit_subscription)
    cli.add_command(cancel_subscription)
    cli.add_command(activate_subscription)
    cli.add_command(delete_subscription)
