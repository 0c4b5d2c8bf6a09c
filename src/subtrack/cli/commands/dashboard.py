"""Dashboard and reminder commands."""

import click
from subtrack.domain.reminders import build_reminder_plan
from subtrack.domain.status import days_until
from subtrack.domain.user import UserService
from subtrack.utils.formatting import format_currency, format_date


def _print_dated(subscriptions, now, label: str) -> None:
    for sub in subscriptions:
        target = sub.target_date
        amount = format_currency(sub.amount, sub.currency)
        click.echo(
            f"  {sub.name:<24} {amount:>14}  {label} {format_date(target)} "
            f"(in {days_until(target, now)} days)"
        )


@click.command("dashboard")
@click.pass_context
def show_dashboard(ctx):
    """Show spending totals, upcoming renewals and expiring subscriptions.

    Totals add amounts as-is; subscriptions in other currencies are not
    converted.
    """
    store = ctx.obj["store"]
    summary = store.display_summary()
    currency = UserService(ctx.obj["db"], store).get_settings().currency
    now = store.clock()

    click.echo("\nDashboard")
    click.echo("=" * 60)
    click.echo(f"Monthly spending: {format_currency(summary.total_monthly_spending, currency):>20}")
    click.echo(f"Yearly spending:  {format_currency(summary.total_yearly_spending, currency):>20}")
    click.echo(f"Active subscriptions: {summary.active_subscriptions}")

    if summary.active_subscriptions == 0:
        click.echo("\nNo active subscriptions yet. Use 'add' to track your first one.")
        return

    click.echo("\nUpcoming renewals (next 30 days):")
    if summary.upcoming_renewals:
        _print_dated(summary.upcoming_renewals, now, "renews")
    else:
        click.echo("  None")

    click.echo("\nExpiring soon (next 7 days):")
    if summary.expiring_soon:
        _print_dated(summary.expiring_soon, now, "expires")
    else:
        click.echo("  None")

    click.echo("\nMonthly spending by category:")
    for item in summary.monthly_breakdown:
        subs = f"{item.count} subscription{'s' if item.count != 1 else ''}"
        click.echo(f"  {item.label:<16} {format_currency(item.amount, currency):>14}  ({subs})")


@click.command("reminders")
@click.pass_context
def show_reminders(ctx):
    """Show the reminders that would be scheduled for manual subscriptions."""
    store = ctx.obj["store"]
    plan = build_reminder_plan((), store.subscriptions, store.clock())

    if not plan.reminders:
        click.echo("No reminders to schedule.")
        return

    click.echo(f"\n{len(plan.reminders)} reminder(s):")
    for reminder in plan.reminders:
        click.echo(f"  {format_date(reminder.fire_at)}  {reminder.body}")


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(show_dashboard)
    cli.add_command(show_reminders)
