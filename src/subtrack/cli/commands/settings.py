"""User settings commands."""

import click
from subtrack.cli.error_handling import handle_domain_error
from subtrack.domain.entities import Theme
from subtrack.domain.errors import DomainError
from subtrack.domain.user import UserService


@click.group()
def settings_group():
    """Manage your profile and defaults."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show current settings."""
    user = UserService(ctx.obj["db"], ctx.obj["store"]).get_settings()

    click.echo("\nSettings:")
    click.echo(f"  Name: {user.name or '-'}")
    click.echo(f"  Email: {user.email or '-'}")
    click.echo(f"  Currency: {user.currency}")
    click.echo(f"  Default reminder: {user.default_reminder_time} day(s)")
    click.echo(f"  Theme: {user.theme.value}")


@settings_group.command("set")
@click.option("--name", help="Your name")
@click.option("--email", help="Your email")
@click.option("--currency", help="Home currency code (e.g., INR, USD)")
@click.option("--reminder", type=click.IntRange(min=0), help="Default reminder days for manual subscriptions")
@click.option("--theme", type=click.Choice([theme.value for theme in Theme], case_sensitive=False), help="Theme")
@click.pass_context
def set_settings(
    ctx,
    name: str | None,
    email: str | None,
    currency: str | None,
    reminder: int | None,
    theme: str | None,
):
    """Update settings."""
    service = UserService(ctx.obj["db"], ctx.obj["store"])
    try:
        service.save_settings(
            name=name,
            email=email,
            default_reminder_time=reminder,
            theme=theme,
            currency=currency,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("Settings saved.")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
