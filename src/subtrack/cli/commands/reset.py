"""Reset command."""

import click
from subtrack.cli.error_handling import handle_domain_error
from subtrack.domain.errors import DomainError
from subtrack.domain.subscription import SubscriptionService


@click.command("reset")
@click.confirmation_option(prompt="Delete all subscriptions and settings?")
@click.pass_context
def reset(ctx):
    """Delete all subscriptions and settings."""
    service = SubscriptionService(ctx.obj["db"], ctx.obj["store"])
    try:
        service.clear_all()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("All data cleared.")


def register_commands(cli):
    """Register reset command with main CLI."""
    cli.add_command(reset)
