"""Assistant command."""

import click
from subtrack.domain.assistant import AssistantService
from subtrack.domain.user import UserService


@click.command("chat")
@click.argument("message", nargs=-1, required=True)
@click.pass_context
def chat(ctx, message: tuple[str, ...]):
    """Ask the assistant about your subscriptions.

    Examples:
        subtrack chat how much am I spending
        subtrack chat find netflix
    """
    store = ctx.obj["store"]
    currency = UserService(ctx.obj["db"], store).get_settings().currency
    assistant = AssistantService(
        store.subscriptions, store.summary, currency=currency, now=store.clock()
    )

    response = assistant.process_message(" ".join(message))
    click.echo(response.text)
    if response.suggestions:
        click.echo(f"\nTry: {', '.join(response.suggestions)}")


def register_commands(cli):
    """Register chat command with main CLI."""
    cli.add_command(chat)
