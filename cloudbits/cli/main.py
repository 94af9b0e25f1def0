"""
Cloudbits CLI - Main entry point.

Commands:
    cloudbits-notify list <publisher_id>                 - List subscriptions of a device
    cloudbits-notify subscribe <publisher_id> <event>... - Subscribe to device events
    cloudbits-notify unsubscribe <publisher_id>          - Delete a subscription
    cloudbits-notify events                              - Show the event mapping table
    cloudbits-notify version                             - Show the package version
"""

import json
import logging
from typing import Any, List, Optional

import typer

from cloudbits.config import get_settings
from cloudbits.exceptions import CloudbitsError
from cloudbits.mappings import default_event_mappings
from cloudbits.notifications import NotificationManager

app = typer.Typer(
    name="cloudbits-notify",
    help="Manage littleBits cloudBit event subscriptions.",
    no_args_is_help=True,
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="cloudBit access token (defaults to CLOUDBITS_TOKEN)."
)
SUBSCRIBER_OPTION = typer.Option(
    None,
    "--subscriber-id",
    "-s",
    help="Subscriber device id or callback URL (defaults to the configured callback).",
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests."),
):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _echo_json(data: Any):
    typer.echo(json.dumps(data, indent=2))


def _fail(error: CloudbitsError):
    typer.echo(f"❌ {error.code}: {error.detail}", err=True)
    raise typer.Exit(1)


@app.command(name="list")
def list_command(
    publisher_id: str = typer.Argument(..., help="Id of the publisher device."),
    token: Optional[str] = TOKEN_OPTION,
):
    """
    List the subscriptions of a publisher device.
    """
    try:
        with NotificationManager(token=token) as manager:
            subscriptions = manager.list_subscriptions(publisher_id)
    except CloudbitsError as e:
        _fail(e)
    _echo_json([s.model_dump(exclude_none=True) for s in subscriptions])


@app.command()
def subscribe(
    publisher_id: str = typer.Argument(..., help="Id of the publisher device."),
    events: List[str] = typer.Argument(..., help="Event names to subscribe to."),
    subscriber_id: Optional[str] = SUBSCRIBER_OPTION,
    token: Optional[str] = TOKEN_OPTION,
):
    """
    Subscribe to events of a publisher device.
    """
    try:
        with NotificationManager(token=token) as manager:
            result = manager.subscribe_to_notifications(
                publisher_id=publisher_id,
                events=events,
                subscriber_id=subscriber_id,
            )
    except CloudbitsError as e:
        _fail(e)
    _echo_json(result)


@app.command()
def unsubscribe(
    publisher_id: str = typer.Argument(..., help="Id of the publisher device."),
    subscriber_id: Optional[str] = SUBSCRIBER_OPTION,
    token: Optional[str] = TOKEN_OPTION,
):
    """
    Delete a subscription to a publisher device.
    """
    try:
        with NotificationManager(token=token) as manager:
            result = manager.delete_subscription(publisher_id, subscriber_id=subscriber_id)
    except CloudbitsError as e:
        _fail(e)
    _echo_json(result)


@app.command()
def events():
    """
    Show the event name to key mapping table.
    """
    try:
        table = default_event_mappings(get_settings())
    except CloudbitsError as e:
        _fail(e)
    for name, key in table.items():
        typer.echo(f"{name:<28} {key}")


@app.command()
def version():
    """
    Show the cloudbits version.
    """
    from cloudbits import __version__
    typer.echo(f"cloudbits v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
