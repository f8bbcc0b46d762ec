"""``message`` and ``deliveries`` commands."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import lib_log_rich.runtime
import rich_click as click

from postal_client.adapters.api.client import PostalClient
from postal_client.adapters.api.messages import Delivery, GetDeliveriesRequest, GetMessageRequest, MessageDetails
from postal_client.adapters.api.response import ApiResponse

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import api_connection_options, filter_sentinels, run_api_command

logger = logging.getLogger(__name__)

#: Sections ``--expand`` accepts.
EXPANSIONS = (
    "status",
    "details",
    "inspection",
    "plain_body",
    "html_body",
    "attachments",
    "headers",
    "raw_message",
    "activity_entries",
)


def _format_timestamp(value: float | None) -> str:
    """Render a Unix timestamp as UTC ISO-8601, or ``-``.

    Example:
        >>> _format_timestamp(0.0)
        '1970-01-01T00:00:00+00:00'
        >>> _format_timestamp(None)
        '-'
    """
    if value is None:
        return "-"
    return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()


def render_message(message: MessageDetails) -> None:
    click.echo(f"Message {message.id} (token {message.token})")
    if message.status is not None:
        held = " (held)" if message.status.held else ""
        click.echo(f"  status: {message.status.status or '-'}{held}")
    if message.details is not None:
        details = message.details
        click.echo(f"  from: {details.mail_from or '-'}")
        click.echo(f"  to: {details.rcpt_to or '-'}")
        click.echo(f"  subject: {details.subject or '-'}")
        click.echo(f"  sent: {_format_timestamp(details.timestamp)}")
    if message.inspection is not None and message.inspection.inspected:
        click.echo(f"  spam score: {message.inspection.spam_score}")
    if isinstance(message.plain_body, str):
        click.echo("")
        click.echo(message.plain_body)


def render_deliveries(deliveries: list[Delivery]) -> None:
    if not deliveries:
        click.echo("No delivery attempts yet.")
        return
    for delivery in deliveries:
        ssl = " ssl" if delivery.sent_with_ssl else ""
        line = f"{_format_timestamp(delivery.timestamp)}  {delivery.status}{ssl}  {delivery.details or ''}"
        click.echo(line.rstrip())
        if delivery.output:
            click.echo(f"    {delivery.output}")


@click.command("message", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message_id", type=int)
@click.option(
    "--expand",
    "expand",
    multiple=True,
    type=click.Choice(EXPANSIONS),
    help="Include a section of the message (repeatable)",
)
@click.option("--expand-all", is_flag=True, default=False, help="Include every section")
@api_connection_options
@click.pass_context
def cli_message(
    ctx: click.Context,
    message_id: int,
    expand: tuple[str, ...],
    expand_all: bool,
    base_url: str | None,
    api_key: str | None,
    timeout: float | None,
    output_format: str,
) -> None:
    """Show the details Postal holds for one message."""
    if expand and expand_all:
        raise click.UsageError("--expand and --expand-all are mutually exclusive")
    cli_ctx = get_cli_context(ctx)
    expansions: bool | list[str] | None = True if expand_all else (list(expand) or None)

    def call(client: PostalClient) -> tuple[MessageDetails, ApiResponse]:
        return client.messages.get_message(GetMessageRequest(id=message_id, expansions=expansions))

    with lib_log_rich.runtime.bind(job_id="cli-message", extra={"command": "message", "message_id": message_id}):
        logger.info("Fetching message", extra={"expansions": expansions})
        run_api_command(
            cli_ctx,
            command="message",
            overrides=filter_sentinels(base_url=base_url, api_key=api_key, timeout=timeout),
            call=call,
            output_format=output_format,
            render=render_message,
        )


@click.command("deliveries", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message_id", type=int)
@api_connection_options
@click.pass_context
def cli_deliveries(
    ctx: click.Context,
    message_id: int,
    base_url: str | None,
    api_key: str | None,
    timeout: float | None,
    output_format: str,
) -> None:
    """List the delivery attempts made for one message."""
    cli_ctx = get_cli_context(ctx)

    def call(client: PostalClient) -> tuple[list[Delivery], ApiResponse]:
        return client.messages.get_deliveries(GetDeliveriesRequest(id=message_id))

    with lib_log_rich.runtime.bind(job_id="cli-deliveries", extra={"command": "deliveries", "message_id": message_id}):
        logger.info("Fetching deliveries")
        run_api_command(
            cli_ctx,
            command="deliveries",
            overrides=filter_sentinels(base_url=base_url, api_key=api_key, timeout=timeout),
            call=call,
            output_format=output_format,
            render=render_deliveries,
        )


__all__ = ["EXPANSIONS", "cli_deliveries", "cli_message", "render_deliveries", "render_message"]
