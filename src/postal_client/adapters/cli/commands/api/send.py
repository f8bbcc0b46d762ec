"""``send`` and ``send-raw`` commands."""

from __future__ import annotations

import logging
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click

from postal_client.adapters.api.client import PostalClient
from postal_client.adapters.api.response import ApiResponse
from postal_client.adapters.api.send import SendRawRequest, SendRequest, SendResult, attachment_from_path

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import api_connection_options, filter_sentinels, parse_header_options, run_api_command

logger = logging.getLogger(__name__)


def render_send_result(result: SendResult) -> None:
    """Print the message id and one line per recipient."""
    click.echo(f"Message accepted: {result.message_id}")
    for address, sent in result.messages.items():
        click.echo(f"  {address}: id={sent.id} token={sent.token}")


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--to", "to", multiple=True, required=True, help="Recipient address (repeatable, up to 50)")
@click.option("--cc", "cc", multiple=True, help="CC address (repeatable)")
@click.option("--bcc", "bcc", multiple=True, help="BCC address (repeatable)")
@click.option("--from", "from_address", required=True, help="From address; must belong to the server's domains")
@click.option("--sender", default=None, help="Sender header address")
@click.option("--subject", default=None, help="Subject line")
@click.option("--tag", default=None, help="Tag to file the message under")
@click.option("--reply-to", default=None, help="Reply-To address")
@click.option("--plain-body", default=None, help="Plain-text body")
@click.option("--html-body", default=None, help="HTML body")
@click.option("--header", "header_values", multiple=True, metavar="NAME=VALUE", help="Extra header (repeatable)")
@click.option(
    "--attachment",
    "attachments",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File to attach (repeatable)",
)
@click.option("--bounce", is_flag=True, default=False, help="Mark the message as a bounce")
@api_connection_options
@click.pass_context
def cli_send(
    ctx: click.Context,
    to: tuple[str, ...],
    cc: tuple[str, ...],
    bcc: tuple[str, ...],
    from_address: str,
    sender: str | None,
    subject: str | None,
    tag: str | None,
    reply_to: str | None,
    plain_body: str | None,
    html_body: str | None,
    header_values: tuple[str, ...],
    attachments: tuple[Path, ...],
    bounce: bool,
    base_url: str | None,
    api_key: str | None,
    timeout: float | None,
    output_format: str,
) -> None:
    """Send a structured message through the Postal API."""
    cli_ctx = get_cli_context(ctx)
    headers = parse_header_options(header_values)
    extra = {"command": "send", "recipients": list(to), "subject": subject}

    def call(client: PostalClient) -> tuple[SendResult, ApiResponse]:
        request = SendRequest(
            to=list(to),
            cc=list(cc) or None,
            bcc=list(bcc) or None,
            from_address=from_address,
            sender=sender,
            subject=subject,
            tag=tag,
            reply_to=reply_to,
            plain_body=plain_body,
            html_body=html_body,
            attachments=[attachment_from_path(path) for path in attachments] or None,
            headers=headers or None,
            bounce=bounce,
        )
        return client.send.send(request)

    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        logger.info(
            "Sending message",
            extra={"recipient_count": len(to) + len(cc) + len(bcc), "attachment_count": len(attachments)},
        )
        run_api_command(
            cli_ctx,
            command="send",
            overrides=filter_sentinels(base_url=base_url, api_key=api_key, timeout=timeout),
            call=call,
            output_format=output_format,
            render=render_send_result,
        )


@click.command("send-raw", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--mail-from", required=True, help="Envelope sender address")
@click.option("--rcpt-to", "rcpt_to", multiple=True, required=True, help="Envelope recipient (repeatable)")
@click.option(
    "--file",
    "message_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
    help="RFC2822 message to send ('-' reads standard input)",
)
@click.option("--bounce", is_flag=True, default=False, help="Mark the message as a bounce")
@api_connection_options
@click.pass_context
def cli_send_raw(
    ctx: click.Context,
    mail_from: str,
    rcpt_to: tuple[str, ...],
    message_file: Path,
    bounce: bool,
    base_url: str | None,
    api_key: str | None,
    timeout: float | None,
    output_format: str,
) -> None:
    """Send a complete RFC2822 message read from a file."""
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send-raw", "recipients": list(rcpt_to), "file": str(message_file)}

    def call(client: PostalClient) -> tuple[SendResult, ApiResponse]:
        message = click.get_binary_stream("stdin").read() if str(message_file) == "-" else message_file.read_bytes()
        request = SendRawRequest.from_message(mail_from, list(rcpt_to), message, bounce=bounce)
        return client.send.send_raw(request)

    with lib_log_rich.runtime.bind(job_id="cli-send-raw", extra=extra):
        logger.info("Sending raw message", extra={"recipient_count": len(rcpt_to)})
        run_api_command(
            cli_ctx,
            command="send-raw",
            overrides=filter_sentinels(base_url=base_url, api_key=api_key, timeout=timeout),
            call=call,
            output_format=output_format,
            render=render_send_result,
        )


__all__ = ["cli_send", "cli_send_raw", "render_send_result"]
