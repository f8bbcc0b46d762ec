"""Send façade: structured and raw message submission.

Contents:
    * :class:`SendRequest` - Structured message (recipients, bodies, headers).
    * :class:`SendRawRequest` - Complete RFC2822 message, base64 encoded.
    * :class:`SendResult` - Acknowledgement with per-recipient ids and tokens.
    * :class:`SendService` - ``client.send`` operations.
    * :func:`attachment_from_path` - Build an attachment entry from a file.
"""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from postal_client.domain.enums import Operation

from .response import ApiResponse

if TYPE_CHECKING:
    from .client import PostalClient

#: Postal accepts at most this many addresses per recipient list.
MAX_RECIPIENTS = 50


class SendRequest(BaseModel):
    """A structured message for ``POST /api/v1/send/message``.

    ``to``, ``cc`` and ``bcc`` hold up to :data:`MAX_RECIPIENTS` addresses
    each; the server enforces the limit. Fields left as None are not sent.

    Example:
        >>> request = SendRequest(to=["jane@example.com"], from_address="app@example.com", subject="Hi")
        >>> request.model_dump(by_alias=True, exclude_none=True)["from"]
        'app@example.com'
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    to: list[str] = Field(default_factory=list)
    cc: list[str] | None = None
    bcc: list[str] | None = None
    from_address: str | None = Field(default=None, alias="from")
    sender: str | None = None
    subject: str | None = None
    tag: str | None = None
    reply_to: str | None = None
    plain_body: str | None = None
    html_body: str | None = None
    attachments: JsonValue = None
    headers: dict[str, JsonValue] | None = None
    bounce: bool = False


class SendRawRequest(BaseModel):
    """A complete RFC2822 message for ``POST /api/v1/send/raw``.

    Example:
        >>> raw = SendRawRequest.from_message("app@example.com", ["jane@example.com"], b"Subject: hi\\r\\n\\r\\nhello")
        >>> raw.data
        'U3ViamVjdDogaGkNCg0KaGVsbG8='
    """

    model_config = ConfigDict(frozen=True)

    mail_from: str
    rcpt_to: list[str]
    data: str
    bounce: bool = False

    @classmethod
    def from_message(
        cls,
        mail_from: str,
        rcpt_to: list[str],
        message: bytes | str,
        *,
        bounce: bool = False,
    ) -> SendRawRequest:
        """Build a request from an unencoded message, base64-encoding it."""
        raw = message.encode("utf-8") if isinstance(message, str) else message
        return cls(
            mail_from=mail_from,
            rcpt_to=rcpt_to,
            data=base64.b64encode(raw).decode("ascii"),
            bounce=bounce,
        )


class SentMessage(BaseModel):
    """Per-recipient acknowledgement: Postal's numeric id and delivery token."""

    model_config = ConfigDict(frozen=True)

    id: int
    token: str


class SendResult(BaseModel):
    """Acknowledgement returned by both send operations."""

    model_config = ConfigDict(frozen=True)

    message_id: str
    messages: dict[str, SentMessage] = Field(default_factory=dict)


def attachment_from_path(path: Path) -> dict[str, JsonValue]:
    """Return the ``attachments`` entry Postal expects for the file at *path*.

    Raises:
        FileNotFoundError: *path* does not exist.
    """
    content_type, _ = mimetypes.guess_type(path.name)
    return {
        "name": path.name,
        "content_type": content_type or "application/octet-stream",
        "data": base64.b64encode(path.read_bytes()).decode("ascii"),
    }


class SendService:
    """Send operations of the Postal API, reachable as ``client.send``."""

    def __init__(self, client: PostalClient) -> None:
        self._client = client

    def send(self, request: SendRequest) -> tuple[SendResult, ApiResponse]:
        """Send a structured message."""
        return self._client.invoke(Operation.SEND, request, SendResult)

    def send_raw(self, request: SendRawRequest) -> tuple[SendResult, ApiResponse]:
        """Send a raw RFC2822 message."""
        return self._client.invoke(Operation.SEND_RAW, request, SendResult)


__all__ = [
    "MAX_RECIPIENTS",
    "SendRawRequest",
    "SendRequest",
    "SendResult",
    "SendService",
    "SentMessage",
    "attachment_from_path",
]
