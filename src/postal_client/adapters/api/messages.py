"""Messages façade: message details and delivery attempts.

Postal exposes these reads over POST. Sections of :class:`MessageDetails`
other than ``id`` and ``token`` only appear when requested through
``expansions``, so every section is optional.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, JsonValue

from postal_client.domain.enums import Operation

from .response import ApiResponse

if TYPE_CHECKING:
    from .client import PostalClient


def _null_as_false(value: object) -> object:
    return False if value is None else value


#: Boolean reply field; Postal sends ``null`` where it means false.
Flag = Annotated[bool, BeforeValidator(_null_as_false)]


class GetMessageRequest(BaseModel):
    """Request for ``POST /api/v1/messages/message``.

    ``expansions`` is True (expand everything) or a list of section names
    such as ``["status", "details"]``; it travels as ``_expansions``.

    Example:
        >>> GetMessageRequest(id=7, expansions=["status"]).model_dump(by_alias=True)
        {'id': 7, '_expansions': ['status']}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    expansions: bool | list[str] | None = Field(default=None, alias="_expansions")


class GetDeliveriesRequest(BaseModel):
    """Request for ``POST /api/v1/messages/deliveries``."""

    model_config = ConfigDict(frozen=True)

    id: int


class MessageStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str | None = None
    last_delivery_attempt: float | None = None
    held: Flag = False
    hold_expiry: JsonValue = None


class MessageInfo(BaseModel):
    """The ``details`` section: envelope addresses, subject, size, bounce link."""

    model_config = ConfigDict(frozen=True)

    rcpt_to: str | None = None
    mail_from: str | None = None
    subject: str | None = None
    message_id: str | None = None
    timestamp: float | None = None
    direction: str | None = None
    size: JsonValue = None
    bounce: Flag = False
    bounce_for_id: int | None = None
    tag: JsonValue = None
    received_with_ssl: JsonValue = None


class MessageInspection(BaseModel):
    model_config = ConfigDict(frozen=True)

    inspected: Flag = False
    spam: Flag = False
    spam_score: float | None = None
    threat: Flag = False
    threat_details: JsonValue = None


class ActivityEntries(BaseModel):
    model_config = ConfigDict(frozen=True)

    loads: list[JsonValue] = Field(default_factory=list)
    clicks: list[JsonValue] = Field(default_factory=list)


class MessageDetails(BaseModel):
    """Everything Postal knows about one message."""

    model_config = ConfigDict(frozen=True)

    id: int
    token: str
    status: MessageStatus | None = None
    details: MessageInfo | None = None
    inspection: MessageInspection | None = None
    plain_body: JsonValue = None
    html_body: JsonValue = None
    attachments: list[JsonValue] | None = None
    headers: dict[str, JsonValue] | None = None
    raw_message: str | None = None
    activity_entries: ActivityEntries | None = None


class Delivery(BaseModel):
    """One delivery attempt for a message."""

    model_config = ConfigDict(frozen=True)

    id: int
    status: str
    details: str | None = None
    output: str | None = None
    sent_with_ssl: Flag = False
    log_id: str | None = None
    time: float | None = None
    timestamp: float | None = None


class MessagesService:
    """Message read operations of the Postal API, reachable as ``client.messages``."""

    def __init__(self, client: PostalClient) -> None:
        self._client = client

    def get_message(self, request: GetMessageRequest) -> tuple[MessageDetails, ApiResponse]:
        """Return all details about a message."""
        return self._client.invoke(Operation.GET_MESSAGE, request, MessageDetails)

    def get_deliveries(self, request: GetDeliveriesRequest) -> tuple[list[Delivery], ApiResponse]:
        """Return the delivery attempts made for a message, oldest first."""
        return self._client.invoke(Operation.GET_DELIVERIES, request, list[Delivery])


__all__ = [
    "ActivityEntries",
    "Delivery",
    "GetDeliveriesRequest",
    "GetMessageRequest",
    "MessageDetails",
    "MessageInfo",
    "MessageInspection",
    "MessageStatus",
    "MessagesService",
]
