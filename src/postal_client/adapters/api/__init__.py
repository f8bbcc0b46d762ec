"""Postal API adapter - transport core and operation façades.

Structure:
    * :mod:`.client` - PostalClient: request building, dispatch, decoding
    * :mod:`.envelope` - Response envelope model and classification
    * :mod:`.response` - ApiResponse metadata returned with every result
    * :mod:`.send` - Send façade and its request/result models
    * :mod:`.messages` - Messages façade and its request/result models
    * :mod:`.config` - PostalConfig model, loader, and client factory
"""

from __future__ import annotations

from .client import (
    PostalClient,
    RequestCompletionCallback,
    do_request,
    do_request_with_client,
    resolve_url,
    serialize_body,
)
from .config import PostalConfig, build_client, load_postal_config_from_dict
from .envelope import ResponseEnvelope, check_response, classify_response
from .messages import (
    ActivityEntries,
    Delivery,
    GetDeliveriesRequest,
    GetMessageRequest,
    MessageDetails,
    MessageInfo,
    MessageInspection,
    MessagesService,
    MessageStatus,
)
from .response import ApiResponse
from .send import (
    SendRawRequest,
    SendRequest,
    SendResult,
    SendService,
    SentMessage,
    attachment_from_path,
)

__all__ = [
    # Transport core
    "ApiResponse",
    "PostalClient",
    "RequestCompletionCallback",
    "ResponseEnvelope",
    "check_response",
    "classify_response",
    "do_request",
    "do_request_with_client",
    "resolve_url",
    "serialize_body",
    # Configuration
    "PostalConfig",
    "build_client",
    "load_postal_config_from_dict",
    # Send
    "SendRawRequest",
    "SendRequest",
    "SendResult",
    "SendService",
    "SentMessage",
    "attachment_from_path",
    # Messages
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
