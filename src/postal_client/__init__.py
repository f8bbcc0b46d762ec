"""Client for the Postal mail server HTTP API.

Typical use::

    from postal_client import PostalClient, SendRequest

    with PostalClient("https://postal.example.com", "api-key") as client:
        result, response = client.send.send(
            SendRequest(to=["jane@example.com"], from_address="app@example.com", subject="Hi", plain_body="Hello")
        )

Or from the layered configuration::

    from postal_client import build_client, get_config, load_postal_config_from_dict

    client = build_client(load_postal_config_from_dict(get_config().as_dict()))
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .adapters.api import (
    ActivityEntries,
    ApiResponse,
    Delivery,
    GetDeliveriesRequest,
    GetMessageRequest,
    MessageDetails,
    MessageInfo,
    MessageInspection,
    MessageStatus,
    PostalClient,
    PostalConfig,
    RequestCompletionCallback,
    SendRawRequest,
    SendRequest,
    SendResult,
    SentMessage,
    attachment_from_path,
    do_request,
    do_request_with_client,
)
from .composition import build_client, get_config, load_postal_config_from_dict
from .domain.errors import (
    APIError,
    ConfigurationError,
    DecodeError,
    MalformedResponseError,
    PostalError,
    RequestConstructionError,
    TransportError,
)

__all__ = [
    # Client
    "ApiResponse",
    "PostalClient",
    "RequestCompletionCallback",
    "do_request",
    "do_request_with_client",
    # Send
    "SendRawRequest",
    "SendRequest",
    "SendResult",
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
    # Configuration
    "PostalConfig",
    "build_client",
    "get_config",
    "load_postal_config_from_dict",
    # Errors
    "APIError",
    "ConfigurationError",
    "DecodeError",
    "MalformedResponseError",
    "PostalError",
    "RequestConstructionError",
    "TransportError",
    # Metadata
    "print_info",
]
