"""Domain-specific exceptions for typed error handling at boundaries.

Every failure the client can report derives from :class:`PostalError`, so
callers may catch the whole family at once or pick the one class whose
retry semantics they care about. Nothing in the client retries; these
exceptions propagate unchanged from the transport core to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..adapters.api.response import ApiResponse


class PostalError(Exception):
    """Base class for every error raised by the Postal client.

    Example:
        >>> from postal_client.domain.errors import PostalError, TransportError
        >>> issubclass(TransportError, PostalError)
        True
    """


class ConfigurationError(PostalError):
    """Missing, invalid, or incomplete client configuration.

    Raised when a client is assembled from layered configuration without a
    base URL or an API key. Caught at CLI boundaries to print a hint.

    Example:
        >>> err = ConfigurationError("No Postal base URL configured")
        >>> str(err)
        'No Postal base URL configured'
    """


class RequestConstructionError(PostalError, ValueError):
    """The outgoing request could not be built.

    Raised for an unusable base URL or a body that cannot be serialized to
    JSON. Always a caller bug and never retryable. Also a ValueError.

    Example:
        >>> err = RequestConstructionError("base URL has no host: 'https://'")
        >>> isinstance(err, ValueError)
        True
    """


class TransportError(PostalError):
    """The HTTP exchange failed below the API level.

    Wraps the ``httpx`` exception (connection refused, timeout, broken read)
    as ``__cause__``. May be retryable; the policy belongs to the caller.

    Example:
        >>> str(TransportError("Connection refused"))
        'Connection refused'
    """


class _ResponseError(PostalError):
    """Shared base for errors raised after a response was received."""

    def __init__(self, message: str, *, response: ApiResponse | None = None) -> None:
        super().__init__(message)
        self.response = response


class MalformedResponseError(_ResponseError):
    """The response body is not a readable envelope.

    Raised when the body is not JSON, is JSON but not an object, or is an
    error envelope whose ``data`` cannot carry a message. Indicates a server
    bug; not retryable.

    Example:
        >>> err = MalformedResponseError("unexpected character: line 1 column 1")
        >>> err.response is None
        True
    """


class DecodeError(_ResponseError):
    """A success envelope carried data that does not match the typed result.

    Points at a version or schema mismatch between client and server.

    Example:
        >>> str(DecodeError("data.messages: Input should be a valid dictionary"))
        'data.messages: Input should be a valid dictionary'
    """


class APIError(_ResponseError):
    """A well-formed envelope reported a non-success status.

    The HTTP status code is irrelevant to this classification: Postal
    answers ``200 OK`` with ``"status": "error"`` for most failures.

    Attributes:
        method: HTTP method of the failed request.
        url: Fully resolved request URL.
        status_code: HTTP status code of the reply.
        message: ``data.message`` from the envelope, when present.
        envelope_status: Raw envelope status (``error``, ``parameter-error``, ...).

    Example:
        >>> err = APIError(
        ...     method="POST",
        ...     url="https://postal.example.com/api/v1/send/message",
        ...     status_code=200,
        ...     message="No recipients were specified",
        ... )
        >>> str(err)
        'POST https://postal.example.com/api/v1/send/message: 200 No recipients were specified'
    """

    def __init__(
        self,
        *,
        method: str,
        url: str,
        status_code: int,
        message: str | None,
        envelope_status: str = "error",
        response: ApiResponse | None = None,
    ) -> None:
        super().__init__(f"{method} {url}: {status_code} {message}", response=response)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.message = message
        self.envelope_status = envelope_status


__all__ = [
    "APIError",
    "ConfigurationError",
    "DecodeError",
    "MalformedResponseError",
    "PostalError",
    "RequestConstructionError",
    "TransportError",
]
