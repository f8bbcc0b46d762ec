"""Response envelope model and the classification step.

Postal signals failure inside the JSON body rather than through the HTTP
status code. Every reply is wrapped as::

    {"status": "success" | "parameter-error" | "error",
     "time": 0.01, "flags": {}, "data": ...}

Classification decides from that envelope alone whether the body is usable.
Only a success envelope hands its raw bytes back; the typed ``data`` payload
is decoded afterwards by the caller, so ``data`` cannot be read before the
status has been checked.

Contents:
    * :class:`ResponseEnvelope` - Generic envelope header plus untyped data.
    * :class:`DataEnvelope` - Typed view of a success envelope's ``data``.
    * :func:`parse_envelope` - Bytes to envelope, or MalformedResponseError.
    * :func:`raise_for_envelope` - Non-success envelope to APIError.
    * :func:`classify_response` - Read, parse and classify, keeping the metadata.
    * :func:`check_response` - :func:`classify_response` without the metadata.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

import httpx
import orjson
from pydantic import BaseModel, ConfigDict, JsonValue, ValidationError

from postal_client.domain.enums import ResponseStatus
from postal_client.domain.errors import APIError, MalformedResponseError, TransportError

from .response import ApiResponse

logger = logging.getLogger(__name__)

DataT = TypeVar("DataT")


class ResponseEnvelope(BaseModel):
    """The outer object of every Postal reply.

    A missing ``status`` parses as the empty string and is therefore treated
    as a failure, never as success.

    Example:
        >>> envelope = ResponseEnvelope.model_validate({"status": "success", "time": 0.02, "data": {}})
        >>> envelope.is_success
        True
        >>> ResponseEnvelope.model_validate({}).is_success
        False
    """

    model_config = ConfigDict(frozen=True)

    status: str = ""
    time: float | None = None
    flags: dict[str, JsonValue] | None = None
    data: JsonValue = None

    @property
    def is_success(self) -> bool:
        return self.status == ResponseStatus.SUCCESS.value


class DataEnvelope(BaseModel, Generic[DataT]):
    """Typed projection of a success envelope onto its ``data`` field.

    ``data`` is required: a success reply without it fails decoding.
    """

    data: DataT


def parse_envelope(body: bytes, *, response: ApiResponse | None = None) -> ResponseEnvelope | None:
    """Decode *body* into a :class:`ResponseEnvelope`.

    Args:
        body: Complete response body.
        response: Metadata attached to any raised error.

    Returns:
        The envelope, or None for an empty body (no-content replies).

    Raises:
        MalformedResponseError: Body is not JSON, not a JSON object, or its
            header fields have the wrong types.

    Example:
        >>> parse_envelope(b"") is None
        True
        >>> parse_envelope(b'{"status": "error", "data": {"message": "nope"}}').status
        'error'
    """
    if not body:
        return None
    try:
        raw = orjson.loads(body)
    except orjson.JSONDecodeError as exc:
        raise MalformedResponseError(str(exc), response=response) from exc
    if not isinstance(raw, dict):
        raise MalformedResponseError(
            f"expected a JSON object envelope, got {type(raw).__name__}",
            response=response,
        )
    try:
        return ResponseEnvelope.model_validate(raw)
    except ValidationError as exc:
        raise MalformedResponseError(f"invalid response envelope: {exc}", response=response) from exc


def extract_error_message(data: JsonValue, *, response: ApiResponse | None = None) -> str | None:
    """Pull ``message`` out of an error envelope's ``data``.

    Raises:
        MalformedResponseError: When ``data`` is not an object.

    Example:
        >>> extract_error_message({"message": "Invalid API key"})
        'Invalid API key'
        >>> extract_error_message({"code": "NoRecipients"}) is None
        True
    """
    if not isinstance(data, Mapping):
        raise MalformedResponseError(
            f"error envelope data must be an object, got {type(data).__name__}",
            response=response,
        )
    message = cast("Mapping[str, Any]", data).get("message")
    return None if message is None else str(message)


def raise_for_envelope(
    envelope: ResponseEnvelope | None,
    http_response: httpx.Response,
    *,
    response: ApiResponse | None = None,
) -> None:
    """Raise :class:`APIError` unless *envelope* is absent or successful.

    Raises:
        APIError: Envelope status is anything but ``success``.
        MalformedResponseError: Error envelope whose ``data`` is not an object.
    """
    if envelope is None or envelope.is_success:
        return
    request = http_response.request
    message = extract_error_message(envelope.data, response=response)
    logger.debug(
        "Postal API reported failure",
        extra={
            "method": request.method,
            "url": str(request.url),
            "status_code": http_response.status_code,
            "envelope_status": envelope.status,
        },
    )
    raise APIError(
        method=request.method,
        url=str(request.url),
        status_code=http_response.status_code,
        message=message,
        envelope_status=envelope.status,
        response=response,
    )


def read_body(http_response: httpx.Response) -> bytes:
    """Read the whole body, reporting a broken stream as :class:`TransportError`."""
    try:
        return http_response.read()
    except httpx.HTTPError as exc:
        request = http_response.request
        raise TransportError(f"{request.method} {request.url}: reading body failed: {exc}") from exc


def classify_response(http_response: httpx.Response) -> tuple[bytes, ApiResponse]:
    """Read *http_response* completely and classify it.

    Returns:
        The raw body of a success reply (``b""`` for an empty body) and the
        response metadata with the envelope attached.

    Raises:
        TransportError: The body could not be read.
        MalformedResponseError: The envelope cannot be read.
        APIError: The envelope reports a non-success status.
    """
    body = read_body(http_response)
    meta = ApiResponse(http_response=http_response)
    envelope = parse_envelope(body, response=meta)
    meta = meta.with_envelope(envelope)
    raise_for_envelope(envelope, http_response, response=meta)
    return body, meta


def check_response(http_response: httpx.Response) -> bytes:
    """Return the body of a success reply; raise like :func:`classify_response` otherwise."""
    body, _ = classify_response(http_response)
    return body


__all__ = [
    "DataEnvelope",
    "ResponseEnvelope",
    "check_response",
    "classify_response",
    "extract_error_message",
    "parse_envelope",
    "raise_for_envelope",
    "read_body",
]
