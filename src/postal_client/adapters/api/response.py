"""Response metadata returned next to every decoded result."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

import httpx
from pydantic import JsonValue

if TYPE_CHECKING:
    from .envelope import ResponseEnvelope


def _empty_flags() -> dict[str, JsonValue]:
    return {}


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """A Postal reply: the raw ``httpx.Response`` plus the envelope header fields.

    ``status``, ``time`` and ``flags`` are copied from the response envelope
    when the body carried one; they stay ``None``/empty for no-content replies.
    The envelope's ``data`` is not kept here; façades return it once the
    status has been checked.

    Example:
        >>> import httpx
        >>> request = httpx.Request("POST", "https://postal.example.com/api/v1/send/raw")
        >>> meta = ApiResponse(http_response=httpx.Response(204, request=request))
        >>> meta.status_code, meta.method, meta.status
        (204, 'POST', None)
    """

    http_response: httpx.Response
    status: str | None = None
    time: float | None = None
    flags: Mapping[str, JsonValue] = field(default_factory=_empty_flags)

    @property
    def status_code(self) -> int:
        return self.http_response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.http_response.headers

    @property
    def method(self) -> str:
        return self.http_response.request.method

    @property
    def url(self) -> str:
        return str(self.http_response.request.url)

    @property
    def elapsed(self) -> timedelta | None:
        """Round-trip time, or None when the transport did not record it."""
        try:
            return self.http_response.elapsed
        except RuntimeError:
            # httpx only sets elapsed once the response has been closed.
            return None

    def with_envelope(self, envelope: ResponseEnvelope | None) -> ApiResponse:
        """Return a copy carrying the envelope header fields."""
        if envelope is None:
            return self
        return dataclasses.replace(
            self,
            status=envelope.status,
            time=envelope.time,
            flags=dict(envelope.flags or {}),
        )


__all__ = ["ApiResponse"]
