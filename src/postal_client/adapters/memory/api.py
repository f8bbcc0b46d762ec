"""A stub Postal server on top of ``httpx.MockTransport``.

Contents:
    * :class:`StubReply` - Canned HTTP reply for one API path.
    * :class:`PostalServerStub` - Routes requests to canned replies and
      records every request it receives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx
import orjson

from ..api.client import PostalClient
from ..api.config import PostalConfig
from ..api.config import build_client as build_production_client


def _json_headers() -> dict[str, str]:
    return {"Content-Type": "application/json"}


@dataclass(frozen=True, slots=True)
class StubReply:
    """HTTP status plus raw body bytes served for one path."""

    status_code: int
    content: bytes
    headers: dict[str, str] = field(default_factory=_json_headers)


def envelope(data: Any = None, *, status: str = "success", time: float = 0.01, flags: Any = None) -> bytes:
    """Encode a Postal response envelope.

    Example:
        >>> envelope({"id": 1})
        b'{"status":"success","time":0.01,"flags":{},"data":{"id":1}}'
    """
    return orjson.dumps({"status": status, "time": time, "flags": flags if flags is not None else {}, "data": data})


def _empty_replies() -> dict[str, StubReply]:
    return {}


def _empty_requests() -> list[httpx.Request]:
    return []


@dataclass
class PostalServerStub:
    """Answers API paths with canned replies.

    Unregistered paths receive HTTP 404 with an error envelope, like a
    Postal server that does not know the route.

    Example:
        >>> from postal_client.adapters.api import GetDeliveriesRequest
        >>> stub = PostalServerStub()
        >>> stub.reply_success("api/v1/messages/deliveries", [])
        >>> client = stub.build_client(PostalConfig(base_url="https://postal.test", api_key="k"))
        >>> client.messages.get_deliveries(GetDeliveriesRequest(id=1))[0]
        []
        >>> stub.last_json()
        {'id': 1}
    """

    replies: dict[str, StubReply] = field(default_factory=_empty_replies)
    requests: list[httpx.Request] = field(default_factory=_empty_requests)

    def reply(self, path: str, content: bytes, *, status_code: int = 200) -> None:
        """Serve *content* verbatim for *path*."""
        self.replies[path.strip("/")] = StubReply(status_code=status_code, content=content)

    def reply_success(self, path: str, data: Any, *, status_code: int = 200) -> None:
        """Serve a success envelope carrying *data*."""
        self.reply(path, envelope(data), status_code=status_code)

    def reply_error(
        self, path: str, data: Any, *, status: str = "error", status_code: int = 200
    ) -> None:
        """Serve a non-success envelope; Postal answers HTTP 200 for most of these."""
        self.reply(path, envelope(data, status=status), status_code=status_code)

    def handle(self, request: httpx.Request) -> httpx.Response:
        """Record *request* and return the reply registered for its path."""
        request.read()
        self.requests.append(request)
        for path, reply in self.replies.items():
            if request.url.path.rstrip("/").endswith("/" + path):
                return httpx.Response(reply.status_code, content=reply.content, headers=reply.headers)
        return httpx.Response(
            404,
            content=envelope({"code": "NotFound", "message": f"no route for {request.url.path}"}, status="error"),
            headers={"Content-Type": "application/json"},
        )

    def transport(self) -> httpx.MockTransport:
        """Return a transport that routes into :meth:`handle`."""
        return httpx.MockTransport(self.handle)

    def last_json(self) -> Any:
        """Decode the body of the most recent request."""
        if not self.requests:
            raise AssertionError("stub received no requests")
        return orjson.loads(self.requests[-1].content)

    def build_client(self, config: PostalConfig, *, transport: httpx.BaseTransport | None = None) -> PostalClient:
        """Build a client from *config* that talks to this stub."""
        return build_production_client(config, transport=transport if transport is not None else self.transport())


__all__ = ["PostalServerStub", "StubReply", "envelope"]
