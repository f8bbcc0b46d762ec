"""Transport core: build, dispatch, classify, and decode Postal API calls.

Contents:
    * :class:`PostalClient` - Long-lived client configuration plus the façades.
    * :func:`resolve_url` - Join a relative API path onto the base URL.
    * :func:`serialize_body` - JSON-encode a request body.
    * :func:`do_request` / :func:`do_request_with_client` - Raw dispatch helpers.

System Role:
    Every façade call funnels through :meth:`PostalClient.invoke`, which
    builds the request with :meth:`PostalClient.new_request` and executes it
    with :meth:`PostalClient.do`. No retries, no timeouts of its own: the
    injected ``httpx.Client`` owns connection handling and deadlines.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from functools import lru_cache
from types import TracebackType
from typing import Any, Final, TypeVar, cast, overload

import httpx
import orjson
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from postal_client import __init__conf__
from postal_client.domain.endpoints import endpoint_for, has_body
from postal_client.domain.enums import Operation
from postal_client.domain.errors import DecodeError, RequestConstructionError, TransportError

from .envelope import DataEnvelope, classify_response
from .messages import MessagesService
from .response import ApiResponse
from .send import SendService

logger = logging.getLogger(__name__)

T = TypeVar("T")

MEDIA_TYPE: Final[str] = "application/json"
API_KEY_HEADER: Final[str] = "X-Server-API-Key"

RequestCompletionCallback = Callable[[httpx.Request, httpx.Response], None]
"""Observation hook invoked after every request that reached the server."""

_default_http_client: httpx.Client | None = None
_default_http_client_lock = threading.Lock()


def resolve_url(base_url: str, path: str) -> httpx.URL:
    """Resolve *path* against *base_url*.

    A trailing slash on the base and a leading slash on the path are both
    tolerated; a path prefix on the base URL (``https://host/postal``) is
    kept.

    Raises:
        RequestConstructionError: The base URL cannot be parsed or lacks an
            http(s) scheme or a host.

    Example:
        >>> str(resolve_url("https://postal.example.com", "api/v1/send/raw"))
        'https://postal.example.com/api/v1/send/raw'
        >>> str(resolve_url("https://example.com/postal/", "/api/v1/send/raw"))
        'https://example.com/postal/api/v1/send/raw'
    """
    try:
        base = httpx.URL(base_url.rstrip("/") + "/")
    except httpx.InvalidURL as exc:
        raise RequestConstructionError(f"invalid base URL {base_url!r}: {exc}") from exc
    if base.scheme not in ("http", "https"):
        raise RequestConstructionError(f"base URL must use http or https: {base_url!r}")
    if not base.host:
        raise RequestConstructionError(f"base URL has no host: {base_url!r}")
    return base.join(path.lstrip("/"))


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    raise TypeError(f"Type is not JSON serializable: {type(value).__name__}")


def serialize_body(body: object) -> bytes:
    """Encode *body* as JSON bytes.

    Pydantic models are dumped by alias with unset (``None``) fields left
    out; anything else goes through orjson.

    Raises:
        RequestConstructionError: The value cannot be represented as JSON.

    Example:
        >>> serialize_body({"id": 42})
        b'{"id":42}'
    """
    try:
        if isinstance(body, BaseModel):
            return orjson.dumps(body.model_dump(mode="json", by_alias=True, exclude_none=True))
        return orjson.dumps(body, default=_json_default)
    except (orjson.JSONEncodeError, PydanticSerializationError) as exc:
        raise RequestConstructionError(f"cannot serialize request body: {exc}") from exc


def _get_default_http_client() -> httpx.Client:
    global _default_http_client
    with _default_http_client_lock:
        if _default_http_client is None:
            _default_http_client = httpx.Client()
        return _default_http_client


def do_request(request: httpx.Request) -> httpx.Response:
    """Submit *request* through a shared module-level ``httpx.Client``.

    The response is returned unread in streaming mode; the caller must close it.
    """
    return do_request_with_client(_get_default_http_client(), request)


def do_request_with_client(http_client: httpx.Client, request: httpx.Request) -> httpx.Response:
    """Submit *request* through *http_client*.

    The response is returned unread in streaming mode; the caller must close it.

    Raises:
        TransportError: Any network-level failure reported by httpx.
    """
    try:
        return http_client.send(request, stream=True)
    except httpx.HTTPError as exc:
        raise TransportError(f"{request.method} {request.url}: {exc}") from exc


@lru_cache(maxsize=32)
def _adapter_for(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def decode_payload(body: bytes, target: type[T] | Any, *, response: ApiResponse | None = None) -> T:
    """Validate *body* as JSON into *target* (a model, ``list[Model]``, ...).

    Raises:
        DecodeError: The body does not match *target*.
    """
    try:
        return cast(T, _adapter_for(target).validate_json(body))
    except ValidationError as exc:
        raise DecodeError(f"response does not match {target!r}: {exc}", response=response) from exc


class PostalClient:
    """Client for the Postal HTTP API.

    Holds the base URL, the API key sent as ``X-Server-API-Key`` on every
    request, optional extra headers, the user agent, an optional
    post-request observation hook, and the two operation façades.

    Args:
        base_url: Postal server root, e.g. ``https://postal.example.com``.
        api_key: Server API key.
        http_client: Transport to dispatch through. When omitted the client
            creates (and on :meth:`close` closes) its own ``httpx.Client``.
        headers: Extra headers applied to every request before the API key
            and user agent headers, which always win.
        user_agent: ``User-Agent`` override.
        owns_http_client: Whether :meth:`close` closes *http_client*. Defaults
            to True exactly when the client created its own.

    Example:
        >>> client = PostalClient("https://postal.example.com", "secret")
        >>> request = client.new_request("POST", "api/v1/messages/deliveries", {"id": 42})
        >>> request.headers["X-Server-API-Key"]
        'secret'
        >>> client.close()
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        http_client: httpx.Client | None = None,
        headers: Mapping[str, str] | None = None,
        user_agent: str | None = None,
        owns_http_client: bool | None = None,
    ) -> None:
        self._owns_http_client = http_client is None if owns_http_client is None else owns_http_client
        self.http_client: httpx.Client = http_client if http_client is not None else httpx.Client()
        self.base_url = base_url
        self.api_key = api_key
        self.headers: dict[str, str] = dict(headers or {})
        self.user_agent = user_agent or __init__conf__.USER_AGENT
        self._on_request_completed: RequestCompletionCallback | None = None

        self.send = SendService(self)
        self.messages = MessagesService(self)

    def __repr__(self) -> str:
        return f"PostalClient(base_url={self.base_url!r}, api_key='[REDACTED]')"

    def __enter__(self) -> PostalClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            self.http_client.close()

    def set_base_url(self, base_url: str) -> None:
        """Point subsequent requests at *base_url*."""
        self.base_url = base_url

    def set_api_key(self, api_key: str) -> None:
        """Sign subsequent requests with *api_key*."""
        self.api_key = api_key

    def on_request_completed(self, callback: RequestCompletionCallback | None) -> None:
        """Install (or with None, remove) the post-request observation hook.

        The hook runs after the server answered and before the body is read.
        Exceptions it raises are logged and never abort the exchange.
        """
        self._on_request_completed = callback

    def new_request(self, method: str, path: str, body: object = None) -> httpx.Request:
        """Build a signed request for *path* relative to the base URL.

        Bodyless methods (GET, HEAD, OPTIONS) ignore *body*. All other methods
        carry *body* as JSON (empty when None) with a JSON content type.

        Raises:
            RequestConstructionError: Unusable base URL or unserializable body.
        """
        method = method.upper()
        url = resolve_url(self.base_url, path)
        headers = httpx.Headers()
        content: bytes | None = None
        if has_body(method):
            content = b"" if body is None else serialize_body(body)
            headers["Content-Type"] = MEDIA_TYPE
        for name, value in self.headers.items():
            headers[name] = value
        headers[API_KEY_HEADER] = self.api_key
        headers["User-Agent"] = self.user_agent
        return self.http_client.build_request(method, url, content=content, headers=headers)

    @overload
    def do(self, request: httpx.Request, target: None = None) -> tuple[None, ApiResponse]: ...

    @overload
    def do(self, request: httpx.Request, target: type[T] | Any) -> tuple[T | None, ApiResponse]: ...

    def do(self, request: httpx.Request, target: type[T] | Any | None = None) -> tuple[T | None, ApiResponse]:
        """Execute *request* and decode a success body into *target*.

        Returns:
            ``(value, response)``. ``value`` is None when no *target* was
            given or the server answered 204 No Content.

        Raises:
            TransportError: The exchange failed at the network level.
            MalformedResponseError: The body is not a readable envelope.
            APIError: The envelope reported a non-success status.
            DecodeError: The success payload does not match *target*.
        """
        logger.debug("Dispatching Postal request", extra={"method": request.method, "url": str(request.url)})
        http_response = do_request_with_client(self.http_client, request)
        try:
            self._notify(request, http_response)
            body, meta = classify_response(http_response)
            if target is None or http_response.status_code == httpx.codes.NO_CONTENT:
                return None, meta
            return decode_payload(body, target, response=meta), meta
        finally:
            http_response.close()

    def invoke(self, operation: Operation, body: object, result_type: type[T] | Any) -> tuple[T, ApiResponse]:
        """Run *operation* and unwrap the envelope's ``data`` as *result_type*.

        Raises:
            DecodeError: The reply carried no ``data`` to unwrap.
        """
        endpoint = endpoint_for(operation)
        request = self.new_request(endpoint.method, endpoint.path, body)
        root, meta = self.do(request, DataEnvelope[result_type])  # type: ignore[valid-type]
        if root is None:
            raise DecodeError(f"{operation.value}: reply carried no data", response=meta)
        return cast(T, root.data), meta

    def _notify(self, request: httpx.Request, http_response: httpx.Response) -> None:
        callback = self._on_request_completed
        if callback is None:
            return
        try:
            callback(request, http_response)
        except Exception:
            logger.exception(
                "Request completion callback failed",
                extra={"method": request.method, "url": str(request.url)},
            )


__all__ = [
    "API_KEY_HEADER",
    "MEDIA_TYPE",
    "PostalClient",
    "RequestCompletionCallback",
    "decode_payload",
    "do_request",
    "do_request_with_client",
    "resolve_url",
    "serialize_body",
]
