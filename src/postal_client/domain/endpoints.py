"""Pure routing data: which HTTP method and path each operation uses.

Postal serves reads over POST too, so every operation below is a POST.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from .enums import Operation

SEND_BASE_PATH: Final[str] = "api/v1/send"
MESSAGES_BASE_PATH: Final[str] = "api/v1/messages"

#: Methods that never carry a request body.
BODYLESS_METHODS: Final[frozenset[str]] = frozenset({"GET", "HEAD", "OPTIONS"})


@dataclass(frozen=True, slots=True)
class Endpoint:
    """HTTP method plus path relative to the client's base URL."""

    method: str
    path: str


ENDPOINTS: Final[Mapping[Operation, Endpoint]] = MappingProxyType(
    {
        Operation.SEND: Endpoint("POST", f"{SEND_BASE_PATH}/message"),
        Operation.SEND_RAW: Endpoint("POST", f"{SEND_BASE_PATH}/raw"),
        Operation.GET_MESSAGE: Endpoint("POST", f"{MESSAGES_BASE_PATH}/message"),
        Operation.GET_DELIVERIES: Endpoint("POST", f"{MESSAGES_BASE_PATH}/deliveries"),
    }
)


def endpoint_for(operation: Operation) -> Endpoint:
    """Return the endpoint serving *operation*.

    Example:
        >>> endpoint_for(Operation.GET_DELIVERIES)
        Endpoint(method='POST', path='api/v1/messages/deliveries')
    """
    return ENDPOINTS[operation]


def has_body(method: str) -> bool:
    """Return whether requests with *method* carry a JSON body.

    Example:
        >>> has_body("post")
        True
        >>> has_body("GET")
        False
    """
    return method.upper() not in BODYLESS_METHODS


__all__ = [
    "BODYLESS_METHODS",
    "ENDPOINTS",
    "Endpoint",
    "MESSAGES_BASE_PATH",
    "SEND_BASE_PATH",
    "endpoint_for",
    "has_body",
]
