"""Domain layer - pure values with no I/O or framework dependencies.

Contents:
    * :mod:`.endpoints` - Constant operation to method/path table
    * :mod:`.enums` - Domain enumerations (ResponseStatus, Operation, OutputFormat)
    * :mod:`.errors` - Client exception taxonomy
"""

from __future__ import annotations

from .endpoints import ENDPOINTS, Endpoint, endpoint_for, has_body
from .enums import Operation, OutputFormat, ResponseStatus
from .errors import (
    APIError,
    ConfigurationError,
    DecodeError,
    MalformedResponseError,
    PostalError,
    RequestConstructionError,
    TransportError,
)

__all__ = [
    # Endpoints
    "ENDPOINTS",
    "Endpoint",
    "endpoint_for",
    "has_body",
    # Enums
    "Operation",
    "OutputFormat",
    "ResponseStatus",
    # Errors
    "APIError",
    "ConfigurationError",
    "DecodeError",
    "MalformedResponseError",
    "PostalError",
    "RequestConstructionError",
    "TransportError",
]
