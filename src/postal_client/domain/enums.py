"""Type-safe domain enums for envelope statuses, operations, and output formats."""

from __future__ import annotations

from enum import Enum


class ResponseStatus(str, Enum):
    """Values of the ``status`` field of every Postal response envelope.

    Only :attr:`SUCCESS` makes the envelope's ``data`` usable; any other value,
    including ones this enum does not list, is an error condition.

    Example:
        >>> ResponseStatus.SUCCESS == "success"
        True
        >>> ResponseStatus("parameter-error").name
        'PARAMETER_ERROR'
    """

    SUCCESS = "success"
    PARAMETER_ERROR = "parameter-error"
    ERROR = "error"


class Operation(str, Enum):
    """Remote operations exposed by the send and messages façades.

    Example:
        >>> Operation.SEND_RAW.value
        'send-raw'
    """

    SEND = "send"
    SEND_RAW = "send-raw"
    GET_MESSAGE = "get-message"
    GET_DELIVERIES = "get-deliveries"


class OutputFormat(str, Enum):
    """Output format options for configuration display and API results.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "Operation",
    "OutputFormat",
    "ResponseStatus",
]
