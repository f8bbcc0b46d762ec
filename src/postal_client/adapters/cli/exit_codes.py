"""Exit codes for the CLI error paths, following sysexits.h where it has one.

Contents:
    * :class:`ExitCode` - every code a command may exit with.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes, one per error family of the client.

    * 22: EINVAL - a command-line value the client rejects
    * 65: EX_DATAERR - the server reply could not be read or decoded
    * 69: EX_UNAVAILABLE - the Postal server could not be reached
    * 75: EX_TEMPFAIL - the Postal API refused the request
    * 78: EX_CONFIG - base URL or API key missing or invalid

    Example:
        >>> int(ExitCode.API_ERROR)
        75
        >>> ExitCode(69).name
        'TRANSPORT_FAILURE'
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 22
    DATA_ERROR = 65
    TRANSPORT_FAILURE = 69
    API_ERROR = 75
    CONFIG_ERROR = 78


__all__ = ["ExitCode"]
