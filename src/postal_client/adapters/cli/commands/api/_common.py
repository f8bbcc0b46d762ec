"""Shared plumbing for the commands that talk to the Postal API.

Connection override options, PostalConfig loading, error-to-exit-code
mapping, and result rendering.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable, Mapping
from typing import Any, NoReturn, TypeVar

import orjson
import rich_click as click
from lib_layered_config import Config
from pydantic import ValidationError
from pydantic_core import to_jsonable_python

from postal_client import __init__conf__
from postal_client.adapters.api.client import PostalClient
from postal_client.adapters.api.config import PostalConfig
from postal_client.adapters.api.response import ApiResponse
from postal_client.application.ports import LoadPostalConfigFromDict
from postal_client.domain.enums import OutputFormat
from postal_client.domain.errors import (
    APIError,
    ConfigurationError,
    DecodeError,
    MalformedResponseError,
    RequestConstructionError,
    TransportError,
)

from ...context import CLIContext
from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)

T = TypeVar("T")


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop options the user did not pass (None or an empty tuple).

    Example:
        >>> filter_sentinels(base_url=None, timeout=5.0, to=())
        {'timeout': 5.0}
    """
    return {key: value for key, value in kwargs.items() if value is not None and value != ()}


def parse_header_options(values: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``--header NAME=VALUE`` options into a mapping.

    Raises:
        click.BadParameter: A value without ``=`` or with an empty name.

    Example:
        >>> parse_header_options(("X-Campaign=spring", "X-Empty="))
        {'X-Campaign': 'spring', 'X-Empty': ''}
    """
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint="--header")
        headers[name.strip()] = value
    return headers


def api_connection_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--base-url``, ``--api-key``, ``--timeout`` and ``--format`` to a command."""
    options = [
        click.option("--base-url", default=None, help="Override postal.base_url"),
        click.option("--api-key", default=None, help="Override postal.api_key"),
        click.option("--timeout", type=float, default=None, help="Override postal.timeout in seconds"),
        click.option(
            "--format",
            "output_format",
            type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
            default=OutputFormat.HUMAN.value,
            help="Output format (human-readable or JSON)",
        ),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def load_and_validate_postal_config(
    config: Config, loader: LoadPostalConfigFromDict, overrides: Mapping[str, Any]
) -> PostalConfig:
    """Read ``[postal]`` from *config* and layer the command-line *overrides* on top.

    Overrides are merged before validation so they get the same checks as
    file values.

    Raises:
        SystemExit: The merged settings are invalid (exit code 78 / CONFIG_ERROR).
    """
    try:
        postal_config = loader(config.as_dict())
        if overrides:
            postal_config = PostalConfig.model_validate({**postal_config.model_dump(), **overrides})
    except ValidationError as exc:
        _fail(exc, "Invalid Postal configuration", exit_code=ExitCode.CONFIG_ERROR)
    return postal_config


def run_api_command(
    cli_ctx: CLIContext,
    *,
    command: str,
    overrides: Mapping[str, Any],
    call: Callable[[PostalClient], tuple[T, ApiResponse]],
    output_format: str,
    render: Callable[[T], None],
) -> None:
    """Build a client, run *call* with it, and print the result.

    Exit codes by failure:

    1. ConfigurationError -> CONFIG_ERROR (78)
    2. RequestConstructionError, request ValidationError -> INVALID_ARGUMENT (22)
    3. TransportError -> TRANSPORT_FAILURE (69)
    4. APIError -> API_ERROR (75)
    5. MalformedResponseError, DecodeError -> DATA_ERROR (65)
    6. OSError reading a local file -> INVALID_ARGUMENT (22)
    7. Anything else -> GENERAL_ERROR (1), re-raised when DEVELOPMENT_MODE is set

    Raises:
        SystemExit: Any failure, with the code above.
    """
    postal_config = load_and_validate_postal_config(
        cli_ctx.config, cli_ctx.services.load_postal_config_from_dict, overrides
    )
    try:
        with cli_ctx.services.build_client(postal_config) as client:
            result, meta = call(client)
    except ConfigurationError as exc:
        _fail(
            exc,
            "Configuration error",
            exit_code=ExitCode.CONFIG_ERROR,
            hint=f"See: {__init__conf__.shell_command} config --section postal",
        )
    except RequestConstructionError as exc:
        _fail(exc, "Invalid request", exit_code=ExitCode.INVALID_ARGUMENT)
    except ValidationError as exc:
        _fail(exc, "Invalid request", exit_code=ExitCode.INVALID_ARGUMENT)
    except TransportError as exc:
        _fail(exc, "Postal server unreachable", exit_code=ExitCode.TRANSPORT_FAILURE)
    except APIError as exc:
        _fail(exc, "Postal API error", exit_code=ExitCode.API_ERROR)
    except (MalformedResponseError, DecodeError) as exc:
        _fail(exc, "Unreadable Postal response", exit_code=ExitCode.DATA_ERROR)
    except OSError as exc:
        _fail(exc, "Cannot read input file", exit_code=ExitCode.INVALID_ARGUMENT)
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _fail(exc, "Unexpected error", exit_code=ExitCode.GENERAL_ERROR, log_traceback=True)

    logger.info(
        "Postal API call completed",
        extra={"command": command, "status_code": meta.status_code, "server_time": meta.time},
    )
    emit_result(result, OutputFormat(output_format.lower()), render)


def emit_result(result: T, output_format: OutputFormat, render: Callable[[T], None]) -> None:
    """Print *result* as indented JSON or through the command's human renderer."""
    if output_format is OutputFormat.JSON:
        payload = to_jsonable_python(result, by_alias=True, exclude_none=True)
        click.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))
        return
    render(result)


def _fail(
    exc: Exception,
    user_message: str,
    *,
    exit_code: ExitCode,
    log_traceback: bool = False,
    hint: str | None = None,
) -> NoReturn:
    logger.error(
        user_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    if hint:
        click.echo(hint, err=True)
    raise SystemExit(exit_code)


__all__ = [
    "api_connection_options",
    "emit_result",
    "filter_sentinels",
    "load_and_validate_postal_config",
    "parse_header_options",
    "run_api_command",
]
