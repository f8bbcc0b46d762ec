"""Render the merged configuration for ``postal-client config``."""

from __future__ import annotations

from collections.abc import Mapping

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LayeredOutputFormat
from lib_layered_config import display_config as render_layered_config
from rich.console import Console

from postal_client.domain.enums import OutputFormat

#: Keys whose values never reach the terminal. The placeholder matches the
#: marker lib_layered_config prints for values it masks itself.
REDACTED_KEYS = frozenset({"api_key"})
REDACTED_PLACEHOLDER = "***REDACTED***"


def redact_secrets(config: Config) -> Config:
    """Return *config* with a non-empty ``postal.api_key`` masked.

    Example:
        >>> cfg = Config({"postal": {"api_key": "secret", "timeout": 30.0}}, {})
        >>> redact_secrets(cfg)["postal"]["api_key"]
        '***REDACTED***'
        >>> redact_secrets(Config({"postal": {"api_key": ""}}, {}))["postal"]["api_key"]
        ''
    """
    section = config.get("postal", default={})
    if not isinstance(section, Mapping):
        return config
    masked = {key: REDACTED_PLACEHOLDER for key in REDACTED_KEYS if section.get(key)}
    if not masked:
        return config
    return config.with_overrides({"postal": masked})


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Print *config* (or one *section* of it) with provenance comments.

    Pending log records are flushed first so they do not interleave with
    the rendered configuration. The API key is always masked.

    Raises:
        ValueError: *section* does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    render_layered_config(
        redact_secrets(config),
        output_format=LayeredOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["REDACTED_PLACEHOLDER", "display_config", "redact_secrets"]
