"""CLI command implementations, registered onto the root group by :mod:`..root`.

Contents:
    * :func:`.info.cli_info` - Package metadata
    * :func:`.config.cli_config` - Merged configuration display
    * :mod:`.api` - send, send-raw, message, deliveries
"""

from __future__ import annotations

from .api import cli_deliveries, cli_message, cli_send, cli_send_raw
from .config import cli_config
from .info import cli_info

__all__ = [
    "cli_config",
    "cli_deliveries",
    "cli_info",
    "cli_message",
    "cli_send",
    "cli_send_raw",
]
