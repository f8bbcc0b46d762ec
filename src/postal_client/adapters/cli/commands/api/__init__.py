"""Commands that call the Postal API.

Contents:
    * :func:`.send.cli_send` / :func:`.send.cli_send_raw` - Submit messages.
    * :func:`.messages.cli_message` / :func:`.messages.cli_deliveries` - Inspect sent messages.
"""

from __future__ import annotations

from .messages import cli_deliveries, cli_message
from .send import cli_send, cli_send_raw

__all__ = ["cli_deliveries", "cli_message", "cli_send", "cli_send_raw"]
