"""Command-line front end built on rich-click and lib_cli_exit_tools.

Contents:
    * :func:`.main.main` - Entry point returning an exit code
    * :data:`.root.cli` - Root command group
    * :class:`.exit_codes.ExitCode` - Exit codes per error family
"""

from __future__ import annotations

from .commands import (
    cli_config,
    cli_deliveries,
    cli_info,
    cli_message,
    cli_send,
    cli_send_raw,
)
from .constants import CLICK_CONTEXT_SETTINGS, TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    CLIContext,
    TracebackState,
    apply_traceback_preferences,
    get_cli_context,
    restore_traceback_state,
    snapshot_traceback_state,
    store_cli_context,
)
from .exit_codes import ExitCode
from .main import main
from .root import cli

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "CLIContext",
    "ExitCode",
    "TracebackState",
    "apply_traceback_preferences",
    "cli",
    "cli_config",
    "cli_deliveries",
    "cli_info",
    "cli_message",
    "cli_send",
    "cli_send_raw",
    "get_cli_context",
    "main",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
