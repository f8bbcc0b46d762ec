"""``info`` command: print installation metadata."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from postal_client import __init__conf__

from ..constants import CLICK_CONTEXT_SETTINGS

logger = logging.getLogger(__name__)


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package name, version, homepage and author.

    Example:
        >>> from click.testing import CliRunner
        >>> from postal_client.adapters.cli import cli
        >>> from postal_client.composition import build_production
        >>> result = CliRunner().invoke(cli, ["info"], obj=build_production)
        >>> "postal_client" in result.output
        True
    """
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.info("Displaying package information")
        __init__conf__.print_info()


__all__ = ["cli_info"]
