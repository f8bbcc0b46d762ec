"""``config`` command: show the merged configuration with its secrets masked."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from lib_layered_config import Config

from postal_client.adapters.config.overrides import apply_overrides
from postal_client.domain.enums import OutputFormat

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

_FORMAT_CHOICE = click.Choice([member.value for member in OutputFormat], case_sensitive=False)


def _config_for_profile(cli_ctx: CLIContext, profile: str | None) -> tuple[Config, str | None]:
    """Pick the configuration to display.

    Without a command-level ``--profile`` the root configuration is reused.
    With one, layers are re-read for that profile and the root ``--set``
    values are applied again on top.
    """
    if not profile:
        return cli_ctx.config, cli_ctx.profile
    try:
        reloaded = cli_ctx.services.get_config(profile=profile)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--profile") from exc
    return apply_overrides(reloaded, cli_ctx.set_overrides), profile


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--section", default=None, metavar="NAME", help="Limit output to one section, e.g. 'postal'")
@click.option("--profile", default=None, metavar="NAME", help="Re-read configuration for another profile")
@click.option(
    "--format",
    "output_format",
    type=_FORMAT_CHOICE,
    default=OutputFormat.HUMAN.value,
    show_default=True,
    help="Render as human-readable sections or as JSON",
)
@click.pass_context
def cli_config(ctx: click.Context, section: str | None, profile: str | None, output_format: str) -> None:
    """Print the effective configuration.

    Layers merge as defaults -> app -> host -> user -> dotenv -> env -> --set.
    ``postal.api_key`` is never printed in clear text.
    """
    cli_ctx = get_cli_context(ctx)
    config, active_profile = _config_for_profile(cli_ctx, profile)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(
        job_id="cli-config",
        extra={"command": "config", "format": fmt.value, "profile": active_profile},
    ):
        logger.info("Displaying configuration", extra={"section": section})
        try:
            cli_ctx.services.display_config(config, output_format=fmt, section=section, profile=active_profile)
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


__all__ = ["cli_config"]
