"""Root command group: global ``--traceback``, ``--profile`` and ``--set`` handling."""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

from postal_client import __init__conf__
from postal_client.adapters.config.overrides import apply_overrides

from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from postal_client.composition import AppServices


def _resolve_config(services: AppServices, profile: str | None, set_overrides: tuple[str, ...]) -> Config:
    """Load the layered configuration for *profile* and merge ``--set`` values into it.

    Bad profile names surface as ``--profile`` parameter errors, malformed
    overrides as usage errors; both exit with status 2.
    """
    try:
        loaded = services.get_config(profile=profile)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--profile") from exc
    try:
        return apply_overrides(loaded, set_overrides)
    except (TypeError, ValueError) as exc:
        raise click.UsageError(str(exc)) from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", default=False, help="Show full Python traceback on errors")
@click.option(
    "--profile",
    default=None,
    help="Read configuration from profile/<NAME>/ directories (e.g. 'staging')",
)
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Override a configuration setting (repeatable), e.g. postal.timeout=10",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Load configuration once, start logging, and hand both to the subcommand.

    ``ctx.obj`` arrives as the services factory and leaves as a ``CLIContext``.

    Example:
        >>> from click.testing import CliRunner
        >>> from postal_client.composition import build_production
        >>> CliRunner().invoke(cli, ["info"], obj=build_production).exit_code
        0
    """
    factory = ctx.obj
    if not callable(factory):
        raise RuntimeError("Services factory not provided. This is a bug.")
    services: AppServices = factory()
    config = _resolve_config(services, profile, set_overrides)
    services.init_logging(config)
    apply_traceback_preferences(traceback)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _register_commands() -> None:
    # Deferred: the command modules import this package.
    from . import commands

    for name in ("cli_info", "cli_config", "cli_send", "cli_send_raw", "cli_message", "cli_deliveries"):
        cli.add_command(getattr(commands, name))


_register_commands()


__all__ = ["cli"]
