"""Composition root: the one place that picks concrete adapters for each port.

``build_production`` talks to a real Postal server over httpx;
``build_testing`` keeps configuration in memory and routes every HTTP
request to a :class:`PostalServerStub`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..adapters.api.config import build_client, load_postal_config_from_dict
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config
from ..adapters.logging.setup import init_logging

if TYPE_CHECKING:
    from ..adapters.memory.api import PostalServerStub
    from ..application.ports import (
        BuildClient,
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadPostalConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_load_postal_config_from_dict: LoadPostalConfigFromDict = load_postal_config_from_dict
    _assert_build_client: BuildClient = build_client
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Port implementations the CLI commands reach through ``CLIContext.services``."""

    get_config: GetConfig
    display_config: DisplayConfig
    load_postal_config_from_dict: LoadPostalConfigFromDict
    build_client: BuildClient
    init_logging: InitLogging


def build_production() -> AppServices:
    """Return services backed by layered config files, lib_log_rich and httpx."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        load_postal_config_from_dict=load_postal_config_from_dict,
        build_client=build_client,
        init_logging=init_logging,
    )


def build_testing(*, stub: PostalServerStub | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        stub: Stub Postal server the built clients talk to. Pass your own to
            register replies and inspect recorded requests; a fresh one with
            no routes is used otherwise.
    """
    from ..adapters.memory import (
        PostalServerStub,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
    )

    server = stub if stub is not None else PostalServerStub()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        load_postal_config_from_dict=load_postal_config_from_dict,
        build_client=server.build_client,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    "AppServices",
    "build_client",
    "build_production",
    "build_testing",
    "display_config",
    "get_config",
    "init_logging",
    "load_postal_config_from_dict",
]
