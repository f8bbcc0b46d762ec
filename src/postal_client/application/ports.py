"""Callable Protocols for the adapter functions wired into the composition root.

Module-level adapter functions satisfy these structurally. Infrastructure
types are imported under ``TYPE_CHECKING`` only, keeping this layer free of
runtime adapter imports.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    import httpx
    from lib_layered_config import Config

    from ..adapters.api.client import PostalClient
    from ..adapters.api.config import PostalConfig


class GetConfig(Protocol):
    """Load layered configuration with the bundled defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadPostalConfigFromDict(Protocol):
    """Read PostalConfig from the ``[postal]`` section of a config mapping."""

    def __call__(self, config_dict: Mapping[str, Any]) -> PostalConfig: ...


class BuildClient(Protocol):
    """Turn PostalConfig into a ready PostalClient."""

    def __call__(self, config: PostalConfig, *, transport: httpx.BaseTransport | None = ...) -> PostalClient: ...


class InitLogging(Protocol):
    """Initialize the lib_log_rich runtime."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "BuildClient",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadPostalConfigFromDict",
]
