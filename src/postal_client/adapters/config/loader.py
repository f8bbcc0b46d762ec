"""Layered configuration loading for the Postal client.

Sources merge in precedence order defaults → app → host → user → dotenv →
env, so ``POSTAL_CLIENT___POSTAL__API_KEY`` in the environment beats the
value in any file. Platform paths derive from the ``LAYEREDCONF_*``
identifiers in :mod:`postal_client.__init__conf__`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import (
    DEFAULT_MAX_PROFILE_LENGTH,
    Config,
    read_config,
    validate_profile_name,
)

from postal_client import __init__conf__

#: Name of the defaults file shipped inside this package.
DEFAULT_CONFIG_FILENAME = "defaultconfig.toml"


class ConfigLoaderProtocol(Protocol):
    """Callable config loader that also exposes ``cache_clear``."""

    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject profile names that are empty, too long, or escape the config tree.

    Raises:
        ValueError: The name fails lib_layered_config's profile rules (the
            library raises its ``ValidationError`` subclass).

    Examples:
        >>> validate_profile("staging")

        >>> validate_profile("../../secrets")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValidationError: profile contains invalid characters: ../../secrets
    """
    validate_profile_name(profile, max_length=max_length if max_length is not None else DEFAULT_MAX_PROFILE_LENGTH)


@lru_cache(maxsize=1)
def get_default_config_path() -> Path:
    """Return the path of the bundled ``defaultconfig.toml``.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return Path(__file__).parent / DEFAULT_CONFIG_FILENAME


@lru_cache(maxsize=4)
def _read_layers(*, profile: str | None, start_dir: str | None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Load the merged configuration, cached per ``(profile, start_dir)``.

    Args:
        profile: Optional profile name; inserts ``profile/<name>/`` into every
            configuration path so e.g. staging and production keys stay apart.
        start_dir: Directory where ``.env`` discovery starts; defaults to the
            current working directory.

    Raises:
        ValueError: Invalid profile name.

    Example:
        >>> config = get_config()
        >>> config.get("postal.timeout")
        30.0
    """
    if profile is not None:
        validate_profile(profile)
    return _read_layers(profile=profile, start_dir=start_dir)


def _cache_clear() -> None:
    """Drop cached configurations so the next call re-reads every layer."""
    _read_layers.cache_clear()


# lru_cache's cache_clear is invisible once the wrapper is cast to the Protocol.
_get_config.cache_clear = _cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "get_config",
    "get_default_config_path",
    "validate_profile",
]
