"""``--set SECTION.KEY=VALUE`` overrides layered on top of loaded configuration."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

OverrideValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Values an override string can decode to."""

OverrideTree = dict[str, dict[str, object]]


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One ``--set`` assignment: top-level section, nested key path, value."""

    section: str
    key_path: tuple[str, ...]
    value: OverrideValue

    @property
    def dotted_key(self) -> str:
        """Return the assignment target as ``section.key.subkey``.

        Example:
            >>> ConfigOverride("postal", ("headers", "X-Team"), "ops").dotted_key
            'postal.headers.X-Team'
        """
        return ".".join((self.section, *self.key_path))


def coerce_value(raw: str) -> OverrideValue:
    """Decode *raw* as JSON when possible, otherwise keep it as text.

    Examples:
        >>> coerce_value("45.5")
        45.5
        >>> coerce_value("false")
        False
        >>> coerce_value("https://postal.example.com")
        'https://postal.example.com'
        >>> coerce_value('{"X-Team": "ops"}')
        {'X-Team': 'ops'}
        >>> coerce_value("")
        ''
    """
    if not raw:
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    The first ``=`` ends the key; the first dot ends the section name.

    Raises:
        ValueError: No ``=``, no dot in the key, or an empty key component.

    Examples:
        >>> parse_override("postal.timeout=10").value
        10
        >>> parse_override("postal.headers.X-Team=ops").key_path
        ('headers', 'X-Team')
        >>> parse_override("postal=1")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: Invalid override 'postal=1': key must contain at least one dot (SECTION.KEY)
    """
    key, sep, value = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")
    if "." not in key:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")

    section, *key_path = key.split(".")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(key_path):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")
    return ConfigOverride(section=section, key_path=tuple(key_path), value=coerce_value(value))


def build_override_tree(overrides: Iterable[ConfigOverride]) -> OverrideTree:
    """Fold parsed overrides into the nested mapping ``Config.with_overrides`` expects.

    Raises:
        TypeError: An override descends into a key already holding a scalar.

    Example:
        >>> build_override_tree([parse_override("postal.headers.X-Team=ops"), parse_override("postal.timeout=5")])
        {'postal': {'headers': {'X-Team': 'ops'}, 'timeout': 5}}
    """
    tree: OverrideTree = {}
    for override in overrides:
        node: dict[str, object] = tree.setdefault(override.section, {})
        for part in override.key_path[:-1]:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise TypeError(f"Cannot set {override.dotted_key}: {part!r} already holds {type(child).__name__}")
            node = cast("dict[str, object]", child)
        node[override.key_path[-1]] = override.value
    return tree


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return *config* with every ``--set`` assignment merged in.

    Returns the very same instance when there is nothing to apply.

    Raises:
        ValueError: A malformed override string.

    Example:
        >>> cfg = Config({"postal": {"timeout": 30.0}}, {})
        >>> apply_overrides(cfg, ("postal.timeout=5",))["postal"]["timeout"]
        5
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config
    return config.with_overrides(build_override_tree(parse_override(raw) for raw in raw_overrides))


__all__ = [
    "ConfigOverride",
    "OverrideValue",
    "apply_overrides",
    "build_override_tree",
    "coerce_value",
    "parse_override",
]
