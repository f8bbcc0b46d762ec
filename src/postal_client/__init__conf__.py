"""Static package metadata surfaced to CLI commands and the HTTP user agent.

Contents:
    * Distribution identifiers (:data:`name`, :data:`version`, ...).
    * :data:`USER_AGENT` - ``User-Agent`` header value sent on every request.
    * ``LAYEREDCONF_*`` identifiers consumed by lib_layered_config.
    * :func:`print_info` - Human-readable metadata dump for ``postal-client info``.
"""

from __future__ import annotations

from typing import Final

#: Distribution name as published on the package index.
name: Final[str] = "postal_client"
#: One-line description shown in CLI help.
title: Final[str] = "Client library and command line for the Postal mail server HTTP API"
#: Package version; kept in sync with ``pyproject.toml``.
version: Final[str] = "0.1.0"
homepage: Final[str] = "https://github.com/postal-client/postal-client"
author: Final[str] = "postal-client contributors"
author_email: Final[str] = "maintainers@postal-client.dev"
#: Console script name installed by ``pip``.
shell_command: Final[str] = "postal-client"

#: Library identifier used in the ``User-Agent`` header.
LIBRARY_NAME: Final[str] = "postal-client"
#: ``User-Agent`` header value forced onto every outgoing request.
USER_AGENT: Final[str] = f"{LIBRARY_NAME}/{version}"

# lib_layered_config identifiers - determine platform configuration paths.
LAYEREDCONF_VENDOR: Final[str] = "postal-client"
LAYEREDCONF_APP: Final[str] = "postal-client"
LAYEREDCONF_SLUG: Final[str] = "postal-client"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for postal_client:
        ...
    """
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
        ("user_agent", USER_AGENT),
    )
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "LIBRARY_NAME",
    "USER_AGENT",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
