"""In-memory configuration adapters for testing.

Same Protocols as the production adapters, but no filesystem and no
lib_layered_config layer discovery.
"""

from __future__ import annotations

from lib_layered_config import Config

from ...domain.enums import OutputFormat

#: Base URL the in-memory configuration points at.
STUB_BASE_URL = "https://postal.test"
#: API key the in-memory configuration carries.
STUB_API_KEY = "test-api-key"


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return a Config whose ``[postal]`` section points at the stub server."""
    return Config({"postal": {"base_url": STUB_BASE_URL, "api_key": STUB_API_KEY, "timeout": 5.0}}, {})


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """No-op display."""


__all__ = [
    "STUB_API_KEY",
    "STUB_BASE_URL",
    "display_config_in_memory",
    "get_config_in_memory",
]
