"""In-memory adapter implementations for testing.

Everything here operates in process: no config files, no logging runtime,
no network.

Contents:
    * :mod:`.api` - PostalServerStub built on ``httpx.MockTransport``
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .api import PostalServerStub, StubReply, envelope
from .config import STUB_API_KEY, STUB_BASE_URL, display_config_in_memory, get_config_in_memory
from .logging import init_logging_in_memory

if TYPE_CHECKING:
    from postal_client.application.ports import DisplayConfig, GetConfig, InitLogging

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "STUB_API_KEY",
    "STUB_BASE_URL",
    "PostalServerStub",
    "StubReply",
    "display_config_in_memory",
    "envelope",
    "get_config_in_memory",
    "init_logging_in_memory",
]
