"""Application layer - port definitions the adapters implement.

Contents:
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .ports import (
    BuildClient,
    DisplayConfig,
    GetConfig,
    InitLogging,
    LoadPostalConfigFromDict,
)

__all__ = [
    "BuildClient",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadPostalConfigFromDict",
]
