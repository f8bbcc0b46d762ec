"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.api` - Postal HTTP transport core and operation façades
    * :mod:`.config` - Layered configuration loading, overrides, and display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters and a stub Postal server for tests
    * :mod:`.cli` - rich-click command line front end
"""

from __future__ import annotations

__all__: list[str] = []
