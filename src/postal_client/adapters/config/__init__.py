"""Configuration adapter - layered loading, display, and ``--set`` overrides.

Contents:
    * :mod:`.loader` - Cached lib_layered_config loading
    * :mod:`.display` - Rich/JSON display with the API key masked
    * :mod:`.overrides` - ``--set SECTION.KEY=VALUE`` parsing and merging
"""

from __future__ import annotations

from .display import display_config, redact_secrets
from .loader import get_config, get_default_config_path, validate_profile
from .overrides import apply_overrides

__all__ = [
    "apply_overrides",
    "display_config",
    "get_config",
    "get_default_config_path",
    "redact_secrets",
    "validate_profile",
]
