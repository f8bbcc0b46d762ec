"""Postal connection configuration model, loader, and client factory.

Provides the PostalConfig Pydantic model for validated, immutable connection
settings, the loader that reads it from the ``[postal]`` configuration
section, and :func:`build_client` which turns it into a ready client.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from postal_client.domain.errors import ConfigurationError

from .client import PostalClient


class PostalConfig(BaseModel):
    """Validated, immutable Postal connection settings.

    Example:
        >>> config = PostalConfig(base_url="https://postal.example.com", api_key="secret")
        >>> config.timeout
        30.0
        >>> "secret" in repr(config)
        False
    """

    model_config = ConfigDict(frozen=True)

    base_url: str | None = None
    api_key: str | None = None
    timeout: float = 30.0
    headers: dict[str, str] = Field(default_factory=dict)
    user_agent: str | None = None

    @field_validator("base_url", "api_key", "user_agent", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        """Treat empty or whitespace-only strings from config files as unset.

        Examples:
            >>> PostalConfig._coerce_empty_string_to_none("  ") is None
            True
            >>> PostalConfig._coerce_empty_string_to_none("https://postal.example.com")
            'https://postal.example.com'
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_missing_headers(cls, v: Any) -> Any:
        """Accept a missing or empty TOML table as no extra headers."""
        if v is None or v == "":
            return {}
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> PostalConfig:
        """Reject settings that would only fail later at request time.

        Example:
            >>> PostalConfig(timeout=0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.base_url is not None and not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got {self.base_url!r}")
        return self

    def __repr__(self) -> str:
        """Return string representation with api_key redacted."""
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"PostalConfig({', '.join(fields)})"


def load_postal_config_from_dict(config_dict: Mapping[str, Any]) -> PostalConfig:
    """Load PostalConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed model;
    reads the ``postal`` section.

    Example:
        >>> config = load_postal_config_from_dict({"postal": {"base_url": "https://postal.example.com"}})
        >>> config.base_url
        'https://postal.example.com'
        >>> load_postal_config_from_dict({}).api_key is None
        True
    """
    section: Any = config_dict.get("postal", {})
    if not isinstance(section, Mapping):
        return PostalConfig.model_validate(section)
    return PostalConfig.model_validate(dict(cast(Mapping[str, Any], section)))


def build_client(config: PostalConfig, *, transport: httpx.BaseTransport | None = None) -> PostalClient:
    """Create a PostalClient that owns an ``httpx.Client`` built from *config*.

    Args:
        config: Validated connection settings.
        transport: Optional httpx transport (a ``MockTransport`` in tests).

    Raises:
        ConfigurationError: Base URL or API key is not configured.
    """
    if config.base_url is None:
        raise ConfigurationError("No Postal base URL configured (postal.base_url is empty)")
    if config.api_key is None:
        raise ConfigurationError("No Postal API key configured (postal.api_key is empty)")

    return PostalClient(
        config.base_url,
        config.api_key,
        http_client=httpx.Client(timeout=config.timeout, transport=transport),
        headers=config.headers,
        user_agent=config.user_agent,
        owns_http_client=True,
    )


__all__ = [
    "PostalConfig",
    "build_client",
    "load_postal_config_from_dict",
]
