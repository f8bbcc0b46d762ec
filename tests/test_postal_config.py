"""Behaviour tests for PostalConfig: validators, repr, loading, and client assembly."""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from postal_client.adapters.api.config import PostalConfig, build_client, load_postal_config_from_dict
from postal_client.adapters.api.messages import GetDeliveriesRequest
from postal_client.adapters.memory import PostalServerStub
from postal_client.domain.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_empty_strings_from_config_files_mean_unset() -> None:
    """Blank base_url, api_key and user_agent become None."""
    config = PostalConfig.model_validate({"base_url": "", "api_key": "   ", "user_agent": ""})

    assert config.base_url is None
    assert config.api_key is None
    assert config.user_agent is None


@pytest.mark.os_agnostic
def test_missing_headers_table_means_no_extra_headers() -> None:
    """A None headers value coerces to an empty mapping."""
    assert PostalConfig.model_validate({"headers": None}).headers == {}


@pytest.mark.os_agnostic
@pytest.mark.parametrize("timeout", [0, -1, -0.5])
def test_non_positive_timeout_is_rejected(timeout: float) -> None:
    """Timeouts must be strictly positive."""
    with pytest.raises(ValidationError, match="timeout must be positive"):
        PostalConfig(timeout=timeout)


@pytest.mark.os_agnostic
@pytest.mark.parametrize("base_url", ["postal.example.com", "ftp://postal.example.com"])
def test_base_url_without_http_scheme_is_rejected(base_url: str) -> None:
    """Only http and https base URLs are accepted."""
    with pytest.raises(ValidationError, match="base_url must start with"):
        PostalConfig(base_url=base_url)


@pytest.mark.os_agnostic
def test_config_is_frozen() -> None:
    """Assigning to a field after construction fails."""
    config = PostalConfig(base_url="https://postal.example.com")

    with pytest.raises(ValidationError):
        config.base_url = "https://other.example.com"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# __repr__ with api_key redaction
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_repr_redacts_api_key() -> None:
    """The api key never appears in repr."""
    config = PostalConfig(base_url="https://postal.example.com", api_key="s3cr3t-key")

    text = repr(config)

    assert "s3cr3t-key" not in text
    assert "api_key='[REDACTED]'" in text
    assert "base_url='https://postal.example.com'" in text


@pytest.mark.os_agnostic
def test_repr_shows_unset_api_key_as_none() -> None:
    """An unset key is shown as None, not as redacted."""
    assert "api_key=None" in repr(PostalConfig())


# ---------------------------------------------------------------------------
# load_postal_config_from_dict
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_load_reads_the_postal_section() -> None:
    """Values under ``postal`` populate the model."""
    config = load_postal_config_from_dict(
        {
            "postal": {
                "base_url": "https://postal.example.com",
                "api_key": "key",
                "timeout": 12.5,
                "headers": {"X-Team": "ops"},
            },
            "lib_log_rich": {"service": "ignored"},
        }
    )

    assert config.base_url == "https://postal.example.com"
    assert config.api_key == "key"
    assert config.timeout == 12.5
    assert config.headers == {"X-Team": "ops"}


@pytest.mark.os_agnostic
def test_load_without_postal_section_yields_defaults() -> None:
    """A missing section produces an unconfigured model."""
    config = load_postal_config_from_dict({})

    assert config.base_url is None
    assert config.timeout == 30.0


@pytest.mark.os_agnostic
def test_load_rejects_non_table_postal_section() -> None:
    """A scalar where the section should be fails validation."""
    with pytest.raises(ValidationError):
        load_postal_config_from_dict({"postal": "https://postal.example.com"})


# ---------------------------------------------------------------------------
# build_client
# ---------------------------------------------------------------------------


@pytest.mark.os_agnostic
def test_build_client_without_base_url_raises_configuration_error() -> None:
    """The base URL is required to assemble a client."""
    with pytest.raises(ConfigurationError, match="base URL"):
        build_client(PostalConfig(api_key="key"))


@pytest.mark.os_agnostic
def test_build_client_without_api_key_raises_configuration_error() -> None:
    """The API key is required to assemble a client."""
    with pytest.raises(ConfigurationError, match="API key"):
        build_client(PostalConfig(base_url="https://postal.example.com"))


@pytest.mark.os_agnostic
def test_build_client_applies_settings() -> None:
    """Timeout, extra headers and user agent reach the client."""
    config = PostalConfig(
        base_url="https://postal.example.com",
        api_key="key",
        timeout=7.0,
        headers={"X-Team": "ops"},
        user_agent="billing-service/2.0",
    )

    with build_client(config) as client:
        assert client.base_url == "https://postal.example.com"
        assert client.api_key == "key"
        assert client.http_client.timeout == httpx.Timeout(7.0)
        request = client.new_request("POST", "api/v1/send/raw", {})

    assert request.headers["X-Team"] == "ops"
    assert request.headers["User-Agent"] == "billing-service/2.0"


@pytest.mark.os_agnostic
def test_build_client_closes_its_http_client() -> None:
    """The assembled client owns and closes its transport."""
    client = build_client(PostalConfig(base_url="https://postal.example.com", api_key="key"))

    client.close()

    assert client.http_client.is_closed


@pytest.mark.os_agnostic
def test_build_client_routes_through_given_transport() -> None:
    """A supplied transport receives the requests."""
    stub = PostalServerStub()
    stub.reply_success("api/v1/messages/deliveries", [])
    config = PostalConfig(base_url="https://postal.example.com", api_key="key")

    with build_client(config, transport=stub.transport()) as client:
        deliveries, _ = client.messages.get_deliveries(GetDeliveriesRequest(id=3))

    assert deliveries == []
    assert stub.requests[-1].headers["X-Server-API-Key"] == "key"
