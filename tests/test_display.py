"""Tests for ``display_config``: delegation to lib_layered_config plus key masking."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from lib_layered_config import Config

from postal_client.adapters.config.display import REDACTED_PLACEHOLDER, display_config, redact_secrets
from postal_client.domain.enums import OutputFormat

# ======================== redact_secrets ========================


@pytest.mark.os_agnostic
def test_redact_secrets_masks_configured_api_key(config_factory: Callable[[dict[str, Any]], Config]) -> None:
    """A set api_key is replaced; other keys are untouched."""
    config = config_factory({"postal": {"api_key": "s3cr3t", "base_url": "https://postal.example.com"}})

    redacted = redact_secrets(config)

    assert redacted["postal"]["api_key"] == REDACTED_PLACEHOLDER
    assert redacted["postal"]["base_url"] == "https://postal.example.com"
    assert config["postal"]["api_key"] == "s3cr3t"


@pytest.mark.os_agnostic
def test_redact_secrets_leaves_config_without_key_alone(config_factory: Callable[[dict[str, Any]], Config]) -> None:
    """Nothing to hide returns the same instance."""
    config = config_factory({"postal": {"api_key": ""}, "lib_log_rich": {}})

    assert redact_secrets(config) is config


@pytest.mark.os_agnostic
def test_redact_secrets_without_postal_section(config_factory: Callable[[dict[str, Any]], Config]) -> None:
    """A config lacking the section passes through."""
    config = config_factory({"lib_log_rich": {"service": "x"}})

    assert redact_secrets(config) is config


# ======================== display_config ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize("output_format", [OutputFormat.HUMAN, OutputFormat.JSON])
def test_display_config_raises_for_nonexistent_section(
    config_factory: Callable[[dict[str, Any]], Config],
    output_format: OutputFormat,
) -> None:
    """Asking for a missing section raises ValueError."""
    config = config_factory({"postal": {"timeout": 30.0}})

    with pytest.raises(ValueError, match="not found"):
        display_config(config, output_format=output_format, section="nonexistent")


@pytest.mark.os_agnostic
def test_display_human_never_prints_the_api_key(capsys: pytest.CaptureFixture[str]) -> None:
    """Human output shows a redaction marker instead of the key."""
    config = Config({"postal": {"base_url": "https://postal.example.com", "api_key": "s3cr3t"}}, {})

    display_config(config, output_format=OutputFormat.HUMAN)

    output = capsys.readouterr().out
    assert "[postal]" in output
    assert 'base_url = "https://postal.example.com"' in output
    assert "s3cr3t" not in output
    assert "REDACTED" in output


@pytest.mark.os_agnostic
def test_display_json_section_never_prints_the_api_key(capsys: pytest.CaptureFixture[str]) -> None:
    """JSON output of one section is masked too."""
    config = Config({"postal": {"api_key": "s3cr3t", "timeout": 0}}, {})

    display_config(config, output_format=OutputFormat.JSON, section="postal")

    output = capsys.readouterr().out
    assert '"timeout": 0' in output
    assert "s3cr3t" not in output
