"""Package metadata and PEP 561 marker tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import pytest
import rtoml

from postal_client import __init__conf__

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"
PACKAGE_DIR = PROJECT_ROOT / "src" / "postal_client"


def _load_pyproject() -> dict[str, Any]:
    return rtoml.load(PYPROJECT_PATH)


def _wheel_table() -> dict[str, Any]:
    tool_table = cast(dict[str, Any], _load_pyproject().get("tool", {}))
    hatch_table = cast(dict[str, Any], tool_table.get("hatch", {}))
    targets_table = cast(dict[str, Any], cast(dict[str, Any], hatch_table.get("build", {})).get("targets", {}))
    return cast(dict[str, Any], targets_table.get("wheel", {}))


@pytest.mark.os_agnostic
def test_print_info_outputs_metadata(capsys: pytest.CaptureFixture[str]) -> None:
    """print_info lists the package name and version."""
    from postal_client import print_info

    print_info()

    captured = capsys.readouterr().out
    assert "postal_client" in captured
    assert __init__conf__.version in captured


@pytest.mark.os_agnostic
def test_version_matches_pyproject() -> None:
    """The hard-coded version equals the one in pyproject.toml."""
    assert _load_pyproject()["project"]["version"] == __init__conf__.version


@pytest.mark.os_agnostic
def test_user_agent_carries_library_version() -> None:
    """The User-Agent is library name slash version."""
    assert __init__conf__.USER_AGENT == f"postal-client/{__init__conf__.version}"


@pytest.mark.os_agnostic
def test_console_script_points_at_entry_main() -> None:
    """The installed command runs entry.main."""
    scripts = _load_pyproject()["project"]["scripts"]

    assert scripts[__init__conf__.shell_command] == "postal_client.entry:main"


@pytest.mark.os_agnostic
def test_py_typed_marker_exists_and_ships() -> None:
    """py.typed exists and is listed in the wheel includes."""
    includes = cast(list[str], _wheel_table().get("include", []))

    assert (PACKAGE_DIR / "py.typed").is_file()
    assert any("py.typed" in entry for entry in includes)


@pytest.mark.os_agnostic
def test_default_config_ships_with_the_wheel() -> None:
    """The bundled defaults file exists and is listed in the wheel includes."""
    includes = cast(list[str], _wheel_table().get("include", []))

    assert (PACKAGE_DIR / "adapters" / "config" / "defaultconfig.toml").is_file()
    assert any(entry.endswith("defaultconfig.toml") for entry in includes)
