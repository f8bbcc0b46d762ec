"""Shared pytest fixtures for client, configuration and CLI tests.

Fixtures use descriptive names that read as plain English; tests pick them
up through pytest's conftest discovery.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx
import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from postal_client.adapters.api.client import PostalClient
from postal_client.adapters.memory import PostalServerStub, envelope

if TYPE_CHECKING:
    from postal_client.composition import AppServices

BASE_URL = "https://postal.example.com"
API_KEY = "test-api-key"


def _load_dotenv() -> None:
    """Load .env when present so integration tests can reach a real server."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(type(lib_cli_exit_tools.config)))


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


# ======================== Client fixtures ========================


@dataclass
class RecordingServer:
    """A MockTransport handler that answers with one fixed reply and records requests."""

    status_code: int = 200
    content: bytes = b""
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.content)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "server received no requests"
        return self.requests[-1]


@pytest.fixture
def recording_server() -> RecordingServer:
    """Provide a server replying with an empty success envelope until reconfigured."""
    return RecordingServer(content=envelope({}))


@pytest.fixture
def client_factory(recording_server: RecordingServer) -> Iterator[Callable[..., PostalClient]]:
    """Build PostalClients wired to ``recording_server`` and close them afterwards."""
    created: list[PostalClient] = []

    def _factory(base_url: str = BASE_URL, api_key: str = API_KEY, **kwargs: Any) -> PostalClient:
        http_client = httpx.Client(transport=httpx.MockTransport(recording_server))
        client = PostalClient(base_url, api_key, http_client=http_client, owns_http_client=True, **kwargs)
        created.append(client)
        return client

    yield _factory
    for client in created:
        client.close()


@pytest.fixture
def postal_stub() -> PostalServerStub:
    """Provide a fresh stub Postal server with no routes."""
    return PostalServerStub()


@pytest.fixture
def stub_client(postal_stub: PostalServerStub) -> Iterator[PostalClient]:
    """Provide a PostalClient talking to ``postal_stub``."""
    http_client = httpx.Client(transport=postal_stub.transport())
    with PostalClient(BASE_URL, API_KEY, http_client=http_client, owns_http_client=True) as client:
        yield client


# ======================== CLI fixtures ========================


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` when parsing JSON so log lines on stderr do not
    contaminate the output.
    """
    return CliRunner()


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore them after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before the test.

    Only clears before, since a monkeypatched get_config loses cache_clear.
    """
    from postal_client.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def inject_config(
    clear_config_cache: None,
) -> Callable[[Config], Callable[[], AppServices]]:
    """Return a factory that provides production services with an injected Config.

    Only the I/O boundary (``get_config``) is replaced.
    """
    from postal_client.composition import AppServices, build_production

    def _inject(config: Config) -> Callable[[], AppServices]:
        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        prod = build_production()
        services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            load_postal_config_from_dict=prod.load_postal_config_from_dict,
            build_client=prod.build_client,
            init_logging=prod.init_logging,
        )
        return lambda: services

    return _inject


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a factory whose get_config records the profile it was asked for."""
    from postal_client.composition import AppServices, build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        prod = build_production()
        services = AppServices(
            get_config=_capturing_get_config,
            display_config=prod.display_config,
            load_postal_config_from_dict=prod.load_postal_config_from_dict,
            build_client=prod.build_client,
            init_logging=prod.init_logging,
        )
        return lambda: services

    return _inject


@dataclass
class PostalCliContext:
    """Services factory for CLI invocation plus the stub server it talks to."""

    factory: Callable[[], Any]
    stub: PostalServerStub


@pytest.fixture
def postal_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any] | None], PostalCliContext]:
    """Create a CLI context whose API commands hit a fresh PostalServerStub.

    Pass the ``postal`` section to use; None keeps the in-memory defaults
    that point at the stub.
    """
    from postal_client.adapters.logging import init_logging
    from postal_client.composition import AppServices, build_testing

    def _create(postal_section: dict[str, Any] | None = None) -> PostalCliContext:
        stub = PostalServerStub()
        testing = build_testing(stub=stub)
        config = testing.get_config() if postal_section is None else Config({"postal": postal_section}, {})

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        services = AppServices(
            get_config=_fake_get_config,
            display_config=testing.display_config,
            load_postal_config_from_dict=testing.load_postal_config_from_dict,
            build_client=testing.build_client,
            init_logging=init_logging,
        )
        return PostalCliContext(factory=lambda: services, stub=stub)

    return _create
