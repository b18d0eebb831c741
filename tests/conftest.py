"""Shared test fixtures for rbauth.

Provides a scripted fake transport, httpx response builders, storage
tiers, XDG isolation and output state management.  Fixtures are
discovered by pytest and available to all test modules without explicit
imports; the helper classes are importable as ``from conftest import ...``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from rbauth.auth.provider import SimpleAuthProvider
from rbauth.auth.storage import MemoryStorage
from rbauth.models import ProviderConfig, RequestOptions
from rbauth.output import reset_output

AUTH_URL = "https://api.example.com/auth/login"
CHECK_URL = "https://api.example.com/auth/me"


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


def json_response(data: Any, status_code: int = 200, url: str = AUTH_URL) -> httpx.Response:
    """Build an httpx.Response with a JSON body."""
    return httpx.Response(
        status_code=status_code,
        json=data,
        request=httpx.Request("POST", url),
    )


def status_response(status_code: int, url: str = AUTH_URL) -> httpx.Response:
    """Build a bodiless error response."""
    return httpx.Response(status_code=status_code, request=httpx.Request("POST", url))


class FakeTransport:
    """Transport that replays scripted responses and records every call.

    Items are consumed in order; the last one is repeated once the script
    runs out.  An exception instance in the script is raised instead of
    returned.
    """

    def __init__(self, *script: httpx.Response | Exception) -> None:
        self._script = list(script)
        self.calls: list[tuple[str, RequestOptions, float]] = []

    async def __call__(self, url: str, options: RequestOptions, timeout: float) -> httpx.Response:
        self.calls.append((url, options, timeout))
        item = self._script.pop(0) if len(self._script) > 1 else self._script[0]
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def urls(self) -> list[str]:
        return [url for url, _, _ in self.calls]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager caches references to sys.stdout/sys.stderr; CliRunner
    swaps those streams per invocation.
    """
    yield
    reset_output()


@pytest.fixture
def sleep_mock(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    """Replace the executor's backoff sleep and record requested delays."""
    mock = AsyncMock()
    monkeypatch.setattr("rbauth.client.executor.asyncio.sleep", mock)
    return mock


@pytest.fixture
def persistent_tier() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def ephemeral_tier() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def make_provider(persistent_tier: MemoryStorage, ephemeral_tier: MemoryStorage):
    """Factory building a provider wired to in-memory tiers and a fake transport."""

    def _make(transport: FakeTransport, **options: Any) -> SimpleAuthProvider:
        settings: dict[str, Any] = {"auth_url": AUTH_URL, "check_url": CHECK_URL}
        settings.update(options)
        return SimpleAuthProvider(
            ProviderConfig(**settings),
            transport=transport,
            persistent=persistent_tier,
            ephemeral=ephemeral_tier,
        )

    return _make


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration and data to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path,
    clears all RBAUTH_* environment variables and changes the working
    directory to tmp_path.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    # Non-XDG platforms resolve directories under $HOME.
    monkeypatch.setenv("HOME", str(tmp_path / "home"))

    for var in [
        "RBAUTH_CONFIG",
        "RBAUTH_AUTH_URL",
        "RBAUTH_CHECK_URL",
        "RBAUTH_TOKEN_CACHE_KEY",
        "RBAUTH_TIMEOUT",
        "RBAUTH_RETRIES",
        "RBAUTH_BACKOFF",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path
