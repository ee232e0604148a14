"""Shared test fixtures for authacquire.

Provides isolated config directories, a controllable clock, a counting
mock token endpoint, output management, and a CLI runner. These fixtures
are discovered by pytest and available to all test modules.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from authacquire.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time; when
    CliRunner swaps those streams the cached references go stale.
    """
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _reset_logging_between_tests() -> None:
    """Detach handlers the CLI callback installs on the package logger.

    They hold consoles bound to CliRunner streams that are closed once
    the invocation returns.
    """
    yield
    package_logger = logging.getLogger("authacquire")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock returning a fixed instant that tests advance manually."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Mock token endpoint
# ---------------------------------------------------------------------------


class TokenEndpoint:
    """Scripted token endpoint backed by :class:`httpx.MockTransport`.

    ``responses`` is consumed in order; the last entry repeats. Every
    request is recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.responses: list[Callable[[httpx.Request], httpx.Response]] = []
        self.requests: list[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def respond_json(self, data: Any, status_code: int = 200) -> TokenEndpoint:
        self.responses.append(lambda request: httpx.Response(status_code, json=data))
        return self

    def respond_bytes(self, content: bytes, status_code: int = 200) -> TokenEndpoint:
        self.responses.append(lambda request: httpx.Response(status_code, content=content))
        return self

    def respond_with(self, handler: Callable[[httpx.Request], httpx.Response]) -> TokenEndpoint:
        self.responses.append(handler)
        return self

    def handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        return self.responses[index](request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handle))


@pytest.fixture
def token_endpoint() -> TokenEndpoint:
    return TokenEndpoint()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points the XDG directories into tmp_path, forces the XDG layout on
    every platform, clears AUTHACQUIRE_* variables and changes the working
    directory to tmp_path.
    """
    monkeypatch.setattr("authacquire.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("AUTHACQUIRE_PROFILE", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()
