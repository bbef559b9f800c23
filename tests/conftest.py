"""Shared test fixtures for sendwave.

Provides reusable fixtures for isolating configuration, resetting global
output and logging state, and building request clients that talk to an
:class:`httpx.MockTransport` stub server instead of the network.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import httpx
import pytest

from sendwave.auth.token_store import MemoryTokenStore
from sendwave.client.request_client import RequestClient
from sendwave.log import reset_logging
from sendwave.models import ClientSettings
from sendwave.output import reset_output

BASE_URL = "https://api.example.com"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals_between_tests() -> None:
    """Reset the global OutputManager and CLI log handler after every test.

    Both cache references to sys.stdout/sys.stderr at creation time; when
    Typer's CliRunner redirects those streams the references go stale once
    the test finishes.
    """
    yield
    reset_output()
    reset_logging()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration and session files to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path,
    clears SENDWAVE_API_URL and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("sendwave.config._is_xdg_platform", lambda: True)
    monkeypatch.delenv("SENDWAVE_API_URL", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore("test-token")


@pytest.fixture
def make_client(token_store: MemoryTokenStore) -> Callable[..., RequestClient]:
    """Factory for request clients backed by a stub server.

    Usage::

        async with make_client(handler) as client:
            ...
    """

    def _make(
        handler: Handler,
        base_url: str = BASE_URL,
        store: Optional[MemoryTokenStore] = None,
    ) -> RequestClient:
        return RequestClient(
            ClientSettings(base_url=base_url),
            store if store is not None else token_store,
            transport=httpx.MockTransport(handler),
        )

    return _make
