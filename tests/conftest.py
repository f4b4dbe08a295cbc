"""Shared test fixtures for memey.

Provides reusable fixtures for isolated config environments, sample
catalogs, mocked Imgflip transports, desktop side-effect stubs, and CLI
runners. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from memey.models import CompiledExpression, Credentials, ExpressionRule, Settings, Template
from memey.output import OutputManager, reset_output, set_output
from memey.store import TemplateStore


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stderr at creation time.
    When Typer's CliRunner redirects those streams during a test and the
    test finishes, the cached references become stale.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Desktop side effects
# ---------------------------------------------------------------------------


class DesktopRecorder:
    """Collects clipboard writes and open requests instead of performing them."""

    def __init__(self) -> None:
        self.clipboard: list[str] = []
        self.opened_urls: list[str] = []
        self.opened_files: list[Path] = []
        self.clipboard_available = True

    def copy(self, text: str) -> bool:
        if not self.clipboard_available:
            return False
        self.clipboard.append(text)
        return True


@pytest.fixture(autouse=True)
def desktop(monkeypatch: pytest.MonkeyPatch) -> DesktopRecorder:
    """Stub out clipboard and browser/file opening for every test."""
    recorder = DesktopRecorder()
    monkeypatch.setattr("memey.actions.copy_to_clipboard", recorder.copy)
    monkeypatch.setattr("memey.actions.open_url", recorder.opened_urls.append)
    monkeypatch.setattr("memey.actions.open_file", recorder.opened_files.append)
    return recorder


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME, XDG_CACHE_HOME, and XDG_DATA_HOME to
    subdirectories of tmp_path so that tests never touch real user
    state, forces XDG path resolution, and clears all MEMEY_* variables.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("memey.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["MEMEY_API_URL", "MEMEY_TIMEOUT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def templates() -> list[Template]:
    return [
        Template(id=61579, name="One Does Not Simply", url="https://i.imgflip.com/1bij.jpg"),
        Template(id=1, name="Y U No", url="https://i.imgflip.com/1bh3.jpg"),
        Template(id=61520, name="Futurama Fry", url="https://i.imgflip.com/1bgw.jpg"),
        Template(id=87, name="Y U No Guy (alt)", url="https://i.imgflip.com/alt.jpg"),
    ]


@pytest.fixture
def store(templates: list[Template], tmp_path: Path) -> TemplateStore:
    """A template store that persists to ``tmp_path/templates.json``."""
    return TemplateStore(templates, path=tmp_path / "templates.json")


@pytest.fixture
def expressions() -> list[CompiledExpression]:
    rules = [
        ExpressionRule(id=61579, regex=r"^(one does not simply)\s+(.+)$"),
        ExpressionRule(id=1, regex=r"^(y u no)\s+(.+)$"),
        ExpressionRule(id=2, regex=r"^(.+?)\s+(all the .+)$"),
        ExpressionRule(id=3, regex=r"^shrug$"),
    ]
    return [CompiledExpression(rule) for rule in rules]


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(username="alice", password="hunter2")


@pytest.fixture
def settings() -> Settings:
    return Settings(api_url="https://api.imgflip.test", timeout=5)


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_api(monkeypatch: pytest.MonkeyPatch) -> Callable[[Callable[[httpx.Request], httpx.Response]], list[httpx.Request]]:
    """Route every ``httpx.Client`` created by memey through a handler.

    Usage::

        requests = mock_api(handler)
        ...
        assert requests[0].url.path == "/caption_image"

    Returns:
        A function that installs *handler* and returns the list that
        collects every request it receives.
    """
    real_client = httpx.Client

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        def factory(*args: Any, **kwargs: Any) -> httpx.Client:
            kwargs["transport"] = httpx.MockTransport(recording)
            return real_client(*args, **kwargs)

        monkeypatch.setattr("memey.client.httpx.Client", factory)
        return seen

    return install


# ---------------------------------------------------------------------------
# Output / CLI fixtures
# ---------------------------------------------------------------------------



@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
