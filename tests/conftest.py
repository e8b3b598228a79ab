"""Configuration file for pytest containing shared fixtures.

This module provides fixtures that can be used across multiple test files:
- isolated_environment: keeps user config and logging variables out of tests
- write_markdown: writes Markdown files into a temporary directory
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ignore configuration and log settings from the developer's machine."""
    monkeypatch.delenv("MADO_CONFIG_PATH", raising=False)
    monkeypatch.delenv("MADO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MADO_LOG_FORMAT", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg-config")))


@pytest.fixture
def write_markdown(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes ``text`` to ``tmp_path / name``."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
