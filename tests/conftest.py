"""Shared pytest fixtures and test helpers for rod tests."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from rod.domain.types import ColorScheme
from rod.infrastructure import terminal
from rod.infrastructure.terminal import QueryOptions


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the app directory at a temp dir and clear ``ROD_*`` env vars."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    for name in list(os.environ):
        if name.startswith("ROD_"):
            monkeypatch.delenv(name)


@pytest.fixture
def config_dir() -> Path:
    """The (isolated) rod app directory, created on demand."""
    path = Path(click.get_app_dir("rod"))
    path.mkdir(parents=True, exist_ok=True)
    return path


@dataclass
class FakeTerminal:
    """Stand-in for the OSC 10/11 query; answers with ``scheme``."""

    scheme: ColorScheme | None = None
    calls: list[QueryOptions] = field(default_factory=list)

    def __call__(self, options: QueryOptions | None = None) -> ColorScheme | None:
        self.calls.append(options or QueryOptions())
        return self.scheme


@pytest.fixture(autouse=True)
def fake_terminal(monkeypatch: pytest.MonkeyPatch) -> FakeTerminal:
    """Replace the real terminal query so tests never touch /dev/tty."""
    fake = FakeTerminal()
    monkeypatch.setattr(terminal, "query_color_scheme", fake)
    return fake


@dataclass
class ExecRecorder:
    """Captures ``os.execvpe`` calls instead of replacing the process."""

    calls: list[tuple[str, list[str], Mapping[str, str]]] = field(default_factory=list)

    def __call__(self, file: str, args: list[str], env: Mapping[str, str]) -> None:
        self.calls.append((file, list(args), dict(env)))


@pytest.fixture
def exec_recorder(monkeypatch: pytest.MonkeyPatch) -> ExecRecorder:
    recorder = ExecRecorder()
    monkeypatch.setattr(os, "execvpe", recorder)
    return recorder


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_config(config_dir: Path, text: str) -> Path:
    """Write ``config.toml`` into *config_dir* and return its path."""
    path = config_dir / "config.toml"
    path.write_text(text, encoding="utf-8")
    return path


def write_override(config_dir: Path, text: str) -> Path:
    """Write the override file into *config_dir* and return its path."""
    path = config_dir / "override"
    path.write_text(text, encoding="utf-8")
    return path
