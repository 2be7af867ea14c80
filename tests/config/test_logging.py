"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from rod.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    rod = logging.getLogger("rod")
    rod_level = rod.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    rod.setLevel(rod_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("rod").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("rod").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("rod.test").warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "rod.test"
        assert "timestamp" in parsed
        assert captured.out == ""

    def test_stdlib_rod_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("rod.services.scheme").debug("Color scheme Dark resolved")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Color scheme Dark resolved"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "rod.services.scheme"

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("rod.services.scheme").debug("hidden")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_json_record_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        logging.getLogger("rod.x").warning("fields")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert set(parsed) == {"event", "level", "logger", "timestamp"}

    def test_console_mode_stderr_only(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True)
        logging.getLogger("rod.x").debug("console line")
        captured = capfd.readouterr()
        assert "console line" in captured.err
        assert captured.out == ""

    def test_verbose_leaves_other_loggers_at_warning(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("urllib3").debug("noise")
        assert capfd.readouterr().err == ""
