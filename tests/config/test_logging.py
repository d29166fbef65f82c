"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from typecraft.config.logging import LOGGER_NAME, configure_logging
from typecraft.core.predicates import register_predicate


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lib = logging.getLogger(LOGGER_NAME)
    lib_level = lib.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lib.setLevel(lib_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger(LOGGER_NAME).level == logging.WARNING

    def test_human_mode_output(self) -> None:
        buffer = io.StringIO()
        configure_logging(verbose=True, log_json=False, stream=buffer)
        log = structlog.get_logger("typecraft.test")
        log.warning("hello world", key="val")
        line = buffer.getvalue()
        assert "hello world" in line
        assert "key=val" in line
        assert "warning" in line
        assert "\x1b[" not in line

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("typecraft.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "typecraft.test"
        assert "timestamp" in parsed

    @pytest.mark.usefixtures("predicate_registry")
    def test_stdlib_module_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        register_predicate("always", lambda v: True, arity=0)

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Registered predicate: always"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "typecraft.core.predicates"
        assert "timestamp" in parsed

    def test_other_loggers_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("urllib3").debug("connection noise")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1

    def test_custom_stream(self) -> None:
        buffer = io.StringIO()
        handler = configure_logging(verbose=True, log_json=True, stream=buffer)
        assert logging.getLogger().handlers == [handler]

        logging.getLogger("typecraft.types.constructor").debug("Coercion failed")

        parsed = json.loads(buffer.getvalue().strip())
        assert parsed["event"] == "Coercion failed"
        assert parsed["logger"] == "typecraft.types.constructor"
