# tests/core/test_logging.py
"""Tests for structured logging configuration."""

import io
import json
import logging

import pytest


class TestLoggingConfig:
    """Tests for logging configuration."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger returns a bound logger."""
        from tracy.core.logging import get_logger

        logger = get_logger("test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")
        assert hasattr(logger, "bind")

    def test_logger_outputs_structured(self) -> None:
        """JSON mode emits one JSON object per event."""
        from tracy.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)
        get_logger("test").info("test message", key="value")

        data = json.loads(stream.getvalue().strip().split("\n")[-1])
        assert data["event"] == "test message"
        assert data["key"] == "value"
        assert data["level"] == "info"
        assert "_record" not in data
        assert "_from_structlog" not in data

    def test_logger_console_output(self) -> None:
        """Console mode is human-readable, not JSON."""
        from tracy.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(json_output=False, stream=stream)
        get_logger("test").info("test message", key="value")

        output = stream.getvalue()
        assert "test message" in output
        assert not output.strip().startswith("{")

    def test_logs_default_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """stdout stays free for case file output."""
        from tracy.core.logging import configure_logging, get_logger

        configure_logging(json_output=True)
        get_logger("test").warning("to stderr")

        captured = capsys.readouterr()
        assert "to stderr" in captured.err
        assert "to stderr" not in captured.out

    def test_stdlib_logging_uses_same_format(self) -> None:
        """Modules using logging.getLogger() emit the same JSON shape."""
        from tracy.core.logging import configure_logging

        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)
        logging.getLogger("plain").warning("stdlib message")

        data = json.loads(stream.getvalue().strip().split("\n")[-1])
        assert data["event"] == "stdlib message"

    def test_level_filters_events(self) -> None:
        from tracy.core.logging import configure_logging, get_logger

        stream = io.StringIO()
        configure_logging(json_output=True, level="WARNING", stream=stream)
        get_logger("test").info("hidden")

        assert stream.getvalue() == ""

    def test_reconfigure_replaces_handler(self) -> None:
        """A second call redirects output instead of duplicating it."""
        from tracy.core.logging import configure_logging, get_logger

        first, second = io.StringIO(), io.StringIO()
        configure_logging(json_output=True, stream=first)
        configure_logging(json_output=True, stream=second)
        get_logger("test").info("once")

        assert first.getvalue() == ""
        assert len(second.getvalue().strip().split("\n")) == 1

    def test_configure_from_settings(self) -> None:
        from tracy.core.config import LoggingSettings
        from tracy.core.logging import configure_from_settings, get_logger

        stream = io.StringIO()
        configure_from_settings(LoggingSettings(level="warning", json_output=True), stream=stream)
        get_logger("test").info("hidden")
        get_logger("test").warning("shown")

        lines = stream.getvalue().strip().split("\n")
        assert [json.loads(line)["event"] for line in lines] == ["shown"]
        assert logging.getLogger().level == logging.WARNING
