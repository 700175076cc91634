"""Tests for logging setup and error formatting."""

import json
import logging
import sys
from pathlib import Path

from css_tiny.config import LoggingConfig
from css_tiny.storage import StylesheetStorage
from css_tiny.utils.errors import (
    MalformedBlockError,
    MalformedDeclarationError,
    MissingInputError,
    NotFoundError,
    format_error,
)
from css_tiny.utils.logging_config import (
    JSONFormatter,
    LoggerMixin,
    TextFormatter,
    get_logger,
    log_file_operation,
    setup_logging,
)


class TestLoggingSetup:
    """Test cases for logging configuration."""

    def test_get_logger_namespace(self):
        """Test loggers live under the package namespace."""
        assert get_logger("storage").name == "css_tiny.storage"

    def test_logger_mixin(self):
        """Test the mixin names loggers after the class."""
        assert StylesheetStorage().logger.name == "css_tiny.StylesheetStorage"
        assert isinstance(LoggerMixin().logger, logging.Logger)

    def test_setup_text_logging(self):
        """Test the text formatter is installed by default."""
        setup_logging(LoggingConfig(level="DEBUG"))

        logger = logging.getLogger("css_tiny")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, TextFormatter)

    def test_setup_json_file_logging(self, temp_dir: Path):
        """Test JSON logs are written to the configured file."""
        log_file = temp_dir / "logs" / "css-tiny.log"
        setup_logging(LoggingConfig(level="INFO", format="json", file=str(log_file)))

        get_logger("test").info("hello", extra={"selectors": 3})
        for handler in logging.getLogger("css_tiny").handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "hello"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "css_tiny.test"
        assert entry["selectors"] == 3

    def test_setup_replaces_handlers(self):
        """Test calling setup twice does not duplicate handlers."""
        setup_logging(LoggingConfig())
        setup_logging(LoggingConfig())

        assert len(logging.getLogger("css_tiny").handlers) == 1

    def test_json_formatter_exception(self):
        """Test exception details are included in JSON output."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("css_tiny", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]

    def test_log_file_operation(self, caplog):
        """Test storage events carry structured fields."""
        caplog.set_level(logging.DEBUG, logger="css_tiny.storage")

        log_file_operation("load", "style.css", 4, 120, 0.0015)

        record = caplog.records[-1]
        assert record.levelno == logging.DEBUG
        assert record.event == "stylesheet_load"
        assert record.selectors == 4
        assert record.duration_ms == 1.5

    def test_log_file_operation_error(self, caplog):
        """Test failed storage events carry the error."""
        caplog.set_level(logging.DEBUG, logger="css_tiny.storage")

        log_file_operation("store", "style.css", 0, 0, 0.0, error="disk full")

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.error == "disk full"

    def test_storage_logs_load(self, caplog, sample_css_file: Path):
        """Test loading a file emits a storage event."""
        caplog.set_level(logging.DEBUG, logger="css_tiny.storage")

        StylesheetStorage().load(sample_css_file)

        assert any(getattr(record, "event", None) == "stylesheet_load" for record in caplog.records)


class TestFormatError:
    """Test cases for rendering errors."""

    def test_plain_error(self):
        """Test errors without context render as their message."""
        assert format_error(MissingInputError("No text")) == "No text"
        assert format_error(MalformedBlockError("Bad block", block="x")) == "Bad block"

    def test_declaration_error(self):
        """Test declaration errors name the selector."""
        error = MalformedDeclarationError("Bad declaration", fragment="x", selector="H1")

        assert format_error(error) == "Selector: H1: Bad declaration"

    def test_storage_error(self):
        """Test storage errors name the file."""
        error = NotFoundError("Missing", path="style.css")

        assert format_error(error) == "File: style.css: Missing"

    def test_error_details(self):
        """Test details default to an empty dict."""
        error = MissingInputError("No text")

        assert error.details == {}
        assert str(error) == "No text"
