"""Tests for config and logging."""

import io
import json
import logging
import os
import sys
from unittest.mock import patch

import pytest

from sepa_transfer.config import (
    DEFAULT_MESSAGE_ID_PREFIX,
    OutputConfig,
    SepaConfig,
)
from sepa_transfer.exceptions import ConfigurationError
from sepa_transfer.logging import JsonFormatter, get_logger, setup_logging


class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = OutputConfig()

        assert config.pretty_print is True

    def test_custom_values(self) -> None:
        """Test custom configuration values."""
        config = OutputConfig(pretty_print=False)

        assert config.pretty_print is False


class TestSepaConfig:
    """Tests for SepaConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = SepaConfig()

        assert config.message_id_prefix == "SEPA-XFER"
        assert config.default_schema == "pain.001.001.03"
        assert isinstance(config.output, OutputConfig)
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_custom_values(self) -> None:
        """Test custom configuration values."""
        config = SepaConfig(
            message_id_prefix="ACME",
            default_schema="pain.001.003.03",
            output=OutputConfig(pretty_print=False),
            seed=42,
            log_level="DEBUG",
        )

        assert config.message_id_prefix == "ACME"
        assert config.default_schema == "pain.001.003.03"
        assert config.output.pretty_print is False
        assert config.seed == 42
        assert config.log_level == "DEBUG"

    def test_from_env_default(self) -> None:
        """Test creating config from an empty environment."""
        with patch.dict(os.environ, {}, clear=True):
            config = SepaConfig.from_env()

        assert config.message_id_prefix == DEFAULT_MESSAGE_ID_PREFIX
        assert config.default_schema == "pain.001.001.03"
        assert config.output.pretty_print is True
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_custom(self) -> None:
        """Test creating config from custom environment variables."""
        env_vars = {
            "SEPA_MESSAGE_ID_PREFIX": "ACME-PAY",
            "SEPA_DEFAULT_SCHEMA": "pain.001.001.03.ch.02",
            "SEPA_PRETTY_PRINT": "false",
            "SEED": "12345",
            "LOG_LEVEL": "DEBUG",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            config = SepaConfig.from_env()

        assert config.message_id_prefix == "ACME-PAY"
        assert config.default_schema == "pain.001.001.03.ch.02"
        assert config.output.pretty_print is False
        assert config.seed == 12345
        assert config.log_level == "DEBUG"

    def test_from_env_unknown_schema(self) -> None:
        """Test that an unknown default schema is rejected."""
        with patch.dict(os.environ, {"SEPA_DEFAULT_SCHEMA": "pain.008.001.02"}, clear=True):
            with pytest.raises(ConfigurationError, match="pain.008.001.02"):
                SepaConfig.from_env()

    @pytest.mark.parametrize("prefix", ["", "ACME-PAYMENT"])
    def test_from_env_prefix_length(self, prefix: str) -> None:
        """Test that the prefix must keep the message id within 35 characters."""
        with patch.dict(os.environ, {"SEPA_MESSAGE_ID_PREFIX": prefix}, clear=True):
            with pytest.raises(ConfigurationError, match="1-9 characters"):
                SepaConfig.from_env()

    @pytest.mark.parametrize("prefix", ["", "ACME-PAYMENT"])
    def test_prefix_length_checked_on_construction(self, prefix: str) -> None:
        with pytest.raises(ConfigurationError, match="1-9 characters"):
            SepaConfig(message_id_prefix=prefix)

    def test_longest_prefix(self) -> None:
        assert SepaConfig(message_id_prefix="ACME-PAYS").message_id_prefix == "ACME-PAYS"

    def test_from_env_invalid_seed(self) -> None:
        """Test that a non-integer seed is rejected."""
        with patch.dict(os.environ, {"SEED": "abc"}, clear=True):
            with pytest.raises(ConfigurationError, match="SEED"):
                SepaConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        """Test default logging setup."""
        setup_logging()

        logger = logging.getLogger("sepa_transfer")
        assert logger.level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        """Test debug level logging setup."""
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("sepa_transfer").level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        """Test JSON format logging."""
        setup_logging(format_type="json")

        logger = logging.getLogger()
        assert any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        """Test that setup_logging replaces existing handlers."""
        logger = logging.getLogger()
        logger.addHandler(logging.StreamHandler())
        logger.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(logger.handlers) == 1

    def test_faker_logger_quieted(self) -> None:
        """Test that Faker's provider lookups stay out of debug output."""
        setup_logging(level="DEBUG")

        assert logging.getLogger("faker").level == logging.WARNING

    def test_setup_logging_stream(self) -> None:
        """Test that the handler writes to the given stream."""
        stream = io.StringIO()
        setup_logging(stream=stream)

        logging.getLogger("sepa_transfer.test").info("to the stream")

        assert "to the stream" in stream.getvalue()


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        defaults = dict(
            name="sepa_transfer.message",
            level=logging.INFO,
            pathname="/path/to/file.py",
            lineno=42,
            msg="Generated %s document",
            args=("pain.001.001.03",),
            exc_info=None,
        )
        defaults.update(kwargs)
        return logging.LogRecord(**defaults)

    def test_format_basic(self) -> None:
        """Test basic log formatting."""
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "sepa_transfer.message"
        assert data["message"] == "Generated pain.001.001.03 document"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        """Test formatting with exception info."""
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        record = self._record(level=logging.ERROR, msg="Error occurred", args=(), exc_info=exc_info)
        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "ERROR"
        assert "ValueError" in data["exception"]

    def test_format_with_extra(self) -> None:
        """Test formatting with extra fields."""
        record = self._record()
        record.extra = {"message_id": "SEPA-XFER/abc"}

        data = json.loads(JsonFormatter().format(record))

        assert data["message_id"] == "SEPA-XFER/abc"

    def test_format_with_document_context(self) -> None:
        """Test that message_id and schema passed via extra become keys."""
        record = self._record()
        record.message_id = "SEPA-XFER/abc"
        record.schema = "pain.001.001.03"

        data = json.loads(JsonFormatter().format(record))

        assert data["message_id"] == "SEPA-XFER/abc"
        assert data["schema"] == "pain.001.001.03"

    def test_format_without_document_context(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert "message_id" not in data
        assert "schema" not in data


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self) -> None:
        logger = get_logger("test.module")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_get_logger_same_instance(self) -> None:
        assert get_logger("test.same") is get_logger("test.same")


class TestSepaTransferInit:
    """Tests for sepa_transfer __init__.py."""

    def test_version_exported(self) -> None:
        """Test that __version__ is exported."""
        from sepa_transfer import __version__

        assert isinstance(__version__, str)

    def test_public_api(self) -> None:
        """Test that the main entry points are importable from the package."""
        import sepa_transfer

        assert sepa_transfer.CreditTransfer is not None
        assert sepa_transfer.PAIN_001_001_03_CH_02 == "pain.001.001.03.ch.02"
