#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for root logging setup."""

import logging

import pytest

from adoc2html.logging_utils import SIMPLE_FORMAT, TRACE_FORMAT, configure_logging, resolve_level


@pytest.fixture(autouse=True)
def restore_httpx_level():
    httpx_logger = logging.getLogger("httpx")
    level = httpx_logger.level
    yield
    httpx_logger.setLevel(level)


@pytest.mark.unit
class TestResolveLevel:
    """Tests for level resolution."""

    @pytest.mark.parametrize(
        "value,expected",
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), (logging.ERROR, logging.ERROR), ("loud", logging.INFO)],
    )
    def test_levels(self, value, expected):
        """Test names, numbers and unknown names."""
        assert resolve_level(value) == expected


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for handler setup."""

    def test_replaces_root_handlers(self):
        """Test a single stderr handler with the simple format."""
        root = configure_logging("INFO")

        assert root is logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == SIMPLE_FORMAT

    def test_trace_format(self):
        """Test the verbose format."""
        root = configure_logging("DEBUG", trace_mode=True)
        assert root.handlers[0].formatter._fmt == TRACE_FORMAT

    def test_log_file(self, tmp_path):
        """Test that records are also written to the log file."""
        log_file = tmp_path / "adoc2html.log"
        root = configure_logging("INFO", log_file=str(log_file))

        logging.getLogger("adoc2html.test").info("converted topic")
        for handler in root.handlers:
            handler.flush()
        root.handlers[1].close()

        assert "INFO: converted topic" in log_file.read_text(encoding="utf-8")

    def test_unwritable_log_file(self, tmp_path):
        """Test that a log file that cannot be opened only keeps stderr."""
        root = configure_logging("INFO", log_file=str(tmp_path / "missing" / "adoc2html.log"))
        assert len(root.handlers) == 1

    def test_quiets_http_client(self):
        """Test that the HTTP client logger is raised to WARNING unless debugging."""
        configure_logging("INFO")
        assert logging.getLogger("httpx").level == logging.WARNING
