"""Tests for eacc_mcp.logging_config module."""

import logging
import sys

import pytest

from eacc_mcp.logging_config import setup_logging


@pytest.fixture(autouse=True)
def clean_package_logger():
    """Remove all handlers from the eacc_mcp logger before/after each test."""
    logger = logging.getLogger("eacc_mcp")
    logger.handlers.clear()
    yield
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_returns_package_logger(self):
        logger = setup_logging()
        assert isinstance(logger, logging.Logger)
        assert logger.name == "eacc_mcp"

    def test_default_level_is_warning(self):
        assert setup_logging().level == logging.WARNING

    def test_level_is_case_insensitive(self):
        assert setup_logging("debug").level == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self):
        assert setup_logging("chatty").level == logging.WARNING

    def test_console_goes_to_stderr(self):
        logger = setup_logging()
        streams = [h.stream for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert streams == [sys.stderr]

    def test_does_not_propagate(self):
        assert setup_logging().propagate is False

    def test_repeated_setup_does_not_stack_handlers(self, tmp_path):
        setup_logging(log_to_file=True, data_dir=tmp_path)
        logger = setup_logging(log_to_file=True, data_dir=tmp_path)
        assert len(logger.handlers) == 2

    def test_keeps_foreign_handlers(self):
        logger = logging.getLogger("eacc_mcp")
        foreign = logging.NullHandler()
        logger.addHandler(foreign)

        setup_logging()

        assert foreign in logger.handlers


class TestFileLogging:
    def test_creates_dated_log_file(self, tmp_path):
        logger = setup_logging(level="info", log_to_file=True, data_dir=tmp_path)
        logger.getChild("query").info("hello from the query engine")
        for handler in logger.handlers:
            handler.flush()

        log_files = list((tmp_path / "logs").glob("local-*.log"))
        assert len(log_files) == 1
        content = log_files[0].read_text()
        assert "INFO | eacc_mcp.query | hello from the query engine" in content

    def test_requires_data_dir(self):
        with pytest.raises(ValueError, match="data_dir"):
            setup_logging(log_to_file=True)
