"""Tests for application logging setup."""

import logging
from logging.handlers import RotatingFileHandler

from core.logging import LOG_FILE_NAME, LOGGER_NAMESPACE, configure_logging, get_logger


def test_get_logger_namespace():
    assert get_logger().name == LOGGER_NAMESPACE
    assert get_logger("extractors.mobile.xry").name == "xrysifter.extractors.mobile.xry"


def test_console_only():
    logger = configure_logging(None, level=logging.DEBUG)
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0], RotatingFileHandler)


def test_file_handler(tmp_path):
    log_dir = tmp_path / "logs"
    logger = configure_logging(log_dir, max_bytes=1024 * 1024, backup_count=2)
    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].backupCount == 2

    get_logger("tests").info("hello from the test")
    file_handlers[0].flush()
    text = (log_dir / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "INFO xrysifter.tests hello from the test" in text


def test_reconfigure_replaces_handlers(tmp_path):
    configure_logging(tmp_path / "logs")
    logger = configure_logging(None)
    assert len(logger.handlers) == 1
