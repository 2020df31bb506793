"""Global pytest configuration."""

import logging

import pytest

pytest_plugins = ["tests.fixtures.xry"]


@pytest.fixture(autouse=True)
def _reset_app_logger():
    """Drop handlers installed by configure_logging() so they do not leak between tests."""
    yield
    logger = logging.getLogger("xrysifter")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
