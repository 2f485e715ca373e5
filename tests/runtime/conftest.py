"""Shared fixtures for runtime tests."""

from __future__ import annotations

import logging

import pytest
from fp_common.runtime import LOGGER_NAME


@pytest.fixture(autouse=True)
def library_logger() -> logging.Logger:
    """Hand every test the library logger in its unconfigured state."""
    logger = logging.getLogger(LOGGER_NAME)

    def restore() -> None:
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    restore()
    yield logger
    restore()
