"""Shared test fixtures."""

import logging

import pytest

from numfmt.logger import _remove_installed_handlers


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove handlers installed by setup_logger during a test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    _remove_installed_handlers(root_logger)
    root_logger.setLevel(level)
    logging.getLogger("numfmt").setLevel(logging.NOTSET)
