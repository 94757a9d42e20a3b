"""Shared fixtures for donmai tests."""

import logging

import pytest

from donmai.foundation.config import clear_settings_cache


@pytest.fixture(autouse=True)
def clean_settings() -> object:
    """Reload settings from the environment for every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_donmai_logger() -> object:
    """Undo configure_logging() so caplog keeps receiving records."""
    yield
    logger = logging.getLogger("donmai")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
