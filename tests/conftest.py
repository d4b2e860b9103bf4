"""Shared fixtures for devtool tests."""

from __future__ import annotations

import pytest

from logging_utils import Logger


@pytest.fixture(autouse=True)
def _info_logging():
    """Pin the console log level regardless of LOG_LEVEL in the environment."""
    previous = Logger.level
    Logger.set_level('info')
    yield
    Logger.level = previous
