# tests/conftest.py
from __future__ import annotations

import logging
import os
import random

import pytest

from src.core.finance import XirrCalculator
from src.core.logs import ROOT_LOGGER_NAME
from tests.utils import EXCEL_AMOUNTS, EXCEL_DATES, make_series


# -------- Global deterministic seed --------
@pytest.fixture(autouse=True, scope="session")
def _seed_session():
    random.seed(1337)
    os.environ.setdefault("PYTHONHASHSEED", "0")
    yield


# -------- Isolation from the caller's environment --------
@pytest.fixture(autouse=True)
def _clear_xirr_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("XIRR_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """configure_logging() attaches handlers to the package logger; undo per test."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield
    for h in logger.handlers:
        if h not in saved_handlers:
            h.close()
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


# -------- Domain fixtures --------
@pytest.fixture
def excel_series():
    return make_series(EXCEL_DATES, EXCEL_AMOUNTS)


@pytest.fixture
def calculator():
    """Factory for fresh calculators (optionally with settings)."""

    def _factory(settings=None):
        return XirrCalculator(settings)

    return _factory


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks integration tests")
