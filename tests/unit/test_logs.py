# tests/unit/test_logs.py
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from src.core.logs import ROOT_LOGGER_NAME, configure_logging, debug_enabled


@pytest.fixture
def clean_logger():
    # conftest restores the original handlers afterwards
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers = []
    return logger


@pytest.mark.parametrize(("value", "expected"), [("1", True), ("Yes", True), ("on", True), ("0", False), ("", False)])
def test_debug_flag(monkeypatch, value, expected):
    monkeypatch.setenv("XIRR_DEBUG", value)
    assert debug_enabled() is expected


def test_configure_is_idempotent(clean_logger, tmp_path: Path):
    configure_logging(verbose=True, log_path=str(tmp_path / "x.log"))
    configure_logging(verbose=True, log_path=str(tmp_path / "x.log"))
    assert [h.get_name() for h in clean_logger.handlers] == ["xirr-stderr"]
    assert clean_logger.level == logging.INFO
    assert not (tmp_path / "x.log").exists()


def test_debug_adds_rotating_file(monkeypatch, clean_logger, tmp_path: Path):
    monkeypatch.setenv("XIRR_DEBUG", "1")
    log_path = tmp_path / "logs" / "debug.log"
    configure_logging(log_path=str(log_path))
    assert clean_logger.level == logging.DEBUG
    assert "xirr-debug-file" in {h.get_name() for h in clean_logger.handlers}

    logging.getLogger("src.core.finance.goal_seek").debug("hello from the solver")
    for h in clean_logger.handlers:
        h.flush()
    assert "hello from the solver" in log_path.read_text(encoding="utf-8")
