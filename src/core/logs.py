# src/core/logs.py
"""
Logging helpers shared by the solver, the calculator and the CLI.

- Library modules log through `get_logger(__name__)` and never configure handlers.
- `configure_logging()` is for entry points: stderr handler, plus a rotating
  debug file when XIRR_DEBUG is set.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

ROOT_LOGGER_NAME = "src"
DEBUG_ENV = "XIRR_DEBUG"
DEBUG_LOG_PATH = os.path.join("logs", "xirr_debug.log")

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "(%Y-%m-%d %H:%M:%S)"


def debug_enabled() -> bool:
    return os.getenv(DEBUG_ENV, "").strip().lower() in {"1", "true", "yes", "on"}


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _add_debug_file_handler(logger: logging.Logger, path: str) -> None:
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError:
        # stderr output keeps working without the file
        return
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    handler.set_name("xirr-debug-file")
    logger.addHandler(handler)


def configure_logging(verbose: bool = False, *, log_path: str = DEBUG_LOG_PATH) -> logging.Logger:
    """
    Configure the package logger once (idempotent across repeated calls).

    verbose      -> INFO on stderr
    XIRR_DEBUG=1 -> DEBUG on stderr and in a rotating file at `log_path`
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    debug = debug_enabled()
    logger.setLevel(logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING)

    names = {h.get_name() for h in logger.handlers}
    if "xirr-stderr" not in names:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        stream.set_name("xirr-stderr")
        logger.addHandler(stream)
    if debug and "xirr-debug-file" not in names:
        _add_debug_file_handler(logger, log_path)

    return logger


__all__ = ["debug_enabled", "get_logger", "configure_logging", "DEBUG_ENV", "DEBUG_LOG_PATH"]
