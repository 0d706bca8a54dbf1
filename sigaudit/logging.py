"""Logging for sigaudit.

Audit findings are printed to stdout by :mod:`sigaudit.diagnostics`; log
records only ever go to stderr or to the ``--log-file`` sink, so the two never
interleave in a redirected report.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_ROOT = "sigaudit"
_CONSOLE_FORMAT = "[sigaudit] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``sigaudit`` or one of its children, e.g. ``sigaudit.fetch``."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Install the stderr handler and, when ``log_file`` is given, a file handler.

    ``log_file`` always records at DEBUG so a quiet console run still leaves
    the full fetch trace behind.
    """
    logger = logging.getLogger(_ROOT)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = logging.DEBUG if verbose else logging.INFO
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)
    logger.setLevel(console_level)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger"]
