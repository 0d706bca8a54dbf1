"""Free-text audit findings written to standard output."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .logging import get_logger

ERROR = "ERROR"
WARNING = "WARNING"
OPTIONAL = "OPTIONAL"

_LOGGER = get_logger("diagnostics")


class Reporter:
    """Writes one line per finding, prefixed with its severity."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the replaced sys.stdout.
        return self._stream if self._stream is not None else sys.stdout

    def error(self, message: str) -> None:
        self.finding(ERROR, message)

    def warning(self, message: str) -> None:
        self.finding(WARNING, message)

    def optional(self, message: str) -> None:
        self.finding(OPTIONAL, message)

    def finding(self, severity: str, message: str) -> None:
        _LOGGER.debug("%s finding: %s", severity.lower(), message)
        self.line(f"{severity}: {message}")

    def section(self, title: str) -> None:
        """Start a block of findings with a blank line and a ``>>>>`` header."""
        self.line("")
        self.line(f">>>> {title}")

    def line(self, text: str) -> None:
        print(text, file=self.stream)


__all__ = ["ERROR", "OPTIONAL", "Reporter", "WARNING"]
