"""A small logger whose levels carry feelings."""

from __future__ import annotations

import sys
import threading
from datetime import datetime
from enum import IntEnum
from typing import TextIO

RESET_COLOR = "\033[0m"


class EmotionalLevel(IntEnum):
    """Logging levels: FYI is info, UHOH warn, CRAP error, COOKED fatal."""

    FYI = 0
    UHOH = 1
    CRAP = 2
    COOKED = 3

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def color(self) -> str:
        return _COLORS[self]


_LABELS = {
    EmotionalLevel.FYI: "FYI 💁",
    EmotionalLevel.UHOH: "UHOH 😬",
    EmotionalLevel.CRAP: "CRAP 💩",
    EmotionalLevel.COOKED: "COOKED 🔥",
}

_COLORS = {
    EmotionalLevel.FYI: "\033[36m",
    EmotionalLevel.UHOH: "\033[33m",
    EmotionalLevel.CRAP: "\033[31m",
    EmotionalLevel.COOKED: "\033[35m",
}


class VibeLogger:
    """Writes one timestamped, emotionally labelled line per message.

    A message formatted with ``args`` uses ``%`` formatting. Logging at
    COOKED writes the line and then exits with status 1.
    """

    def __init__(self, out: TextIO | None = None, colorful: bool = True) -> None:
        self._out = out
        self.colorful = colorful
        self._lock = threading.Lock()

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def _log(self, level: EmotionalLevel, message: str, args: tuple) -> None:
        prefix = level.label
        if self.colorful:
            prefix = f"{level.color}{prefix}{RESET_COLOR}"
        text = message % args if args else message
        timestamp = datetime.now().strftime("%H:%M:%S")
        with self._lock:
            out = self.out
            out.write(f"[{timestamp}] {prefix}: {text}\n")
            out.flush()
        if level is EmotionalLevel.COOKED:
            sys.exit(1)

    def fyi(self, message: str, *args: object) -> None:
        self._log(EmotionalLevel.FYI, message, args)

    def uhoh(self, message: str, *args: object) -> None:
        self._log(EmotionalLevel.UHOH, message, args)

    def crap(self, message: str, *args: object) -> None:
        self._log(EmotionalLevel.CRAP, message, args)

    def cooked(self, message: str, *args: object) -> None:
        """Log at COOKED level and exit the process with status 1."""
        self._log(EmotionalLevel.COOKED, message, args)


def default_vibe_logger() -> VibeLogger:
    """A colourful logger writing to standard output."""
    return VibeLogger(None, True)