"""Console logger for sync progress.

Progress lines (info, debug) go to stdout. Warnings and errors go to stderr so
they stay visible when stdout is redirected. ``set_stream`` sends every level
to one stream instead.
"""

from __future__ import annotations

import sys
from typing import TextIO


_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


class Logger:
    """Level-filtered logger writing progress to stdout and problems to stderr.

    Levels are DEBUG, INFO, WARN and ERROR. An explicit stream, when set,
    overrides both stdout and stderr.
    """

    def __init__(self, level: str = "INFO", stream: TextIO | None = None) -> None:
        self._level = _LEVELS.get(level.upper(), _LEVELS["INFO"])
        self._stream = stream

    def set_stream(self, stream: TextIO | None) -> None:
        self._stream = stream

    def set_level(self, level: str) -> None:
        self._level = _LEVELS.get(level.upper(), _LEVELS["INFO"])

    def _write(self, message: str, error_stream: bool = False) -> None:
        if self._stream is not None:
            stream = self._stream
        else:
            stream = sys.stderr if error_stream else sys.stdout
        print(message, file=stream)

    def debug(self, message: str) -> None:
        if self._level <= _LEVELS["DEBUG"]:
            self._write(message)

    def info(self, message: str) -> None:
        if self._level <= _LEVELS["INFO"]:
            self._write(message)

    def warn(self, message: str) -> None:
        if self._level <= _LEVELS["WARN"]:
            self._write(message, error_stream=True)

    def error(self, message: str) -> None:
        if self._level <= _LEVELS["ERROR"]:
            self._write(message, error_stream=True)


_LOGGER = Logger()


def get_logger() -> Logger:
    """Return the shared logger instance."""
    return _LOGGER
