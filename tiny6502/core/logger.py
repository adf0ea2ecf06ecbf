"""
Trace sinks for tiny6502.

The core never logs on its own; the only output it produces is the optional
per-instruction trace line, which is handed to an :class:`ILogger`.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import TextIO

# Level at which the step engine emits trace lines.
TRACE_LEVEL = 1


class ILogger(ABC):
    """Logging interface with level-based filtering."""

    @property
    @abstractmethod
    def level(self) -> int: ...

    @level.setter
    @abstractmethod
    def level(self, value: int): ...

    @abstractmethod
    def log(self, level: int, message: str): ...


class NullLogger(ILogger):
    """No-op logger implementation."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._level = 0
        return cls._instance

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: int):
        self._level = value

    def log(self, level: int, message: str):
        pass


class ConsoleLogger(ILogger):
    """Logger that prints to a text stream (stdout by default)."""

    def __init__(self, level: int = TRACE_LEVEL, stream: TextIO | None = None):
        self._level = level
        self._stream = stream

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: int):
        self._level = value

    def log(self, level: int, message: str):
        if level <= self._level:
            print(message, file=self._stream or sys.stdout)


class LoggingLogger(ILogger):
    """Forwards messages to a stdlib :mod:`logging` logger at DEBUG."""

    def __init__(self, name: str = "tiny6502.trace", level: int = TRACE_LEVEL):
        self._logger = logging.getLogger(name)
        self._level = level

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: int):
        self._level = value

    def log(self, level: int, message: str):
        if level <= self._level:
            self._logger.debug(message)


# Default logger instance
DEFAULT_LOGGER: ILogger = NullLogger()
