from __future__ import annotations

from typing import Callable, Iterable

import pytest

from tiny6502.core.logger import ILogger, NullLogger, TRACE_LEVEL
from tiny6502.core.m6502 import M6502

PROGRAM_START = 0x0600


class CapturingLogger(ILogger):
    """Collects every message it is given."""

    def __init__(self, level: int = TRACE_LEVEL) -> None:
        self._level = level
        self.lines: list[str] = []

    @property
    def level(self) -> int:
        return self._level

    @level.setter
    def level(self, value: int) -> None:
        self._level = value

    def log(self, level: int, message: str) -> None:
        if level <= self._level:
            self.lines.append(message)


@pytest.fixture()
def cpu() -> M6502:
    return M6502(logger=NullLogger())


@pytest.fixture()
def trace_log() -> CapturingLogger:
    return CapturingLogger()


@pytest.fixture()
def traced_cpu(trace_log: CapturingLogger) -> M6502:
    return M6502(logger=trace_log)


@pytest.fixture()
def load_program() -> Callable[..., None]:
    """Return ``load(cpu, code, start=$0600)``: copy *code* and point PC at it."""

    def load(cpu: M6502, code: Iterable[int], start: int = PROGRAM_START) -> None:
        cpu.load(start, bytes(code))
        cpu.pc = start

    return load
