"""Exceptions raised by the tiny6502 core."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for CPU-related failures."""


class UnknownOpcode(CPUError):
    """Raised when the fetched byte has no entry in the opcode table.

    Attributes
    ----------
    opcode:
        The offending byte.
    address:
        The program counter at fetch time (the address of the opcode byte).
    """

    def __init__(self, opcode: int, address: int) -> None:
        self.opcode: int = opcode & 0xFF
        self.address: int = address & 0xFFFF
        super().__init__(f"Unknown opcode ${self.opcode:02X} at ${self.address:04X}")
