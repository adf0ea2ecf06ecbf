"""
Core enumerations for tiny6502: status-flag bits, addressing modes and the
cycle-penalty classes used by the opcode table.
"""

from enum import IntEnum, IntFlag


class Flag(IntFlag):
    C = 0x01  # Carry
    Z = 0x02  # Zero
    I = 0x04  # Interrupt disable
    D = 0x08  # Decimal
    B = 0x10  # Break
    U = 0x20  # Unused, always reads as 1
    V = 0x40  # Overflow
    N = 0x80  # Negative


class AddressingMode(IntEnum):
    IMPLIED = 0
    ACCUMULATOR = 1
    IMMEDIATE = 2
    ZERO_PAGE = 3
    ZERO_PAGE_X = 4
    ZERO_PAGE_Y = 5
    RELATIVE = 6
    ABSOLUTE = 7
    ABSOLUTE_X = 8
    ABSOLUTE_Y = 9
    INDIRECT = 10
    INDEXED_INDIRECT = 11  # ($zp,X)
    INDIRECT_INDEXED = 12  # ($zp),Y

    @staticmethod
    def operand_bytes(mode):
        """Number of operand bytes following the opcode byte."""
        if mode in (AddressingMode.IMPLIED, AddressingMode.ACCUMULATOR):
            return 0
        if mode in (
            AddressingMode.ABSOLUTE, AddressingMode.ABSOLUTE_X,
            AddressingMode.ABSOLUTE_Y, AddressingMode.INDIRECT,
        ):
            return 2
        return 1


class CyclePenalty(IntEnum):
    NONE = 0        # fixed cost (stores, read-modify-write, implied)
    PAGE_CROSS = 1  # +1 when the indexed address crosses a page
    BRANCH = 2      # +1 when taken, +1 more when the target is on another page
