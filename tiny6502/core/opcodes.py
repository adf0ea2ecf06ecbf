"""
Opcode dispatch table -- 256 entries.

``OPCODE_TABLE[byte]`` is either an :class:`Opcode` or ``None`` for bytes
that are not documented NMOS instructions. The table is built once at import
time and shared read-only by every CPU instance.

Cycle counts are the base costs from the standard NMOS timing table. Whether
an indexed access may add a cycle is recorded per opcode in ``penalty``:
loads, ALU operations and compares pay +1 only when the page is crossed;
stores and read-modify-write instructions have the worst case folded into
their base count.
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Tuple

from tiny6502.core import instructions
from tiny6502.core.instructions import Handler
from tiny6502.core.types import AddressingMode, CyclePenalty

M = AddressingMode
P = CyclePenalty


class Opcode(NamedTuple):
    opcode: int
    mnemonic: str
    mode: AddressingMode
    cycles: int
    penalty: CyclePenalty
    handler: Handler


# (opcode, mnemonic, mode, base cycles, penalty)
# fmt: off
_ROWS: Tuple[Tuple[int, str, AddressingMode, int, CyclePenalty], ...] = (
    # -- Load / store ---------------------------------------------------
    (0xA9, "LDA", M.IMMEDIATE,        2, P.NONE),
    (0xA5, "LDA", M.ZERO_PAGE,        3, P.NONE),
    (0xB5, "LDA", M.ZERO_PAGE_X,      4, P.NONE),
    (0xAD, "LDA", M.ABSOLUTE,         4, P.NONE),
    (0xBD, "LDA", M.ABSOLUTE_X,       4, P.PAGE_CROSS),
    (0xB9, "LDA", M.ABSOLUTE_Y,       4, P.PAGE_CROSS),
    (0xA1, "LDA", M.INDEXED_INDIRECT, 6, P.NONE),
    (0xB1, "LDA", M.INDIRECT_INDEXED, 5, P.PAGE_CROSS),

    (0xA2, "LDX", M.IMMEDIATE,        2, P.NONE),
    (0xA6, "LDX", M.ZERO_PAGE,        3, P.NONE),
    (0xB6, "LDX", M.ZERO_PAGE_Y,      4, P.NONE),
    (0xAE, "LDX", M.ABSOLUTE,         4, P.NONE),
    (0xBE, "LDX", M.ABSOLUTE_Y,       4, P.PAGE_CROSS),

    (0xA0, "LDY", M.IMMEDIATE,        2, P.NONE),
    (0xA4, "LDY", M.ZERO_PAGE,        3, P.NONE),
    (0xB4, "LDY", M.ZERO_PAGE_X,      4, P.NONE),
    (0xAC, "LDY", M.ABSOLUTE,         4, P.NONE),
    (0xBC, "LDY", M.ABSOLUTE_X,       4, P.PAGE_CROSS),

    (0x85, "STA", M.ZERO_PAGE,        3, P.NONE),
    (0x95, "STA", M.ZERO_PAGE_X,      4, P.NONE),
    (0x8D, "STA", M.ABSOLUTE,         4, P.NONE),
    (0x9D, "STA", M.ABSOLUTE_X,       5, P.NONE),
    (0x99, "STA", M.ABSOLUTE_Y,       5, P.NONE),
    (0x81, "STA", M.INDEXED_INDIRECT, 6, P.NONE),
    (0x91, "STA", M.INDIRECT_INDEXED, 6, P.NONE),

    (0x86, "STX", M.ZERO_PAGE,        3, P.NONE),
    (0x96, "STX", M.ZERO_PAGE_Y,      4, P.NONE),
    (0x8E, "STX", M.ABSOLUTE,         4, P.NONE),

    (0x84, "STY", M.ZERO_PAGE,        3, P.NONE),
    (0x94, "STY", M.ZERO_PAGE_X,      4, P.NONE),
    (0x8C, "STY", M.ABSOLUTE,         4, P.NONE),

    # -- Transfer -------------------------------------------------------
    (0xAA, "TAX", M.IMPLIED,          2, P.NONE),
    (0xA8, "TAY", M.IMPLIED,          2, P.NONE),
    (0x8A, "TXA", M.IMPLIED,          2, P.NONE),
    (0x98, "TYA", M.IMPLIED,          2, P.NONE),
    (0xBA, "TSX", M.IMPLIED,          2, P.NONE),
    (0x9A, "TXS", M.IMPLIED,          2, P.NONE),

    # -- Stack ----------------------------------------------------------
    (0x48, "PHA", M.IMPLIED,          3, P.NONE),
    (0x08, "PHP", M.IMPLIED,          3, P.NONE),
    (0x68, "PLA", M.IMPLIED,          4, P.NONE),
    (0x28, "PLP", M.IMPLIED,          4, P.NONE),

    # -- Logic ----------------------------------------------------------
    (0x29, "AND", M.IMMEDIATE,        2, P.NONE),
    (0x25, "AND", M.ZERO_PAGE,        3, P.NONE),
    (0x35, "AND", M.ZERO_PAGE_X,      4, P.NONE),
    (0x2D, "AND", M.ABSOLUTE,         4, P.NONE),
    (0x3D, "AND", M.ABSOLUTE_X,       4, P.PAGE_CROSS),
    (0x39, "AND", M.ABSOLUTE_Y,       4, P.PAGE_CROSS),
    (0x21, "AND", M.INDEXED_INDIRECT, 6, P.NONE),
    (0x31, "AND", M.INDIRECT_INDEXED, 5, P.PAGE_CROSS),

    (0x09, "ORA", M.IMMEDIATE,        2, P.NONE),
    (0x05, "ORA", M.ZERO_PAGE,        3, P.NONE),
    (0x15, "ORA", M.ZERO_PAGE_X,      4, P.NONE),
    (0x0D, "ORA", M.ABSOLUTE,         4, P.NONE),
    (0x1D, "ORA", M.ABSOLUTE_X,       4, P.PAGE_CROSS),
    (0x19, "ORA", M.ABSOLUTE_Y,       4, P.PAGE_CROSS),
    (0x01, "ORA", M.INDEXED_INDIRECT, 6, P.NONE),
    (0x11, "ORA", M.INDIRECT_INDEXED, 5, P.PAGE_CROSS),

    (0x49, "EOR", M.IMMEDIATE,        2, P.NONE),
    (0x45, "EOR", M.ZERO_PAGE,        3, P.NONE),
    (0x55, "EOR", M.ZERO_PAGE_X,      4, P.NONE),
    (0x4D, "EOR", M.ABSOLUTE,         4, P.NONE),
    (0x5D, "EOR", M.ABSOLUTE_X,       4, P.PAGE_CROSS),
    (0x59, "EOR", M.ABSOLUTE_Y,       4, P.PAGE_CROSS),
    (0x41, "EOR", M.INDEXED_INDIRECT, 6, P.NONE),
    (0x51, "EOR", M.INDIRECT_INDEXED, 5, P.PAGE_CROSS),

    (0x24, "BIT", M.ZERO_PAGE,        3, P.NONE),
    (0x2C, "BIT", M.ABSOLUTE,         4, P.NONE),

    # -- Arithmetic -----------------------------------------------------
    (0x69, "ADC", M.IMMEDIATE,        2, P.NONE),
    (0x65, "ADC", M.ZERO_PAGE,        3, P.NONE),
    (0x75, "ADC", M.ZERO_PAGE_X,      4, P.NONE),
    (0x6D, "ADC", M.ABSOLUTE,         4, P.NONE),
    (0x7D, "ADC", M.ABSOLUTE_X,       4, P.PAGE_CROSS),
    (0x79, "ADC", M.ABSOLUTE_Y,       4, P.PAGE_CROSS),
    (0x61, "ADC", M.INDEXED_INDIRECT, 6, P.NONE),
    (0x71, "ADC", M.INDIRECT_INDEXED, 5, P.PAGE_CROSS),

    (0xE9, "SBC", M.IMMEDIATE,        2, P.NONE),
    (0xE5, "SBC", M.ZERO_PAGE,        3, P.NONE),
    (0xF5, "SBC", M.ZERO_PAGE_X,      4, P.NONE),
    (0xED, "SBC", M.ABSOLUTE,         4, P.NONE),
    (0xFD, "SBC", M.ABSOLUTE_X,       4, P.PAGE_CROSS),
    (0xF9, "SBC", M.ABSOLUTE_Y,       4, P.PAGE_CROSS),
    (0xE1, "SBC", M.INDEXED_INDIRECT, 6, P.NONE),
    (0xF1, "SBC", M.INDIRECT_INDEXED, 5, P.PAGE_CROSS),

    # -- Compare --------------------------------------------------------
    (0xC9, "CMP", M.IMMEDIATE,        2, P.NONE),
    (0xC5, "CMP", M.ZERO_PAGE,        3, P.NONE),
    (0xD5, "CMP", M.ZERO_PAGE_X,      4, P.NONE),
    (0xCD, "CMP", M.ABSOLUTE,         4, P.NONE),
    (0xDD, "CMP", M.ABSOLUTE_X,       4, P.PAGE_CROSS),
    (0xD9, "CMP", M.ABSOLUTE_Y,       4, P.PAGE_CROSS),
    (0xC1, "CMP", M.INDEXED_INDIRECT, 6, P.NONE),
    (0xD1, "CMP", M.INDIRECT_INDEXED, 5, P.PAGE_CROSS),

    (0xE0, "CPX", M.IMMEDIATE,        2, P.NONE),
    (0xE4, "CPX", M.ZERO_PAGE,        3, P.NONE),
    (0xEC, "CPX", M.ABSOLUTE,         4, P.NONE),

    (0xC0, "CPY", M.IMMEDIATE,        2, P.NONE),
    (0xC4, "CPY", M.ZERO_PAGE,        3, P.NONE),
    (0xCC, "CPY", M.ABSOLUTE,         4, P.NONE),

    # -- Increment / decrement ------------------------------------------
    (0xE6, "INC", M.ZERO_PAGE,        5, P.NONE),
    (0xF6, "INC", M.ZERO_PAGE_X,      6, P.NONE),
    (0xEE, "INC", M.ABSOLUTE,         6, P.NONE),
    (0xFE, "INC", M.ABSOLUTE_X,       7, P.NONE),

    (0xC6, "DEC", M.ZERO_PAGE,        5, P.NONE),
    (0xD6, "DEC", M.ZERO_PAGE_X,      6, P.NONE),
    (0xCE, "DEC", M.ABSOLUTE,         6, P.NONE),
    (0xDE, "DEC", M.ABSOLUTE_X,       7, P.NONE),

    (0xE8, "INX", M.IMPLIED,          2, P.NONE),
    (0xC8, "INY", M.IMPLIED,          2, P.NONE),
    (0xCA, "DEX", M.IMPLIED,          2, P.NONE),
    (0x88, "DEY", M.IMPLIED,          2, P.NONE),

    # -- Shifts / rotates -----------------------------------------------
    (0x0A, "ASL", M.ACCUMULATOR,      2, P.NONE),
    (0x06, "ASL", M.ZERO_PAGE,        5, P.NONE),
    (0x16, "ASL", M.ZERO_PAGE_X,      6, P.NONE),
    (0x0E, "ASL", M.ABSOLUTE,         6, P.NONE),
    (0x1E, "ASL", M.ABSOLUTE_X,       7, P.NONE),

    (0x4A, "LSR", M.ACCUMULATOR,      2, P.NONE),
    (0x46, "LSR", M.ZERO_PAGE,        5, P.NONE),
    (0x56, "LSR", M.ZERO_PAGE_X,      6, P.NONE),
    (0x4E, "LSR", M.ABSOLUTE,         6, P.NONE),
    (0x5E, "LSR", M.ABSOLUTE_X,       7, P.NONE),

    (0x2A, "ROL", M.ACCUMULATOR,      2, P.NONE),
    (0x26, "ROL", M.ZERO_PAGE,        5, P.NONE),
    (0x36, "ROL", M.ZERO_PAGE_X,      6, P.NONE),
    (0x2E, "ROL", M.ABSOLUTE,         6, P.NONE),
    (0x3E, "ROL", M.ABSOLUTE_X,       7, P.NONE),

    (0x6A, "ROR", M.ACCUMULATOR,      2, P.NONE),
    (0x66, "ROR", M.ZERO_PAGE,        5, P.NONE),
    (0x76, "ROR", M.ZERO_PAGE_X,      6, P.NONE),
    (0x6E, "ROR", M.ABSOLUTE,         6, P.NONE),
    (0x7E, "ROR", M.ABSOLUTE_X,       7, P.NONE),

    # -- Jump / subroutine ----------------------------------------------
    (0x4C, "JMP", M.ABSOLUTE,         3, P.NONE),
    (0x6C, "JMP", M.INDIRECT,         5, P.NONE),
    (0x20, "JSR", M.ABSOLUTE,         6, P.NONE),
    (0x60, "RTS", M.IMPLIED,          6, P.NONE),

    # -- Branches -------------------------------------------------------
    (0x10, "BPL", M.RELATIVE,         2, P.BRANCH),
    (0x30, "BMI", M.RELATIVE,         2, P.BRANCH),
    (0x50, "BVC", M.RELATIVE,         2, P.BRANCH),
    (0x70, "BVS", M.RELATIVE,         2, P.BRANCH),
    (0x90, "BCC", M.RELATIVE,         2, P.BRANCH),
    (0xB0, "BCS", M.RELATIVE,         2, P.BRANCH),
    (0xD0, "BNE", M.RELATIVE,         2, P.BRANCH),
    (0xF0, "BEQ", M.RELATIVE,         2, P.BRANCH),

    # -- Flag set / clear -----------------------------------------------
    (0x18, "CLC", M.IMPLIED,          2, P.NONE),
    (0x38, "SEC", M.IMPLIED,          2, P.NONE),
    (0x58, "CLI", M.IMPLIED,          2, P.NONE),
    (0x78, "SEI", M.IMPLIED,          2, P.NONE),
    (0xB8, "CLV", M.IMPLIED,          2, P.NONE),
    (0xD8, "CLD", M.IMPLIED,          2, P.NONE),
    (0xF8, "SED", M.IMPLIED,          2, P.NONE),

    # -- System ---------------------------------------------------------
    (0x00, "BRK", M.IMPLIED,          7, P.NONE),
    (0x40, "RTI", M.IMPLIED,          6, P.NONE),
    (0xEA, "NOP", M.IMPLIED,          2, P.NONE),
)
# fmt: on


def _build_opcode_table() -> Tuple[Optional[Opcode], ...]:
    """Construct the 256-entry opcode table from ``_ROWS``.

    Raises:
        ValueError: If an opcode byte is listed twice.
    """
    table: list[Optional[Opcode]] = [None] * 256
    for opcode, mnemonic, mode, cycles, penalty in _ROWS:
        if table[opcode] is not None:
            raise ValueError(f"Duplicate opcode ${opcode:02X}")
        handler = getattr(instructions, f"i_{mnemonic.lower()}")
        table[opcode] = Opcode(opcode, mnemonic, mode, cycles, penalty, handler)
    return tuple(table)


OPCODE_TABLE: Tuple[Optional[Opcode], ...] = _build_opcode_table()


def lookup(opcode: int) -> Optional[Opcode]:
    """Return the table entry for *opcode*, or ``None`` if it is not defined."""
    return OPCODE_TABLE[opcode & 0xFF]
