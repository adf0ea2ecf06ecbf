"""
Single-instruction disassembler.

Shares the opcode table with the step engine, so anything the CPU can
execute can also be listed, and anything it cannot is shown as a data byte.
"""

from __future__ import annotations

from typing import Iterator, Tuple

from tiny6502.core.memory import Memory
from tiny6502.core.opcodes import lookup
from tiny6502.core.types import AddressingMode

M = AddressingMode

_FORMATS = {
    M.IMPLIED: "",
    M.ACCUMULATOR: " A",
    M.IMMEDIATE: " #${:02X}",
    M.ZERO_PAGE: " ${:02X}",
    M.ZERO_PAGE_X: " ${:02X},X",
    M.ZERO_PAGE_Y: " ${:02X},Y",
    M.ABSOLUTE: " ${:04X}",
    M.ABSOLUTE_X: " ${:04X},X",
    M.ABSOLUTE_Y: " ${:04X},Y",
    M.INDIRECT: " (${:04X})",
    M.INDEXED_INDIRECT: " (${:02X},X)",
    M.INDIRECT_INDEXED: " (${:02X}),Y",
    M.RELATIVE: " ${:04X}",
}


def disassemble(mem: Memory, address: int) -> Tuple[str, int]:
    """Disassemble the instruction at *address*.

    Returns:
        ``(text, length)`` where *length* counts the opcode byte. Undefined
        opcodes render as ``.byte $NN`` with length 1.
    """
    address &= 0xFFFF
    opcode = mem[address]
    entry = lookup(opcode)
    if entry is None:
        return f".byte ${opcode:02X}", 1

    size = AddressingMode.operand_bytes(entry.mode)
    if size == 2:
        operand = mem.read_word(address + 1)
    elif size == 1:
        operand = mem[address + 1]
    else:
        operand = 0

    if entry.mode == M.RELATIVE:
        offset = operand - 256 if operand & 0x80 else operand
        operand = (address + 2 + offset) & 0xFFFF

    return entry.mnemonic + _FORMATS[entry.mode].format(operand), size + 1


def disassemble_range(mem: Memory, start: int, count: int) -> Iterator[Tuple[int, str, int]]:
    """Yield ``(address, text, length)`` for *count* consecutive instructions."""
    address = start & 0xFFFF
    for _ in range(count):
        text, length = disassemble(mem, address)
        yield address, text, length
        address = (address + length) & 0xFFFF
