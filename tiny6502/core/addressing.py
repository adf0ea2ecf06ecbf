"""
Addressing-mode resolver.

Each ``a_*`` function reads the operand bytes at ``s.pc``, advances ``s.pc``
past them and returns ``(effective_address, page_crossed)``.

* Immediate mode returns the address of the literal byte itself, so every
  handler can read its operand with ``mem[ea]``.
* Implied and accumulator modes consume nothing and return ``None``.
* Relative mode returns the branch target; ``page_crossed`` compares it with
  the address of the following instruction.
* Only absolute-indexed, indirect-indexed and relative modes ever report a
  page crossing; zero-page indexing wraps inside page zero.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from tiny6502.core.memory import Memory
from tiny6502.core.registers import CPUState
from tiny6502.core.types import AddressingMode

Resolved = Tuple[Optional[int], bool]


def _fetch(s: CPUState, mem: Memory) -> int:
    val = mem[s.pc]
    s.pc = (s.pc + 1) & 0xFFFF
    return val


def _fetch_word(s: CPUState, mem: Memory) -> int:
    lsb = _fetch(s, mem)
    msb = _fetch(s, mem)
    return lsb | (msb << 8)


def _crossed(base: int, ea: int) -> bool:
    return (base & 0xFF00) != (ea & 0xFF00)


def a_imp(s: CPUState, mem: Memory) -> Resolved:
    """Implied / accumulator -- no operand."""
    return None, False


def a_imm(s: CPUState, mem: Memory) -> Resolved:
    ea = s.pc
    s.pc = (s.pc + 1) & 0xFFFF
    return ea, False


def a_zpg(s: CPUState, mem: Memory) -> Resolved:
    return _fetch(s, mem), False


def a_zpx(s: CPUState, mem: Memory) -> Resolved:
    return (_fetch(s, mem) + s.x) & 0xFF, False


def a_zpy(s: CPUState, mem: Memory) -> Resolved:
    return (_fetch(s, mem) + s.y) & 0xFF, False


def a_abs(s: CPUState, mem: Memory) -> Resolved:
    return _fetch_word(s, mem), False


def a_abx(s: CPUState, mem: Memory) -> Resolved:
    base = _fetch_word(s, mem)
    ea = (base + s.x) & 0xFFFF
    return ea, _crossed(base, ea)


def a_aby(s: CPUState, mem: Memory) -> Resolved:
    base = _fetch_word(s, mem)
    ea = (base + s.y) & 0xFFFF
    return ea, _crossed(base, ea)


def a_idx(s: CPUState, mem: Memory) -> Resolved:
    """Indexed indirect ($zp,X); the pointer fetch wraps in page zero."""
    zpa = (_fetch(s, mem) + s.x) & 0xFF
    return mem[zpa] | (mem[(zpa + 1) & 0xFF] << 8), False


def a_idy(s: CPUState, mem: Memory) -> Resolved:
    """Indirect indexed ($zp),Y."""
    zpa = _fetch(s, mem)
    base = mem[zpa] | (mem[(zpa + 1) & 0xFF] << 8)
    ea = (base + s.y) & 0xFFFF
    return ea, _crossed(base, ea)


def a_ind(s: CPUState, mem: Memory) -> Resolved:
    """Indirect -- used only by JMP ($nnnn).

    Reproduces the NMOS page-boundary wrap bug: if the low byte of the
    pointer is $FF the high byte is fetched from $xx00 of the same page.
    """
    ptr = _fetch_word(s, mem)
    lsb = mem[ptr]
    msb = mem[(ptr & 0xFF00) | ((ptr + 1) & 0xFF)]
    return lsb | (msb << 8), False


def a_rel(s: CPUState, mem: Memory) -> Resolved:
    """Relative -- returns the branch target address."""
    bo = _fetch(s, mem)
    if bo & 0x80:
        bo -= 256  # sign-extend
    ea = (s.pc + bo) & 0xFFFF
    return ea, _crossed(s.pc, ea)


RESOLVERS: Dict[AddressingMode, Callable[[CPUState, Memory], Resolved]] = {
    AddressingMode.IMPLIED: a_imp,
    AddressingMode.ACCUMULATOR: a_imp,
    AddressingMode.IMMEDIATE: a_imm,
    AddressingMode.ZERO_PAGE: a_zpg,
    AddressingMode.ZERO_PAGE_X: a_zpx,
    AddressingMode.ZERO_PAGE_Y: a_zpy,
    AddressingMode.RELATIVE: a_rel,
    AddressingMode.ABSOLUTE: a_abs,
    AddressingMode.ABSOLUTE_X: a_abx,
    AddressingMode.ABSOLUTE_Y: a_aby,
    AddressingMode.INDIRECT: a_ind,
    AddressingMode.INDEXED_INDIRECT: a_idx,
    AddressingMode.INDIRECT_INDEXED: a_idy,
}


def resolve(mode: AddressingMode, s: CPUState, mem: Memory) -> Resolved:
    """Resolve *mode* at ``s.pc``; see the module docstring for the contract."""
    return RESOLVERS[mode](s, mem)
