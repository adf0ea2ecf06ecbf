"""
Instruction handlers for the 6502.

Every handler has the signature ``handler(s, mem, ea)`` where *ea* is the
effective address produced by the addressing-mode resolver (``None`` for
implied and accumulator modes). Handlers mutate the state in place. Branch
handlers return ``True`` when the branch is taken; the step engine turns that
into cycle penalties. All other handlers return ``None``.

Decimal mode is not emulated: ADC and SBC always use binary arithmetic.
"""

from __future__ import annotations

from typing import Callable, Optional

from tiny6502.core.memory import Memory
from tiny6502.core.registers import CPUState
from tiny6502.core.types import Flag

IRQ_VEC: int = 0xFFFE

Handler = Callable[[CPUState, Memory, Optional[int]], Optional[bool]]


# ----------------------------------------------------------------------
# Stack operations
# ----------------------------------------------------------------------

def push(s: CPUState, mem: Memory, data: int) -> None:
    """Write at $0100+SP, then decrement SP (wrapping within page one)."""
    mem[0x100 | s.sp] = data
    s.sp = (s.sp - 1) & 0xFF


def pull(s: CPUState, mem: Memory) -> int:
    """Increment SP (wrapping within page one), then read at $0100+SP."""
    s.sp = (s.sp + 1) & 0xFF
    return mem[0x100 | s.sp]


def push_word(s: CPUState, mem: Memory, value: int) -> None:
    push(s, mem, (value >> 8) & 0xFF)
    push(s, mem, value & 0xFF)


def pull_word(s: CPUState, mem: Memory) -> int:
    lo = pull(s, mem)
    hi = pull(s, mem)
    return lo | (hi << 8)


# ----------------------------------------------------------------------
# Arithmetic
# ----------------------------------------------------------------------

def _add(s: CPUState, val: int) -> None:
    c = 1 if s.fC else 0
    total = s.a + val + c
    s.fV = bool(~(s.a ^ val) & (s.a ^ total) & 0x80)
    s.fC = total > 0xFF
    s.a = s.set_fnz(total)


def i_adc(s, mem, ea):
    _add(s, mem[ea])


def i_sbc(s, mem, ea):
    # A - M - !C == A + ~M + C
    _add(s, ~mem[ea] & 0xFF)


# ----------------------------------------------------------------------
# Logic
# ----------------------------------------------------------------------

def i_and(s, mem, ea):
    s.a = s.set_fnz(s.a & mem[ea])


def i_ora(s, mem, ea):
    s.a = s.set_fnz(s.a | mem[ea])


def i_eor(s, mem, ea):
    s.a = s.set_fnz(s.a ^ mem[ea])


def i_bit(s, mem, ea):
    val = mem[ea]
    s.fN = bool(val & 0x80)
    s.fV = bool(val & 0x40)
    s.fZ = (s.a & val) == 0


# ----------------------------------------------------------------------
# Shifts / rotates (accumulator when ea is None, otherwise memory)
# ----------------------------------------------------------------------

def _modify(s: CPUState, mem: Memory, ea: Optional[int], op: Callable[[int], int]) -> None:
    if ea is None:
        s.a = op(s.a)
    else:
        mem[ea] = op(mem[ea])


def i_asl(s, mem, ea):
    def op(val: int) -> int:
        s.fC = bool(val & 0x80)
        return s.set_fnz(val << 1)
    _modify(s, mem, ea, op)


def i_lsr(s, mem, ea):
    def op(val: int) -> int:
        s.fC = bool(val & 0x01)
        return s.set_fnz((val >> 1) & 0x7F)
    _modify(s, mem, ea, op)


def i_rol(s, mem, ea):
    def op(val: int) -> int:
        c = 1 if s.fC else 0
        s.fC = bool(val & 0x80)
        return s.set_fnz((val << 1) | c)
    _modify(s, mem, ea, op)


def i_ror(s, mem, ea):
    def op(val: int) -> int:
        c = 0x80 if s.fC else 0
        s.fC = bool(val & 0x01)
        return s.set_fnz(((val >> 1) & 0x7F) | c)
    _modify(s, mem, ea, op)


# ----------------------------------------------------------------------
# Compare
# ----------------------------------------------------------------------

def _compare(s: CPUState, reg: int, val: int) -> None:
    s.fC = reg >= val
    s.set_fnz(reg - val)


def i_cmp(s, mem, ea):
    _compare(s, s.a, mem[ea])


def i_cpx(s, mem, ea):
    _compare(s, s.x, mem[ea])


def i_cpy(s, mem, ea):
    _compare(s, s.y, mem[ea])


# ----------------------------------------------------------------------
# Increment / decrement
# ----------------------------------------------------------------------

def i_inc(s, mem, ea):
    mem[ea] = s.set_fnz(mem[ea] + 1)


def i_dec(s, mem, ea):
    mem[ea] = s.set_fnz(mem[ea] - 1)


def i_inx(s, mem, ea):
    s.x = s.set_fnz(s.x + 1)


def i_iny(s, mem, ea):
    s.y = s.set_fnz(s.y + 1)


def i_dex(s, mem, ea):
    s.x = s.set_fnz(s.x - 1)


def i_dey(s, mem, ea):
    s.y = s.set_fnz(s.y - 1)


# ----------------------------------------------------------------------
# Load / store
# ----------------------------------------------------------------------

def i_lda(s, mem, ea):
    s.a = s.set_fnz(mem[ea])


def i_ldx(s, mem, ea):
    s.x = s.set_fnz(mem[ea])


def i_ldy(s, mem, ea):
    s.y = s.set_fnz(mem[ea])


def i_sta(s, mem, ea):
    mem[ea] = s.a


def i_stx(s, mem, ea):
    mem[ea] = s.x


def i_sty(s, mem, ea):
    mem[ea] = s.y


# ----------------------------------------------------------------------
# Transfer
# ----------------------------------------------------------------------

def i_tax(s, mem, ea):
    s.x = s.set_fnz(s.a)


def i_tay(s, mem, ea):
    s.y = s.set_fnz(s.a)


def i_txa(s, mem, ea):
    s.a = s.set_fnz(s.x)


def i_tya(s, mem, ea):
    s.a = s.set_fnz(s.y)


def i_tsx(s, mem, ea):
    s.x = s.set_fnz(s.sp)


def i_txs(s, mem, ea):
    s.sp = s.x  # No flags affected


# ----------------------------------------------------------------------
# Stack instructions
# ----------------------------------------------------------------------

def i_pha(s, mem, ea):
    push(s, mem, s.a)


def i_php(s, mem, ea):
    push(s, mem, s.p | Flag.B | Flag.U)  # B and bit-5 always set when pushed


def i_pla(s, mem, ea):
    s.a = s.set_fnz(pull(s, mem))


def i_plp(s, mem, ea):
    s.p = pull(s, mem) & ~Flag.B


# ----------------------------------------------------------------------
# Flag set / clear
# ----------------------------------------------------------------------

def _flag_op(mask: Flag, value: bool) -> Handler:
    def handler(s, mem, ea):
        if value:
            s.p = s.p | mask
        else:
            s.p = s.p & ~mask
    handler.__name__ = f"{'se' if value else 'cl'}_{mask.name.lower()}"
    return handler


i_clc = _flag_op(Flag.C, False)
i_sec = _flag_op(Flag.C, True)
i_cli = _flag_op(Flag.I, False)
i_sei = _flag_op(Flag.I, True)
i_cld = _flag_op(Flag.D, False)
i_sed = _flag_op(Flag.D, True)
i_clv = _flag_op(Flag.V, False)


# ----------------------------------------------------------------------
# Branches
# ----------------------------------------------------------------------

def _branch(mask: Flag, when_set: bool) -> Handler:
    def handler(s, mem, ea):
        if bool(s.p & mask) == when_set:
            s.pc = ea
            return True
        return False
    handler.__name__ = f"b{'s' if when_set else 'c'}_{mask.name.lower()}"
    return handler


i_bpl = _branch(Flag.N, False)
i_bmi = _branch(Flag.N, True)
i_bvc = _branch(Flag.V, False)
i_bvs = _branch(Flag.V, True)
i_bcc = _branch(Flag.C, False)
i_bcs = _branch(Flag.C, True)
i_bne = _branch(Flag.Z, False)
i_beq = _branch(Flag.Z, True)


# ----------------------------------------------------------------------
# Jump / subroutine / return
# ----------------------------------------------------------------------

def i_jmp(s, mem, ea):
    s.pc = ea


def i_jsr(s, mem, ea):
    # Push the address of the last operand byte; RTS adds one.
    push_word(s, mem, (s.pc - 1) & 0xFFFF)
    s.pc = ea


def i_rts(s, mem, ea):
    s.pc = (pull_word(s, mem) + 1) & 0xFFFF


def i_rti(s, mem, ea):
    s.p = pull(s, mem) & ~Flag.B
    s.pc = pull_word(s, mem)


def i_brk(s, mem, ea):
    """BRK -- software interrupt through the IRQ vector."""
    s.pc = (s.pc + 1) & 0xFFFF  # skip padding byte
    push_word(s, mem, s.pc)
    push(s, mem, s.p | Flag.B | Flag.U)
    s.fI = True
    s.pc = mem.read_word(IRQ_VEC)


def i_nop(s, mem, ea):
    pass
