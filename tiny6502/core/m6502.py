"""
MOS 6502 step engine for tiny6502.

Implements the documented NMOS 6502 instruction set in binary mode with
exact cycle counts, including the processor quirks programs rely on:

* Indexed reads that cross a page cost one extra cycle; indexed stores and
  read-modify-write instructions always pay the worst case.
* Taken branches cost one extra cycle, two if the target is on another page.
* JMP ($xxFF) wraps within the page (the famous indirect-jump bug).
* JSR pushes the address of its *last* operand byte (PC-1), and RTS
  compensates by pulling and adding one.
* PHP and BRK push P with Break and bit 5 set; PLP and RTI clear Break.

:func:`step` works on an explicit :class:`CPUState` and :class:`Memory`.
:class:`M6502` bundles one of each with the accessors callers need. A step is
not re-entrant: callers must not run two steps on the same instance at once.
"""

from __future__ import annotations

from typing import Optional

from tiny6502.core.addressing import resolve
from tiny6502.core.disasm import disassemble
from tiny6502.core.errors import UnknownOpcode
from tiny6502.core.logger import ConsoleLogger, DEFAULT_LOGGER, ILogger, TRACE_LEVEL
from tiny6502.core.memory import Memory
from tiny6502.core.opcodes import OPCODE_TABLE
from tiny6502.core.registers import CPUState
from tiny6502.core.types import CyclePenalty


def format_trace(s: CPUState, mem: Memory, address: int) -> str:
    """Build the trace line for the instruction at *address*."""
    text, _ = disassemble(mem, address)
    return (
        f"{address:04X}: {text:<12} | "
        f"A:{s.a:02X} X:{s.x:02X} Y:{s.y:02X} SP:{s.sp:02X} "
        f"P:{s.p:02X} [{s.flags_string()}]"
    )


def step(
    s: CPUState,
    mem: Memory,
    trace: bool = False,
    logger: ILogger = DEFAULT_LOGGER,
) -> int:
    """Fetch, decode and execute one instruction; return the cycles it took.

    Raises:
        UnknownOpcode: If the fetched byte has no table entry. ``s.pc`` has
            then been advanced past the opcode byte and nothing else changed.
    """
    fetch_pc = s.pc

    if trace:
        logger.log(TRACE_LEVEL, format_trace(s, mem, fetch_pc))

    opcode = mem[fetch_pc]
    s.pc = (fetch_pc + 1) & 0xFFFF

    op = OPCODE_TABLE[opcode]
    if op is None:
        raise UnknownOpcode(opcode, fetch_pc)

    ea, crossed = resolve(op.mode, s, mem)
    taken = op.handler(s, mem, ea)

    cycles = op.cycles
    if op.penalty == CyclePenalty.PAGE_CROSS:
        if crossed:
            cycles += 1
    elif op.penalty == CyclePenalty.BRANCH:
        if taken:
            cycles += 2 if crossed else 1
    return cycles


class M6502:
    """NMOS 6502 CPU with its own 64 KB memory.

    Parameters
    ----------
    logger:
        Sink for trace lines produced by ``step(trace=True)``. Defaults to a
        :class:`ConsoleLogger` printing to stdout.
    memory:
        Optional pre-populated :class:`Memory`; a fresh zeroed one is created
        otherwise.
    """

    def __init__(self, logger: Optional[ILogger] = None, memory: Optional[Memory] = None) -> None:
        self.state: CPUState = CPUState()
        self.mem: Memory = memory if memory is not None else Memory()
        self.logger: ILogger = logger if logger is not None else ConsoleLogger()

        # Total cycles executed since construction or the last reset.
        self.cycles: int = 0

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def step(self, trace: bool = False) -> int:
        """Execute one instruction and return its cycle count."""
        cycles = step(self.state, self.mem, trace, self.logger)
        self.cycles += cycles
        return cycles

    def reset(self) -> None:
        """Restore the power-on register values. Memory is left untouched."""
        self.state.reset()
        self.cycles = 0

    # ------------------------------------------------------------------
    # Memory access
    # ------------------------------------------------------------------

    def read_byte(self, address: int) -> int:
        return self.mem.read_byte(address)

    def write_byte(self, address: int, value: int) -> None:
        self.mem.write_byte(address, value)

    def read_word(self, address: int) -> int:
        return self.mem.read_word(address)

    def write_word(self, address: int, value: int) -> None:
        self.mem.write_word(address, value)

    def load(self, address: int, data: bytes) -> None:
        self.mem.load(address, data)

    # ------------------------------------------------------------------
    # Registers
    # ------------------------------------------------------------------

    @property
    def a(self) -> int:
        return self.state.a

    @a.setter
    def a(self, value: int) -> None:
        self.state.a = value & 0xFF

    @property
    def x(self) -> int:
        return self.state.x

    @x.setter
    def x(self, value: int) -> None:
        self.state.x = value & 0xFF

    @property
    def y(self) -> int:
        return self.state.y

    @y.setter
    def y(self, value: int) -> None:
        self.state.y = value & 0xFF

    @property
    def sp(self) -> int:
        return self.state.sp

    @sp.setter
    def sp(self, value: int) -> None:
        self.state.sp = value & 0xFF

    @property
    def pc(self) -> int:
        return self.state.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self.state.pc = value & 0xFFFF

    @property
    def p(self) -> int:
        return self.state.p

    @p.setter
    def p(self, value: int) -> None:
        self.state.p = value

    def set_flag(self, mask: int) -> None:
        self.state.p = self.state.p | (mask & 0xFF)

    def clear_flag(self, mask: int) -> None:
        self.state.p = self.state.p & ~(mask & 0xFF)

    def is_flag_set(self, mask: int) -> bool:
        return bool(self.state.p & mask)

    # ------------------------------------------------------------------
    # Snapshot helpers
    # ------------------------------------------------------------------

    def get_snapshot(self) -> dict:
        """Return a serialisable snapshot of registers, cycles and memory."""
        snap = self.state.get_snapshot()
        snap["cycles"] = self.cycles
        snap["mem"] = self.mem.get_snapshot()
        return snap

    def restore_snapshot(self, snap: dict) -> None:
        """Restore CPU state from a previous snapshot."""
        self.mem.restore_snapshot(snap["mem"])
        self.state.restore_snapshot(snap)
        self.cycles = snap.get("cycles", 0)

    def __repr__(self) -> str:
        return (
            f"M6502(PC=${self.pc:04X} A=${self.a:02X} "
            f"X=${self.x:02X} Y=${self.y:02X} "
            f"SP=${self.sp:02X} P=${self.p:02X} "
            f"clk={self.cycles})"
        )
