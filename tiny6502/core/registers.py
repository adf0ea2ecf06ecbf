"""
Register file and status flags of the 6502.

:class:`CPUState` is the single mutable record the step engine operates on.
One instance belongs to one emulated processor; nothing in the core keeps a
module-level copy.
"""

from __future__ import annotations

from tiny6502.core.types import Flag


def _flag_property(mask: int, doc: str) -> property:
    def getter(self) -> bool:
        return bool(self._p & mask)

    def setter(self, value: bool) -> None:
        if value:
            self.p = self._p | mask
        else:
            self.p = self._p & ~mask

    return property(getter, setter, doc=doc)


class CPUState:
    """Accumulator, index registers, stack pointer, program counter and P.

    ``p`` always reads with the Unused bit (0x20) set: the setter forces it,
    so neither PLP/RTI nor a caller writing the register can clear it.
    """

    # Power-on values
    SP_INIT: int = 0xFD
    P_INIT: int = Flag.I | Flag.U  # 0x24

    def __init__(self) -> None:
        self.a: int = 0x00      # 8-bit accumulator
        self.x: int = 0x00      # 8-bit index register X
        self.y: int = 0x00      # 8-bit index register Y
        self.sp: int = self.SP_INIT
        self.pc: int = 0x0000   # 16-bit program counter
        self._p: int = int(self.P_INIT)

    @property
    def p(self) -> int:
        return self._p

    @p.setter
    def p(self, value: int) -> None:
        self._p = int(value | Flag.U) & 0xFF

    fC = _flag_property(Flag.C, "Carry")
    fZ = _flag_property(Flag.Z, "Zero")
    fI = _flag_property(Flag.I, "Interrupt disable")
    fD = _flag_property(Flag.D, "Decimal")
    fB = _flag_property(Flag.B, "Break")
    fV = _flag_property(Flag.V, "Overflow")
    fN = _flag_property(Flag.N, "Negative")

    def set_fnz(self, val: int) -> int:
        """Set the N and Z flags from an 8-bit value and return the value."""
        val &= 0xFF
        self.p = (self._p & ~(Flag.N | Flag.Z)) | (val & Flag.N) | (Flag.Z if val == 0 else 0)
        return val

    def reset(self) -> None:
        """Restore the power-on register values."""
        self.a = self.x = self.y = 0
        self.sp = self.SP_INIT
        self.pc = 0
        self.p = self.P_INIT

    def flags_string(self) -> str:
        """Render P as ``NV-BDIZC`` with upper case for set bits."""
        return "".join(
            ch.upper() if self._p & mask else ch
            for ch, mask in (
                ("n", Flag.N), ("v", Flag.V), ("-", 0), ("b", Flag.B),
                ("d", Flag.D), ("i", Flag.I), ("z", Flag.Z), ("c", Flag.C),
            )
        )

    # ------------------------------------------------------------------
    # Snapshot helpers
    # ------------------------------------------------------------------

    def get_snapshot(self) -> dict:
        """Return a serialisable snapshot of the registers."""
        return {
            "a": self.a, "x": self.x, "y": self.y,
            "sp": self.sp, "pc": self.pc, "p": self.p,
        }

    def restore_snapshot(self, snap: dict) -> None:
        """Restore registers from a previous snapshot."""
        self.a = snap["a"] & 0xFF
        self.x = snap["x"] & 0xFF
        self.y = snap["y"] & 0xFF
        self.sp = snap["sp"] & 0xFF
        self.pc = snap["pc"] & 0xFFFF
        self.p = snap["p"]

    def __repr__(self) -> str:
        return (
            f"CPUState(PC=${self.pc:04X} A=${self.a:02X} "
            f"X=${self.x:02X} Y=${self.y:02X} "
            f"SP=${self.sp:02X} P=${self.p:02X})"
        )
