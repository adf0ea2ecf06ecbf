"""tiny6502 -- a MOS 6502 instruction execution core."""

from tiny6502.core.errors import CPUError, UnknownOpcode
from tiny6502.core.m6502 import M6502
from tiny6502.core.types import Flag

__version__ = "1.0.0"

__all__ = ["M6502", "Flag", "CPUError", "UnknownOpcode", "__version__"]
