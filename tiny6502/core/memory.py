"""
Flat 64 KB memory bus for tiny6502.

Every address is taken modulo 65536 and every stored value modulo 256, so
address arithmetic that runs off either end of the space simply wraps.
Locations that were never written read as zero.
"""

from __future__ import annotations

import numpy as np


class Memory:
    """65536-byte address space backed by a pre-zeroed ``numpy.uint8`` array.

    Single-byte access goes through ``mem[addr]`` / ``mem[addr] = value``;
    the named ``read_*`` / ``write_*`` methods are the public accessors
    exposed to callers of the CPU.
    """

    SIZE: int = 0x10000

    def __init__(self) -> None:
        self._data: np.ndarray = np.zeros(self.SIZE, dtype=np.uint8)

    def reset(self) -> None:
        """Clear the whole address space to zeros."""
        self._data.fill(0)

    def __getitem__(self, addr: int) -> int:
        return int(self._data[addr & 0xFFFF])

    def __setitem__(self, addr: int, value: int) -> None:
        self._data[addr & 0xFFFF] = int(value) & 0xFF

    def __len__(self) -> int:
        return self.SIZE

    # ------------------------------------------------------------------
    # Byte / word accessors
    # ------------------------------------------------------------------

    def read_byte(self, address: int) -> int:
        return self[address]

    def write_byte(self, address: int, value: int) -> None:
        self[address] = value

    def read_word(self, address: int) -> int:
        """Little-endian 16-bit read; each byte address wraps independently."""
        return self[address] | (self[address + 1] << 8)

    def write_word(self, address: int, value: int) -> None:
        """Little-endian 16-bit write; a word at $FFFF spills into $0000."""
        self[address] = value & 0xFF
        self[address + 1] = (value >> 8) & 0xFF

    def load(self, address: int, data: bytes) -> None:
        """Copy *data* into memory starting at *address*, wrapping at $FFFF.

        Raises:
            ValueError: If *data* is larger than the address space.
        """
        if len(data) > self.SIZE:
            raise ValueError(
                f"Image too large: {len(data)} bytes exceeds {self.SIZE}"
            )
        raw = np.frombuffer(bytes(data), dtype=np.uint8)
        start = address & 0xFFFF
        first = min(len(raw), self.SIZE - start)
        self._data[start:start + first] = raw[:first]
        if first < len(raw):
            self._data[:len(raw) - first] = raw[first:]

    # ------------------------------------------------------------------
    # Serialisation helpers (for save-state support)
    # ------------------------------------------------------------------

    def get_snapshot(self) -> bytes:
        """Return an immutable copy of the memory contents."""
        return self._data.tobytes()

    def restore_snapshot(self, data: bytes) -> None:
        """Restore memory contents from a previous snapshot.

        Raises:
            ValueError: If *data* is not exactly SIZE bytes long.
        """
        if len(data) != self.SIZE:
            raise ValueError(
                f"Snapshot size mismatch: expected {self.SIZE}, got {len(data)}"
            )
        self._data[:] = np.frombuffer(bytes(data), dtype=np.uint8)

    def __repr__(self) -> str:
        return f"Memory(size={self.SIZE})"
