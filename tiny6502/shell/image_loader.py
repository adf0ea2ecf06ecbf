"""
Raw program-image loading for tiny6502.

Images are flat binaries with no header: the bytes are copied verbatim into
CPU memory at a caller-chosen load address.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from tiny6502.core.m6502 import M6502
from tiny6502.core.memory import Memory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageInfo:
    """Where an image ended up after loading."""

    path: str
    load_address: int
    size: int
    end_address: int


def read_image(path: str) -> bytes:
    """Read a raw image from *path*.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is empty or larger than the address space.
    """
    with open(path, "rb") as fh:
        data = fh.read()

    if not data:
        raise ValueError(f"Image is empty: {path}")
    if len(data) > Memory.SIZE:
        raise ValueError(
            f"Image too large: {len(data)} bytes exceeds {Memory.SIZE}"
        )
    return data


def _info(path: str, load_address: int, size: int) -> ImageInfo:
    load_address &= 0xFFFF
    return ImageInfo(
        path=path,
        load_address=load_address,
        size=size,
        end_address=(load_address + size - 1) & 0xFFFF,
    )


def load_image(cpu: M6502, path: str, load_address: int) -> ImageInfo:
    """Copy the image at *path* into *cpu* memory starting at *load_address*."""
    data = read_image(path)
    cpu.load(load_address, data)
    info = _info(path, load_address, len(data))
    logger.info(
        "Loaded %s: %d bytes at $%04X-$%04X",
        os.path.basename(path), info.size, info.load_address, info.end_address,
    )
    return info


def describe(path: str, load_address: int = 0) -> dict[str, str]:
    """Return a human-readable description of an image file.

    Returns a dict with keys: ``name``, ``size``, ``load_address``,
    ``end_address``, ``reset_vector``. ``reset_vector`` is the word the image
    would place at $FFFC, or ``"-"`` when the image does not cover it.
    """
    data = read_image(path)
    info = _info(path, load_address, len(data))

    mem = Memory()
    mem.load(info.load_address, data)
    covers = all(
        ((vec - info.load_address) & 0xFFFF) < info.size
        for vec in (0xFFFC, 0xFFFD)
    )

    return {
        "name": os.path.basename(path),
        "size": str(info.size),
        "load_address": f"${info.load_address:04X}",
        "end_address": f"${info.end_address:04X}",
        "reset_vector": f"${mem.read_word(0xFFFC):04X}" if covers else "-",
    }
