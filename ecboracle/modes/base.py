"""
Common contract of the block modes.

A mode wraps a one-block primitive (see ecboracle.block) and transforms
whole blocks with crypt_blocks(dst, src). dst and src may be the same
buffer (in-place), but must not partially overlap.
"""

import abc

import numpy as np

from ..errors import BufferTooSmall, InvalidInputLength, InvalidOverlap


def _span(buf):
    """Start and end address of a contiguous byte buffer."""
    arr = np.frombuffer(buf, dtype=np.uint8)
    start = arr.__array_interface__["data"][0]
    return start, start + arr.nbytes


def any_overlap(x, y) -> bool:
    if len(x) == 0 or len(y) == 0:
        return False
    x0, x1 = _span(x)
    y0, y1 = _span(y)
    return x0 < y1 and y0 < x1


def inexact_overlap(x, y) -> bool:
    """True if x and y share memory but do not start at the same byte."""
    if not any_overlap(x, y):
        return False
    return _span(x)[0] != _span(y)[0]


class BlockMode(abc.ABC):
    """Encrypter or decrypter for one block mode."""

    name = None

    def __init__(self, block):
        self._b = block

    @property
    def block_size(self) -> int:
        return self._b.block_size

    def crypt_blocks(self, dst, src) -> None:
        """
        Transform src into dst, block by block.

        Args:
            dst: writable buffer (bytearray or memoryview), len(dst) >= len(src)
            src: bytes-like, a whole number of blocks

        Raises:
            InvalidInputLength, BufferTooSmall, InvalidOverlap
        """
        bs = self.block_size
        src = memoryview(src).cast("B")
        dst = memoryview(dst).cast("B")

        if len(src) % bs != 0:
            raise InvalidInputLength(f"{self.name}: input not full blocks ({len(src)} % {bs} != 0)")
        if len(dst) < len(src):
            raise BufferTooSmall(f"{self.name}: output smaller than input ({len(dst)} < {len(src)})")
        dst = dst[:len(src)]
        if inexact_overlap(dst, src):
            raise InvalidOverlap(f"{self.name}: invalid buffer overlap")
        if len(src) == 0:
            return
        if dst.readonly:
            raise TypeError(f"{self.name}: output buffer is read-only")

        self._crypt(dst, src)

    @abc.abstractmethod
    def _crypt(self, dst: memoryview, src: memoryview) -> None:
        """Process len(src) bytes; arguments are already validated."""


def crypt(mode: BlockMode, data) -> bytes:
    """Run mode over a copy of data and return the result."""
    buf = bytearray(data)
    mode.crypt_blocks(buf, buf)
    return bytes(buf)
