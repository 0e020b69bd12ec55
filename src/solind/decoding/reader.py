"""Cursor reader over a byte buffer.

A `Reader` keeps a zero-copy `memoryview` of the payload and an offset that
only moves forward. Every read is atomic: it either consumes exactly the
requested bytes or raises `OutOfBoundsError` and leaves the offset untouched.

>>> r = create_reader(bytes([1, 2, 3]))
>>> bytes(r.read_bytes(2))
b'\\x01\\x02'
>>> r.offset, r.remaining
(2, 1)
"""

from __future__ import annotations

import struct
from typing import Any

from solind.core.exceptions import OutOfBoundsError

Buffer = bytes | bytearray | memoryview


class Reader:
    """Sequential little-endian reader with offset tracking."""

    __slots__ = ("_view", "_offset")

    def __init__(self, data: Buffer) -> None:
        self._view = memoryview(data)
        self._offset = 0

    def __repr__(self) -> str:
        return f"Reader(offset={self._offset}, size={self.size})"

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def size(self) -> int:
        return len(self._view)

    @property
    def remaining(self) -> int:
        return len(self._view) - self._offset

    def is_empty(self) -> bool:
        return self._offset >= len(self._view)

    def _check(self, n: int) -> None:
        if n < 0:
            raise ValueError("length cannot be negative")
        if self._offset + n > len(self._view):
            raise OutOfBoundsError(offset=self._offset, requested=n, size=len(self._view))

    def peek_bytes(self, n: int) -> memoryview:
        """Return the next `n` bytes without consuming them."""
        self._check(n)
        return self._view[self._offset : self._offset + n]

    def read_bytes(self, n: int) -> memoryview:
        """Consume and return the next `n` bytes."""
        data = self.peek_bytes(n)
        self._offset += n
        return data

    def peek_struct(self, fmt: str) -> tuple[Any, ...]:
        size = struct.calcsize(fmt)
        return struct.unpack(fmt, self.peek_bytes(size))

    def read_struct(self, fmt: str) -> tuple[Any, ...]:
        size = struct.calcsize(fmt)
        return struct.unpack(fmt, self.read_bytes(size))

    def read_all(self) -> memoryview:
        """Consume everything left in the buffer."""
        data = self._view[self._offset :]
        self._offset = len(self._view)
        return data


def create_reader(data: Buffer) -> Reader:
    """Return a reader positioned at offset 0 of `data`."""
    return Reader(data)
