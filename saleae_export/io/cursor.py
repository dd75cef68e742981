# saleae_export/io/cursor.py
"""
Sequential little-endian access to an in-memory buffer.

ByteCursor reads scalars with `struct` and arrays with numpy.frombuffer,
checking the remaining length before every read so a short buffer raises
TruncatedData instead of reading out of bounds. ByteWriter is the mirror
image, appending to a bytearray.
"""
from __future__ import annotations

import struct

import numpy as np

from saleae_export.core.exceptions import TruncatedData


U32 = struct.Struct("<I")
U64 = struct.Struct("<Q")
F64 = struct.Struct("<d")


class ByteCursor:
    def __init__(self, data: bytes | bytearray | memoryview, offset: int = 0):
        view = memoryview(data)
        if not view.c_contiguous:
            view = memoryview(bytes(view))
        self._buf = view.cast("B")
        self._pos = offset

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._pos

    def peek(self, size: int) -> bytes:
        """Up to `size` bytes from the current position, without advancing."""
        return bytes(self._buf[self._pos:self._pos + size])

    def _take(self, size: int, what: str) -> memoryview:
        if size > self.remaining:
            raise TruncatedData(what, self._pos, size, self.remaining)
        chunk = self._buf[self._pos:self._pos + size]
        self._pos += size
        return chunk

    def read_bytes(self, size: int, what: str = "bytes") -> bytes:
        return bytes(self._take(size, what))

    def _unpack(self, fmt: struct.Struct, what: str):
        return fmt.unpack(self._take(fmt.size, what))[0]

    def read_u32(self, what: str = "u32") -> int:
        return self._unpack(U32, what)

    def read_u64(self, what: str = "u64") -> int:
        return self._unpack(U64, what)

    def read_f64(self, what: str = "f64") -> float:
        return self._unpack(F64, what)

    def read_array(self, dtype: str, count: int, what: str = "array") -> np.ndarray:
        """Read `count` items of a little-endian dtype ('<f8', '<f4', ...) into an owned array."""
        dt = np.dtype(dtype)
        # Python ints: a huge declared count cannot overflow here.
        chunk = self._take(count * dt.itemsize, what)
        if count == 0:
            return np.empty(0, dtype=dt.newbyteorder("="))
        return np.frombuffer(chunk, dtype=dt).astype(dt.newbyteorder("="))


class ByteWriter:
    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def write_bytes(self, data: bytes) -> None:
        self._buf += data

    def write_u32(self, value: int) -> None:
        self._buf += U32.pack(value)

    def write_u64(self, value: int) -> None:
        self._buf += U64.pack(value)

    def write_f64(self, value: float) -> None:
        self._buf += F64.pack(value)

    def write_array(self, values: np.ndarray, dtype: str) -> None:
        self._buf += np.ascontiguousarray(values, dtype=np.dtype(dtype)).tobytes()
