"""
Primitive byte codec shared by field blobs and container encodings.

Layout (little-endian, unpadded)
--------------------------------
- u32: 4 bytes (enum discriminants)
- u64 / i64: 8 bytes, two's complement for i64
- f64: 8 bytes IEEE-754
- bool: 1 byte, 0 or 1
- bytes: u64 length prefix, then the raw bytes
- str: u64 length prefix, then UTF-8 bytes

Notes:
    - WireWriter never fails on well-typed input; integers outside the target
      width raise OverflowError (programmer error).
    - WireReader raises DecodeError on any malformed input, including trailing
      bytes detected by finish().
"""

from __future__ import annotations

import struct

from .constants import (
    F64_FORMAT,
    I64_FORMAT,
    I64_MAX,
    I64_MIN,
    LENGTH_FORMAT,
    U32_FORMAT,
    U32_MAX,
    U64_FORMAT,
    U64_MAX,
)
from .errors import DecodeError

__all__ = [
    "WireWriter",
    "WireReader",
]

_U32 = struct.Struct(U32_FORMAT)
_U64 = struct.Struct(U64_FORMAT)
_I64 = struct.Struct(I64_FORMAT)
_F64 = struct.Struct(F64_FORMAT)
_LEN = struct.Struct(LENGTH_FORMAT)


class WireWriter:
    """Append-only encoder; ``getvalue()`` returns the accumulated bytes."""

    __slots__ = ("_buf",)

    def __init__(self) -> None:
        self._buf = bytearray()

    def write_u32(self, value: int) -> WireWriter:
        if not 0 <= value <= U32_MAX:
            raise OverflowError(f"u32 out of range: {value}")
        self._buf += _U32.pack(value)
        return self

    def write_u64(self, value: int) -> WireWriter:
        if not 0 <= value <= U64_MAX:
            raise OverflowError(f"u64 out of range: {value}")
        self._buf += _U64.pack(value)
        return self

    def write_i64(self, value: int) -> WireWriter:
        if not I64_MIN <= value <= I64_MAX:
            raise OverflowError(f"i64 out of range: {value}")
        self._buf += _I64.pack(value)
        return self

    def write_f64(self, value: float) -> WireWriter:
        self._buf += _F64.pack(value)
        return self

    def write_bool(self, value: bool) -> WireWriter:
        self._buf.append(1 if value else 0)
        return self

    def write_bytes(self, value: bytes) -> WireWriter:
        self._buf += _LEN.pack(len(value))
        self._buf += value
        return self

    def write_str(self, value: str) -> WireWriter:
        return self.write_bytes(value.encode("utf-8"))

    def write_raw(self, value: bytes) -> WireWriter:
        """Append already-encoded bytes without a length prefix."""
        self._buf += value
        return self

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class WireReader:
    """
    Cursor over an encoded buffer.

    Args:
        data (bytes): Encoded input. Any bytes-like object is accepted.

    Raises:
        DecodeError: From every ``read_*`` method when the input is truncated or
            malformed, and from ``finish()`` when unread bytes remain.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(bytes(data))
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, n: int) -> memoryview:
        if n > self.remaining:
            raise DecodeError(
                f"unexpected end of input: need {n} bytes at offset {self._pos}, "
                f"have {self.remaining}"
            )
        chunk = self._data[self._pos : self._pos + n]
        self._pos += n
        return chunk

    def read_u32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]

    def read_u64(self) -> int:
        return _U64.unpack(self._take(_U64.size))[0]

    def read_i64(self) -> int:
        return _I64.unpack(self._take(_I64.size))[0]

    def read_f64(self) -> float:
        return _F64.unpack(self._take(_F64.size))[0]

    def read_bool(self) -> bool:
        byte = self._take(1)[0]
        if byte > 1:
            raise DecodeError(f"invalid bool byte: {byte:#04x}")
        return byte == 1

    def read_bytes(self) -> bytes:
        length = _LEN.unpack(self._take(_LEN.size))[0]
        return bytes(self._take(length))

    def read_str(self) -> str:
        raw = self.read_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid utf-8 in string: {exc}") from exc

    def finish(self) -> None:
        if self.remaining:
            raise DecodeError(f"{self.remaining} trailing bytes after value")
