"""
Wire-format constants for rschema records.

Defines the struct formats and integer bounds shared by the primitive codec,
the value model, and the container serializers. This module is zero-IO and uses
only the Python standard library.

Notes:
    - All multi-byte primitives are little-endian.
    - Length prefixes (strings, byte blobs, sequences) are unsigned 64-bit.
    - Enum discriminants (ValueType, tagged Value) are unsigned 32-bit.
    - Changing any of these values breaks compatibility with previously encoded
      records.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "U32_FORMAT",
    "U64_FORMAT",
    "I64_FORMAT",
    "F64_FORMAT",
    "LENGTH_FORMAT",
    "I32_MIN",
    "I32_MAX",
    "U32_MAX",
    "I64_MIN",
    "I64_MAX",
    "U64_MAX",
]

U32_FORMAT: Final[str] = "<I"
U64_FORMAT: Final[str] = "<Q"
I64_FORMAT: Final[str] = "<q"
F64_FORMAT: Final[str] = "<d"

LENGTH_FORMAT: Final[str] = U64_FORMAT

I32_MIN: Final[int] = -(2**31)
I32_MAX: Final[int] = 2**31 - 1
U32_MAX: Final[int] = 2**32 - 1
I64_MIN: Final[int] = -(2**63)
I64_MAX: Final[int] = 2**63 - 1
U64_MAX: Final[int] = 2**64 - 1
