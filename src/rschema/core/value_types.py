"""
Type tags for the closed Value union.

Defines ValueType, the enumeration of declared field and key types, plus the
normalization helpers used by builders and the wire codec.

Naming
------
- Enum class: PascalCase
- Enum member names: UPPER_SNAKE
- Enum serialized values (JSON forms, builder spellings): lower_snake
- Wire discriminants: declaration order, starting at 0

Examples
--------
>>> from rschema.core.value_types import ValueType, value_type_from_value
>>> value_type_from_value("I64") is ValueType.I64
True
>>> ValueType.BOOL.discriminant
4
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "ValueType",
    "value_type_from_value",
    "value_type_from_discriminant",
]


class ValueType(Enum):
    """
    Declared type of a Value, a schema field, or a schema key.

    Notes:
      Member order is the wire discriminant order. Append new members at the
      end only.
    """

    STRING = "string"
    F64 = "f64"
    I64 = "i64"
    U64 = "u64"
    BOOL = "bool"
    JSON = "json"

    @property
    def discriminant(self) -> int:
        return _DISCRIMINANTS[self]

    def __str__(self) -> str:
        return self.value


_ORDERED: tuple[ValueType, ...] = tuple(ValueType)
_DISCRIMINANTS: dict[ValueType, int] = {vt: i for i, vt in enumerate(_ORDERED)}


def value_type_from_value(value: str | ValueType) -> ValueType:
    """
    Normalize a lower_snake spelling (or a ValueType) to a ValueType.

    Args:
        value (str | ValueType): Candidate spelling, e.g. "u64" or "STRING".

    Returns:
        ValueType: Matching member.

    Raises:
        ValueError: If the spelling does not name a ValueType.
    """
    if isinstance(value, ValueType):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid ValueType: {value!r}")
    try:
        return ValueType(value.strip().lower())
    except ValueError as exc:
        raise ValueError(f"Invalid ValueType: {value!r}") from exc


def value_type_from_discriminant(discriminant: int) -> ValueType:
    """Return the ValueType for a wire discriminant; raises ValueError when out of range."""
    if 0 <= discriminant < len(_ORDERED):
        return _ORDERED[discriminant]
    raise ValueError(f"Invalid ValueType discriminant: {discriminant}")
