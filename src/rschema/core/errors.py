"""
Core exception types raised by the value codec, schema accessors, and builders.

Provides typed exceptions for core-domain failures:
- SchemaError and its subclasses for recoverable data errors surfaced by schema
  accessors (unknown field, malformed entry, strict-mode type mismatch).
- DecodeError for bytes that are not a valid encoding of the declared type.
- ValueTypeMismatch for conversions out of a Value with the wrong tag.
- ContractViolation for programmer bugs detected by the builders.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - ContractViolation is intentionally not a SchemaError: code that handles
      data errors with ``except SchemaError`` never absorbs a contract violation.

Examples:
    Catch a missing field.

    >>> from rschema.core.errors import NoSuchField, SchemaError
    >>> try:
    ...     raise NoSuchField("value3")
    ... except SchemaError as e:
    ...     msg = str(e)
    >>> msg
    'No such field: value3'
"""

from __future__ import annotations

__all__ = [
    "SchemaError",
    "NoSuchField",
    "EncodingError",
    "FieldTypeMismatch",
    "DecodeError",
    "ValueTypeMismatch",
    "ContractViolation",
]


class SchemaError(Exception):
    """Recoverable data error raised by schema accessors."""


class NoSuchField(SchemaError):
    """
    The named field does not exist in the schema.

    Attributes:
        name (str): The field name that was looked up.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"No such field: {name}")
        self.name = name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoSuchField):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash((NoSuchField, self.name))


class EncodingError(SchemaError):
    """Entry does not match the schema layout, or a field blob failed to decode."""

    def __init__(self, message: str = "Failed to encode or decode data") -> None:
        super().__init__(message)


class FieldTypeMismatch(SchemaError):
    """
    Strict-mode schemas only: a value's tag differs from the declared field type.

    Attributes:
        name (str): Field name being written.
        expected (ValueType): Declared field type.
        actual (ValueType): Tag of the supplied value.
    """

    def __init__(self, name: str, expected: object, actual: object) -> None:
        super().__init__(f"Field {name!r} expects {expected}, got {actual}")
        self.name = name
        self.expected = expected
        self.actual = actual


class DecodeError(ValueError):
    """Bytes are not a valid encoding of the requested type."""


class ValueTypeMismatch(TypeError):
    """A Value was converted out to a host type that does not match its tag."""


class ContractViolation(AssertionError):
    """Programmer error detected at build time (duplicate field, missing field)."""
