"""
Tagged Value union and its untagged field codec.

Value is a closed union over ValueType: exactly one payload per value, no null
variant (null exists only inside JSON documents). The field encoding produced
by ``serialize_inner`` carries no tag; decoding always needs the declared type.

Responsibilities
- Construct Values from host primitives (total within declared ranges).
- Convert Values back to host primitives (exact tag match only).
- Encode/decode the untagged field form used inside DataEntry blobs.

Notes:
    - Equality is tag-aware: ``Value.i64(1) != Value.u64(1) != Value.f64(1.0)``.
    - Value is unhashable because JSON payloads are mutable containers.
    - The tagged standalone form lives in rschema.core.serde.

Examples:
    >>> from rschema.core.value import Value
    >>> from rschema.core.value_types import ValueType
    >>> v = Value.from_native(42)
    >>> v.value_type is ValueType.I64
    True
    >>> Value.from_bytes(v.serialize_inner(), ValueType.I64) == v
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .constants import I32_MAX, I32_MIN, I64_MAX, I64_MIN, U32_MAX, U64_MAX
from .document import check_text, decode_document, documents_equal, encode_document, to_document
from .errors import ValueTypeMismatch
from .typing import Document
from .value_types import ValueType
from .wire import WireReader, WireWriter

__all__ = [
    "Value",
    "serialize",
    "deserialize",
]


def _check_int(value: Any, lo: int, hi: int, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{label} expects int, got {type(value).__name__}")
    if not lo <= value <= hi:
        raise OverflowError(f"{label} out of range: {value}")
    return int(value)


def _check_payload(value_type: Any, payload: Any) -> Any:
    """Validate ``payload`` against ``value_type`` and return its normalized form."""
    if value_type is ValueType.STRING:
        if not isinstance(payload, str):
            raise TypeError(f"string expects str, got {type(payload).__name__}")
        return check_text(payload)
    if value_type is ValueType.F64:
        if isinstance(payload, bool) or not isinstance(payload, (int, float)):
            raise TypeError(f"f64 expects float, got {type(payload).__name__}")
        return float(payload)
    if value_type is ValueType.I64:
        return _check_int(payload, I64_MIN, I64_MAX, "i64")
    if value_type is ValueType.U64:
        return _check_int(payload, 0, U64_MAX, "u64")
    if value_type is ValueType.BOOL:
        if not isinstance(payload, bool):
            raise TypeError(f"bool expects bool, got {type(payload).__name__}")
        return payload
    if value_type is ValueType.JSON:
        return to_document(payload)
    raise TypeError(f"value_type must be a ValueType, got {value_type!r}")


@dataclass(frozen=True, slots=True, eq=False)
class Value:
    """
    One tagged payload.

    Attributes:
        value_type (ValueType): Variant tag.
        payload (Any): str, float, int, bool, or a document, matching value_type.

    Raises:
        TypeError: If the payload type does not match value_type.
        ValueError: If the payload is out of range for value_type (OverflowError
            for integers) or is text that has no UTF-8 encoding.

    Notes:
        JSON payloads are stored as a normalized deep copy (see
        rschema.core.document.to_document).
    """

    value_type: ValueType
    payload: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", _check_payload(self.value_type, self.payload))

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.value_type, self.payload))

    # ------------------------------------------------------------------
    # Conversions in
    # ------------------------------------------------------------------

    @classmethod
    def string(cls, value: str) -> Value:
        return cls(ValueType.STRING, value)

    @classmethod
    def f64(cls, value: float) -> Value:
        return cls(ValueType.F64, value)

    @classmethod
    def i64(cls, value: int) -> Value:
        return cls(ValueType.I64, value)

    @classmethod
    def u64(cls, value: int) -> Value:
        return cls(ValueType.U64, value)

    @classmethod
    def i32(cls, value: int) -> Value:
        """Widen a signed 32-bit integer to I64."""
        return cls(ValueType.I64, _check_int(value, I32_MIN, I32_MAX, "i32"))

    @classmethod
    def u32(cls, value: int) -> Value:
        """Widen an unsigned 32-bit integer to U64."""
        return cls(ValueType.U64, _check_int(value, 0, U32_MAX, "u32"))

    @classmethod
    def boolean(cls, value: bool) -> Value:
        return cls(ValueType.BOOL, value)

    @classmethod
    def json(cls, document: Any) -> Value:
        return cls(ValueType.JSON, document)

    @classmethod
    def from_native(cls, obj: Any) -> Value:
        """
        Convert a host primitive into a Value.

        Args:
            obj (Any): bool, int, float, str, dict/list/tuple (document), or a Value.

        Returns:
            Value: bool -> BOOL, int -> I64 (U64 above the i64 range), float -> F64,
            str -> STRING, containers -> JSON. A Value is returned unchanged.

        Raises:
            TypeError: On None or any other unsupported type.
            OverflowError: On ints outside both 64-bit ranges.
        """
        if isinstance(obj, Value):
            return obj
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, int):
            if obj > I64_MAX:
                return cls.u64(obj)
            return cls.i64(obj)
        if isinstance(obj, float):
            return cls.f64(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, (dict, list, tuple)):
            return cls.json(obj)
        raise TypeError(f"cannot convert {type(obj).__name__} to Value")

    # ------------------------------------------------------------------
    # Conversions out
    # ------------------------------------------------------------------

    def _expect(self, value_type: ValueType) -> Any:
        if self.value_type is not value_type:
            raise ValueTypeMismatch(f"expected {value_type} value, got {self.value_type}")
        return self.payload

    def as_str(self) -> str:
        return self._expect(ValueType.STRING)

    def as_f64(self) -> float:
        return self._expect(ValueType.F64)

    def as_i64(self) -> int:
        return self._expect(ValueType.I64)

    def as_u64(self) -> int:
        return self._expect(ValueType.U64)

    def as_bool(self) -> bool:
        return self._expect(ValueType.BOOL)

    def as_json(self) -> Document:
        return self._expect(ValueType.JSON)

    # ------------------------------------------------------------------
    # Untagged field codec
    # ------------------------------------------------------------------

    def serialize_inner(self) -> bytes:
        """Encode the payload without a tag (the DataEntry field form)."""
        vt = self.value_type
        if vt is ValueType.JSON:
            return encode_document(self.payload)
        w = WireWriter()
        if vt is ValueType.STRING:
            w.write_str(self.payload)
        elif vt is ValueType.F64:
            w.write_f64(self.payload)
        elif vt is ValueType.I64:
            w.write_i64(self.payload)
        elif vt is ValueType.U64:
            w.write_u64(self.payload)
        elif vt is ValueType.BOOL:
            w.write_bool(self.payload)
        else:  # pragma: no cover - closed enum
            raise AssertionError(f"unreachable value type: {vt!r}")
        return w.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes, value_type: ValueType) -> Value:
        """
        Decode an untagged field blob against its declared type.

        Args:
            data (bytes): Blob produced by ``serialize_inner``.
            value_type (ValueType): Declared type of the field.

        Returns:
            Value: Decoded value whose tag equals value_type.

        Raises:
            rschema.core.errors.DecodeError: If data is not a valid encoding of value_type.
        """
        if value_type is ValueType.JSON:
            return cls(ValueType.JSON, decode_document(data))
        r = WireReader(data)
        if value_type is ValueType.STRING:
            payload: Any = r.read_str()
        elif value_type is ValueType.F64:
            payload = r.read_f64()
        elif value_type is ValueType.I64:
            payload = r.read_i64()
        elif value_type is ValueType.U64:
            payload = r.read_u64()
        elif value_type is ValueType.BOOL:
            payload = r.read_bool()
        else:  # pragma: no cover - closed enum
            raise AssertionError(f"unreachable value type: {value_type!r}")
        r.finish()
        return cls(value_type, payload)

    # ------------------------------------------------------------------
    # Equality / repr
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self.value_type is not other.value_type:
            return False
        if self.value_type is ValueType.JSON:
            return documents_equal(self.payload, other.payload)
        return self.payload == other.payload

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Value({self.value_type.value}, {self.payload!r})"


def serialize(value: Value) -> bytes:
    """Untagged field encoding of ``value``; alias of ``Value.serialize_inner``."""
    return value.serialize_inner()


def deserialize(data: bytes, value_type: ValueType) -> Value:
    """Decode an untagged field blob; alias of ``Value.from_bytes``."""
    return Value.from_bytes(data, value_type)
