"""
Standalone wire forms for Value, DataEntry, and Schema.

Field blobs inside a DataEntry use the untagged form (rschema.core.value). The
functions here produce the self-contained forms used when those objects travel
on their own:

- Value: u32 discriminant, then the payload. JSON payloads are written as a
  length-prefixed canonical text so the tagged form is self-delimiting.
- DataEntry: u64 blob count, then each blob length-prefixed. No names, no tags.
- Schema: key type discriminant, u64 field count, then (name, type discriminant)
  per field. ``strict_types`` is a local policy and is not serialized.

All ``load_*`` functions raise DecodeError on malformed input, including
trailing bytes. This module is zero-IO.

Examples:
    >>> from rschema.core.serde import dump_value, load_value
    >>> from rschema.core.value import Value
    >>> load_value(dump_value(Value.u64(7))) == Value.u64(7)
    True
"""

from __future__ import annotations

from .document import decode_document, encode_document
from .entry import DataEntry
from .errors import DecodeError
from .schema import Schema
from .value import Value
from .value_types import ValueType, value_type_from_discriminant
from .wire import WireReader, WireWriter

__all__ = [
    "dump_value",
    "load_value",
    "dump_entry",
    "load_entry",
    "dump_schema",
    "load_schema",
]


def _write_value(w: WireWriter, value: Value) -> None:
    w.write_u32(value.value_type.discriminant)
    if value.value_type is ValueType.JSON:
        w.write_bytes(encode_document(value.payload))
    else:
        # Fixed-width and length-prefixed primitives are already self-delimiting.
        w.write_raw(value.serialize_inner())


def _read_value_type(r: WireReader) -> ValueType:
    disc = r.read_u32()
    try:
        return value_type_from_discriminant(disc)
    except ValueError as exc:
        raise DecodeError(str(exc)) from exc


def _read_value(r: WireReader) -> Value:
    vt = _read_value_type(r)
    if vt is ValueType.JSON:
        return Value(ValueType.JSON, decode_document(r.read_bytes()))
    if vt is ValueType.STRING:
        return Value(vt, r.read_str())
    if vt is ValueType.F64:
        return Value(vt, r.read_f64())
    if vt is ValueType.I64:
        return Value(vt, r.read_i64())
    if vt is ValueType.U64:
        return Value(vt, r.read_u64())
    return Value(vt, r.read_bool())


def dump_value(value: Value) -> bytes:
    """Tagged standalone encoding of a Value."""
    w = WireWriter()
    _write_value(w, value)
    return w.getvalue()


def load_value(data: bytes) -> Value:
    """Decode a tagged Value; raises DecodeError."""
    r = WireReader(data)
    value = _read_value(r)
    r.finish()
    return value


def dump_entry(entry: DataEntry) -> bytes:
    """Length-prefixed sequence of length-prefixed blobs."""
    w = WireWriter()
    w.write_u64(len(entry.fields))
    for blob in entry.fields:
        w.write_bytes(blob)
    return w.getvalue()


def load_entry(data: bytes) -> DataEntry:
    """Decode a DataEntry; raises DecodeError."""
    r = WireReader(data)
    count = r.read_u64()
    fields = [r.read_bytes() for _ in range(count)]
    r.finish()
    return DataEntry(fields=fields)


def dump_schema(schema: Schema) -> bytes:
    """Encode ``(key_type, [(name, type), ...])``."""
    w = WireWriter()
    w.write_u32(schema.key_type.discriminant)
    w.write_u64(len(schema.fields))
    for name, ftype in schema.fields:
        w.write_str(name)
        w.write_u32(ftype.discriminant)
    return w.getvalue()


def load_schema(data: bytes, *, strict_types: bool = False) -> Schema:
    """Decode a Schema; raises DecodeError. Field names are trusted as in ``Schema.from_parts``."""
    r = WireReader(data)
    key_type = _read_value_type(r)
    count = r.read_u64()
    fields: list[tuple[str, ValueType]] = []
    for _ in range(count):
        name = r.read_str()
        fields.append((name, _read_value_type(r)))
    r.finish()
    return Schema.from_parts(key_type, fields, strict_types=strict_types)
