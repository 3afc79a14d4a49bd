import pytest

from rschema.core.builders import SchemaBuilder
from rschema.core.entry import DataEntry
from rschema.core.errors import DecodeError
from rschema.core.schema import Schema
from rschema.core.serde import (
    dump_entry,
    dump_schema,
    dump_value,
    load_entry,
    load_schema,
    load_value,
)
from rschema.core.value import Value
from rschema.core.value_types import ValueType
from rschema.core.wire import WireReader, WireWriter


def _schema() -> Schema:
    return SchemaBuilder("bool").add_field("value1", "string").add_field("value2", "i64").build()


def test_tagged_value_prefixes_discriminant() -> None:
    data = dump_value(Value.i64(42))
    assert data[:4] == (2).to_bytes(4, "little")
    assert data[4:] == Value.i64(42).serialize_inner()


def test_tagged_and_untagged_forms_differ() -> None:
    v = Value.string("x")
    assert dump_value(v) != v.serialize_inner()


def test_tagged_value_roundtrip_including_json() -> None:
    for v in (Value.string("s"), Value.f64(2.5), Value.u64(9), Value.boolean(True), Value.json({"a": [1, None]})):
        assert load_value(dump_value(v)) == v


def test_load_value_errors() -> None:
    with pytest.raises(DecodeError):
        load_value((99).to_bytes(4, "little"))
    with pytest.raises(DecodeError):
        load_value(dump_value(Value.boolean(True)) + b"\x00")
    with pytest.raises(DecodeError):
        load_value(b"\x02\x00")


def test_entry_wire_form_is_count_plus_prefixed_blobs() -> None:
    entry = DataEntry.from_fields([b"ab", b""])
    data = dump_entry(entry)
    expected = (
        (2).to_bytes(8, "little")
        + (2).to_bytes(8, "little")
        + b"ab"
        + (0).to_bytes(8, "little")
    )
    assert data == expected
    assert load_entry(data) == entry


def test_entry_roundtrip_keeps_schema_access() -> None:
    schema = _schema()
    entry = schema.build_entry().set_field("value1", "foobar").set_field("value2", 42).build()
    back = load_entry(dump_entry(entry))
    assert back == entry
    assert schema.get_field(back, "value2") == Value.i64(42)


def test_load_entry_rejects_truncated_input() -> None:
    data = dump_entry(DataEntry.from_fields([b"abc"]))
    with pytest.raises(DecodeError):
        load_entry(data[:-1])


def test_schema_wire_roundtrip() -> None:
    schema = _schema()
    assert load_schema(dump_schema(schema)) == schema
    strict = load_schema(dump_schema(schema), strict_types=True)
    assert strict.strict_types and strict.fields == schema.fields


def test_schema_json_form_roundtrip() -> None:
    schema = _schema()
    text = schema.model_dump_json()
    assert '"key_type":"bool"' in text
    assert Schema.model_validate_json(text) == schema


def test_entry_copy_is_independent() -> None:
    schema = _schema()
    entry = schema.build_entry().set_field("value1", "a").set_field("value2", 1).build()
    clone = entry.copy()
    schema.set_field(clone, "value2", Value.i64(2))
    assert schema.get_field(entry, "value2") == Value.i64(1)
    assert clone != entry


def test_wire_reader_and_writer_primitives() -> None:
    data = WireWriter().write_u32(7).write_str("hé").write_bool(False).write_i64(-2).getvalue()
    r = WireReader(data)
    assert r.read_u32() == 7
    assert r.read_str() == "hé"
    assert r.read_bool() is False
    assert r.read_i64() == -2
    r.finish()
    with pytest.raises(OverflowError):
        WireWriter().write_u32(-1)
    with pytest.raises(DecodeError):
        WireReader(b"\x00").read_u64()


def test_value_type_discriminants_in_schema_form() -> None:
    schema = Schema.from_parts(ValueType.JSON, [])
    assert dump_schema(schema) == (5).to_bytes(4, "little") + (0).to_bytes(8, "little")
