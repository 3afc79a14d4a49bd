import polars as pl
import pytest
from polars.testing import assert_frame_equal

from rschema.core.builders import SchemaBuilder
from rschema.core.entry import DataEntry
from rschema.core.errors import EncodingError
from rschema.core.schema import Schema
from rschema.core.value import Value
from rschema.io import IoSchemaError, entries_to_frame, frame_schema, frame_to_entries


def _schema() -> Schema:
    return (
        SchemaBuilder("u64")
        .add_field("name", "string")
        .add_field("score", "f64")
        .add_field("delta", "i64")
        .add_field("count", "u64")
        .add_field("active", "bool")
        .add_field("meta", "json")
        .build()
    )


def _frame() -> pl.DataFrame:
    return pl.DataFrame(
        {
            "name": ["a", "b"],
            "score": [1.0, 2.5],
            "delta": [-1, 3],
            "count": [0, 7],
            "active": [True, False],
            "meta": ['{"k":1}', "[]"],
        },
        schema=frame_schema(_schema()),  # type: ignore[arg-type]
    )


def test_frame_schema_dtypes_in_field_order() -> None:
    dtypes = frame_schema(_schema())
    assert list(dtypes) == ["name", "score", "delta", "count", "active", "meta"]
    assert dtypes["count"] == pl.UInt64
    assert dtypes["meta"] == pl.Utf8


def test_frame_roundtrip() -> None:
    schema = _schema()
    df = _frame()
    entries = frame_to_entries(schema, df)
    assert len(entries) == 2
    assert schema.get_field(entries[0], "meta") == Value.json({"k": 1})
    assert schema.get_field(entries[1], "count") == Value.u64(7)
    assert_frame_equal(entries_to_frame(schema, entries), df)


def test_entries_to_frame_empty_batch() -> None:
    out = entries_to_frame(_schema(), [])
    assert out.height == 0
    assert out.columns == ["name", "score", "delta", "count", "active", "meta"]


def test_entries_to_frame_propagates_encoding_error() -> None:
    with pytest.raises(EncodingError):
        entries_to_frame(_schema(), [DataEntry.from_fields([])])


def test_missing_column_raises() -> None:
    with pytest.raises(IoSchemaError, match="missing required columns"):
        frame_to_entries(_schema(), _frame().drop("score"))


def test_extra_columns_strict_and_non_strict() -> None:
    df = _frame().with_columns(pl.lit(1).alias("extra"))
    with pytest.raises(IoSchemaError, match="unexpected columns"):
        frame_to_entries(_schema(), df)
    assert len(frame_to_entries(_schema(), df, strict=False)) == 2


def test_nulls_are_rejected() -> None:
    schema = SchemaBuilder("bool").add_field("n", "i64").build()
    df = pl.DataFrame({"n": [1, None]}, schema={"n": pl.Int64})
    with pytest.raises(IoSchemaError, match="null"):
        frame_to_entries(schema, df)


def test_scalar_columns_are_cast() -> None:
    schema = SchemaBuilder("bool").add_field("x", "f64").build()
    entries = frame_to_entries(schema, pl.DataFrame({"x": [0, 1, 2]}))
    assert [schema.get_field(e, "x") for e in entries] == [Value.f64(0.0), Value.f64(1.0), Value.f64(2.0)]


def test_uncastable_values_are_rejected() -> None:
    schema = SchemaBuilder("bool").add_field("n", "i64").build()
    with pytest.raises(IoSchemaError):
        frame_to_entries(schema, pl.DataFrame({"n": ["abc"]}))


def test_invalid_json_text_is_rejected() -> None:
    schema = SchemaBuilder("bool").add_field("meta", "json").build()
    with pytest.raises(IoSchemaError, match="invalid JSON"):
        frame_to_entries(schema, pl.DataFrame({"meta": ["{broken"]}))


def test_float_to_integer_cast_refuses_truncation() -> None:
    schema = SchemaBuilder("bool").add_field("n", "i64").build()
    with pytest.raises(IoSchemaError, match="non-integral"):
        frame_to_entries(schema, pl.DataFrame({"n": [1.0, 1.7]}))


def test_integral_floats_cast_into_integer_fields() -> None:
    schema = SchemaBuilder("bool").add_field("n", "i64").add_field("c", "u64").build()
    entries = frame_to_entries(schema, pl.DataFrame({"n": [-2.0], "c": [3.0]}))
    assert schema.get_fields(entries[0]) == {"n": Value.i64(-2), "c": Value.u64(3)}
