"""
Tabular adapter between DataEntry records and Polars DataFrames.

Purpose
- Materialize a batch of entries as a DataFrame with one typed column per
  schema field, in schema order.
- Convert a DataFrame back into entries, validating it against the schema.

Dtype mapping
- string -> pl.Utf8
- f64    -> pl.Float64
- i64    -> pl.Int64
- u64    -> pl.UInt64
- bool   -> pl.Boolean
- json   -> pl.Utf8 holding the canonical JSON text

Checks performed by frame_to_entries
- Every schema field has a column.
- When strict=True: no columns outside the schema.
- Scalar columns are cast (non-strict) to the expected dtype; values that
  cannot be cast become nulls and are then rejected.
- Float columns feeding i64/u64 fields must hold integral values; a cast
  that would truncate (1.7 -> 1) is rejected instead.
- No nulls anywhere (Value has no null variant).

Notes
- Depends on polars and rschema.core only; performs no file IO.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import polars as pl

from rschema.core.document import decode_document, dumps_canonical
from rschema.core.entry import DataEntry
from rschema.core.errors import DecodeError
from rschema.core.schema import Schema
from rschema.core.value import Value
from rschema.core.value_types import ValueType

from .errors import IoSchemaError

__all__ = [
    "frame_schema",
    "entries_to_frame",
    "frame_to_entries",
]

# Polars exposes dtype singletons/classes (e.g., pl.Int64); keep this loosely typed.
_DTYPE_MAP: dict[ValueType, object] = {
    ValueType.STRING: pl.Utf8,
    ValueType.F64: pl.Float64,
    ValueType.I64: pl.Int64,
    ValueType.U64: pl.UInt64,
    ValueType.BOOL: pl.Boolean,
    ValueType.JSON: pl.Utf8,
}


def _json_cell(text: str) -> Value:
    return Value(ValueType.JSON, decode_document(text.encode("utf-8")))


_CELL_TO_VALUE: dict[ValueType, Callable[[Any], Value]] = {
    ValueType.STRING: Value.string,
    ValueType.F64: Value.f64,
    ValueType.I64: Value.i64,
    ValueType.U64: Value.u64,
    ValueType.BOOL: Value.boolean,
    ValueType.JSON: _json_cell,
}


def frame_schema(schema: Schema) -> dict[str, object]:
    """
    Map a Schema to an ordered column -> Polars dtype mapping.

    Args:
        schema (Schema): Record layout.

    Returns:
        dict[str, object]: Column names in schema order with their dtypes.
    """
    return {name: _DTYPE_MAP[ftype] for name, ftype in schema.fields}


def _cell(value: Value) -> Any:
    if value.value_type is ValueType.JSON:
        return dumps_canonical(value.payload)
    return value.payload


def entries_to_frame(schema: Schema, entries: Iterable[DataEntry]) -> pl.DataFrame:
    """
    Decode entries into a DataFrame.

    Args:
        schema (Schema): Layout shared by all entries.
        entries (Iterable[DataEntry]): Records to decode.

    Returns:
        pl.DataFrame: One row per entry, one column per schema field.

    Raises:
        rschema.core.errors.EncodingError: If an entry does not match the schema.
    """
    columns: dict[str, list[Any]] = {name: [] for name, _ in schema.fields}
    for entry in entries:
        for name, value in schema.get_fields_as_tuple(entry):
            columns[name].append(_cell(value))
    return pl.DataFrame(columns, schema=frame_schema(schema))  # type: ignore[arg-type]


def _safe_cast(df: pl.DataFrame, col: str, target: object) -> pl.DataFrame:
    try:
        return df.with_columns(pl.col(col).cast(target, strict=False))  # type: ignore[arg-type]
    except Exception as exc:  # pragma: no cover - defensive
        raise IoSchemaError(f"failed to cast column {col!r} to {target}: {exc}") from exc


_INTEGER_TYPES = (ValueType.I64, ValueType.U64)


def _reject_truncation(df: pl.DataFrame, col: str, ftype: ValueType) -> None:
    c = pl.col(col)
    lossy = df.filter(c.is_not_null() & (c != c.floor())).height
    if lossy:
        raise IoSchemaError(f"column {col!r} has {lossy} non-integral values for type {ftype}")


def _validate_frame(schema: Schema, df: pl.DataFrame, *, strict: bool) -> pl.DataFrame:
    names = schema.field_names()
    missing = [c for c in names if c not in df.columns]
    if missing:
        raise IoSchemaError(f"missing required columns: {missing!r}")
    if strict:
        extras = [c for c in df.columns if c not in set(names)]
        if extras:
            raise IoSchemaError(f"unexpected columns present: {extras!r} (allowed={names!r})")

    for name, ftype in schema.fields:
        expected = _DTYPE_MAP[ftype]
        if df.schema[name] != expected:
            if ftype in _INTEGER_TYPES and df.schema[name].is_float():
                _reject_truncation(df, name, ftype)
            df = _safe_cast(df, name, expected)
        nulls = df.get_column(name).null_count()
        if nulls:
            raise IoSchemaError(
                f"column {name!r} has {nulls} null or uncastable values for type {ftype}"
            )
    return df.select(names)


def frame_to_entries(schema: Schema, df: pl.DataFrame, *, strict: bool = True) -> list[DataEntry]:
    """
    Validate a DataFrame against a schema and build one entry per row.

    Args:
        schema (Schema): Target layout.
        df (pl.DataFrame): Frame with one column per schema field.
        strict (bool): Reject columns outside the schema when True.

    Returns:
        list[DataEntry]: Entries in row order.

    Raises:
        IoSchemaError: On missing/extra columns, nulls, uncastable values, or
            invalid JSON text in json columns.
    """
    df = _validate_frame(schema, df, strict=strict)
    converters = [(name, _CELL_TO_VALUE[ftype]) for name, ftype in schema.fields]
    entries: list[DataEntry] = []
    for row_idx, row in enumerate(df.iter_rows()):
        builder = schema.build_entry()
        for (name, convert), cell in zip(converters, row):
            try:
                value = convert(cell)
            except DecodeError as exc:
                raise IoSchemaError(f"row {row_idx}: column {name!r} holds invalid JSON: {exc}") from exc
            builder.set_field_from_value(name, value)
        entries.append(builder.build())
    return entries
