"""
Core package aggregator for rschema contracts (values, wire codec, schemas, entries, builders).

## Contracts (single source of truth)
- Value types — `ValueType` enum, lower_snake spellings, wire discriminants.
- Values — tagged `Value` union with host conversions and the untagged field codec.
- Documents — canonical JSON policy for the `json` variant.
- Schemas — immutable pydantic `Schema` with field-addressed access over `DataEntry`.
- Builders — `SchemaBuilder` / `EntryBuilder` enforcing structural invariants.
- Serde — tagged standalone forms for Value, DataEntry, and Schema.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO, no global state.
- Field blobs are untagged; they are meaningful only next to their schema.
- Recoverable data errors derive from `SchemaError`; builder contract
  violations raise `ContractViolation` instead.

## Downstream usage
- rschema.host — converts plain Python objects to and from `Value` and documents.
- rschema.io — materializes entries as Polars DataFrames using `Schema.fields`.

## Examples
```python
from rschema.core.builders import SchemaBuilder
from rschema.core.value import Value
from rschema.core.value_types import ValueType

schema = (
    SchemaBuilder(ValueType.BOOL)
    .add_field("value1", ValueType.STRING)
    .add_field("value2", ValueType.I64)
    .build()
)
entry = schema.build_entry().set_field("value1", "foobar").set_field("value2", 42).build()
schema.set_field(entry, "value1", Value.string("foobaz"))
schema.get_fields(entry)  # {'value1': Value(string, 'foobaz'), 'value2': Value(i64, 42)}
```
"""
