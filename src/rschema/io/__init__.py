"""
rschema.io — Polars adapter for schema-described records.

## Public API
- frame_schema — Schema -> column dtype mapping.
- entries_to_frame — decode a batch of DataEntry records into a DataFrame.
- frame_to_entries — validate a DataFrame and encode its rows as DataEntry records.

## Import DAG discipline
- Depends only on stdlib, polars, and rschema.core.*.

## Examples
```python
import polars as pl
from rschema import SchemaBuilder
from rschema.io import entries_to_frame, frame_to_entries

schema = SchemaBuilder("u64").add_field("name", "string").add_field("score", "f64").build()
df = pl.DataFrame({"name": ["a", "b"], "score": [1.0, 2.5]})
entries = frame_to_entries(schema, df)
entries_to_frame(schema, entries).equals(df)  # True
```
"""

from __future__ import annotations

from .errors import IoError, IoSchemaError
from .frames import entries_to_frame, frame_schema, frame_to_entries

__all__ = [
    "IoError",
    "IoSchemaError",
    "frame_schema",
    "entries_to_frame",
    "frame_to_entries",
]
