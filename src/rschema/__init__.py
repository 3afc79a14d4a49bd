"""
rschema — typed schema-and-record model for storage and messaging layers.

## Public API
- ValueType, Value — closed tagged union and its type tags.
- Schema, SchemaBuilder, EntryBuilder, DataEntry — layouts, builders, and records.
- SchemaError, NoSuchField, EncodingError, FieldTypeMismatch, DecodeError,
  ValueTypeMismatch, ContractViolation — error taxonomy.
- dump_*/load_* — standalone wire forms (see rschema.core.serde).

## Logging
The library logs through the standard ``logging`` module under the
``rschema`` namespace and installs a NullHandler, so nothing is emitted unless
the application configures logging.
"""

from __future__ import annotations

import logging

from .core.builders import EntryBuilder, SchemaBuilder
from .core.entry import DataEntry
from .core.errors import (
    ContractViolation,
    DecodeError,
    EncodingError,
    FieldTypeMismatch,
    NoSuchField,
    SchemaError,
    ValueTypeMismatch,
)
from .core.schema import Schema
from .core.serde import dump_entry, dump_schema, dump_value, load_entry, load_schema, load_value
from .core.value import Value, deserialize, serialize
from .core.value_types import ValueType

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ValueType",
    "Value",
    "serialize",
    "deserialize",
    "DataEntry",
    "Schema",
    "SchemaBuilder",
    "EntryBuilder",
    "SchemaError",
    "NoSuchField",
    "EncodingError",
    "FieldTypeMismatch",
    "DecodeError",
    "ValueTypeMismatch",
    "ContractViolation",
    "dump_value",
    "load_value",
    "dump_entry",
    "load_entry",
    "dump_schema",
    "load_schema",
]
