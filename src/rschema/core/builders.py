"""
Incremental builders for schemas and entries.

SchemaBuilder accumulates (name, type) pairs and rejects duplicate names;
EntryBuilder collects encoded blobs by name and emits them in schema order.
Both report contract violations (duplicate field, missing field) by raising
ContractViolation, which is never part of the SchemaError channel.
"""

from __future__ import annotations

from typing import Any

from .entry import DataEntry
from .errors import ContractViolation
from .schema import Schema
from .value import Value
from .value_types import ValueType, value_type_from_value

__all__ = [
    "SchemaBuilder",
    "EntryBuilder",
]


class SchemaBuilder:
    """
    Chainable builder for Schema.

    Args:
        key_type (ValueType | str): Declared key type.
        strict_types (bool): Forwarded to the built Schema.

    Examples:
        >>> from rschema.core.builders import SchemaBuilder
        >>> schema = SchemaBuilder("bool").add_field("name", "string").build()
        >>> schema.field_names()
        ['name']
    """

    def __init__(self, key_type: ValueType | str, *, strict_types: bool = False) -> None:
        self._key_type = value_type_from_value(key_type)
        self._strict_types = strict_types
        self._fields: list[tuple[str, ValueType]] = []

    def add_field(self, name: str, value_type: ValueType | str) -> SchemaBuilder:
        """
        Append a field.

        Raises:
            ContractViolation: If a field with the same name was already added.
        """
        name = str(name)
        for fname, _ in self._fields:
            if fname == name:
                raise ContractViolation(f"Field defined more than once: {name}")
        self._fields.append((name, value_type_from_value(value_type)))
        return self

    def build(self) -> Schema:
        return Schema(key_type=self._key_type, fields=tuple(self._fields), strict_types=self._strict_types)


class EntryBuilder:
    """
    Collects field blobs by name for one schema.

    Obtain through ``Schema.build_entry()``. Each ``set_field*`` call encodes
    immediately; setting a name twice keeps the last value. Names that are not
    in the schema are accepted and dropped by ``build``.
    """

    def __init__(self, schema: Schema) -> None:
        self._schema = schema
        self._blobs: dict[str, bytes] = {}

    def set_field(self, name: str, value: Any) -> EntryBuilder:
        """Encode a host primitive (see ``Value.from_native``) and record it under ``name``."""
        return self.set_field_from_value(name, Value.from_native(value))

    def set_field_from_value(self, name: str, value: Value) -> EntryBuilder:
        found = self._schema.find_field(name)
        if found is not None:
            self._schema.check_field_type(name, found[1], value)
        self._blobs[name] = value.serialize_inner()
        return self

    def missing_fields(self) -> list[str]:
        return [name for name, _ in self._schema.fields if name not in self._blobs]

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def build(self) -> DataEntry:
        """
        Emit the entry in schema order.

        Raises:
            ContractViolation: If any schema field was never set.
        """
        missing = self.missing_fields()
        if missing:
            raise ContractViolation(f"Field is missing: {', '.join(missing)}")
        return DataEntry(fields=[self._blobs[name] for name, _ in self._schema.fields])
