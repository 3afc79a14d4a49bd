"""
Schema model and field-addressed record access.

A Schema is an immutable pydantic model: a key type plus an ordered list of
uniquely named, typed fields. Records (DataEntry) are positional; the Schema
maps names to positions and declared types and mediates every read and write.

Responsibilities
- Describe a record layout (key type, ordered (name, type) pairs).
- Read fields from an entry by name, all at once, or through a positional filter.
- Overwrite single field blobs in place.
- Start EntryBuilders that enforce full population at build time.

Error handling
- EncodingError when the entry length differs from the field count, or when a
  blob fails to decode (one error-level log line per decode failure).
- NoSuchField when a name is not in the schema.
- FieldTypeMismatch on writes with a mismatched tag, strict schemas only.

Notes
- Name lookups are linear scans over ``fields``; schemas hold tens of fields
  at most.
- Uniqueness of field names is enforced by SchemaBuilder, not by the model;
  ``from_parts`` trusts its caller.
- Frozen models can be shared between readers without locking.

Examples
--------
>>> from rschema.core.builders import SchemaBuilder
>>> from rschema.core.value_types import ValueType
>>> schema = (
...     SchemaBuilder(ValueType.BOOL)
...     .add_field("value1", ValueType.STRING)
...     .add_field("value2", ValueType.I64)
...     .build()
... )
>>> entry = schema.build_entry().set_field("value1", "foobar").set_field("value2", 42).build()
>>> schema.get_field(entry, "value2").as_i64()
42
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from .entry import DataEntry
from .errors import DecodeError, EncodingError, FieldTypeMismatch, NoSuchField
from .typing import FieldTuple
from .value import Value
from .value_types import ValueType

if TYPE_CHECKING:
    from .builders import EntryBuilder

__all__ = ["Schema"]

logger = logging.getLogger(__name__)


class Schema(BaseModel):
    """
    Immutable record layout.

    Attributes:
        key_type (ValueType): Declared type of the record's external key. The key
            itself is never stored in the record.
        fields (tuple[tuple[str, ValueType], ...]): Ordered (name, type) pairs;
            order defines the positional layout of entries.
        strict_types (bool): When True, writes whose value tag differs from the
            declared field type raise FieldTypeMismatch. Defaults to False.

    Examples:
        >>> from rschema.core.schema import Schema
        >>> s = Schema.from_parts("u64", [("name", "string")])
        >>> s.key_type, s.fields
        (<ValueType.U64: 'u64'>, (('name', <ValueType.STRING: 'string'>),))
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key_type: ValueType
    fields: tuple[tuple[str, ValueType], ...] = ()
    strict_types: bool = False

    @classmethod
    def from_parts(
        cls,
        key_type: ValueType | str,
        fields: Sequence[tuple[str, ValueType | str]],
        *,
        strict_types: bool = False,
    ) -> Schema:
        """Construct directly; the caller is responsible for unique field names."""
        return cls(key_type=key_type, fields=tuple(fields), strict_types=strict_types)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_key_type(self) -> ValueType:
        return self.key_type

    def get_field_types(self) -> tuple[tuple[str, ValueType], ...]:
        return self.fields

    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def clone_inner(self) -> tuple[ValueType, list[tuple[str, ValueType]]]:
        """Return ``(key_type, fields)`` as fresh, independently mutable containers."""
        return self.key_type, list(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def build_entry(self) -> EntryBuilder:
        from .builders import EntryBuilder

        return EntryBuilder(self)

    def find_field(self, name: str) -> tuple[int, ValueType] | None:
        """Return ``(position, declared type)`` of field ``name``, or None if absent."""
        for pos, (fname, ftype) in enumerate(self.fields):
            if fname == name:
                return pos, ftype
        return None

    def check_field_type(self, name: str, ftype: ValueType, value: Value) -> None:
        """
        Enforce the declared type of a write on strict schemas; no-op otherwise.

        Raises:
            FieldTypeMismatch: If strict_types is set and the tags differ.
        """
        # TODO: make strict typing the default once callers stop relying on
        # writing mismatched tags (e.g. i64 into u64 fields).
        if self.strict_types and value.value_type is not ftype:
            raise FieldTypeMismatch(name, ftype, value.value_type)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_layout(self, entry: DataEntry) -> None:
        if len(entry.fields) != len(self.fields):
            raise EncodingError(
                f"entry has {len(entry.fields)} fields, schema declares {len(self.fields)}"
            )

    @staticmethod
    def _decode(name: str, blob: bytes, ftype: ValueType) -> Value:
        try:
            return Value.from_bytes(blob, ftype)
        except DecodeError as exc:
            logger.error("Failed to deserialize field %r of type %s: %s", name, ftype, exc)
            raise EncodingError() from exc

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def set_field(self, entry: DataEntry, name: str, value: Value | Any) -> None:
        """
        Encode ``value`` and replace the blob of field ``name`` in place.

        Args:
            entry (DataEntry): Entry laid out for this schema.
            name (str): Field name.
            value (Value | Any): A Value, or a host primitive accepted by
                ``Value.from_native``.

        Raises:
            EncodingError: If the entry length does not match the schema.
            NoSuchField: If name is not a field of this schema.
            FieldTypeMismatch: Strict schemas only, on a tag mismatch.
            TypeError, ValueError: If value cannot be converted (see
                ``Value.from_native``).
        """
        self._check_layout(entry)
        found = self.find_field(name)
        if found is None:
            raise NoSuchField(name)
        pos, ftype = found
        value = Value.from_native(value)
        self.check_field_type(name, ftype, value)
        entry.fields[pos] = value.serialize_inner()

    def get_field(self, entry: DataEntry, name: str) -> Value:
        """
        Decode field ``name`` against its declared type.

        Raises:
            EncodingError: On length mismatch or when the blob fails to decode.
            NoSuchField: If name is not a field of this schema.
        """
        self._check_layout(entry)
        found = self.find_field(name)
        if found is None:
            raise NoSuchField(name)
        pos, ftype = found
        return self._decode(name, entry.fields[pos], ftype)

    def get_fields(self, entry: DataEntry) -> dict[str, Value]:
        """Decode every field into a name -> Value mapping."""
        return dict(self.get_fields_as_tuple(entry))

    def get_fields_as_tuple(self, entry: DataEntry) -> FieldTuple:
        """Decode every field into ``[(name, Value), ...]`` in schema order."""
        self._check_layout(entry)
        return [
            (name, self._decode(name, blob, ftype))
            for (name, ftype), blob in zip(self.fields, entry.fields)
        ]

    def get_fields_with_filter(self, entry: DataEntry, names: Sequence[str]) -> dict[str, Value]:
        """
        Decode an entry that was already projected down to ``names``.

        Blob ``i`` is interpreted as field ``names[i]``, decoded with that field's
        declared type. Intended for consumers that reduced a record to a subset of
        fields in the filter order.

        Args:
            entry (DataEntry): Projected entry with one blob per filter name.
            names (Sequence[str]): Field names, in the entry's blob order.

        Returns:
            dict[str, Value]: Decoded values keyed by filter name.

        Raises:
            EncodingError: If ``len(entry) != len(names)`` or a blob fails to decode.
            NoSuchField: If a filter name is not a field of this schema.
        """
        if len(entry.fields) != len(names):
            raise EncodingError(
                f"entry has {len(entry.fields)} fields, filter names {len(names)}"
            )
        result: dict[str, Value] = {}
        for name, blob in zip(names, entry.fields):
            found = self.find_field(name)
            if found is None:
                raise NoSuchField(name)
            result[name] = self._decode(name, blob, found[1])
        return result
