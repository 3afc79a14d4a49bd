"""
Positional record payload.

A DataEntry is an ordered list of untagged field blobs. It carries no names, no
type tags, and no reference to a schema; the pairing with a Schema is by
convention and is checked by the schema accessors on every call.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

__all__ = ["DataEntry"]


@dataclass
class DataEntry:
    """
    Ordered field blobs, one per schema field in schema order.

    Attributes:
        fields (list[bytes]): Untagged encodings; ``fields[i]`` decodes with the
            declared type of the schema's i-th field.

    Notes:
        - Length is fixed at construction. Schema.set_field replaces blobs in
          place but never adds or removes them.
        - Concurrent mutation of one entry needs external synchronization.

    Examples:
        >>> from rschema.core.entry import DataEntry
        >>> len(DataEntry.from_fields([b"\\x01"]))
        1
    """

    fields: list[bytes] = field(default_factory=list)

    @classmethod
    def from_fields(cls, fields: Iterable[bytes]) -> DataEntry:
        """Wrap precomputed blobs; the caller asserts they match the intended schema."""
        return cls(fields=[bytes(b) for b in fields])

    def copy(self) -> DataEntry:
        return DataEntry(fields=list(self.fields))

    def __len__(self) -> int:
        return len(self.fields)
