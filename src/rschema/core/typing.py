"""
Lightweight typing aliases used across the core value and schema modules.

This module contains no runtime logic and is zero-IO.

Notes:
    - Intended for use in annotations across core and downstream modules.
    - Keep the surface small and stable to avoid churn in dependents.

Examples:
    >>> from rschema.core.typing import FieldTypeList
    >>> from rschema.core.value_types import ValueType
    >>> fields: FieldTypeList = (("name", ValueType.STRING),)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from .value import Value
    from .value_types import ValueType

__all__ = [
    "Blob",
    "Document",
    "FieldTypeList",
    "FieldTuple",
]

# One encoded field inside a DataEntry.
Blob = bytes

# Structured document payload (JSON-compatible). Kept broad for serde boundaries.
Document = Union[None, bool, int, float, str, list[Any], dict[str, Any]]

# Ordered (name, type) pairs describing a record layout.
FieldTypeList = tuple[tuple[str, "ValueType"], ...]

# Decoded record in schema order.
FieldTuple = list[tuple[str, "Value"]]
