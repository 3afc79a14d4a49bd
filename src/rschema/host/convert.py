"""
Conversions between Python objects and rschema values.

Overview
- value_type_from_python(): resolve a type object or spelling to ValueType.
- python_to_value() / value_to_python(): primitives <-> Value.
- python_to_json() / python_to_json_value() / json_to_python(): documents.

Notes
- Integers outside i64 are rejected by python_to_value, but become unsigned
  document numbers in python_to_json (up to u64).
- ``bool`` is checked before ``int`` everywhere, so True stays a boolean.
"""

from __future__ import annotations

import copy
from typing import Any

from rschema.core.constants import I64_MIN, U64_MAX
from rschema.core.typing import Document
from rschema.core.value import Value
from rschema.core.value_types import ValueType

__all__ = [
    "value_type_from_python",
    "python_to_value",
    "value_to_python",
    "python_to_json",
    "python_to_json_value",
    "json_to_python",
]

_SPELLINGS: dict[str, ValueType] = {
    "int": ValueType.I64,
    "i64": ValueType.I64,
    "u64": ValueType.U64,
    "str": ValueType.STRING,
    "bool": ValueType.BOOL,
    "json": ValueType.JSON,
    "float": ValueType.F64,
    "f64": ValueType.F64,
}


def value_type_from_python(obj: Any) -> ValueType:
    """
    Resolve a Python type or a spelling string to a ValueType.

    Args:
        obj (Any): A type object (``int``, ``str``, ``bool``, ``float``) or one of
            the spellings "int", "i64", "u64", "str", "bool", "json", "float", "f64".

    Returns:
        ValueType: Resolved type.

    Raises:
        TypeError: If obj is neither a type nor a string, or names no ValueType.

    Examples:
        >>> from rschema.host.convert import value_type_from_python
        >>> value_type_from_python(int)
        <ValueType.I64: 'i64'>
        >>> value_type_from_python("u64")
        <ValueType.U64: 'u64'>
    """
    if isinstance(obj, type):
        typename = obj.__name__
    elif isinstance(obj, str):
        typename = obj
    else:
        raise TypeError("Failed to convert object to ValueType. Need string or python type.")
    try:
        return _SPELLINGS[typename]
    except KeyError:
        raise TypeError(f"Cannot convert to ValueType. Got '{typename}'.") from None


def python_to_value(obj: Any) -> Value:
    """
    Convert a Python primitive to a Value.

    Raises:
        OverflowError: For ints outside the signed 64-bit range.
        TypeError: For any type other than str, float, int, or bool.
    """
    if isinstance(obj, str):
        return Value.string(obj)
    if isinstance(obj, float):
        return Value.f64(obj)
    if isinstance(obj, bool):
        return Value.boolean(obj)
    if isinstance(obj, int):
        return Value.i64(obj)
    raise TypeError(f"Failed to convert {type(obj).__name__} to Value")


def value_to_python(value: Value) -> Any:
    """Return the payload of ``value`` as a plain Python object (documents are deep-copied)."""
    if value.value_type is ValueType.JSON:
        return json_to_python(value.payload)
    return value.payload


def python_to_json(obj: Any) -> Document:
    """
    Convert a Python object tree to a document.

    Args:
        obj (Any): None, str, float, int, bool, list/tuple, or dict with str keys.

    Returns:
        Document: Fresh document tree.

    Raises:
        OverflowError: For ints outside both the i64 and u64 ranges.
        TypeError: For unsupported types or non-str dict keys.
    """
    if obj is None:
        return None
    if isinstance(obj, str):
        return str(obj)
    if isinstance(obj, float):
        return float(obj)
    if isinstance(obj, bool):
        return bool(obj)
    if isinstance(obj, int):
        # Values beyond i64 fall back to the unsigned range.
        if I64_MIN <= obj <= U64_MAX:
            return int(obj)
        raise OverflowError(f"integer does not fit in i64 or u64: {obj}")
    if isinstance(obj, (list, tuple)):
        return [python_to_json(elem) for elem in obj]
    if isinstance(obj, dict):
        result: dict[str, Any] = {}
        for key, elem in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"JSON object keys must be str, got {type(key).__name__}")
            result[key] = python_to_json(elem)
        return result
    raise TypeError(f"Failed to convert {type(obj).__name__} to JSON Value")


def python_to_json_value(obj: Any) -> Value:
    """Convert a Python object tree to a JSON Value."""
    return Value.json(python_to_json(obj))


def json_to_python(doc: Document) -> Any:
    """Return an independent copy of a document as plain Python containers."""
    return copy.deepcopy(doc)
