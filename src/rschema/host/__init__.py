"""
rschema.host — binding surface between plain Python objects and the core value model.

## Responsibilities
- Resolve type spellings (``"u64"``, ``int``, ``"json"`` ...) to ValueType.
- Convert Python objects to Value / documents and back.

## Import DAG discipline
- Depends only on rschema.core; the core never imports this package.
"""

from __future__ import annotations

from .convert import (
    json_to_python,
    python_to_json,
    python_to_json_value,
    python_to_value,
    value_to_python,
    value_type_from_python,
)

__all__ = [
    "value_type_from_python",
    "python_to_value",
    "value_to_python",
    "python_to_json",
    "python_to_json_value",
    "json_to_python",
]
