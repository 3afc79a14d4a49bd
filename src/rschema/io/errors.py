"""
Custom exceptions for the rschema.io module.

Source of truth and boundaries
- rschema.core.errors defines value/schema errors (SchemaError, DecodeError, ...).
- rschema.io raises Io* errors for failures at the DataFrame boundary:
  - IoSchemaError: a frame does not match the schema (columns, nulls, dtypes).

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations

__all__ = [
    "IoError",
    "IoSchemaError",
]


class IoError(Exception):
    """
    Base class for errors raised by rschema.io.

    Notes:
        Use this as a catch-all for adapter failures, distinct from rschema.core errors.
    """


class IoSchemaError(IoError):
    """
    Raised when a DataFrame cannot be converted into entries for a schema.

    Examples:
        - A schema field has no matching column
        - A column contains nulls (Value has no null variant)
        - A column cannot be cast to the field's dtype
    """
