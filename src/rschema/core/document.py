"""
Structured-document payloads for the JSON value variant.

Provides validation/normalization of JSON-compatible Python objects, the
canonical text encoding used for field blobs, and strict structural equality.
This module is zero-IO and uses only the Python standard library.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
        - allow_nan=False
    - Blobs are the UTF-8 encoding of the canonical JSON string.
    - Integers must fit in signed or unsigned 64-bit; both ranges survive a
      round trip unchanged.
    - documents_equal distinguishes bool, int, and float (``True != 1``,
      ``1 != 1.0``), unlike plain ``==`` on Python containers.

Examples:
    >>> from rschema.core.document import dumps_canonical, to_document
    >>> dumps_canonical(to_document({"b": 2, "a": (1, 2)}))
    '{"a":[1,2],"b":2}'
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

from .constants import I64_MIN, U64_MAX
from .errors import DecodeError
from .typing import Document

__all__ = [
    "check_text",
    "to_document",
    "dumps_canonical",
    "encode_document",
    "decode_document",
    "documents_equal",
]


def check_text(text: str) -> str:
    """
    Return ``text`` unchanged if it is encodable as UTF-8.

    Python str can hold lone surrogates (e.g. from ``"\\ud800"`` JSON escapes);
    those have no UTF-8 encoding and are rejected here.

    Raises:
        ValueError: If ``text`` contains a lone surrogate.
    """
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValueError(f"string is not valid UTF-8 text: {exc.reason} at index {exc.start}") from exc
    return text


def to_document(obj: Any) -> Document:
    """
    Validate a JSON-compatible object and return a normalized deep copy.

    Args:
        obj (Any): None, bool, int, float, str, list/tuple, or a mapping with
            str keys, nested arbitrarily.

    Returns:
        Document: Deep copy with tuples turned into lists and mappings into dicts.

    Raises:
        TypeError: On unsupported types or non-str mapping keys.
        ValueError: On integers outside the 64-bit ranges, non-finite floats, or
            strings (values or keys) holding lone surrogates.
    """
    if obj is None or isinstance(obj, bool):
        return obj
    if isinstance(obj, str):
        return check_text(obj)
    if isinstance(obj, int):
        if not I64_MIN <= obj <= U64_MAX:
            raise ValueError(f"integer out of 64-bit range: {obj}")
        return int(obj)
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise ValueError(f"non-finite float is not representable: {obj!r}")
        return float(obj)
    if isinstance(obj, (list, tuple)):
        return [to_document(item) for item in obj]
    if isinstance(obj, Mapping):
        out: dict[str, Any] = {}
        for key, item in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"document keys must be str, got {type(key).__name__}")
            out[check_text(key)] = to_document(item)
        return out
    raise TypeError(f"unsupported document type: {type(obj).__name__}")


def dumps_canonical(doc: Document) -> str:
    """Serialize a document to its canonical JSON string."""
    return json.dumps(doc, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def encode_document(doc: Document) -> bytes:
    """Encode a document as UTF-8 canonical JSON bytes."""
    return dumps_canonical(doc).encode("utf-8")


def _reject_constant(name: str) -> Any:
    raise DecodeError(f"non-finite number {name} is not valid JSON")


def decode_document(data: bytes) -> Document:
    """
    Decode UTF-8 JSON bytes into a document.

    Args:
        data (bytes): Encoded document.

    Returns:
        Document: Parsed document.

    Raises:
        DecodeError: If the bytes are not UTF-8 JSON, contain NaN/Infinity, hold
            integers outside the 64-bit ranges or lone surrogate escapes, or nest
            deeper than the interpreter recursion limit.
    """
    try:
        text = bytes(data).decode("utf-8")
        doc = json.loads(text, parse_constant=_reject_constant)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise DecodeError(f"invalid JSON document: {exc}") from exc
    try:
        return to_document(doc)
    except (TypeError, ValueError, RecursionError) as exc:
        raise DecodeError(f"invalid JSON document: {exc}") from exc


def documents_equal(a: Any, b: Any) -> bool:
    """Strict structural equality: container shapes, keys, and scalar types must all match."""
    if type(a) is not type(b):
        return False
    if isinstance(a, list):
        return len(a) == len(b) and all(documents_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(documents_equal(a[k], b[k]) for k in a)
    return a == b
