import copy
import math
import pickle

import pytest

from rschema.core.constants import I64_MAX, I64_MIN, U64_MAX
from rschema.core.errors import DecodeError, ValueTypeMismatch
from rschema.core.value import Value, deserialize, serialize
from rschema.core.value_types import ValueType

PRIMITIVES = [
    Value.string(""),
    Value.string("foobar"),
    Value.string("ünïcødé 🙂"),
    Value.f64(0.0),
    Value.f64(-1.5),
    Value.f64(1e300),
    Value.i64(0),
    Value.i64(I64_MIN),
    Value.i64(I64_MAX),
    Value.u64(0),
    Value.u64(U64_MAX),
    Value.boolean(True),
    Value.boolean(False),
]


@pytest.mark.parametrize("value", PRIMITIVES, ids=repr)
def test_untagged_roundtrip_primitives(value: Value) -> None:
    data = serialize(value)
    assert deserialize(data, value.value_type) == value


def test_fixed_width_little_endian_layout() -> None:
    assert Value.i64(42).serialize_inner() == (42).to_bytes(8, "little", signed=True)
    assert Value.i64(-1).serialize_inner() == b"\xff" * 8
    assert Value.u64(U64_MAX).serialize_inner() == b"\xff" * 8
    assert Value.boolean(True).serialize_inner() == b"\x01"
    assert Value.boolean(False).serialize_inner() == b"\x00"
    assert len(Value.f64(math.pi).serialize_inner()) == 8


def test_string_is_length_prefixed_utf8() -> None:
    data = Value.string("foobar").serialize_inner()
    assert data[:8] == (6).to_bytes(8, "little")
    assert data[8:] == b"foobar"


def test_json_roundtrip_structured_document() -> None:
    value = Value.json({"value": 42})
    back = Value.from_bytes(value.serialize_inner(), ValueType.JSON)
    assert back == value
    assert back.as_json() == {"value": 42}


def test_json_blob_is_canonical_text() -> None:
    value = Value.json({"b": [1, 2], "a": None})
    assert value.serialize_inner() == b'{"a":null,"b":[1,2]}'


def test_json_preserves_signed_and_unsigned_extremes() -> None:
    doc = {"value1": U64_MAX, "value2": I64_MIN, "list": ["a", "b", "c"]}
    back = Value.from_bytes(Value.json(doc).serialize_inner(), ValueType.JSON)
    assert back.as_json() == doc


def test_equality_is_tag_aware() -> None:
    assert Value.i64(1) != Value.u64(1)
    assert Value.i64(1) != Value.f64(1.0)
    assert Value.u64(1) != Value.f64(1.0)
    assert Value.json({"a": True}) != Value.json({"a": 1})
    assert Value.json([1]) != Value.json([1.0])
    assert Value.i64(7) == Value.i64(7)


def test_value_is_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(Value.i64(1))


def test_conversions_in_widen_32_bit() -> None:
    assert Value.i32(-5) == Value.i64(-5)
    assert Value.u32(5) == Value.u64(5)
    with pytest.raises(OverflowError):
        Value.i32(2**31)
    with pytest.raises(OverflowError):
        Value.u32(-1)


def test_conversions_in_reject_out_of_range_and_wrong_types() -> None:
    with pytest.raises(OverflowError):
        Value.i64(I64_MAX + 1)
    with pytest.raises(OverflowError):
        Value.u64(-1)
    with pytest.raises(TypeError):
        Value.i64(True)
    with pytest.raises(TypeError):
        Value.string(3)
    with pytest.raises(TypeError):
        Value.boolean(1)


def test_from_native_dispatch() -> None:
    assert Value.from_native(True) == Value.boolean(True)
    assert Value.from_native(42) == Value.i64(42)
    assert Value.from_native(I64_MAX + 1) == Value.u64(I64_MAX + 1)
    assert Value.from_native(2.5) == Value.f64(2.5)
    assert Value.from_native("x") == Value.string("x")
    assert Value.from_native({"k": (1, 2)}) == Value.json({"k": [1, 2]})
    v = Value.u64(3)
    assert Value.from_native(v) is v
    with pytest.raises(TypeError):
        Value.from_native(None)
    with pytest.raises(TypeError):
        Value.from_native(b"bytes")


def test_conversions_out_match_tag_only() -> None:
    assert Value.i64(-3).as_i64() == -3
    assert Value.u64(3).as_u64() == 3
    assert Value.f64(0.5).as_f64() == 0.5
    assert Value.boolean(False).as_bool() is False
    assert Value.string("s").as_str() == "s"
    with pytest.raises(ValueTypeMismatch):
        Value.i64(3).as_u64()
    with pytest.raises(ValueTypeMismatch):
        Value.u64(3).as_i64()
    with pytest.raises(ValueTypeMismatch):
        Value.i64(3).as_f64()
    with pytest.raises(ValueTypeMismatch):
        Value.string("1").as_json()


@pytest.mark.parametrize(
    ("data", "value_type"),
    [
        (b"\x01\x02", ValueType.I64),
        (b"", ValueType.U64),
        (b"\x02", ValueType.BOOL),
        (b"\x01\x00", ValueType.BOOL),
        ((3).to_bytes(8, "little") + b"ab", ValueType.STRING),
        ((2).to_bytes(8, "little") + b"\xff\xfe", ValueType.STRING),
        (b"\x00" * 9, ValueType.F64),
        (b"{not json", ValueType.JSON),
        (b"NaN", ValueType.JSON),
        (str(2**64).encode(), ValueType.JSON),
    ],
)
def test_from_bytes_rejects_invalid_encodings(data: bytes, value_type: ValueType) -> None:
    with pytest.raises(DecodeError):
        Value.from_bytes(data, value_type)


def test_decoded_tag_follows_declared_type() -> None:
    # Same eight bytes, different declared types.
    data = Value.i64(5).serialize_inner()
    assert Value.from_bytes(data, ValueType.I64) == Value.i64(5)
    assert Value.from_bytes(data, ValueType.U64) == Value.u64(5)
    assert Value.from_bytes(data, ValueType.F64).value_type is ValueType.F64


def test_lone_surrogates_are_rejected_at_construction() -> None:
    with pytest.raises(ValueError):
        Value.string("\ud800")
    with pytest.raises(ValueError):
        Value.json({"k": ["ok", "\udfff"]})
    with pytest.raises(ValueError):
        Value.json({"\ud800": 1})
    # A proper surrogate pair escape decodes to one code point and re-encodes.
    value = Value.from_bytes(b'"\\ud83d\\ude42"', ValueType.JSON)
    assert value.as_json() == "🙂"
    assert Value.from_bytes(value.serialize_inner(), ValueType.JSON) == value


@pytest.mark.parametrize("data", [b'"\\ud800"', b'{"\\udfff":1}', b'["a","\\ud800b"]'])
def test_lone_surrogate_escapes_fail_to_decode(data: bytes) -> None:
    with pytest.raises(DecodeError):
        Value.from_bytes(data, ValueType.JSON)


def test_constructor_checks_payload_against_tag() -> None:
    with pytest.raises(TypeError):
        Value(ValueType.I64, "x")
    with pytest.raises(OverflowError):
        Value(ValueType.U64, -1)
    with pytest.raises(TypeError):
        Value(ValueType.BOOL, 3)
    with pytest.raises(TypeError):
        Value(ValueType.F64, True)
    with pytest.raises(TypeError):
        Value(ValueType.JSON, {1: "a"})
    with pytest.raises(TypeError):
        Value("i64", 1)  # type: ignore[arg-type]

    widened = Value(ValueType.F64, 2)
    assert isinstance(widened.payload, float)
    assert widened == Value.f64(2.0)


def test_deepcopy_gives_equal_independent_value() -> None:
    original = Value.json({"a": [1, 2], "b": {"c": True}})
    clone = copy.deepcopy(original)
    assert clone == original
    clone.payload["a"].append(3)
    assert original.as_json() == {"a": [1, 2], "b": {"c": True}}


@pytest.mark.parametrize("value", PRIMITIVES + [Value.json({"k": [1, None, 2.5]})], ids=repr)
def test_values_survive_pickle(value: Value) -> None:
    back = pickle.loads(pickle.dumps(value))
    assert back == value
    assert back.value_type is value.value_type
