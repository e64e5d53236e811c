"""Regression tests for single-value type coercion semantics."""

import math
import struct
from dataclasses import dataclass
from decimal import Decimal

import pytest

from form_binding.binding import (
    COERCION_SKIPPED,
    BindingUnknownTypeError,
    BindingValueError,
    Float32,
    Int8,
    Int16,
    Uint8,
    Uint64,
    binding_coerce_value,
    binding_field,
    binding_resolve_field_type,
)


@dataclass
class _Point:
    x: int
    y: int


@dataclass
class _Pair:
    age: int = 0
    city: str = ""


@dataclass
class _TaggedPair:
    age: int = binding_field(json="years", default_value=0)
    city: str = binding_field(form="town", default_value="")
    secret: str = binding_field(json="-", default_value="")
    note: str = binding_field(json=",omitempty", default_value="")


def _coerce(annotation: object, raw_value: str) -> object:
    return binding_coerce_value(binding_resolve_field_type(annotation), raw_value, field_name="value")


def test_binding_coercion_signed_integers_parse_and_default_empty_to_zero() -> None:
    """Parse base-10 signed integers and map empty text to zero.

    Returns:
        None: Assertions validate signed integer coercion.

    Raises:
        AssertionError: Raised when signed integer coercion is incorrect.
    """

    assert _coerce(int, "42") == 42
    assert _coerce(int, "-7") == -7
    assert _coerce(int, "+7") == 7
    assert _coerce(int, "") == 0
    assert _coerce(int, "9223372036854775807") == 9223372036854775807
    assert _coerce(Int8, "-128") == -128
    assert _coerce(Int16, "32767") == 32767


def test_binding_coercion_signed_integers_reject_bad_syntax_and_range() -> None:
    """Reject non-decimal text and values outside the declared bit width.

    Returns:
        None: Assertions validate signed integer failure behavior.

    Raises:
        AssertionError: Raised when invalid values are accepted.
    """

    with pytest.raises(BindingValueError, match="invalid integer syntax"):
        _coerce(int, "abc")
    with pytest.raises(BindingValueError, match="invalid integer syntax"):
        _coerce(int, " 1")
    with pytest.raises(BindingValueError, match="invalid integer syntax"):
        _coerce(int, "1_000")
    with pytest.raises(BindingValueError, match="out of range for 8-bit field"):
        _coerce(Int8, "128")
    with pytest.raises(BindingValueError, match="out of range for 64-bit field"):
        _coerce(int, "9223372036854775808")
    with pytest.raises(BindingValueError, match="out of range"):
        _coerce(int, "1" * 5000)


def test_binding_coercion_unsigned_integers_enforce_sign_and_width() -> None:
    """Parse unsigned integers and reject signs and overflow."""

    assert _coerce(Uint8, "255") == 255
    assert _coerce(Uint8, "") == 0
    assert _coerce(Uint64, "18446744073709551615") == 18446744073709551615

    with pytest.raises(BindingValueError, match="out of range for 8-bit field"):
        _coerce(Uint8, "256")
    with pytest.raises(BindingValueError, match="invalid unsigned integer syntax"):
        _coerce(Uint8, "-1")
    with pytest.raises(BindingValueError, match="invalid unsigned integer syntax"):
        _coerce(Uint8, "+1")


def test_binding_coercion_bool_swallows_invalid_literals() -> None:
    """Keep the boolean quirk: invalid literals skip the field without error.

    Returns:
        None: Assertions validate boolean literal handling.

    Raises:
        AssertionError: Raised when boolean coercion semantics change.
    """

    for literal in ("1", "t", "T", "TRUE", "true", "True"):
        assert _coerce(bool, literal) is True
    for literal in ("0", "f", "F", "FALSE", "false", "False", ""):
        assert _coerce(bool, literal) is False

    assert _coerce(bool, "notabool") is COERCION_SKIPPED
    assert _coerce(bool, "yes") is COERCION_SKIPPED


def test_binding_coercion_floats_parse_round_and_detect_overflow() -> None:
    """Parse decimal floats at 64 and 32 bit widths."""

    assert _coerce(float, "1.5") == 1.5
    assert _coerce(float, "") == 0.0
    assert _coerce(float, "-2e3") == -2000.0
    assert _coerce(float, ".5") == 0.5
    assert math.isinf(_coerce(float, "inf"))
    assert math.isnan(_coerce(float, "NaN"))
    assert _coerce(Float32, "0.1") == struct.unpack("f", struct.pack("f", 0.1))[0]

    with pytest.raises(BindingValueError, match="invalid float syntax"):
        _coerce(float, "abc")
    with pytest.raises(BindingValueError, match="out of range for 64-bit field"):
        _coerce(float, "1e400")
    with pytest.raises(BindingValueError, match="out of range for 32-bit field"):
        _coerce(Float32, "1e39")


def test_binding_coercion_text_is_assigned_verbatim() -> None:
    """Return text values unchanged, including blanks and padding."""

    assert _coerce(str, "  hello ") == "  hello "
    assert _coerce(str, "") == ""


def test_binding_coercion_structured_types_decode_json_text() -> None:
    """Decode JSON text into sequence, mapping, array and record types.

    Returns:
        None: Assertions validate JSON fallback decoding.

    Raises:
        AssertionError: Raised when JSON decoding is incorrect.
    """

    assert _coerce(list[int], "[1,2,3]") == [1, 2, 3]
    assert _coerce(dict[str, int], '{"a": 1}') == {"a": 1}
    assert _coerce(tuple[int, int], "[4, 5]") == (4, 5)
    assert _coerce(_Point, '{"x": 1, "y": 2}') == _Point(x=1, y=2)


def test_binding_coercion_structured_types_reject_invalid_json() -> None:
    """Surface JSON decode failures with the underlying error chained."""

    with pytest.raises(BindingValueError, match="cannot decode JSON") as error_info:
        _coerce(list[int], "[1,2")
    assert error_info.value.__cause__ is not None
    assert error_info.value.field_name == "value"


def test_binding_coercion_json_records_keep_zero_values_for_missing_keys() -> None:
    """Overlay partial JSON objects onto zero-valued records.

    Returns:
        None: Assertions validate zero-value overlay of JSON records.

    Raises:
        AssertionError: Raised when missing keys are not zero-filled.
    """

    assert _coerce(_Pair, '{"age": 5}') == _Pair(age=5, city="")
    assert _coerce(_Pair, "{}") == _Pair(age=0, city="")
    assert _coerce(_Pair, '{"AGE": 7, "unknown": true}') == _Pair(age=7, city="")
    assert _coerce(_Point, '{"y": 2}') == _Point(x=0, y=2)


def test_binding_coercion_json_records_honor_key_tags() -> None:
    """Resolve JSON object keys through nested field key tags."""

    decoded = _coerce(_TaggedPair, '{"years": 4, "town": "Rome", "secret": "leak", "note": "n"}')

    assert decoded == _TaggedPair(age=4, city="Rome", secret="", note="n")


def test_binding_coercion_json_values_must_match_declared_types() -> None:
    """Reject JSON values whose type differs from the declared element type.

    Returns:
        None: Assertions validate strict JSON element typing.

    Raises:
        AssertionError: Raised when mismatched JSON values are coerced.
    """

    with pytest.raises(BindingValueError, match="cannot decode JSON str"):
        _coerce(list[int], '["1","2"]')
    with pytest.raises(BindingValueError, match="cannot decode JSON int"):
        _coerce(list[str], "[1]")
    with pytest.raises(BindingValueError, match="cannot decode JSON bool"):
        _coerce(list[int], "[true]")
    with pytest.raises(BindingValueError, match="cannot decode JSON dict"):
        _coerce(list[int], '{"a": 1}')
    with pytest.raises(BindingValueError, match="out of range for 8-bit field"):
        _coerce(list[Int8], "[300]")
    with pytest.raises(BindingValueError, match="cannot decode JSON"):
        _coerce(list[float], "[NaN]")


def test_binding_coercion_json_null_yields_zero_values() -> None:
    """Decode JSON null into the zero value of the declared type."""

    assert _coerce(list[int], "null") == []
    assert _coerce(dict[str, int], "null") == {}
    assert _coerce(list[int | None], "[1, null]") == [1, None]
    assert _coerce(list[int], "[1, null]") == [1, 0]
    assert _coerce(_Pair, '{"age": null, "city": "Oslo"}') == _Pair(age=0, city="Oslo")


def test_binding_coercion_json_fixed_arrays_pad_and_truncate() -> None:
    """Pad short fixed-length arrays with zero values and drop extra elements."""

    assert _coerce(tuple[int, int, int], "[1]") == (1, 0, 0)
    assert _coerce(tuple[int, int], "[1, 2, 3]") == (1, 2)
    assert _coerce(tuple[int, ...], "[1, 2, 3]") == (1, 2, 3)
    assert _coerce(set[str], '["a", "a"]') == {"a"}
    assert _coerce(dict[int, str], '{"1": "one"}') == {1: "one"}


def test_binding_coercion_unknown_type_fails_immediately() -> None:
    """Raise unknown-type errors for unsupported declared types."""

    with pytest.raises(BindingUnknownTypeError, match="unknown type"):
        _coerce(Decimal, "1.0")
    with pytest.raises(BindingUnknownTypeError, match="unknown type"):
        _coerce(int | str, "1")
