"""Type coercion from single source strings into declared field types.

Record, mapping, sequence and array fields carry JSON text. The decoded value
is overlaid onto a freshly allocated zero value of the declared type: keys the
JSON leaves out keep their zero value, and JSON types must match the declared
types exactly.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import json
import math
import re
import struct
from datetime import date, datetime
from typing import Any, Final, get_args, get_origin

from pydantic import BaseModel, ValidationError

from .errors import BindingUnknownTypeError, BindingValueError
from .interfaces import FieldCategory, FieldType
from .schema import (
    binding_describe_record,
    binding_new_record,
    binding_pointee_type,
    binding_resolve_field_type,
    binding_zero_value,
)


class _CoercionSkipped:
    """Marker type for conversions that must leave the field unmodified."""

    def __repr__(self) -> str:
        return "COERCION_SKIPPED"


COERCION_SKIPPED: Final = _CoercionSkipped()

_COERCION_MAX_DIGITS = 20

_COERCION_SIGNED_PATTERN = re.compile(r"[+-]?[0-9]+")
_COERCION_UNSIGNED_PATTERN = re.compile(r"[0-9]+")
_COERCION_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_COERCION_FLOAT_SPECIAL_PATTERN = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

_COERCION_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_COERCION_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_COERCION_JSON_CATEGORIES = frozenset(
    {
        FieldCategory.RECORD,
        FieldCategory.MAPPING,
        FieldCategory.SEQUENCE,
        FieldCategory.ARRAY,
    }
)


def binding_coerce_value(field_type: FieldType, raw_value: str, field_name: str | None = None) -> Any:
    """Convert one source string into the declared field type.

    Args:
        field_type: Declared (non-optional) field type.
        raw_value: Source text.
        field_name: Optional record field name used in error context.

    Returns:
        Any: Converted value, or `COERCION_SKIPPED` when the field must be
            left unmodified (invalid boolean literals).

    Raises:
        BindingValueError: Raised when the text cannot be converted.
        BindingUnknownTypeError: Raised when the category is unsupported.
    """

    category = field_type.category
    if category is FieldCategory.INT:
        return _coercion_parse_int(raw_value, field_type.bit_size, field_name)
    if category is FieldCategory.UINT:
        return _coercion_parse_uint(raw_value, field_type.bit_size, field_name)
    if category is FieldCategory.BOOL:
        return _coercion_parse_bool(raw_value)
    if category is FieldCategory.FLOAT:
        return _coercion_parse_float(raw_value, field_type.bit_size, field_name)
    if category is FieldCategory.STRING:
        return raw_value
    if category in _COERCION_JSON_CATEGORIES:
        return _coercion_decode_json(raw_value, field_type, field_name)
    raise BindingUnknownTypeError(f"unknown type {field_type.python_type!r}", field_name=field_name)


def _coercion_parse_int(raw_value: str, bit_size: int, field_name: str | None) -> int:
    if raw_value == "":
        raw_value = "0"
    if _COERCION_SIGNED_PATTERN.fullmatch(raw_value) is None:
        raise BindingValueError(f"invalid integer syntax {raw_value!r}", field_name=field_name)
    if len(raw_value.lstrip("+-0")) > _COERCION_MAX_DIGITS:
        raise BindingValueError(f"integer {raw_value!r} out of range for {bit_size}-bit field", field_name=field_name)
    parsed_value = int(raw_value)
    upper_bound = 1 << (bit_size - 1)
    if not -upper_bound <= parsed_value < upper_bound:
        raise BindingValueError(f"integer {raw_value!r} out of range for {bit_size}-bit field", field_name=field_name)
    return parsed_value


def _coercion_parse_uint(raw_value: str, bit_size: int, field_name: str | None) -> int:
    if raw_value == "":
        raw_value = "0"
    if _COERCION_UNSIGNED_PATTERN.fullmatch(raw_value) is None:
        raise BindingValueError(f"invalid unsigned integer syntax {raw_value!r}", field_name=field_name)
    parsed_value = int(raw_value) if len(raw_value.lstrip("0")) <= _COERCION_MAX_DIGITS else 1 << bit_size
    if parsed_value >= 1 << bit_size:
        raise BindingValueError(
            f"unsigned integer {raw_value!r} out of range for {bit_size}-bit field",
            field_name=field_name,
        )
    return parsed_value


def _coercion_parse_bool(raw_value: str) -> bool | _CoercionSkipped:
    # Invalid literals leave the field untouched without reporting an error.
    if raw_value == "":
        raw_value = "false"
    if raw_value in _COERCION_TRUE_LITERALS:
        return True
    if raw_value in _COERCION_FALSE_LITERALS:
        return False
    return COERCION_SKIPPED


def _coercion_parse_float(raw_value: str, bit_size: int, field_name: str | None) -> float:
    if raw_value == "":
        raw_value = "0.0"
    is_special = _COERCION_FLOAT_SPECIAL_PATTERN.fullmatch(raw_value) is not None
    if not is_special and _COERCION_FLOAT_PATTERN.fullmatch(raw_value) is None:
        raise BindingValueError(f"invalid float syntax {raw_value!r}", field_name=field_name)

    parsed_value = float(raw_value)
    if bit_size == 32 and math.isfinite(parsed_value):
        try:
            parsed_value = struct.unpack("f", struct.pack("f", parsed_value))[0]
        except OverflowError as error:
            raise BindingValueError(
                f"float {raw_value!r} out of range for 32-bit field",
                field_name=field_name,
            ) from error
    if math.isinf(parsed_value) and not is_special:
        raise BindingValueError(f"float {raw_value!r} out of range for {bit_size}-bit field", field_name=field_name)
    return parsed_value


def _coercion_decode_json(raw_value: str, field_type: FieldType, field_name: str | None) -> Any:
    try:
        decoded_value = json.loads(raw_value, parse_constant=_coercion_reject_json_constant)
    except ValueError as error:
        raise BindingValueError(
            f"cannot decode JSON into {field_type.python_type!r}: {error}",
            field_name=field_name,
        ) from error
    return _coercion_convert_json(decoded_value, field_type, field_name, json_path="$")


def _coercion_reject_json_constant(constant: str) -> float:
    raise ValueError(f"invalid JSON constant {constant}")


def _coercion_convert_json(value: Any, field_type: FieldType, field_name: str | None, json_path: str) -> Any:
    # null leaves the freshly allocated zero value in place
    if value is None:
        return binding_zero_value(field_type)
    if field_type.optional:
        field_type = binding_pointee_type(field_type)

    category = field_type.category
    if category in (FieldCategory.INT, FieldCategory.UINT):
        if not isinstance(value, int) or isinstance(value, bool):
            raise _coercion_json_mismatch(value, field_type, field_name, json_path)
        if category is FieldCategory.INT:
            return _coercion_parse_int(str(value), field_type.bit_size, field_name)
        return _coercion_parse_uint(str(value), field_type.bit_size, field_name)
    if category is FieldCategory.FLOAT:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise _coercion_json_mismatch(value, field_type, field_name, json_path)
        return _coercion_parse_float(str(value), field_type.bit_size, field_name)
    if category is FieldCategory.BOOL:
        if not isinstance(value, bool):
            raise _coercion_json_mismatch(value, field_type, field_name, json_path)
        return value
    if category is FieldCategory.STRING:
        if not isinstance(value, str):
            raise _coercion_json_mismatch(value, field_type, field_name, json_path)
        return value
    if category is FieldCategory.TIME:
        return _coercion_convert_json_time(value, field_type, field_name, json_path)
    if category is FieldCategory.RECORD:
        return _coercion_convert_json_record(value, field_type, field_name, json_path)
    if category is FieldCategory.MAPPING:
        return _coercion_convert_json_mapping(value, field_type, field_name, json_path)
    if category is FieldCategory.SEQUENCE:
        return _coercion_convert_json_sequence(value, field_type, field_name, json_path)
    if category is FieldCategory.ARRAY:
        return _coercion_convert_json_array(value, field_type, field_name, json_path)
    raise BindingUnknownTypeError(f"unknown type {field_type.python_type!r} at {json_path}", field_name=field_name)


def _coercion_convert_json_time(value: Any, field_type: FieldType, field_name: str | None, json_path: str) -> Any:
    if not isinstance(value, str):
        raise _coercion_json_mismatch(value, field_type, field_name, json_path)
    try:
        if field_type.python_type is datetime:
            return datetime.fromisoformat(value)
        return date.fromisoformat(value)
    except ValueError as error:
        raise _coercion_json_mismatch(value, field_type, field_name, json_path) from error


def _coercion_convert_json_record(value: Any, field_type: FieldType, field_name: str | None, json_path: str) -> Any:
    if not isinstance(value, dict):
        raise _coercion_json_mismatch(value, field_type, field_name, json_path)

    record_type = field_type.python_type
    if issubclass(record_type, BaseModel):
        try:
            return record_type.model_validate(value, strict=True)
        except ValidationError as error:
            raise BindingValueError(
                f"cannot decode JSON at {json_path} into {record_type!r}: {error}",
                field_name=field_name,
            ) from error

    record = binding_new_record(record_type)
    decoded_fields: dict[str, Any] = {}
    for descriptor in binding_describe_record(record_type).fields:
        if not descriptor.settable:
            continue
        json_key = descriptor.tags.json_key or descriptor.tags.form_key or descriptor.name
        if json_key.startswith("-"):
            continue
        json_key = json_key.split(",", maxsplit=1)[0] or descriptor.name
        matched_key = _coercion_match_json_key(value, json_key)
        if matched_key is None:
            continue
        decoded_fields[descriptor.name] = _coercion_convert_json(
            value[matched_key],
            descriptor.field_type,
            field_name,
            json_path=f"{json_path}.{matched_key}",
        )

    if record_type.__dataclass_params__.frozen:
        return dataclasses.replace(record, **decoded_fields)
    for attribute_name, attribute_value in decoded_fields.items():
        setattr(record, attribute_name, attribute_value)
    return record


def _coercion_match_json_key(json_object: dict[str, Any], json_key: str) -> str | None:
    # exact key first, then a case-insensitive match
    if json_key in json_object:
        return json_key
    folded_key = json_key.casefold()
    return next((candidate for candidate in json_object if candidate.casefold() == folded_key), None)


def _coercion_convert_json_mapping(value: Any, field_type: FieldType, field_name: str | None, json_path: str) -> Any:
    if not isinstance(value, dict):
        raise _coercion_json_mismatch(value, field_type, field_name, json_path)
    type_arguments = get_args(field_type.python_type)
    if len(type_arguments) != 2:
        return dict(value)

    key_type = binding_resolve_field_type(type_arguments[0])
    value_type = binding_resolve_field_type(type_arguments[1])
    converted: dict[Any, Any] = {}
    for json_key, json_value in value.items():
        if key_type.category is FieldCategory.STRING:
            mapping_key: Any = json_key
        elif key_type.category is FieldCategory.INT:
            mapping_key = _coercion_parse_int(json_key, key_type.bit_size, field_name)
        elif key_type.category is FieldCategory.UINT:
            mapping_key = _coercion_parse_uint(json_key, key_type.bit_size, field_name)
        else:
            raise BindingUnknownTypeError(f"unsupported mapping key type {key_type.python_type!r}", field_name=field_name)
        converted[mapping_key] = _coercion_convert_json(json_value, value_type, field_name, f"{json_path}.{json_key}")
    return converted


def _coercion_convert_json_sequence(value: Any, field_type: FieldType, field_name: str | None, json_path: str) -> Any:
    if not isinstance(value, list):
        raise _coercion_json_mismatch(value, field_type, field_name, json_path)
    type_arguments = get_args(field_type.python_type)
    if type_arguments:
        element_type = binding_resolve_field_type(type_arguments[0])
        elements = [
            _coercion_convert_json(element, element_type, field_name, f"{json_path}[{index}]")
            for index, element in enumerate(value)
        ]
    else:
        elements = list(value)

    origin = get_origin(field_type.python_type) or field_type.python_type
    if origin is frozenset:
        return frozenset(elements)
    if origin in (set, collections.abc.Set, collections.abc.MutableSet):
        return set(elements)
    return elements


def _coercion_convert_json_array(value: Any, field_type: FieldType, field_name: str | None, json_path: str) -> Any:
    if not isinstance(value, list):
        raise _coercion_json_mismatch(value, field_type, field_name, json_path)
    type_arguments = get_args(field_type.python_type)
    if not type_arguments:
        return tuple(value)
    if len(type_arguments) == 2 and type_arguments[1] is Ellipsis:
        element_type = binding_resolve_field_type(type_arguments[0])
        return tuple(
            _coercion_convert_json(element, element_type, field_name, f"{json_path}[{index}]")
            for index, element in enumerate(value)
        )

    # fixed length: extra elements are dropped, missing ones stay zero
    converted: list[Any] = []
    for index, element_annotation in enumerate(type_arguments):
        element_type = binding_resolve_field_type(element_annotation)
        if index < len(value):
            converted.append(_coercion_convert_json(value[index], element_type, field_name, f"{json_path}[{index}]"))
        else:
            converted.append(binding_zero_value(element_type))
    return tuple(converted)


def _coercion_json_mismatch(
    value: Any,
    field_type: FieldType,
    field_name: str | None,
    json_path: str,
) -> BindingValueError:
    return BindingValueError(
        f"cannot decode JSON {type(value).__name__} at {json_path} into {field_type.python_type!r}",
        field_name=field_name,
    )


__all__ = ["COERCION_SKIPPED", "binding_coerce_value"]
