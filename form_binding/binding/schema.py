"""Record schema description for dataclass binding targets.

Each dataclass type is described once: every field is classified into a closed
`FieldCategory` so the walker and coercer dispatch on plain enum values instead
of re-inspecting annotations on every bind call.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
from dataclasses import replace
from datetime import date, datetime
from functools import lru_cache
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from .errors import BindingRecordTypeError
from .interfaces import BINDING_METADATA_KEY, BitSize, FieldCategory, FieldDescriptor, FieldTags, FieldType, RecordSchema
from .timeparse import ZERO_DATE, ZERO_TIME

_SCHEMA_DEFAULT_BIT_SIZE = 64

_SCHEMA_MAPPING_ORIGINS = frozenset(
    {
        dict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)

_SCHEMA_SEQUENCE_ORIGINS = frozenset(
    {
        list,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
    }
)


def binding_describe_record(record_type: type) -> RecordSchema:
    """Describe one dataclass type as an ordered tuple of field descriptors.

    Args:
        record_type: Dataclass type to describe.

    Returns:
        RecordSchema: Cached schema for the record type.

    Raises:
        BindingRecordTypeError: Raised when the type is not a dataclass or its
            annotations cannot be resolved.
    """

    if not isinstance(record_type, type) or not dataclasses.is_dataclass(record_type):
        raise BindingRecordTypeError(f"binding target must be a dataclass type, got {record_type!r}")
    return _schema_describe_dataclass(record_type)


@lru_cache(maxsize=256)
def _schema_describe_dataclass(record_type: type) -> RecordSchema:
    try:
        type_hints = get_type_hints(record_type, include_extras=True)
    except (NameError, TypeError) as error:
        raise BindingRecordTypeError(f"cannot resolve annotations of {record_type.__name__}: {error}") from error

    descriptors: list[FieldDescriptor] = []
    for record_field in dataclasses.fields(record_type):
        tags = record_field.metadata.get(BINDING_METADATA_KEY, FieldTags())
        if not isinstance(tags, FieldTags):
            raise BindingRecordTypeError(
                f"{record_type.__name__}.{record_field.name} metadata {BINDING_METADATA_KEY!r} must be FieldTags"
            )
        descriptors.append(
            FieldDescriptor(
                name=record_field.name,
                field_type=binding_resolve_field_type(type_hints.get(record_field.name, record_field.type)),
                tags=tags,
                settable=not record_field.name.startswith("_"),
            )
        )
    return RecordSchema(record_type=record_type, fields=tuple(descriptors))


def binding_resolve_field_type(annotation: Any) -> FieldType:
    """Classify one field annotation into a field type description.

    Args:
        annotation: Resolved field annotation (extras included).

    Returns:
        FieldType: Category, unwrapped python type, bit size and optional flag.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    bit_marker: BitSize | None = None
    optional = False

    annotation, bit_marker = _schema_strip_annotated(annotation, bit_marker)
    if get_origin(annotation) in (Union, types.UnionType):
        union_members = get_args(annotation)
        non_none_members = [member for member in union_members if member is not type(None)]
        if len(non_none_members) != 1 or len(union_members) != 2:
            return FieldType(category=FieldCategory.UNKNOWN, python_type=annotation)
        optional = True
        annotation, bit_marker = _schema_strip_annotated(non_none_members[0], bit_marker)

    category, bit_size = _schema_classify(annotation, bit_marker)
    return FieldType(category=category, python_type=annotation, bit_size=bit_size, optional=optional)


def binding_zero_value(field_type: FieldType) -> Any:
    """Build the zero value for one field type.

    Args:
        field_type: Field type description.

    Returns:
        Any: `None` for optional types, else the category zero value.

    Raises:
        BindingRecordTypeError: Raised when a nested record cannot be constructed.
    """

    if field_type.optional:
        return None

    category = field_type.category
    if category in (FieldCategory.INT, FieldCategory.UINT):
        return 0
    if category is FieldCategory.FLOAT:
        return 0.0
    if category is FieldCategory.BOOL:
        return False
    if category is FieldCategory.STRING:
        return ""
    if category is FieldCategory.TIME:
        return ZERO_TIME if field_type.python_type is datetime else ZERO_DATE
    if category is FieldCategory.RECORD:
        return binding_new_record(field_type.python_type)
    if category is FieldCategory.MAPPING:
        return {}
    if category is FieldCategory.SEQUENCE:
        origin = get_origin(field_type.python_type) or field_type.python_type
        if origin in (set, collections.abc.Set, collections.abc.MutableSet):
            return set()
        if origin is frozenset:
            return frozenset()
        return []
    if category is FieldCategory.ARRAY:
        return ()
    return None


def binding_new_record(record_type: type) -> Any:
    """Construct a record whose required fields hold zero values.

    Args:
        record_type: Dataclass or pydantic model type.

    Returns:
        Any: New record instance.

    Raises:
        BindingRecordTypeError: Raised when the type is not a supported record.
    """

    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return record_type.model_construct()

    schema = binding_describe_record(record_type)
    descriptors = {descriptor.name: descriptor for descriptor in schema.fields}
    constructor_arguments: dict[str, Any] = {}
    for record_field in dataclasses.fields(record_type):
        if not record_field.init:
            continue
        if record_field.default is not dataclasses.MISSING or record_field.default_factory is not dataclasses.MISSING:
            continue
        constructor_arguments[record_field.name] = binding_zero_value(descriptors[record_field.name].field_type)
    return record_type(**constructor_arguments)


def binding_pointee_type(field_type: FieldType) -> FieldType:
    """Return the non-optional type wrapped by an optional field type."""

    return replace(field_type, optional=False)


def _schema_strip_annotated(annotation: Any, bit_marker: BitSize | None) -> tuple[Any, BitSize | None]:
    while get_origin(annotation) is Annotated:
        base_type, *extras = get_args(annotation)
        for extra in extras:
            if isinstance(extra, BitSize):
                bit_marker = extra
        annotation = base_type
    return annotation, bit_marker


def _schema_classify(annotation: Any, bit_marker: BitSize | None) -> tuple[FieldCategory, int]:
    # bool before int: bool is an int subclass
    if annotation is bool:
        return FieldCategory.BOOL, 0
    if annotation is int:
        if bit_marker is None:
            return FieldCategory.INT, _SCHEMA_DEFAULT_BIT_SIZE
        category = FieldCategory.UINT if bit_marker.unsigned else FieldCategory.INT
        return category, bit_marker.bits
    if annotation is float:
        return FieldCategory.FLOAT, bit_marker.bits if bit_marker is not None else _SCHEMA_DEFAULT_BIT_SIZE
    if annotation is str:
        return FieldCategory.STRING, 0
    if annotation is datetime or annotation is date:
        return FieldCategory.TIME, 0
    origin = get_origin(annotation)
    if origin is None and isinstance(annotation, type):
        if dataclasses.is_dataclass(annotation) or issubclass(annotation, BaseModel):
            return FieldCategory.RECORD, 0

    origin = origin or annotation
    if origin in _SCHEMA_MAPPING_ORIGINS:
        return FieldCategory.MAPPING, 0
    if origin in _SCHEMA_SEQUENCE_ORIGINS:
        return FieldCategory.SEQUENCE, 0
    if origin is tuple:
        return FieldCategory.ARRAY, 0
    return FieldCategory.UNKNOWN, 0


__all__ = [
    "binding_describe_record",
    "binding_new_record",
    "binding_pointee_type",
    "binding_resolve_field_type",
    "binding_zero_value",
]
