"""Binding layer package for record schema description, coercion and field walking."""

from .coercion import COERCION_SKIPPED, binding_coerce_value
from .errors import (
    BindingBlankTimeFormatError,
    BindingError,
    BindingRecordTypeError,
    BindingTimeLocationError,
    BindingUnknownTypeError,
    BindingValueError,
)
from .fields import binding_field
from .interfaces import (
    BitSize,
    FieldCategory,
    FieldDescriptor,
    FieldTags,
    FieldType,
    FormBinderPort,
    RecordSchema,
    SourceMapping,
)
from .schema import binding_describe_record, binding_new_record, binding_resolve_field_type, binding_zero_value
from .service import FormBinder, binding_bind
from .source import binding_source_from_pairs, binding_source_from_query_string
from .timeparse import ZERO_DATE, ZERO_TIME, binding_parse_time, binding_translate_time_layout
from .types import Float32, Float64, Int8, Int16, Int32, Int64, Uint, Uint8, Uint16, Uint32, Uint64

__all__ = [
    "BindingBlankTimeFormatError",
    "BindingError",
    "BindingRecordTypeError",
    "BindingTimeLocationError",
    "BindingUnknownTypeError",
    "BindingValueError",
    "BitSize",
    "COERCION_SKIPPED",
    "FieldCategory",
    "FieldDescriptor",
    "FieldTags",
    "FieldType",
    "Float32",
    "Float64",
    "FormBinder",
    "FormBinderPort",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "RecordSchema",
    "SourceMapping",
    "Uint",
    "Uint8",
    "Uint16",
    "Uint32",
    "Uint64",
    "ZERO_DATE",
    "ZERO_TIME",
    "binding_bind",
    "binding_coerce_value",
    "binding_describe_record",
    "binding_field",
    "binding_new_record",
    "binding_parse_time",
    "binding_resolve_field_type",
    "binding_source_from_pairs",
    "binding_source_from_query_string",
    "binding_translate_time_layout",
    "binding_zero_value",
]
