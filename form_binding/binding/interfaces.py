"""Typed interfaces for record schema description and form binding."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

BINDING_METADATA_KEY = "form_binding"

SourceMapping = Mapping[str, Sequence[str]]


class FieldCategory(str, Enum):
    """Closed set of field categories supported by the type coercer."""

    INT = "int"
    UINT = "uint"
    BOOL = "bool"
    FLOAT = "float"
    STRING = "string"
    TIME = "time"
    RECORD = "record"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    ARRAY = "array"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class BitSize:
    """Annotation marker declaring the bit width of a numeric field.

    Attributes:
        bits: Bit width (8, 16, 32 or 64).
        unsigned: Whether the integer field is unsigned.
    """

    bits: int
    unsigned: bool = False


@dataclass(frozen=True)
class FieldTags:
    """Declarative per-field binding configuration.

    Attributes:
        json_key: Preferred explicit source key. May carry `,`-separated options.
        form_key: Alternative explicit source key used when `json_key` is absent.
        default: Literal default coerced into the field when its key is absent.
        time_format: Parse format for date/time fields.
        time_utc: Parse date/time values in UTC instead of the local zone.
        time_location: Named IANA zone used to parse date/time values.
    """

    json_key: str | None = None
    form_key: str | None = None
    default: str | None = None
    time_format: str | None = None
    time_utc: bool = False
    time_location: str | None = None


@dataclass(frozen=True)
class FieldType:
    """Resolved field type description.

    Attributes:
        category: Coercion category for the (unwrapped) type.
        python_type: Declared type with `None` unwrapped and extras stripped.
        bit_size: Numeric bit width; 0 for non-numeric categories.
        optional: Whether the declared type was `X | None`.
    """

    category: FieldCategory
    python_type: Any
    bit_size: int = 0
    optional: bool = False


@dataclass(frozen=True)
class FieldDescriptor:
    """One record field as seen by the field walker.

    Attributes:
        name: Attribute name on the record.
        field_type: Resolved declared type.
        tags: Declarative binding configuration.
        settable: Whether the walker may write this field.
    """

    name: str
    field_type: FieldType
    tags: FieldTags
    settable: bool = True


@dataclass(frozen=True)
class RecordSchema:
    """Ordered field descriptors for one record type.

    Attributes:
        record_type: Described dataclass type.
        fields: Field descriptors in declaration order.
    """

    record_type: type
    fields: tuple[FieldDescriptor, ...]


class FormBinderPort(Protocol):
    """Port definition for binding flat multi-value mappings into records."""

    def binding_bind(self, record: object, source: SourceMapping) -> None:
        """Populate record fields from one source mapping.

        Args:
            record: Writable dataclass instance.
            source: Mapping of key to ordered string values.

        Returns:
            None: The record is mutated in place.

        Raises:
            BindingError: Raised on the first field that fails to bind.
        """
