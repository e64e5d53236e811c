"""Field walker populating dataclass records from flat multi-value mappings."""

from __future__ import annotations

import dataclasses
import logging
from datetime import tzinfo
from typing import Any

from .coercion import COERCION_SKIPPED, binding_coerce_value
from .errors import BindingRecordTypeError
from .interfaces import FieldCategory, FieldDescriptor, SourceMapping
from .schema import binding_describe_record, binding_new_record, binding_pointee_type, binding_zero_value
from .timeparse import binding_parse_time

logger = logging.getLogger(__name__)

_BINDING_OMIT_PREFIX = "-"
_BINDING_KEY_OPTION_SEPARATOR = ","


class FormBinder:
    """Bind source mappings into dataclass records field by field.

    Fields are written in declaration order and never rolled back: when one
    field fails, fields bound before it keep their new values.
    """

    def __init__(self, local_timezone: tzinfo | None = None):
        """Initialize binder configuration.

        Args:
            local_timezone: Zone used as "local" for date/time fields without
                a UTC flag or named zone. The host zone is used when None.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: Initializer does not raise runtime errors.
        """

        self._local_timezone = local_timezone

    @property
    def local_timezone(self) -> tzinfo | None:
        """Return the zone standing in for "local" during time parsing."""

        return self._local_timezone

    def binding_bind(self, record: Any, source: SourceMapping) -> None:
        """Populate record fields from one source mapping.

        Args:
            record: Writable dataclass instance.
            source: Mapping of key to ordered string values.

        Returns:
            None: The record is mutated in place.

        Raises:
            BindingRecordTypeError: Raised when record is not a writable dataclass instance.
            BindingError: Raised on the first field that fails to bind.
        """

        if isinstance(record, type):
            raise BindingRecordTypeError(f"binding target must be a record instance, got type {record.__name__}")
        self._binding_map_record(record, source)

    def _binding_map_record(self, record: Any, source: SourceMapping) -> None:
        if not dataclasses.is_dataclass(record):
            raise BindingRecordTypeError(f"binding target must be a dataclass instance, got {type(record).__name__}")
        if type(record).__dataclass_params__.frozen:
            raise BindingRecordTypeError(f"binding target {type(record).__name__} is frozen")

        schema = binding_describe_record(type(record))
        for descriptor in schema.fields:
            if not descriptor.settable:
                continue

            source_key = descriptor.tags.json_key or descriptor.tags.form_key
            if not source_key:
                if _binding_is_flattened_record(descriptor):
                    nested_record = getattr(record, descriptor.name, None)
                    if nested_record is None:
                        nested_record = binding_new_record(descriptor.field_type.python_type)
                        setattr(record, descriptor.name, nested_record)
                    self._binding_map_record(nested_record, source)
                    continue
                source_key = descriptor.name

            if source_key.startswith(_BINDING_OMIT_PREFIX):
                logger.debug("omitting field %s", descriptor.name)
                continue
            source_key = source_key.split(_BINDING_KEY_OPTION_SEPARATOR, maxsplit=1)[0]

            source_values = source.get(source_key)
            if isinstance(source_values, str):
                source_values = [source_values]
            if not source_values:
                if not descriptor.tags.default:
                    continue
                logger.debug("applying default %r to field %s", descriptor.tags.default, descriptor.name)
                self._binding_set_field(record, descriptor, descriptor.tags.default)
                continue

            self._binding_set_field(record, descriptor, source_values[0])

    def _binding_set_field(self, record: Any, descriptor: FieldDescriptor, raw_value: str) -> None:
        field_type = descriptor.field_type
        if field_type.optional:
            field_type = binding_pointee_type(field_type)
            if getattr(record, descriptor.name, None) is None:
                setattr(record, descriptor.name, binding_zero_value(field_type))

        if field_type.category is FieldCategory.TIME:
            field_value = binding_parse_time(
                raw_value,
                tags=descriptor.tags,
                python_type=field_type.python_type,
                field_name=descriptor.name,
                local_timezone=self._local_timezone,
            )
        else:
            field_value = binding_coerce_value(field_type, raw_value, field_name=descriptor.name)
            if field_value is COERCION_SKIPPED:
                return

        setattr(record, descriptor.name, field_value)


_BINDING_DEFAULT_BINDER = FormBinder()


def binding_bind(record: Any, source: SourceMapping) -> None:
    """Populate record fields from one source mapping with the default binder.

    Args:
        record: Writable dataclass instance.
        source: Mapping of key to ordered string values.

    Returns:
        None: The record is mutated in place.

    Raises:
        BindingError: Raised on the first field that fails to bind.
    """

    _BINDING_DEFAULT_BINDER.binding_bind(record, source)


def _binding_is_flattened_record(descriptor: FieldDescriptor) -> bool:
    field_type = descriptor.field_type
    return (
        field_type.category is FieldCategory.RECORD
        and not field_type.optional
        and dataclasses.is_dataclass(field_type.python_type)
    )


__all__ = ["FormBinder", "binding_bind"]
