"""Form binding package for populating typed records from flat multi-value mappings."""

from .binding import (
    BindingError,
    FormBinder,
    binding_bind,
    binding_field,
    binding_new_record,
    binding_source_from_query_string,
)

__all__ = [
    "BindingError",
    "FormBinder",
    "binding_bind",
    "binding_field",
    "binding_new_record",
    "binding_source_from_query_string",
]
