"""Project-native typed exceptions for form binding failures."""

from __future__ import annotations


class BindingError(Exception):
    """Base exception for field-level binding failures.

    Attributes:
        field_name: Optional record field name that failed to bind.
    """

    def __init__(self, message: str, field_name: str | None = None):
        super().__init__(message)
        self.field_name = field_name


class BindingRecordTypeError(BindingError, TypeError):
    """Binding target is not a writable dataclass record instance."""


class BindingUnknownTypeError(BindingError, TypeError):
    """Declared field type does not fall into any supported category."""


class BindingValueError(BindingError, ValueError):
    """Source text could not be converted into the declared field type."""


class BindingBlankTimeFormatError(BindingValueError):
    """Date/time field was declared without a time format."""


class BindingTimeLocationError(BindingValueError):
    """Named time zone declared on a date/time field could not be resolved."""
