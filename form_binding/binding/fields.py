"""Dataclass field helper attaching binding configuration."""

from __future__ import annotations

import dataclasses
from typing import Any

from .interfaces import BINDING_METADATA_KEY, FieldTags


def binding_field(
    *,
    json: str | None = None,
    form: str | None = None,
    default: str | None = None,
    time_format: str | None = None,
    time_utc: bool = False,
    time_location: str | None = None,
    **field_kwargs: Any,
) -> Any:
    """Build a dataclass field carrying declarative binding tags.

    Args:
        json: Preferred explicit source key (`-` prefix omits the field).
        form: Alternative explicit source key.
        default: Literal applied when the key is absent from the source.
        time_format: Parse format for date/time fields.
        time_utc: Parse date/time values in UTC.
        time_location: Named IANA zone for date/time parsing.
        **field_kwargs: Forwarded to `dataclasses.field`. Pass the attribute
            default as `default_value`; `default` names the binding literal.

    Returns:
        Any: Dataclass field definition.

    Raises:
        ValueError: Raised when `field_kwargs` already carry binding metadata.
    """

    metadata = dict(field_kwargs.pop("metadata", None) or {})
    if BINDING_METADATA_KEY in metadata:
        raise ValueError(f"metadata must not already define {BINDING_METADATA_KEY!r}")
    metadata[BINDING_METADATA_KEY] = FieldTags(
        json_key=json,
        form_key=form,
        default=default,
        time_format=time_format,
        time_utc=time_utc,
        time_location=time_location,
    )
    if "default_value" in field_kwargs:
        field_kwargs["default"] = field_kwargs.pop("default_value")
    return dataclasses.field(metadata=metadata, **field_kwargs)


__all__ = ["binding_field"]
