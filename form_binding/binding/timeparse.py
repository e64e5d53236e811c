"""Date/time conversion for form binding.

Formats accept either `strptime` directives (`%Y-%m-%d`) or reference-layout
tokens (`2006-01-02 15:04:05`). A format containing `%` is always treated as a
`strptime` format.
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import BindingBlankTimeFormatError, BindingTimeLocationError, BindingValueError
from .interfaces import FieldTags

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
ZERO_DATE = date(1, 1, 1)

# Location name resolved to the binder's local zone instead of the zone database.
_TIMEPARSE_LOCAL_LOCATION = "Local"

# Longest tokens first where prefixes overlap.
_TIMEPARSE_REFERENCE_TOKENS: tuple[tuple[str, str], ...] = (
    ("January", "%B"),
    ("Jan", "%b"),
    ("Monday", "%A"),
    ("Mon", "%a"),
    ("2006", "%Y"),
    ("Z07:00", "%z"),
    ("-07:00", "%z"),
    ("-0700", "%z"),
    (".000000", ".%f"),
    (".000", ".%f"),
    ("002", "%j"),
    ("01", "%m"),
    ("02", "%d"),
    ("06", "%y"),
    ("15", "%H"),
    ("03", "%I"),
    ("04", "%M"),
    ("05", "%S"),
    ("PM", "%p"),
    ("pm", "%p"),
)


def binding_parse_time(
    raw_value: str,
    tags: FieldTags,
    python_type: type,
    field_name: str,
    local_timezone: tzinfo | None = None,
) -> datetime | date:
    """Parse one date/time field value using its declared format and zone.

    Args:
        raw_value: Source text (first value for the field key).
        tags: Field binding tags carrying format and zone configuration.
        python_type: `datetime` or `date`.
        field_name: Record field name used in error context.
        local_timezone: Zone standing in for "local"; host zone when None.

    Returns:
        datetime | date: Parsed value, or the zero time for an empty value.

    Raises:
        BindingBlankTimeFormatError: Raised when no time format is declared.
        BindingTimeLocationError: Raised when the named zone cannot be loaded.
        BindingValueError: Raised when the value does not match the format.
    """

    if not tags.time_format:
        raise BindingBlankTimeFormatError("blank time format", field_name=field_name)

    if raw_value == "":
        return ZERO_TIME if python_type is datetime else ZERO_DATE

    parse_zone = local_timezone
    if tags.time_utc:
        parse_zone = timezone.utc
    if tags.time_location == _TIMEPARSE_LOCAL_LOCATION:
        parse_zone = local_timezone
    elif tags.time_location:
        parse_zone = binding_load_time_location(tags.time_location, field_name=field_name)

    time_format = binding_translate_time_layout(tags.time_format)
    try:
        parsed_value = datetime.strptime(raw_value, time_format)
    except ValueError as error:
        raise BindingValueError(
            f"cannot parse {raw_value!r} as time with format {tags.time_format!r}",
            field_name=field_name,
        ) from error

    if parsed_value.tzinfo is None:
        if parse_zone is None:
            parsed_value = parsed_value.astimezone()
        else:
            parsed_value = parsed_value.replace(tzinfo=parse_zone)

    if python_type is datetime:
        return parsed_value
    return parsed_value.date()


def binding_load_time_location(location_name: str, field_name: str | None = None) -> ZoneInfo:
    """Load one named IANA time zone.

    Args:
        location_name: Zone identifier such as `Europe/Berlin`.
        field_name: Optional record field name used in error context.

    Returns:
        ZoneInfo: Loaded time zone.

    Raises:
        BindingTimeLocationError: Raised when the zone is unknown or malformed.
    """

    try:
        return ZoneInfo(location_name)
    except (ZoneInfoNotFoundError, ValueError) as error:
        raise BindingTimeLocationError(f"unknown time location {location_name!r}", field_name=field_name) from error


def binding_translate_time_layout(time_format: str) -> str:
    """Translate a reference-layout time format into `strptime` directives.

    Args:
        time_format: Declared time format.

    Returns:
        str: `strptime` format; unchanged when it already contains `%`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if "%" in time_format:
        return time_format
    return _timeparse_translate_reference_layout(time_format)


@lru_cache(maxsize=128)
def _timeparse_translate_reference_layout(layout: str) -> str:
    translated_parts: list[str] = []
    position = 0
    while position < len(layout):
        for token, directive in _TIMEPARSE_REFERENCE_TOKENS:
            if layout.startswith(token, position):
                translated_parts.append(directive)
                position += len(token)
                break
        else:
            translated_parts.append(layout[position])
            position += 1
    return "".join(translated_parts)


__all__ = [
    "ZERO_DATE",
    "ZERO_TIME",
    "binding_load_time_location",
    "binding_parse_time",
    "binding_translate_time_layout",
]
