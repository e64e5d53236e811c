"""Source-mapping builders for raw query strings and key/value pairs."""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import parse_qsl


def binding_source_from_pairs(pairs: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    """Group ordered key/value pairs into a multi-value source mapping.

    Args:
        pairs: Ordered key/value pairs, keys possibly repeated.

    Returns:
        dict[str, list[str]]: Values per key in input order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    source: dict[str, list[str]] = {}
    for key, value in pairs:
        source.setdefault(key, []).append(value)
    return source


def binding_source_from_query_string(query: str) -> dict[str, list[str]]:
    """Parse one url-encoded query string into a multi-value source mapping.

    Blank values are kept so present-but-empty keys stay distinguishable
    from absent keys.

    Args:
        query: Query string without the leading `?`.

    Returns:
        dict[str, list[str]]: Values per key in input order.

    Raises:
        ValueError: Raised when the query string is malformed.
    """

    return binding_source_from_pairs(parse_qsl(query, keep_blank_values=True))


__all__ = ["binding_source_from_pairs", "binding_source_from_query_string"]
