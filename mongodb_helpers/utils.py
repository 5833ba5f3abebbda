"""Utility functions for mongodb-helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from mongodb_helpers.errors import InvalidArgumentError
from mongodb_helpers.types import MatchValue, Record, Temporal


def convert_timestamps(document: Mapping[str, Any]) -> Record:
    """
    Recursively convert timestamp-like values of a document into datetime objects.

    Each value of the document is classified in this order:
    - falsy (None, 0, "", empty containers...) → unchanged
    - Temporal (bson.Timestamp, bson.datetime_ms.DatetimeMS, anything with as_datetime()) → value.as_datetime()
    - list / tuple → unchanged, elements are NOT converted, even if they hold nested documents
    - mapping → recursively converted into a new dict
    - All other types → unchanged

    Args:
        document: The document to convert. Must be a mapping.

    Returns:
        A new dict with the same keys. The input document, and any document nested in it, is left untouched.

    Raises:
        InvalidArgumentError: if document is not a mapping.

    Examples:
        >>> from bson import Timestamp
        >>> convert_timestamps({"meta": {"updated": Timestamp(1700000000, 1)}, "tags": ["a"]})
        >>> # Returns: {"meta": {"updated": datetime(2023, 11, 14, 22, 13, 20, tzinfo=utc)}, "tags": ["a"]}
    """
    if not isinstance(document, Mapping):
        raise InvalidArgumentError(f"Expected a mapping, got {type(document).__name__}")
    return {key: _convert_value(value) for key, value in document.items()}


def _convert_value(value: Any) -> Any:
    if not value:
        return value
    if isinstance(value, Temporal):
        return value.as_datetime()
    if isinstance(value, (list, tuple)):
        return value
    if isinstance(value, Mapping):
        return convert_timestamps(value)
    return value


def require_positive(name: str, value: int) -> int:
    """Return value if it is a positive integer, raise InvalidArgumentError otherwise."""
    # bool is an int subclass, True must not pass as a size of 1
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    return value


def chunk_values(values: Sequence[MatchValue], chunk_size: int) -> list[list[MatchValue]]:
    """Split values into contiguous slices, each at most chunk_size long, in their original order.

    The last slice holds the remainder and may be shorter than chunk_size. An empty sequence gives no slices."""
    require_positive("chunk_size", chunk_size)
    values = list(values)
    return [values[batch_start : batch_start + chunk_size] for batch_start in range(0, len(values), chunk_size)]
