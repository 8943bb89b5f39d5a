"""Epoch-millisecond timestamps, the unit every persisted record uses."""

from __future__ import annotations

import time
from datetime import datetime

import dateutil.parser as parser

MS_PER_HOUR = 60 * 60 * 1000
MS_PER_DAY = 24 * MS_PER_HOUR


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def coerce_timestamp(value: object) -> int:
    """Read a stored timestamp as epoch milliseconds.

    Accepts numbers and numeric strings as milliseconds, and date strings
    (e.g. ``2024-01-01T12:00:00``) written by other tools. Raises
    ``ValueError`` or ``TypeError`` for anything else.
    """
    if isinstance(value, bool):
        raise TypeError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except OverflowError as e:
            raise ValueError(f"Timestamp out of range: {value!r}") from e
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(float(text))
        except (ValueError, OverflowError):
            pass
        try:
            return int(parser.parse(text).timestamp() * 1000)
        except (parser.ParserError, OverflowError) as e:
            raise ValueError(f"Unparseable timestamp: {value!r}") from e
    raise TypeError(f"Not a timestamp: {value!r}")


def to_datetime(timestamp_ms: int) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000)
