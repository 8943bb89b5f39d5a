"""Shape checks for decoding persisted JSON into models.

Helpers raise ``KeyError``/``TypeError``/``ValueError`` on a mismatch; the
persistence port turns those into a fallback to the default value.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

T = TypeVar("T")


def require_dict(data: Any) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"Expected an object, got {type(data).__name__}")
    return data


def require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"Field {key!r} must be a string")
    return value


def optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"Field {key!r} must be a string or null")
    return value


def as_bool(data: dict, key: str, default: bool = False) -> bool:
    value = data.get(key, default)
    return bool(value) if value is not None else default


def as_int(data: dict, key: str, default: int = 0) -> int:
    value = data.get(key, default)
    if value is None or isinstance(value, bool):
        return default
    return int(value)


def parse_list(data: Any, parse_item: Callable[[Any], T]) -> list[T]:
    """Decode a JSON array, failing on the first malformed element."""
    if not isinstance(data, list):
        raise TypeError(f"Expected an array, got {type(data).__name__}")
    return [parse_item(item) for item in data]


def drop_none(data: dict) -> dict:
    """Omit keys whose value is None (unset optional fields)."""
    return {k: v for k, v in data.items() if v is not None}
