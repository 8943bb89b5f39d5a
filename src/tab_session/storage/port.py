"""Typed load/save boundary over a key-value backend.

Every collection in a session reads and writes through ``PersistencePort``.
Storage faults never escape it: reads fall back to the supplied default and
failed writes are logged and dropped.
"""

from __future__ import annotations

import copy
import json
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from tab_session.exceptions import StorageError
from tab_session.storage.base import BaseKeyValueStore
from tab_session.storage.memory import MemoryKeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DELETED = object()


def to_json_data(value: Any) -> Any:
    """Convert models (anything with ``to_dict``) and containers to JSON data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [to_json_data(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json_data(v) for k, v in value.items()}
    return value


class PersistencePort:
    """JSON persistence for session collections.

    Args:
        store: Backend to read from and write to. Defaults to an in-memory store.
    """

    def __init__(self, store: BaseKeyValueStore | None = None):
        self.store = store or MemoryKeyValueStore()
        self._pending: dict[str, Any] = {}
        self._batch_depth = 0

    def load(
        self,
        key: str,
        default: T,
        parse: Callable[[Any], T] | None = None,
    ) -> T:
        """Read ``key``; return a copy of ``default`` when missing or malformed.

        ``parse`` turns decoded JSON into typed values. Any ``KeyError``,
        ``TypeError``, ``ValueError`` or ``AttributeError`` it raises is
        treated as a shape mismatch.
        """
        raw = self._read_raw(key)
        if not raw:
            return copy.deepcopy(default)

        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Corrupt payload under %s, using default: %s", key, e)
            return copy.deepcopy(default)

        if parse is None:
            return data
        try:
            return parse(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Unexpected shape under %s, using default: %s", key, e)
            return copy.deepcopy(default)

    def save(self, key: str, value: Any) -> None:
        """Serialize and store ``value``. Failures are logged, never raised.

        Inside ``batch`` the value is kept by reference and serialized once
        at flush, so later in-place changes are included.
        """
        if self._batch_depth:
            self._pending[key] = value
            return
        raw = self._serialize(key, value)
        if raw is not None:
            self._write_raw(key, raw)

    def remove(self, key: str) -> None:
        """Delete ``key``. Idempotent."""
        if self._batch_depth:
            self._pending[key] = _DELETED
            return
        self._delete_raw(key)

    @contextmanager
    def batch(self) -> Iterator[PersistencePort]:
        """Coalesce writes: one store write per key, flushed on exit.

        Reads inside the block see pending writes. Nested blocks flush
        with the outermost one.
        """
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                self.flush()

    def flush(self) -> None:
        """Write out anything queued by ``batch``."""
        pending, self._pending = self._pending, {}
        for key, value in pending.items():
            if value is _DELETED:
                self._delete_raw(key)
                continue
            raw = self._serialize(key, value)
            if raw is not None:
                self._write_raw(key, raw)
        if pending:
            logger.debug("Flushed %d pending writes", len(pending))

    def _read_raw(self, key: str) -> str | None:
        if key in self._pending:
            value = self._pending[key]
            return None if value is _DELETED else self._serialize(key, value)
        try:
            return self.store.get(key)
        except StorageError as e:
            logger.warning("Failed to load %s: %s", key, e)
            return None

    def _serialize(self, key: str, value: Any) -> str | None:
        try:
            return json.dumps(to_json_data(value), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.warning("Failed to serialize %s: %s", key, e)
            return None

    def _write_raw(self, key: str, raw: str) -> None:
        try:
            self.store.set(key, raw)
        except StorageError as e:
            logger.warning("Failed to save %s: %s", key, e)

    def _delete_raw(self, key: str) -> None:
        try:
            self.store.delete(key)
        except StorageError as e:
            logger.warning("Failed to remove %s: %s", key, e)
