"""In-process key-value backend, used for tests and throwaway sessions."""

from __future__ import annotations

from tab_session.exceptions import StorageWriteError
from tab_session.storage.base import BaseKeyValueStore


class MemoryKeyValueStore(BaseKeyValueStore):
    """Dict-backed store with an optional byte quota.

    Args:
        quota_bytes: Reject writes once the total stored size would exceed
            this many bytes (mimics a browser storage quota). None disables it.
    """

    def __init__(self, initial: dict[str, str] | None = None, quota_bytes: int | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self.quota_bytes = quota_bytes

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(len(v.encode("utf-8")) for k, v in self._data.items() if k != key)
            if used + len(value.encode("utf-8")) > self.quota_bytes:
                raise StorageWriteError(f"Quota of {self.quota_bytes} bytes exceeded writing {key}")
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
