"""Abstract base class for durable key-value backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseKeyValueStore(ABC):
    """String-to-string storage. Backends raise ``StorageError`` on faults."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Insert or replace a value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        """All stored keys, sorted."""
        ...
