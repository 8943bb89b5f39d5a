"""Durable key-value storage and the typed persistence port."""

from tab_session.storage.base import BaseKeyValueStore
from tab_session.storage.memory import MemoryKeyValueStore
from tab_session.storage.sqlite import SQLiteKeyValueStore
from tab_session.storage.port import PersistencePort

__all__ = [
    "BaseKeyValueStore",
    "MemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "PersistencePort",
]
