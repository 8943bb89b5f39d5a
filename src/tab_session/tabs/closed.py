"""Bounded LIFO of recently closed tabs."""

from __future__ import annotations

import copy
import logging

from tab_session.config import MAX_CLOSED_TABS, StorageKeys
from tab_session.serialization import parse_list
from tab_session.storage.port import PersistencePort
from tab_session.tabs.models import ClosedTab, Tab
from tab_session.timeutil import now_ms

logger = logging.getLogger(__name__)


class ClosedTabStack:
    """Most recently closed tab first; the oldest entries fall off the end.

    ``autosave`` is switched off while browsing privately. ``clear`` always
    writes through.
    """

    def __init__(self, port: PersistencePort, capacity: int = MAX_CLOSED_TABS):
        self.port = port
        self.capacity = capacity
        self.autosave = True
        self._entries: list[ClosedTab] = port.load(
            StorageKeys.CLOSED_TABS, [], lambda data: parse_list(data, ClosedTab.from_dict)
        )[:capacity]

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[ClosedTab]:
        return list(self._entries)

    def peek(self) -> ClosedTab | None:
        return self._entries[0] if self._entries else None

    def push(self, tab: Tab, index: int) -> ClosedTab:
        entry = ClosedTab(tab=copy.deepcopy(tab), closed_at=now_ms(), index=index)
        self._entries.insert(0, entry)
        if len(self._entries) > self.capacity:
            evicted = len(self._entries) - self.capacity
            del self._entries[self.capacity:]
            logger.debug("Evicted %d closed tabs over capacity %d", evicted, self.capacity)
        if self.autosave:
            self.save()
        return entry

    def pop(self) -> ClosedTab | None:
        if not self._entries:
            return None
        entry = self._entries.pop(0)
        if self.autosave:
            self.save()
        return entry

    def clear(self) -> None:
        self._entries = []
        self.save()

    def save(self) -> None:
        self.port.save(StorageKeys.CLOSED_TABS, self._entries)
