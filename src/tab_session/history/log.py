"""Append-only, newest-first, capped log of visited URLs."""

from __future__ import annotations

import logging

from tab_session.config import MAX_HISTORY_ENTRIES, START_PAGE_URL, StorageKeys
from tab_session.history.models import HistoryEntry
from tab_session.serialization import parse_list
from tab_session.storage.port import PersistencePort
from tab_session.timeutil import MS_PER_DAY, MS_PER_HOUR, now_ms, to_datetime
from tab_session.urls import generate_id, is_internal_url

logger = logging.getLogger(__name__)

# Fixed windows for range clearing; a "month" is 30 days.
CLEAR_RANGES = {
    "hour": MS_PER_HOUR,
    "day": MS_PER_DAY,
    "week": 7 * MS_PER_DAY,
    "month": 30 * MS_PER_DAY,
}


class HistoryLog:
    """Chronological record of navigations, newest first.

    Args:
        port: Persistence port the log loads from and saves to.
        capacity: Maximum entries kept; the oldest are evicted first.
        start_page_url: Sentinel URL that is never recorded.
    """

    def __init__(
        self,
        port: PersistencePort,
        capacity: int = MAX_HISTORY_ENTRIES,
        start_page_url: str = START_PAGE_URL,
    ):
        self.port = port
        self.capacity = capacity
        self.start_page_url = start_page_url
        self._entries: list[HistoryEntry] = port.load(
            StorageKeys.HISTORY, [], lambda data: parse_list(data, HistoryEntry.from_dict)
        )[:capacity]

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def record(self, url: str, title: str, favicon: str | None = None) -> HistoryEntry | None:
        """Prepend a visit. Internal pages are skipped and the latest entry returned."""
        if is_internal_url(url, self.start_page_url):
            return self._entries[0] if self._entries else None

        entry = HistoryEntry(
            id=generate_id(),
            url=url,
            title=title,
            visited_at=now_ms(),
            favicon=favicon,
        )
        self._entries.insert(0, entry)
        if len(self._entries) > self.capacity:
            del self._entries[self.capacity:]
            logger.debug("History trimmed to %d entries", self.capacity)
        self._save()
        return entry

    def search(self, query: str) -> list[HistoryEntry]:
        """Case-insensitive substring match over title and URL."""
        needle = query.lower()
        return [
            e for e in self._entries
            if needle in e.title.lower() or needle in e.url.lower()
        ]

    def remove(self, entry_id: str) -> None:
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) != len(self._entries):
            self._entries = remaining
            self._save()

    def clear(self, time_range: str = "all", now: int | None = None) -> int:
        """Clear everything, or drop visits older than ``now - range``.

        Returns the number of entries removed. Unknown ranges remove nothing.
        """
        before = len(self._entries)
        if time_range == "all":
            self._entries = []
        elif time_range in CLEAR_RANGES:
            cutoff = (now if now is not None else now_ms()) - CLEAR_RANGES[time_range]
            self._entries = [e for e in self._entries if e.visited_at >= cutoff]
        else:
            logger.warning("Unknown history clear range %r ignored", time_range)
            return 0
        self._save()
        removed = before - len(self._entries)
        logger.info("Cleared %d history entries (%s)", removed, time_range)
        return removed

    def group_by_date(self, now: int | None = None) -> dict[str, list[HistoryEntry]]:
        """Bucket entries for display, keeping newest-first order in each bucket."""
        current = now if now is not None else now_ms()
        groups: dict[str, list[HistoryEntry]] = {}
        for entry in self._entries:
            groups.setdefault(_date_label(entry.visited_at, current), []).append(entry)
        return groups

    def _save(self) -> None:
        self.port.save(StorageKeys.HISTORY, self._entries)


def _date_label(visited_at: int, now: int) -> str:
    days = (now - visited_at) // MS_PER_DAY
    if days <= 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return "This Week"
    if days < 30:
        return "This Month"
    return to_datetime(visited_at).strftime("%B %Y")
