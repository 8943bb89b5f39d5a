"""Flat saved-for-later URL collection with read/unread state."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup

from tab_session.config import StorageKeys
from tab_session.reading_list.models import ReadingListItem
from tab_session.serialization import parse_list
from tab_session.storage.port import PersistencePort
from tab_session.urls import generate_id

logger = logging.getLogger(__name__)

_HTML_RE = re.compile(r"<\s*(html|body|div|p|article|head|span|h[1-6])\b", re.IGNORECASE)
_DESCRIPTION_LENGTH = 200


class ReadingList:
    """Items deduplicated by URL, newest first."""

    def __init__(self, port: PersistencePort):
        self.port = port
        self._items: list[ReadingListItem] = port.load(
            StorageKeys.READING_LIST, [], lambda data: parse_list(data, ReadingListItem.from_dict)
        )

    def items(self) -> list[ReadingListItem]:
        return list(self._items)

    def unread(self) -> list[ReadingListItem]:
        return [item for item in self._items if not item.is_read]

    def get(self, item_id: str) -> ReadingListItem | None:
        return next((item for item in self._items if item.id == item_id), None)

    def find_by_url(self, url: str) -> ReadingListItem | None:
        return next((item for item in self._items if item.url == url), None)

    def add(self, url: str, title: str, description: str | None = None) -> ReadingListItem:
        """Save ``url``; an already-saved URL returns its item unchanged."""
        existing = self.find_by_url(url)
        if existing is not None:
            return existing

        item = ReadingListItem(id=generate_id(), url=url, title=title, description=description)
        self._items.insert(0, item)
        self._save()
        return item

    def remove(self, item_id: str) -> None:
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) != len(self._items):
            self._items = remaining
            self._save()

    def toggle_read(self, item_id: str) -> ReadingListItem | None:
        item = self.get(item_id)
        if item is None:
            return None
        item.is_read = not item.is_read
        self._save()
        return item

    def cache_content(self, item_id: str, content: str) -> ReadingListItem | None:
        """Store page content for offline reading.

        HTML is reduced to readable text first. An empty description is
        filled from the start of that text.
        """
        item = self.get(item_id)
        if item is None:
            return None

        text = extract_text(content) if _HTML_RE.search(content or "") else (content or "")
        item.cached_content = text
        if not item.description and text:
            item.description = _summarize(text)
        self._save()
        return item

    def clear_cached_content(self) -> None:
        for item in self._items:
            item.cached_content = None
        self._save()

    def _save(self) -> None:
        self.port.save(StorageKeys.READING_LIST, self._items)


def extract_text(html: str) -> str:
    """Readable text of an HTML page, without scripts, styles or page chrome."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style", "head", "nav", "footer", "header"]):
        element.decompose()
    return soup.get_text(separator="\n", strip=True)


def _summarize(text: str) -> str:
    flat = re.sub(r"\s+", " ", text).strip()
    if len(flat) <= _DESCRIPTION_LENGTH:
        return flat
    return flat[:_DESCRIPTION_LENGTH].rsplit(" ", 1)[0] + "..."
