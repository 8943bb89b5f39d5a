"""Data models for the reading list."""

from __future__ import annotations

from dataclasses import dataclass, field

from tab_session.serialization import as_bool, drop_none, optional_str, require_dict, require_str
from tab_session.timeutil import coerce_timestamp, now_ms


@dataclass
class ReadingListItem:
    """A page saved for later, optionally with its text cached offline."""

    id: str
    url: str
    title: str
    description: str | None = None
    favicon: str | None = None
    added_at: int = field(default_factory=now_ms)
    is_read: bool = False
    cached_content: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            **drop_none({"description": self.description, "favicon": self.favicon}),
            "addedAt": self.added_at,
            "isRead": self.is_read,
            **drop_none({"cachedContent": self.cached_content}),
        }

    @classmethod
    def from_dict(cls, data: dict) -> ReadingListItem:
        data = require_dict(data)
        return cls(
            id=require_str(data, "id"),
            url=require_str(data, "url"),
            title=optional_str(data, "title") or "",
            description=optional_str(data, "description"),
            favicon=optional_str(data, "favicon"),
            added_at=coerce_timestamp(data.get("addedAt", 0)),
            is_read=as_bool(data, "isRead"),
            cached_content=optional_str(data, "cachedContent"),
        )
