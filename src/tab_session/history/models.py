"""Data models for the history log."""

from __future__ import annotations

from dataclasses import dataclass

from tab_session.serialization import drop_none, optional_str, require_dict, require_str
from tab_session.timeutil import coerce_timestamp


@dataclass
class HistoryEntry:
    """One visit to a URL."""

    id: str
    url: str
    title: str
    visited_at: int
    favicon: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            **drop_none({"favicon": self.favicon}),
            "visitedAt": self.visited_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> HistoryEntry:
        data = require_dict(data)
        return cls(
            id=require_str(data, "id"),
            url=require_str(data, "url"),
            title=optional_str(data, "title") or "",
            visited_at=coerce_timestamp(data["visitedAt"]),
            favicon=optional_str(data, "favicon"),
        )
