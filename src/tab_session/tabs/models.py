"""Data models for open tabs, closed tabs and tab groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tab_session.exceptions import InvalidColorError
from tab_session.serialization import (
    as_bool,
    as_int,
    drop_none,
    optional_str,
    require_dict,
    require_str,
)
from tab_session.timeutil import coerce_timestamp, now_ms


class TabGroupColor(str, Enum):
    GRAY = "gray"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    CYAN = "cyan"

    @classmethod
    def parse(cls, value: str | TabGroupColor) -> TabGroupColor:
        try:
            return cls(value)
        except ValueError:
            raise InvalidColorError(f"Unknown tab group color: {value!r}") from None


@dataclass
class Tab:
    """One browsing context with its own back/forward history."""

    id: str
    url: str
    title: str
    favicon: str | None = None
    is_pinned: bool = False
    is_muted: bool = False
    is_loading: bool = False
    last_accessed: int = field(default_factory=now_ms)
    group_id: str | None = None
    history: list[str] = field(default_factory=list)
    history_index: int = 0

    def __post_init__(self) -> None:
        if not self.history:
            self.history = [self.url]
        self.history_index = max(0, min(self.history_index, len(self.history) - 1))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            **drop_none({"favicon": self.favicon}),
            "isPinned": self.is_pinned,
            "isMuted": self.is_muted,
            "isLoading": self.is_loading,
            "lastAccessed": self.last_accessed,
            "groupId": self.group_id,
            "history": list(self.history),
            "historyIndex": self.history_index,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Tab:
        data = require_dict(data)
        url = require_str(data, "url")
        history = data.get("history") or [url]
        if not isinstance(history, list) or not all(isinstance(u, str) for u in history):
            raise TypeError("Field 'history' must be an array of strings")
        return cls(
            id=require_str(data, "id"),
            url=url,
            title=optional_str(data, "title") or "",
            favicon=optional_str(data, "favicon"),
            is_pinned=as_bool(data, "isPinned"),
            is_muted=as_bool(data, "isMuted"),
            is_loading=as_bool(data, "isLoading"),
            last_accessed=coerce_timestamp(data.get("lastAccessed", 0)),
            group_id=optional_str(data, "groupId"),
            history=list(history),
            history_index=as_int(data, "historyIndex"),
        )


@dataclass
class ClosedTab:
    """A closed tab kept for restoration, with its position at close time."""

    tab: Tab
    closed_at: int
    index: int

    def to_dict(self) -> dict:
        return {"tab": self.tab.to_dict(), "closedAt": self.closed_at, "index": self.index}

    @classmethod
    def from_dict(cls, data: dict) -> ClosedTab:
        data = require_dict(data)
        return cls(
            tab=Tab.from_dict(data["tab"]),
            closed_at=coerce_timestamp(data.get("closedAt", 0)),
            index=as_int(data, "index"),
        )


@dataclass
class TabGroup:
    """A named, colored, collapsible set of tabs. Does not own tab lifetime."""

    id: str
    name: str
    color: TabGroupColor = TabGroupColor.GRAY
    is_collapsed: bool = False
    tab_ids: list[str] = field(default_factory=list)
    created_at: int = field(default_factory=now_ms)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color.value,
            "isCollapsed": self.is_collapsed,
            "tabIds": list(self.tab_ids),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TabGroup:
        data = require_dict(data)
        tab_ids = data.get("tabIds") or []
        if not isinstance(tab_ids, list):
            raise TypeError("Field 'tabIds' must be an array")
        return cls(
            id=require_str(data, "id"),
            name=require_str(data, "name"),
            color=TabGroupColor.parse(data.get("color", "gray")),
            is_collapsed=as_bool(data, "isCollapsed"),
            tab_ids=[str(t) for t in tab_ids],
            created_at=coerce_timestamp(data.get("createdAt", 0)),
        )
