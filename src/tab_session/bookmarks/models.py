"""Data models for the bookmark tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tab_session.serialization import drop_none, optional_str, require_dict, require_str
from tab_session.timeutil import coerce_timestamp, now_ms

FAVORITES_FOLDER_ID = "favorites"
BOOKMARKS_BAR_FOLDER_ID = "bookmarks-bar"
RESERVED_FOLDER_IDS = (FAVORITES_FOLDER_ID, BOOKMARKS_BAR_FOLDER_ID)


class BookmarkType(str, Enum):
    BOOKMARK = "bookmark"
    FOLDER = "folder"


@dataclass
class Bookmark:
    """A tree node: a folder owning an ordered child list, or a leaf bookmark."""

    id: str
    type: BookmarkType
    title: str
    url: str | None = None
    favicon: str | None = None
    parent_id: str | None = None
    children: list[Bookmark] | None = None
    created_at: int = field(default_factory=now_ms)

    def __post_init__(self) -> None:
        self.type = BookmarkType(self.type)
        if self.is_folder and self.children is None:
            self.children = []

    @property
    def is_folder(self) -> bool:
        return self.type is BookmarkType.FOLDER

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            **drop_none({"url": self.url, "favicon": self.favicon}),
            "parentId": self.parent_id,
        }
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Bookmark:
        data = require_dict(data)
        kind = BookmarkType(data["type"])
        children = data.get("children")
        if children is not None and not isinstance(children, list):
            raise TypeError("Field 'children' must be an array")
        if kind is BookmarkType.BOOKMARK and not isinstance(data.get("url"), str):
            raise TypeError("Bookmark nodes require a string 'url'")
        return cls(
            id=require_str(data, "id"),
            type=kind,
            title=require_str(data, "title"),
            url=optional_str(data, "url"),
            favicon=optional_str(data, "favicon"),
            parent_id=optional_str(data, "parentId"),
            children=[cls.from_dict(c) for c in children] if children is not None else None,
            created_at=coerce_timestamp(data.get("createdAt", 0)),
        )


def default_root_folders() -> list[Bookmark]:
    return [
        Bookmark(id=FAVORITES_FOLDER_ID, type=BookmarkType.FOLDER, title="Favorites"),
        Bookmark(id=BOOKMARKS_BAR_FOLDER_ID, type=BookmarkType.FOLDER, title="Bookmarks Bar"),
    ]
