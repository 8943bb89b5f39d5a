"""Data models for privacy and UI settings."""

from __future__ import annotations

from dataclasses import dataclass

from tab_session.config import START_PAGE_URL
from tab_session.serialization import as_bool, require_dict

SIDEBAR_SECTIONS = ("tabGroups", "readingList", "history", "bookmarks")


@dataclass
class PrivacySettings:
    block_popups: bool = True
    private_mode: bool = False

    def to_dict(self) -> dict:
        return {"blockPopups": self.block_popups, "privateMode": self.private_mode}

    @classmethod
    def from_dict(cls, data: dict) -> PrivacySettings:
        data = require_dict(data)
        return cls(
            block_popups=as_bool(data, "blockPopups", True),
            private_mode=as_bool(data, "privateMode", False),
        )


@dataclass
class UISettings:
    show_bookmarks_bar: bool = True
    show_start_page: bool = True
    sidebar_section: str = "bookmarks"
    home_page: str = START_PAGE_URL

    def to_dict(self) -> dict:
        return {
            "showBookmarksBar": self.show_bookmarks_bar,
            "showStartPage": self.show_start_page,
            "sidebarSection": self.sidebar_section,
            "homePage": self.home_page,
        }

    @classmethod
    def from_dict(cls, data: dict) -> UISettings:
        data = require_dict(data)
        section = data.get("sidebarSection", "bookmarks")
        if section not in SIDEBAR_SECTIONS:
            section = "bookmarks"
        home_page = data.get("homePage")
        return cls(
            show_bookmarks_bar=as_bool(data, "showBookmarksBar", True),
            show_start_page=as_bool(data, "showStartPage", True),
            sidebar_section=section,
            home_page=home_page if isinstance(home_page, str) and home_page else START_PAGE_URL,
        )
