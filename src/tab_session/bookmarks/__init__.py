"""Hierarchical bookmarks with JSON and Netscape HTML import/export."""

from tab_session.bookmarks.models import (
    BOOKMARKS_BAR_FOLDER_ID,
    FAVORITES_FOLDER_ID,
    Bookmark,
    BookmarkType,
)
from tab_session.bookmarks.tree import BookmarkTree

__all__ = [
    "BOOKMARKS_BAR_FOLDER_ID",
    "FAVORITES_FOLDER_ID",
    "Bookmark",
    "BookmarkType",
    "BookmarkTree",
]
