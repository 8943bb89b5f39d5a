"""Saved-for-later pages."""

from tab_session.reading_list.models import ReadingListItem
from tab_session.reading_list.reading_list import ReadingList, extract_text

__all__ = [
    "ReadingList",
    "ReadingListItem",
    "extract_text",
]
