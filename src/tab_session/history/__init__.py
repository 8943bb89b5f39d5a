"""Chronological, capped visit history."""

from tab_session.history.log import CLEAR_RANGES, HistoryLog
from tab_session.history.models import HistoryEntry

__all__ = [
    "CLEAR_RANGES",
    "HistoryLog",
    "HistoryEntry",
]
