"""Session configuration with environment-variable defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DB_PATH = Path(
    os.environ.get("TAB_SESSION_DB_PATH", str(Path.home() / ".tab_session" / "state.db"))
)
DEFAULT_SEARCH_URL = os.environ.get("TAB_SESSION_SEARCH_URL", "https://duckduckgo.com/?q={query}")
START_PAGE_URL = os.environ.get("TAB_SESSION_START_PAGE", "start-page")

MAX_HISTORY_ENTRIES = 1000
MAX_CLOSED_TABS = 25
TOP_SITES_LIMIT = 12


class StorageKeys:
    """Durable keys, one per persisted collection."""

    TABS = "safari-tabs"
    TAB_GROUPS = "safari-tab-groups"
    CLOSED_TABS = "safari-closed-tabs"
    READING_LIST = "safari-reading-list"
    HISTORY = "safari-history"
    BOOKMARKS = "safari-bookmarks"
    FAVORITES = "safari-favorites"
    SETTINGS = "safari-settings"
    PRIVACY = "safari-privacy"
    PAGE_CACHE = "safari-page-cache"


@dataclass
class SessionConfig:
    """Tunables shared by every component of a session."""

    db_path: Path = field(default_factory=lambda: DEFAULT_DB_PATH)
    search_url: str = DEFAULT_SEARCH_URL
    start_page_url: str = START_PAGE_URL
    max_history: int = MAX_HISTORY_ENTRIES
    max_closed_tabs: int = MAX_CLOSED_TABS
    top_sites_limit: int = TOP_SITES_LIMIT

    @classmethod
    def from_env(cls) -> SessionConfig:
        """Build a config from the current environment, not import-time values."""
        db_path = os.environ.get("TAB_SESSION_DB_PATH")
        return cls(
            db_path=Path(db_path) if db_path else DEFAULT_DB_PATH,
            search_url=os.environ.get("TAB_SESSION_SEARCH_URL", DEFAULT_SEARCH_URL),
            start_page_url=os.environ.get("TAB_SESSION_START_PAGE", START_PAGE_URL),
        )
