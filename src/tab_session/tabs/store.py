"""The tab session store: open tabs, their navigation stacks, and the
collections every navigation, close or restore touches.

All operations are total over ids. An id that no longer refers to an open
tab or an existing group makes the call a no-op, so UI handlers can retry
freely without guarding.
"""

from __future__ import annotations

import copy
import logging
from typing import Iterable

from tab_session.bookmarks.models import FAVORITES_FOLDER_ID, Bookmark
from tab_session.bookmarks.tree import BookmarkTree
from tab_session.config import SessionConfig, StorageKeys
from tab_session.favorites.models import DEFAULT_FAVORITES, Favorite
from tab_session.favorites.registry import FavoritesRegistry
from tab_session.history.log import HistoryLog
from tab_session.reading_list.models import ReadingListItem
from tab_session.reading_list.reading_list import ReadingList
from tab_session.serialization import parse_list
from tab_session.settings.store import SettingsStore
from tab_session.storage.port import PersistencePort
from tab_session.storage.sqlite import SQLiteKeyValueStore
from tab_session.tabs.closed import ClosedTabStack
from tab_session.tabs.groups import TabGroupRegistry
from tab_session.tabs.models import Tab, TabGroup, TabGroupColor
from tab_session.timeutil import now_ms
from tab_session.urls import extract_domain, favicon_url, generate_id, is_internal_url, normalize_url

logger = logging.getLogger(__name__)

START_PAGE_TITLE = "Start Page"


class TabSessionStore:
    """Single writer for tab and tab-group state in one browsing session.

    Construct one per application session and hand it to every caller.

    Args:
        port: Persistence port shared by every collection. Defaults to an
            in-memory one.
        config: Session tunables. Defaults to ``SessionConfig()``.
        initial_url: URL for the first tab when no tabs were persisted.
        default_favorites: Seed for an empty favorites registry.
    """

    def __init__(
        self,
        port: PersistencePort | None = None,
        config: SessionConfig | None = None,
        initial_url: str | None = None,
        default_favorites: Iterable[Favorite] = DEFAULT_FAVORITES,
    ):
        self.port = port or PersistencePort()
        self.config = config or SessionConfig()

        self.settings = SettingsStore(self.port)
        self.privacy = self.settings.load_privacy()
        self.groups = TabGroupRegistry(self.port)
        self.groups.autosave = not self.privacy.private_mode
        self.closed_tabs = ClosedTabStack(self.port, self.config.max_closed_tabs)
        self.closed_tabs.autosave = not self.privacy.private_mode
        self.history = HistoryLog(self.port, self.config.max_history, self.config.start_page_url)
        self.favorites = FavoritesRegistry(self.port, default_favorites)
        self.reading_list = ReadingList(self.port)
        self.bookmarks = BookmarkTree(self.port)

        self._tabs: list[Tab] = []
        self.active_tab_id: str | None = None
        self._restore(initial_url or self.config.start_page_url)

    @classmethod
    def from_config(cls, config: SessionConfig | None = None, **kwargs) -> TabSessionStore:
        """Open a session persisted in the sqlite file named by ``config.db_path``."""
        config = config or SessionConfig.from_env()
        port = PersistencePort(SQLiteKeyValueStore(config.db_path))
        return cls(port, config, **kwargs)

    # -- Read helpers -----------------------------------------------------

    @property
    def tabs(self) -> list[Tab]:
        return list(self._tabs)

    @property
    def active_tab(self) -> Tab | None:
        return self.get_tab(self.active_tab_id)

    @property
    def private_mode(self) -> bool:
        return self.privacy.private_mode

    def get_tab(self, tab_id: str | None) -> Tab | None:
        if tab_id is None:
            return None
        return next((t for t in self._tabs if t.id == tab_id), None)

    def index_of(self, tab_id: str) -> int:
        """Position of ``tab_id`` in the tab strip, or -1."""
        return next((i for i, t in enumerate(self._tabs) if t.id == tab_id), -1)

    def can_go_back(self, tab_id: str) -> bool:
        tab = self.get_tab(tab_id)
        return tab is not None and tab.history_index > 0

    def can_go_forward(self, tab_id: str) -> bool:
        tab = self.get_tab(tab_id)
        return tab is not None and tab.history_index < len(tab.history) - 1

    def tabs_in_group(self, group_id: str) -> list[Tab]:
        return [t for t in self._tabs if t.group_id == group_id]

    def is_start_page(self, url: str) -> bool:
        return url == self.config.start_page_url

    def top_sites(self) -> list[Favorite]:
        return self.favorites.top_n(self.config.top_sites_limit)

    # -- Tab lifecycle ----------------------------------------------------

    def create_tab(self, url: str | None = None, title: str | None = None) -> Tab:
        """Open a tab (the start page by default) and make it active."""
        target = self.config.start_page_url
        if url and not self.is_start_page(url.strip()):
            target = normalize_url(url, self.config.search_url) or target
        tab = self._new_tab(target, title)
        self._tabs.append(tab)
        self.active_tab_id = tab.id
        self._save_tabs()
        return tab

    def close_tab(self, tab_id: str) -> None:
        """Close a tab, keeping it on the closed-tab stack for restoration."""
        index = self.index_of(tab_id)
        if index < 0:
            logger.debug("Close of unknown tab %s ignored", tab_id)
            return

        with self.port.batch():
            tab = self._tabs.pop(index)
            if not self.private_mode:
                self.closed_tabs.push(tab, index)
            if tab.group_id is not None:
                self.groups.assign(tab.id, None)

            if not self._tabs:
                replacement = self._new_tab(self.config.start_page_url)
                self._tabs.append(replacement)
                self.active_tab_id = replacement.id
            elif self.active_tab_id == tab_id:
                self.active_tab_id = self._most_recently_accessed().id
            self._save_tabs()

    def close_other_tabs(self, tab_id: str) -> None:
        """Close every tab except ``tab_id``. Start-page tabs are not kept for restore."""
        keep = self.get_tab(tab_id)
        if keep is None:
            return

        with self.port.batch():
            for index, tab in enumerate(self._tabs):
                if tab.id == tab_id:
                    continue
                if not self.private_mode and not self.is_start_page(tab.url):
                    self.closed_tabs.push(tab, index)
                if tab.group_id is not None:
                    self.groups.assign(tab.id, None)
            self._tabs = [keep]
            self.active_tab_id = keep.id
            self._save_tabs()

    def reopen_closed_tab(self) -> Tab | None:
        """Restore the most recently closed tab, at its old position if still valid."""
        with self.port.batch():
            entry = self.closed_tabs.pop()
            if entry is None:
                return None

            tab = copy.deepcopy(entry.tab)
            tab.id = generate_id()
            tab.last_accessed = now_ms()
            if self.groups.get(tab.group_id) is None:
                tab.group_id = None

            index = entry.index if 0 <= entry.index <= len(self._tabs) else len(self._tabs)
            self._tabs.insert(index, tab)
            self.active_tab_id = tab.id
            if tab.group_id is not None:
                self.groups.assign(tab.id, tab.group_id)
            self._save_tabs()
        return tab

    def duplicate_tab(self, tab_id: str) -> Tab | None:
        """Copy a tab's URL and history into a new, unpinned, active tab."""
        source = self.get_tab(tab_id)
        if source is None:
            return None

        tab = copy.deepcopy(source)
        tab.id = generate_id()
        tab.is_pinned = False
        tab.last_accessed = now_ms()
        with self.port.batch():
            self._tabs.append(tab)
            self.active_tab_id = tab.id
            if tab.group_id is not None:
                self.groups.assign(tab.id, tab.group_id)
            self._save_tabs()
        return tab

    def select_tab(self, tab_id: str) -> Tab | None:
        tab = self.get_tab(tab_id)
        if tab is None:
            return None
        self.active_tab_id = tab.id
        tab.last_accessed = now_ms()
        self._save_tabs()
        return tab

    def pin_tab(self, tab_id: str) -> Tab | None:
        """Toggle the pinned flag."""
        tab = self.get_tab(tab_id)
        if tab is None:
            return None
        tab.is_pinned = not tab.is_pinned
        self._save_tabs()
        return tab

    def mute_tab(self, tab_id: str) -> Tab | None:
        """Toggle the muted flag."""
        tab = self.get_tab(tab_id)
        if tab is None:
            return None
        tab.is_muted = not tab.is_muted
        self._save_tabs()
        return tab

    # -- Navigation -------------------------------------------------------

    def navigate(self, tab_id: str, url: str) -> Tab | None:
        """Load ``url`` in a tab, dropping its forward history.

        Outside private mode the visit is recorded in history and counted
        toward favorites; the start page and ``about:`` pages are not.
        """
        tab = self.get_tab(tab_id)
        if tab is None:
            logger.debug("Navigate on unknown tab %s ignored", tab_id)
            return None

        raw = (url or "").strip()
        target = raw if self.is_start_page(raw) else normalize_url(raw, self.config.search_url)
        if not target:
            return tab

        tab.history = tab.history[:tab.history_index + 1] + [target]
        tab.history_index = len(tab.history) - 1
        self._show(tab, target)
        tab.is_loading = not self.is_start_page(target)

        with self.port.batch():
            if not self.private_mode and not is_internal_url(target, self.config.start_page_url):
                self.history.record(target, tab.title, tab.favicon)
                self.favorites.increment(target, tab.title, tab.favicon)
            self._save_tabs()
        return tab

    def back(self, tab_id: str) -> Tab | None:
        tab = self.get_tab(tab_id)
        if tab is None or tab.history_index <= 0:
            return tab
        tab.history_index -= 1
        self._show(tab, tab.history[tab.history_index])
        self._save_tabs()
        return tab

    def forward(self, tab_id: str) -> Tab | None:
        tab = self.get_tab(tab_id)
        if tab is None or tab.history_index >= len(tab.history) - 1:
            return tab
        tab.history_index += 1
        self._show(tab, tab.history[tab.history_index])
        self._save_tabs()
        return tab

    def home(self, tab_id: str) -> Tab | None:
        return self.navigate(tab_id, self.settings.load_ui().home_page)

    def reload(self, tab_id: str) -> Tab | None:
        tab = self.get_tab(tab_id)
        if tab is None:
            return None
        tab.is_loading = not self.is_start_page(tab.url)
        self._save_tabs()
        return tab

    def finish_loading(self, tab_id: str, title: str | None = None) -> Tab | None:
        """Mark a page as loaded, optionally with the title the page reported."""
        tab = self.get_tab(tab_id)
        if tab is None:
            return None
        tab.is_loading = False
        if title:
            tab.title = title
        self._save_tabs()
        return tab

    # -- Groups -----------------------------------------------------------

    def create_group(self, name: str, color: str | TabGroupColor = TabGroupColor.GRAY) -> TabGroup:
        return self.groups.create(name, color)

    def rename_group(self, group_id: str, name: str) -> None:
        self.groups.rename(group_id, name)

    def set_group_color(self, group_id: str, color: str | TabGroupColor) -> None:
        self.groups.set_color(group_id, color)

    def toggle_group_collapse(self, group_id: str) -> None:
        self.groups.toggle_collapse(group_id)

    def delete_group(self, group_id: str) -> None:
        """Delete a group; its tabs stay open, ungrouped."""
        with self.port.batch():
            group = self.groups.delete(group_id)
            if group is None:
                return
            detached = 0
            for tab in self._tabs:
                if tab.group_id == group_id:
                    tab.group_id = None
                    detached += 1
            if detached:
                logger.debug("Detached %d tabs from deleted group %s", detached, group_id)
                self._save_tabs()

    def move_tab_to_group(self, tab_id: str, group_id: str | None) -> Tab | None:
        """Assign a tab to a group; an unknown group id ungroups the tab."""
        tab = self.get_tab(tab_id)
        if tab is None:
            return None
        target = group_id if self.groups.get(group_id) is not None else None
        with self.port.batch():
            tab.group_id = target
            self.groups.assign(tab.id, target)
            self._save_tabs()
        return tab

    # -- Intents on the current page --------------------------------------

    def bookmark_tab(self, tab_id: str, parent_id: str | None = FAVORITES_FOLDER_ID) -> Bookmark | None:
        tab = self._page_tab(tab_id)
        if tab is None:
            return None
        return self.bookmarks.add(tab.url, tab.title or extract_domain(tab.url), parent_id)

    def add_tab_to_reading_list(self, tab_id: str) -> ReadingListItem | None:
        tab = self._page_tab(tab_id)
        if tab is None:
            return None
        return self.reading_list.add(tab.url, tab.title or extract_domain(tab.url))

    def add_tab_to_favorites(self, tab_id: str) -> Favorite | None:
        tab = self._page_tab(tab_id)
        if tab is None:
            return None
        return self.favorites.add(tab.url, tab.title or extract_domain(tab.url), tab.favicon)

    # -- Privacy ----------------------------------------------------------

    def set_private_mode(self, enabled: bool) -> None:
        """While private, nothing about browsing is written to storage."""
        self.privacy = self.settings.save_privacy(private_mode=enabled)
        self.groups.autosave = not enabled
        self.closed_tabs.autosave = not enabled
        logger.info("Private browsing %s", "enabled" if enabled else "disabled")
        if not enabled:
            with self.port.batch():
                self._save_tabs()
                self.groups.save()
                self.closed_tabs.save()

    def clear_browsing_data(
        self,
        history: bool = False,
        cookies: bool = False,
        cache: bool = False,
        closed_tabs: bool = False,
    ) -> None:
        with self.port.batch():
            if history:
                self.history.clear("all")
            if cookies:
                self.port.remove(StorageKeys.PAGE_CACHE)
            if cache:
                self.reading_list.clear_cached_content()
            if closed_tabs:
                self.closed_tabs.clear()

    # -- Internals --------------------------------------------------------

    def _restore(self, initial_url: str) -> None:
        tabs = self.port.load(StorageKeys.TABS, [], lambda data: parse_list(data, Tab.from_dict))

        seen: set[str] = set()
        for tab in tabs:
            if tab.id in seen:
                logger.debug("Dropping duplicate persisted tab %s", tab.id)
                continue
            seen.add(tab.id)
            if self.groups.get(tab.group_id) is None:
                tab.group_id = None
            self._tabs.append(tab)

        if not self._tabs:
            title = START_PAGE_TITLE if self.is_start_page(initial_url) else "New Tab"
            tab = self._new_tab(initial_url, title)
            tab.is_loading = False
            self._tabs.append(tab)
            self._save_tabs()

        self.active_tab_id = self._tabs[0].id
        self.groups.sync_members({t.id: t.group_id for t in self._tabs})
        logger.debug("Restored session with %d tabs", len(self._tabs))

    def _new_tab(self, url: str, title: str | None = None) -> Tab:
        start = self.is_start_page(url)
        return Tab(
            id=generate_id(),
            url=url,
            title=title or (START_PAGE_TITLE if start else extract_domain(url)),
            favicon=None if start else favicon_url(url),
            is_loading=not start,
            history=[url],
            history_index=0,
        )

    def _show(self, tab: Tab, url: str) -> None:
        start = self.is_start_page(url)
        tab.url = url
        tab.title = START_PAGE_TITLE if start else extract_domain(url)
        tab.favicon = None if start else favicon_url(url)
        tab.last_accessed = now_ms()

    def _page_tab(self, tab_id: str) -> Tab | None:
        tab = self.get_tab(tab_id)
        if tab is None or self.is_start_page(tab.url):
            return None
        return tab

    def _most_recently_accessed(self) -> Tab:
        best = self._tabs[0]
        for tab in self._tabs[1:]:
            if tab.last_accessed > best.last_accessed:
                best = tab
        return best

    def _save_tabs(self) -> None:
        if self.private_mode:
            return
        self.port.save(StorageKeys.TABS, self._tabs)
