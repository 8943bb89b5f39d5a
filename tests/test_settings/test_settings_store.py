"""Tests for privacy and UI settings."""

import json

from tab_session.config import StorageKeys
from tab_session.settings.store import SettingsStore
from tab_session.storage.memory import MemoryKeyValueStore
from tab_session.storage.port import PersistencePort


def test_defaults():
    settings = SettingsStore(PersistencePort())
    privacy = settings.load_privacy()
    assert privacy.block_popups and not privacy.private_mode
    ui = settings.load_ui()
    assert ui.show_bookmarks_bar and ui.show_start_page
    assert ui.sidebar_section == "bookmarks"
    assert ui.home_page == "start-page"


def test_partial_update_merges():
    store = MemoryKeyValueStore()
    settings = SettingsStore(PersistencePort(store))
    settings.save_privacy(private_mode=True)
    settings.save_ui(sidebar_section="history", unknown_flag=True)
    assert json.loads(store.get(StorageKeys.PRIVACY)) == {"blockPopups": True, "privateMode": True}
    assert json.loads(store.get(StorageKeys.SETTINGS)) == {
        "showBookmarksBar": True,
        "showStartPage": True,
        "sidebarSection": "history",
        "homePage": "start-page",
    }


def test_bad_sidebar_section_falls_back():
    store = MemoryKeyValueStore({StorageKeys.SETTINGS: json.dumps({"sidebarSection": "weather"})})
    assert SettingsStore(PersistencePort(store)).load_ui().sidebar_section == "bookmarks"


def test_corrupt_record_uses_defaults():
    store = MemoryKeyValueStore({StorageKeys.PRIVACY: json.dumps(["not", "a", "record"])})
    assert not SettingsStore(PersistencePort(store)).load_privacy().private_mode
