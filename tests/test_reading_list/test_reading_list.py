"""Tests for the reading list."""

import json

from tab_session.config import StorageKeys
from tab_session.reading_list.reading_list import ReadingList, extract_text
from tab_session.storage.memory import MemoryKeyValueStore
from tab_session.storage.port import PersistencePort


def make_list():
    store = MemoryKeyValueStore()
    return ReadingList(PersistencePort(store)), store


def test_add_newest_first():
    reading_list, _ = make_list()
    a = reading_list.add("https://a.com", "A")
    b = reading_list.add("https://b.com", "B", "about b")
    assert [i.id for i in reading_list.items()] == [b.id, a.id]
    assert b.description == "about b"
    assert not a.is_read


def test_add_dedupes_by_url():
    reading_list, _ = make_list()
    first = reading_list.add("https://a.com", "A")
    second = reading_list.add("https://a.com", "Different title")
    assert second is first
    assert second.title == "A"
    assert len(reading_list.items()) == 1


def test_toggle_read_twice_restores_state():
    reading_list, _ = make_list()
    item = reading_list.add("https://a.com", "A")
    reading_list.toggle_read(item.id)
    assert item.is_read
    reading_list.toggle_read(item.id)
    assert not item.is_read


def test_toggle_unknown_id_is_noop():
    reading_list, _ = make_list()
    assert reading_list.toggle_read("missing") is None


def test_unread():
    reading_list, _ = make_list()
    a = reading_list.add("https://a.com", "A")
    reading_list.add("https://b.com", "B")
    reading_list.toggle_read(a.id)
    assert [i.url for i in reading_list.unread()] == ["https://b.com"]


def test_remove():
    reading_list, store = make_list()
    item = reading_list.add("https://a.com", "A")
    reading_list.remove(item.id)
    assert reading_list.items() == []
    assert json.loads(store.get(StorageKeys.READING_LIST)) == []


def test_cache_plain_text():
    reading_list, _ = make_list()
    item = reading_list.add("https://a.com", "A", "kept")
    reading_list.cache_content(item.id, "Plain text body")
    assert item.cached_content == "Plain text body"
    assert item.description == "kept"


def test_cache_html_extracts_text_and_fills_description():
    reading_list, store = make_list()
    item = reading_list.add("https://a.com", "A")
    html = (
        "<html><head><title>T</title><script>var x = 1;</script></head>"
        "<body><nav>Menu</nav><p>Hello reader.</p><p>Second paragraph.</p></body></html>"
    )
    reading_list.cache_content(item.id, html)
    assert item.cached_content == "Hello reader.\nSecond paragraph."
    assert item.description == "Hello reader. Second paragraph."
    saved = json.loads(store.get(StorageKeys.READING_LIST))[0]
    assert saved["cachedContent"] == "Hello reader.\nSecond paragraph."


def test_clear_cached_content():
    reading_list, store = make_list()
    item = reading_list.add("https://a.com", "A")
    reading_list.cache_content(item.id, "body")
    reading_list.clear_cached_content()
    assert item.cached_content is None
    assert "cachedContent" not in json.loads(store.get(StorageKeys.READING_LIST))[0]


def test_extract_text_strips_styles():
    assert extract_text("<div><style>p{}</style>Visible</div>") == "Visible"


def test_reload_from_storage():
    port = PersistencePort()
    reading_list = ReadingList(port)
    item = reading_list.add("https://a.com", "A")
    reading_list.toggle_read(item.id)
    reloaded = ReadingList(port)
    assert reloaded.get(item.id).is_read
