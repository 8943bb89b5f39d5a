"""Tests for the favorites registry."""

import json

from tab_session.config import StorageKeys
from tab_session.favorites.models import DEFAULT_FAVORITES, Favorite
from tab_session.favorites.registry import FavoritesRegistry
from tab_session.storage.memory import MemoryKeyValueStore
from tab_session.storage.port import PersistencePort


def empty_registry():
    return FavoritesRegistry(PersistencePort(), defaults=())


def test_seeds_defaults_on_first_run():
    store = MemoryKeyValueStore()
    registry = FavoritesRegistry(PersistencePort(store))
    assert [f.url for f in registry.favorites()] == [f.url for f in DEFAULT_FAVORITES]
    assert len(json.loads(store.get(StorageKeys.FAVORITES))) == len(DEFAULT_FAVORITES)


def test_seeding_does_not_share_default_instances():
    registry = FavoritesRegistry(PersistencePort())
    registry.increment("https://github.com", "GitHub")
    assert DEFAULT_FAVORITES[1].visit_count == 90


def test_existing_favorites_are_not_reseeded():
    store = MemoryKeyValueStore({
        StorageKeys.FAVORITES: json.dumps([
            {"id": "x", "url": "https://x.com", "title": "X", "visitCount": 2}
        ])
    })
    registry = FavoritesRegistry(PersistencePort(store))
    assert [f.id for f in registry.favorites()] == ["x"]


def test_increment_creates_then_counts():
    registry = empty_registry()
    first = registry.increment("https://a.com", "A")
    assert first.visit_count == 1
    again = registry.increment("https://a.com", "Ignored title")
    assert again is first
    assert again.visit_count == 2
    assert again.title == "A"
    assert len(registry.favorites()) == 1


def test_top_n_ranking_is_stable():
    registry = empty_registry()
    for url, count in [("A", 5), ("B", 5), ("C", 10)]:
        favorite = registry.increment(url, url)
        favorite.visit_count = count
    assert [f.url for f in registry.top_n(3)] == ["C", "A", "B"]


def test_top_n_limit():
    registry = FavoritesRegistry(PersistencePort())
    top = registry.top_n(2)
    assert [f.title for f in top] == ["Google", "GitHub"]
    assert registry.top_n(0) == []


def test_remove():
    registry = empty_registry()
    favorite = registry.increment("https://a.com", "A")
    registry.remove("missing")
    registry.remove(favorite.id)
    assert registry.favorites() == []


def test_visit_counts_persist():
    port = PersistencePort()
    registry = FavoritesRegistry(port, defaults=())
    registry.increment("https://a.com", "A")
    registry.increment("https://a.com", "A")
    reloaded = FavoritesRegistry(port, defaults=())
    assert reloaded.favorites() == [
        Favorite(id=registry.favorites()[0].id, url="https://a.com", title="A", visit_count=2)
    ]
