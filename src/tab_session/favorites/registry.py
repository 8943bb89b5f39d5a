"""Frequency-ranked registry of visited URLs for the start page."""

from __future__ import annotations

import copy
import logging
from typing import Iterable

from tab_session.config import TOP_SITES_LIMIT, StorageKeys
from tab_session.favorites.models import DEFAULT_FAVORITES, Favorite
from tab_session.serialization import parse_list
from tab_session.storage.port import PersistencePort
from tab_session.urls import generate_id

logger = logging.getLogger(__name__)


class FavoritesRegistry:
    """Visit counters per URL. Ranking is derived on read, never stored.

    An empty registry is re-seeded from ``defaults`` so the start page always
    has something to show; pass ``defaults=()`` to disable seeding.
    """

    def __init__(self, port: PersistencePort, defaults: Iterable[Favorite] = DEFAULT_FAVORITES):
        self.port = port
        self._favorites: list[Favorite] = port.load(
            StorageKeys.FAVORITES, [], lambda data: parse_list(data, Favorite.from_dict)
        )
        if not self._favorites:
            self._favorites = [copy.copy(f) for f in defaults]
            if self._favorites:
                logger.debug("Seeded %d default favorites", len(self._favorites))
                self._save()

    def favorites(self) -> list[Favorite]:
        return list(self._favorites)

    def find_by_url(self, url: str) -> Favorite | None:
        return next((f for f in self._favorites if f.url == url), None)

    def increment(self, url: str, title: str, favicon: str | None = None) -> Favorite:
        """Count a visit, creating the favorite on its first one."""
        favorite = self.find_by_url(url)
        if favorite is not None:
            favorite.visit_count += 1
        else:
            favorite = Favorite(id=generate_id(), url=url, title=title, visit_count=1, favicon=favicon)
            self._favorites.append(favorite)
        self._save()
        return favorite

    add = increment

    def remove(self, favorite_id: str) -> None:
        remaining = [f for f in self._favorites if f.id != favorite_id]
        if len(remaining) != len(self._favorites):
            self._favorites = remaining
            self._save()

    def top_n(self, limit: int = TOP_SITES_LIMIT) -> list[Favorite]:
        """Most visited first; equal counts keep insertion order."""
        ranked = sorted(self._favorites, key=lambda f: f.visit_count, reverse=True)
        return ranked[:max(0, limit)]

    def _save(self) -> None:
        self.port.save(StorageKeys.FAVORITES, self._favorites)
