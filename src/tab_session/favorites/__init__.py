"""Frequently visited sites."""

from tab_session.favorites.models import DEFAULT_FAVORITES, Favorite
from tab_session.favorites.registry import FavoritesRegistry

__all__ = [
    "DEFAULT_FAVORITES",
    "Favorite",
    "FavoritesRegistry",
]
