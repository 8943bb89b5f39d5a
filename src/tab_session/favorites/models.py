"""Data models for the favorites registry."""

from __future__ import annotations

from dataclasses import dataclass

from tab_session.serialization import as_int, drop_none, optional_str, require_dict, require_str


@dataclass
class Favorite:
    """A URL ranked by how often it is visited."""

    id: str
    url: str
    title: str
    visit_count: int = 1
    favicon: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "title": self.title,
            **drop_none({"favicon": self.favicon}),
            "visitCount": self.visit_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Favorite:
        data = require_dict(data)
        return cls(
            id=require_str(data, "id"),
            url=require_str(data, "url"),
            title=optional_str(data, "title") or "",
            visit_count=as_int(data, "visitCount", 0),
            favicon=optional_str(data, "favicon"),
        )


DEFAULT_FAVORITES = (
    Favorite(id="fav-1", url="https://www.google.com", title="Google", visit_count=100),
    Favorite(id="fav-2", url="https://github.com", title="GitHub", visit_count=90),
    Favorite(id="fav-3", url="https://www.youtube.com", title="YouTube", visit_count=80),
    Favorite(id="fav-4", url="https://twitter.com", title="Twitter", visit_count=70),
    Favorite(id="fav-5", url="https://www.reddit.com", title="Reddit", visit_count=60),
    Favorite(id="fav-6", url="https://en.wikipedia.org", title="Wikipedia", visit_count=50),
)
