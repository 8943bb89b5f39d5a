"""Identifier and URL helpers. Pure functions, no state."""

from __future__ import annotations

import random
import re
import string
from urllib.parse import quote, urlparse

from tab_session.config import DEFAULT_SEARCH_URL, START_PAGE_URL
from tab_session.timeutil import now_ms

_ID_ALPHABET = string.digits + string.ascii_lowercase
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

FAVICON_SERVICE_URL = "https://www.google.com/s2/favicons?domain={domain}&sz=32"


def generate_id() -> str:
    """Return a unique id of the form ``<epoch ms>-<9 base36 chars>``."""
    suffix = "".join(random.choice(_ID_ALPHABET) for _ in range(9))
    return f"{now_ms()}-{suffix}"


def extract_domain(url: str) -> str:
    """Hostname of ``url``, or ``url`` itself when it has none."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return url
    return hostname or url


def favicon_url(url: str) -> str:
    return FAVICON_SERVICE_URL.format(domain=extract_domain(url))


def is_internal_url(url: str, start_page_url: str = START_PAGE_URL) -> bool:
    """True for the start page sentinel and ``about:`` pages."""
    return url == start_page_url or url.lower().startswith("about:")


def normalize_url(text: str, search_url: str = DEFAULT_SEARCH_URL) -> str:
    """Turn address-bar input into a navigable URL.

    Text without a dot, or with any whitespace, becomes a search query.
    Anything else keeps its ``http(s)://`` scheme or gets ``https://``.
    """
    url = (text or "").strip()
    if not url:
        return ""
    if "." not in url or re.search(r"\s", url):
        return search_url.format(query=quote(url, safe="!*'()"))
    if _SCHEME_RE.match(url):
        return url
    return f"https://{url}"
