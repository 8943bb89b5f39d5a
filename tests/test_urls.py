"""Tests for id and URL helpers."""

import re

from tab_session.urls import (
    extract_domain,
    favicon_url,
    generate_id,
    is_internal_url,
    normalize_url,
)


def test_generate_id_format():
    assert re.fullmatch(r"\d{13}-[0-9a-z]{9}", generate_id())


def test_generate_id_unique():
    assert len({generate_id() for _ in range(500)}) == 500


def test_extract_domain():
    assert extract_domain("https://www.example.com/path?q=1") == "www.example.com"
    assert extract_domain("not a url") == "not a url"


def test_favicon_url():
    assert favicon_url("https://github.com/x") == (
        "https://www.google.com/s2/favicons?domain=github.com&sz=32"
    )


def test_normalize_adds_scheme():
    assert normalize_url("example.com") == "https://example.com"
    assert normalize_url("  example.com/a  ") == "https://example.com/a"


def test_normalize_keeps_existing_scheme():
    assert normalize_url("http://example.com") == "http://example.com"
    assert normalize_url("HTTPS://Example.com") == "HTTPS://Example.com"
    assert normalize_url("HTTP://example.com/a") == "HTTP://example.com/a"


def test_normalize_search_without_dot():
    assert normalize_url("python") == "https://duckduckgo.com/?q=python"


def test_normalize_search_with_whitespace():
    assert normalize_url("what is python.org") == (
        "https://duckduckgo.com/?q=what%20is%20python.org"
    )


def test_normalize_search_encodes_like_uri_component():
    assert normalize_url("c++ & rust") == "https://duckduckgo.com/?q=c%2B%2B%20%26%20rust"


def test_normalize_custom_search_engine():
    assert normalize_url("cats", "https://search.example/?s={query}") == (
        "https://search.example/?s=cats"
    )


def test_normalize_blank():
    assert normalize_url("   ") == ""


def test_is_internal_url():
    assert is_internal_url("start-page")
    assert is_internal_url("about:blank")
    assert is_internal_url("home", start_page_url="home")
    assert not is_internal_url("https://example.com")


def test_normalize_whitespace_searches_even_with_scheme():
    assert normalize_url("https://my site.com") == (
        "https://duckduckgo.com/?q=https%3A%2F%2Fmy%20site.com"
    )


def test_normalize_dotless_urls_search():
    assert normalize_url("about:blank") == "https://duckduckgo.com/?q=about%3Ablank"
    assert normalize_url("http://localhost:3000") == (
        "https://duckduckgo.com/?q=http%3A%2F%2Flocalhost%3A3000"
    )
