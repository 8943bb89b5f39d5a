"""Netscape bookmark file (``<DL><DT><H3>``/``<A HREF>``) rendering and parsing."""

from __future__ import annotations

import html

from bs4 import BeautifulSoup, Tag

from tab_session.bookmarks.models import Bookmark
from tab_session.exceptions import BookmarkImportError

_HEADER = (
    "<!DOCTYPE NETSCAPE-Bookmark-file-1>\n"
    '<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">\n'
    "<TITLE>Bookmarks</TITLE>\n"
    "<H1>Bookmarks</H1>\n"
)


def render(roots: list[Bookmark]) -> str:
    lines = [_HEADER + "<DL><p>"]
    _render_nodes(roots, lines, depth=1)
    lines.append("</DL><p>")
    return "\n".join(lines) + "\n"


def _render_nodes(nodes: list[Bookmark], lines: list[str], depth: int) -> None:
    indent = "    " * depth
    for node in nodes:
        add_date = node.created_at // 1000
        title = html.escape(node.title, quote=False)
        if node.is_folder:
            lines.append(f'{indent}<DT><H3 ADD_DATE="{add_date}">{title}</H3>')
            lines.append(f"{indent}<DL><p>")
            _render_nodes(node.children or [], lines, depth + 1)
            lines.append(f"{indent}</DL><p>")
        else:
            href = html.escape(node.url or "", quote=True)
            lines.append(f'{indent}<DT><A HREF="{href}" ADD_DATE="{add_date}">{title}</A>')


def parse(document: str) -> list[dict]:
    """Parse a bookmark file into the JSON node shape used by ``import_tree``."""
    soup = BeautifulSoup(document or "", "html.parser")
    top = soup.find("dl")
    if top is None:
        raise BookmarkImportError("No <DL> bookmark list found")
    return _parse_list(top)


def _parse_list(dl: Tag) -> list[dict]:
    nodes: list[dict] = []
    # DT is never closed in these files, so direct items are found by their
    # nearest enclosing DL rather than by parent/child structure.
    for element in dl.find_all(["h3", "a"]):
        if element.find_parent("dl") is not dl:
            continue
        if element.name == "h3":
            sublist = _folder_list(element)
            nodes.append({
                "type": "folder",
                "title": element.get_text(strip=True),
                "children": _parse_list(sublist) if sublist is not None else [],
            })
        else:
            nodes.append({
                "type": "bookmark",
                "title": element.get_text(strip=True),
                "url": element.get("href", ""),
            })
    return nodes


def _folder_list(h3: Tag) -> Tag | None:
    for sibling in h3.next_siblings:
        if isinstance(sibling, Tag):
            return sibling if sibling.name == "dl" else None
    return None
