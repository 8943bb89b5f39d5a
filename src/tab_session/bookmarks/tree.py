"""Recursive folder/bookmark tree rooted at two reserved folders."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Iterator

from tab_session.bookmarks.models import (
    BOOKMARKS_BAR_FOLDER_ID,
    FAVORITES_FOLDER_ID,
    RESERVED_FOLDER_IDS,
    Bookmark,
    BookmarkType,
    default_root_folders,
)
from tab_session.bookmarks import netscape
from tab_session.config import StorageKeys
from tab_session.exceptions import BookmarkImportError
from tab_session.serialization import parse_list
from tab_session.storage.port import PersistencePort
from tab_session.urls import generate_id

logger = logging.getLogger(__name__)

# Fields callers may change through ``update``; structure fields are excluded
# so the tree stays acyclic.
UPDATABLE_FIELDS = ("title", "url", "favicon")


class BookmarkTree:
    """Bookmarks and folders, traversed depth-first in insertion order.

    Each folder owns its children; nodes carry their parent's id but no
    back-pointer.
    """

    def __init__(self, port: PersistencePort):
        self.port = port
        self._roots: list[Bookmark] = port.load(
            StorageKeys.BOOKMARKS, [], lambda data: parse_list(data, Bookmark.from_dict)
        )
        if self._ensure_reserved_folders():
            self._save()

    def roots(self) -> list[Bookmark]:
        return list(self._roots)

    def walk(self) -> Iterator[Bookmark]:
        """Every node, depth-first pre-order."""
        return _walk(self._roots)

    def find(self, bookmark_id: str) -> Bookmark | None:
        return next((node for node in self.walk() if node.id == bookmark_id), None)

    def is_bookmarked(self, url: str) -> bool:
        return any(node.url == url for node in self.walk())

    def bookmarks_bar_items(self) -> list[Bookmark]:
        folder = self.find(BOOKMARKS_BAR_FOLDER_ID)
        return list(folder.children or []) if folder else []

    def add(self, url: str, title: str, parent_id: str | None = FAVORITES_FOLDER_ID) -> Bookmark:
        """Append a bookmark to ``parent_id``, or to the root list if it is missing."""
        bookmark = Bookmark(id=generate_id(), type=BookmarkType.BOOKMARK, title=title, url=url)
        self._insert(bookmark, parent_id)
        self._save()
        return bookmark

    def create_folder(self, name: str, parent_id: str | None = None) -> Bookmark:
        folder = Bookmark(id=generate_id(), type=BookmarkType.FOLDER, title=name)
        self._insert(folder, parent_id)
        self._save()
        return folder

    def remove(self, bookmark_id: str) -> bool:
        """Prune a node (and its subtree) from wherever it lives.

        The reserved root folders cannot be removed.
        """
        if bookmark_id in RESERVED_FOLDER_IDS:
            logger.debug("Refusing to remove reserved folder %s", bookmark_id)
            return False
        removed = _remove_from(self._roots, bookmark_id)
        if removed:
            self._save()
        return removed

    def update(self, bookmark_id: str, updates: dict[str, Any] | None = None, **fields: Any) -> Bookmark | None:
        """Merge ``updates`` into the node with ``bookmark_id``.

        Only title, url and favicon can change. Other keys, and values the
        tree could not load back (a non-string title, a url on a folder),
        are ignored.
        """
        node = self.find(bookmark_id)
        if node is None:
            return None
        changes = {**(updates or {}), **fields}
        for key, value in changes.items():
            if key not in UPDATABLE_FIELDS:
                logger.debug("Ignoring update of bookmark field %r", key)
                continue
            if not _valid_update(node, key, value):
                logger.debug("Ignoring invalid %s for bookmark %s: %r", key, bookmark_id, value)
                continue
            setattr(node, key, value)
        self._save()
        return node

    def export_tree(self) -> str:
        return json.dumps([root.to_dict() for root in self._roots], indent=2, ensure_ascii=False)

    def import_tree(self, payload: str | list) -> bool:
        """Recreate an exported tree under a new "Imported <date>" folder.

        The whole payload is validated before anything is inserted; on
        failure the existing tree is untouched and False is returned.
        """
        try:
            nodes = _validate_import(payload)
        except BookmarkImportError as e:
            logger.warning("Bookmark import rejected: %s", e)
            return False
        self._import_nodes(nodes)
        return True

    def export_html(self) -> str:
        """Netscape bookmark file, the format desktop browsers exchange."""
        return netscape.render(self._roots)

    def import_html(self, html: str) -> bool:
        try:
            nodes = _validate_import(netscape.parse(html))
        except BookmarkImportError as e:
            logger.warning("Bookmark HTML import rejected: %s", e)
            return False
        self._import_nodes(nodes)
        return True

    def _import_nodes(self, nodes: list[dict]) -> None:
        today = date.today()
        folder = Bookmark(
            id=generate_id(),
            type=BookmarkType.FOLDER,
            title=f"Imported {today.month}/{today.day}/{today.year}",
        )
        self._insert(folder, None)
        count = self._insert_imported(nodes, folder.id)
        self._save()
        logger.info("Imported %d bookmarks into %s", count, folder.title)

    def _insert_imported(self, nodes: list[dict], parent_id: str) -> int:
        count = 0
        for data in nodes:
            if data["type"] == BookmarkType.FOLDER.value:
                folder = Bookmark(id=generate_id(), type=BookmarkType.FOLDER, title=data["title"])
                self._insert(folder, parent_id)
                count += self._insert_imported(data.get("children") or [], folder.id)
            else:
                bookmark = Bookmark(
                    id=generate_id(),
                    type=BookmarkType.BOOKMARK,
                    title=data["title"],
                    url=data["url"],
                )
                self._insert(bookmark, parent_id)
                count += 1
        return count

    def _insert(self, node: Bookmark, parent_id: str | None) -> None:
        parent = self.find(parent_id) if parent_id is not None else None
        if parent is not None and parent.is_folder:
            node.parent_id = parent.id
            parent.children.append(node)
            return
        if parent_id is not None:
            logger.debug("Parent %s not found, adding %s at the root", parent_id, node.id)
        node.parent_id = None
        self._roots.append(node)

    def _ensure_reserved_folders(self) -> bool:
        present = {root.id for root in self._roots}
        missing = [f for f in default_root_folders() if f.id not in present]
        self._roots[:0] = missing
        return bool(missing)

    def _save(self) -> None:
        self.port.save(StorageKeys.BOOKMARKS, self._roots)


def _walk(nodes: list[Bookmark]) -> Iterator[Bookmark]:
    for node in nodes:
        yield node
        if node.children:
            yield from _walk(node.children)


def _remove_from(nodes: list[Bookmark], bookmark_id: str) -> bool:
    for i, node in enumerate(nodes):
        if node.id == bookmark_id:
            del nodes[i]
            return True
        if node.children and _remove_from(node.children, bookmark_id):
            return True
    return False


def _valid_update(node: Bookmark, key: str, value: Any) -> bool:
    if key == "title":
        return isinstance(value, str)
    if key == "url":
        return not node.is_folder and isinstance(value, str) and bool(value)
    return value is None or isinstance(value, str)


def _validate_import(payload: Any) -> list[dict]:
    """Decode and check an import payload, raising ``BookmarkImportError``."""
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise BookmarkImportError(f"Not valid JSON: {e}") from e
    if not isinstance(payload, list):
        raise BookmarkImportError("Top level must be an array of bookmarks")
    for node in payload:
        _validate_node(node)
    return payload


def _validate_node(node: Any) -> None:
    if not isinstance(node, dict):
        raise BookmarkImportError("Every node must be an object")
    kind = node.get("type")
    if kind not in (BookmarkType.FOLDER.value, BookmarkType.BOOKMARK.value):
        raise BookmarkImportError(f"Unknown node type: {kind!r}")
    if not isinstance(node.get("title"), str):
        raise BookmarkImportError("Every node needs a string title")
    if kind == BookmarkType.BOOKMARK.value:
        if not isinstance(node.get("url"), str) or not node["url"]:
            raise BookmarkImportError(f"Bookmark {node['title']!r} has no url")
        return
    children = node.get("children")
    if children is None:
        return
    if not isinstance(children, list):
        raise BookmarkImportError(f"Folder {node['title']!r} children must be an array")
    for child in children:
        _validate_node(child)
