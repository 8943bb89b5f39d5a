"""Tests for the bookmark tree."""

import json

from tab_session.bookmarks.models import BOOKMARKS_BAR_FOLDER_ID, FAVORITES_FOLDER_ID, BookmarkType
from tab_session.bookmarks.tree import BookmarkTree
from tab_session.config import StorageKeys
from tab_session.storage.memory import MemoryKeyValueStore
from tab_session.storage.port import PersistencePort


def make_tree(store=None):
    store = store or MemoryKeyValueStore()
    return BookmarkTree(PersistencePort(store)), store


def test_reserved_folders_created_on_first_use():
    tree, store = make_tree()
    assert [r.id for r in tree.roots()] == [FAVORITES_FOLDER_ID, BOOKMARKS_BAR_FOLDER_ID]
    assert [r.title for r in tree.roots()] == ["Favorites", "Bookmarks Bar"]
    saved = json.loads(store.get(StorageKeys.BOOKMARKS))
    assert saved[0] == {
        "id": "favorites",
        "type": "folder",
        "title": "Favorites",
        "parentId": None,
        "children": [],
        "createdAt": saved[0]["createdAt"],
    }


def test_missing_reserved_folder_is_restored():
    store = MemoryKeyValueStore({
        StorageKeys.BOOKMARKS: json.dumps([
            {"id": "favorites", "type": "folder", "title": "Favorites", "parentId": None,
             "children": [], "createdAt": 1}
        ])
    })
    tree, _ = make_tree(store)
    assert {r.id for r in tree.roots()} == {FAVORITES_FOLDER_ID, BOOKMARKS_BAR_FOLDER_ID}


def test_add_defaults_to_favorites_folder():
    tree, _ = make_tree()
    bookmark = tree.add("https://a.com", "A")
    assert bookmark.type is BookmarkType.BOOKMARK
    assert bookmark.parent_id == FAVORITES_FOLDER_ID
    assert tree.find(FAVORITES_FOLDER_ID).children == [bookmark]


def test_add_to_nested_folder():
    tree, _ = make_tree()
    outer = tree.create_folder("Outer", BOOKMARKS_BAR_FOLDER_ID)
    inner = tree.create_folder("Inner", outer.id)
    bookmark = tree.add("https://deep.com", "Deep", inner.id)
    assert tree.find(inner.id).children == [bookmark]
    assert bookmark.parent_id == inner.id
    assert tree.bookmarks_bar_items() == [outer]


def test_add_with_unknown_parent_falls_back_to_root():
    tree, _ = make_tree()
    bookmark = tree.add("https://a.com", "A", "no-such-folder")
    assert tree.roots()[-1] is bookmark
    assert bookmark.parent_id is None


def test_add_under_a_bookmark_falls_back_to_root():
    tree, _ = make_tree()
    leaf = tree.add("https://a.com", "A")
    child = tree.add("https://b.com", "B", leaf.id)
    assert tree.roots()[-1] is child
    assert leaf.children is None


def test_create_folder_at_root():
    tree, _ = make_tree()
    folder = tree.create_folder("Work")
    assert tree.roots()[-1] is folder
    assert folder.children == []


def test_remove_at_any_depth():
    tree, _ = make_tree()
    a = tree.create_folder("A", FAVORITES_FOLDER_ID)
    b = tree.create_folder("B", a.id)
    c = tree.create_folder("C", b.id)
    bookmark = tree.add("https://deep.com", "Deep", c.id)
    sibling = tree.add("https://stay.com", "Stay", c.id)
    assert tree.remove(bookmark.id)
    assert [n.id for n in tree.find(c.id).children] == [sibling.id]
    assert tree.find(bookmark.id) is None


def test_remove_folder_removes_subtree():
    tree, _ = make_tree()
    folder = tree.create_folder("F", FAVORITES_FOLDER_ID)
    bookmark = tree.add("https://a.com", "A", folder.id)
    tree.remove(folder.id)
    assert tree.find(bookmark.id) is None
    assert not tree.is_bookmarked("https://a.com")


def test_remove_unknown_and_reserved():
    tree, _ = make_tree()
    assert not tree.remove("missing")
    assert not tree.remove(FAVORITES_FOLDER_ID)
    assert tree.find(FAVORITES_FOLDER_ID) is not None


def test_update_merges_allowed_fields():
    tree, _ = make_tree()
    bookmark = tree.add("https://a.com", "A")
    tree.update(bookmark.id, {"title": "Renamed", "id": "hijack"}, url="https://b.com")
    found = tree.find(bookmark.id)
    assert found.title == "Renamed"
    assert found.url == "https://b.com"
    assert tree.update("missing", title="x") is None


def test_update_ignores_values_that_would_not_reload():
    tree, store = make_tree()
    keep = tree.add("https://keep.com", "Keep")
    other = tree.add("https://other.com", "Other")
    folder = tree.create_folder("Folder")
    tree.update(other.id, title=None, url=42)
    tree.update(folder.id, url="https://folder.com", favicon=7)

    reloaded, _ = make_tree(store)
    assert reloaded.find(keep.id).title == "Keep"
    assert reloaded.find(other.id).title == "Other"
    assert reloaded.find(other.id).url == "https://other.com"
    assert reloaded.find(folder.id).url is None
    assert reloaded.find(folder.id).favicon is None


def test_is_bookmarked():
    tree, _ = make_tree()
    folder = tree.create_folder("F", BOOKMARKS_BAR_FOLDER_ID)
    tree.add("https://nested.com", "N", folder.id)
    assert tree.is_bookmarked("https://nested.com")
    assert not tree.is_bookmarked("https://other.com")


def test_walk_is_depth_first_preorder():
    tree, _ = make_tree()
    f1 = tree.create_folder("F1", FAVORITES_FOLDER_ID)
    a = tree.add("https://a.com", "A", f1.id)
    b = tree.add("https://b.com", "B", FAVORITES_FOLDER_ID)
    ids = [n.id for n in tree.walk()]
    assert ids == [FAVORITES_FOLDER_ID, f1.id, a.id, b.id, BOOKMARKS_BAR_FOLDER_ID]


def test_tree_persists():
    port = PersistencePort()
    tree = BookmarkTree(port)
    folder = tree.create_folder("F", FAVORITES_FOLDER_ID)
    tree.add("https://a.com", "A", folder.id)
    reloaded = BookmarkTree(port)
    assert reloaded.find(folder.id).children[0].url == "https://a.com"


def test_export_then_import_recreates_structure():
    tree, _ = make_tree()
    folder = tree.create_folder("Reading", BOOKMARKS_BAR_FOLDER_ID)
    tree.add("https://a.com", "A", folder.id)
    exported = tree.export_tree()

    other, _ = make_tree()
    assert other.import_tree(exported)
    imported = other.roots()[-1]
    assert imported.title.startswith("Imported ")
    assert [c.title for c in imported.children] == ["Favorites", "Bookmarks Bar"]
    bar_copy = imported.children[1]
    assert bar_copy.children[0].title == "Reading"
    assert bar_copy.children[0].children[0].url == "https://a.com"
    assert bar_copy.children[0].id != folder.id


def test_import_accepts_decoded_list():
    tree, _ = make_tree()
    assert tree.import_tree([{"type": "bookmark", "title": "A", "url": "https://a.com"}])
    assert tree.is_bookmarked("https://a.com")


def test_import_rejects_non_sequence():
    tree, store = make_tree()
    before = store.get(StorageKeys.BOOKMARKS)
    assert not tree.import_tree('{"type": "folder"}')
    assert not tree.import_tree("not json")
    assert store.get(StorageKeys.BOOKMARKS) == before
    assert len(tree.roots()) == 2


def test_import_with_bad_node_is_all_or_nothing():
    tree, _ = make_tree()
    payload = [
        {"type": "bookmark", "title": "Good", "url": "https://good.com"},
        {"type": "folder", "title": "F", "children": [{"type": "bookmark", "title": "No url"}]},
    ]
    assert not tree.import_tree(payload)
    assert not tree.is_bookmarked("https://good.com")
    assert len(tree.roots()) == 2
