"""Tests for the closed-tab stack."""

import json

from tab_session.config import StorageKeys
from tab_session.storage.memory import MemoryKeyValueStore
from tab_session.storage.port import PersistencePort
from tab_session.tabs.closed import ClosedTabStack
from tab_session.tabs.models import Tab


def tab(n):
    return Tab(id=f"t{n}", url=f"https://example.com/{n}", title=f"Tab {n}")


def test_push_pop_lifo():
    stack = ClosedTabStack(PersistencePort())
    stack.push(tab(1), 0)
    stack.push(tab(2), 1)
    assert stack.pop().tab.id == "t2"
    entry = stack.pop()
    assert entry.tab.id == "t1"
    assert entry.index == 0
    assert stack.pop() is None


def test_capacity_drops_oldest():
    stack = ClosedTabStack(PersistencePort())
    for i in range(26):
        stack.push(tab(i), i)
    assert len(stack) == 25
    assert stack.peek().tab.id == "t25"
    assert stack.entries()[-1].tab.id == "t1"


def test_push_snapshots_tab():
    stack = ClosedTabStack(PersistencePort())
    original = tab(1)
    stack.push(original, 0)
    original.title = "changed"
    assert stack.peek().tab.title == "Tab 1"


def test_clear_and_persistence():
    store = MemoryKeyValueStore()
    port = PersistencePort(store)
    stack = ClosedTabStack(port)
    stack.push(tab(1), 0)
    assert len(ClosedTabStack(port)) == 1
    stack.clear()
    assert json.loads(store.get(StorageKeys.CLOSED_TABS)) == []


def test_corrupt_entry_loads_empty():
    store = MemoryKeyValueStore({StorageKeys.CLOSED_TABS: json.dumps([{"closedAt": 1}])})
    assert len(ClosedTabStack(PersistencePort(store))) == 0


def test_pop_without_autosave_keeps_stored_stack():
    store = MemoryKeyValueStore()
    port = PersistencePort(store)
    stack = ClosedTabStack(port)
    stack.push(tab(1), 0)
    stack.autosave = False
    assert stack.pop().tab.id == "t1"
    assert len(ClosedTabStack(port)) == 1
    stack.clear()
    assert len(ClosedTabStack(port)) == 0
