"""Open tabs, tab groups, recently closed tabs and the session store."""

from tab_session.tabs.closed import ClosedTabStack
from tab_session.tabs.groups import TabGroupRegistry
from tab_session.tabs.models import ClosedTab, Tab, TabGroup, TabGroupColor
from tab_session.tabs.store import TabSessionStore

__all__ = [
    "ClosedTabStack",
    "TabGroupRegistry",
    "ClosedTab",
    "Tab",
    "TabGroup",
    "TabGroupColor",
    "TabSessionStore",
]
