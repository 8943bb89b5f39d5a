"""Registry of named, colored, collapsible tab groups."""

from __future__ import annotations

import logging

from tab_session.config import StorageKeys
from tab_session.serialization import parse_list
from tab_session.storage.port import PersistencePort
from tab_session.tabs.models import TabGroup, TabGroupColor
from tab_session.urls import generate_id

logger = logging.getLogger(__name__)


class TabGroupRegistry:
    """Owns group records and their member lists; never tab lifetime.

    ``autosave`` is switched off while browsing privately so group changes
    stay in memory.
    """

    def __init__(self, port: PersistencePort):
        self.port = port
        self.autosave = True
        self._groups: list[TabGroup] = port.load(
            StorageKeys.TAB_GROUPS, [], lambda data: parse_list(data, TabGroup.from_dict)
        )

    def groups(self) -> list[TabGroup]:
        return list(self._groups)

    def get(self, group_id: str | None) -> TabGroup | None:
        if group_id is None:
            return None
        return next((g for g in self._groups if g.id == group_id), None)

    def create(self, name: str, color: str | TabGroupColor = TabGroupColor.GRAY) -> TabGroup:
        group = TabGroup(id=generate_id(), name=name, color=TabGroupColor.parse(color))
        self._groups.append(group)
        self.save()
        return group

    def rename(self, group_id: str, name: str) -> None:
        group = self.get(group_id)
        if group is None:
            logger.debug("Rename of unknown group %s ignored", group_id)
            return
        group.name = name
        self.save()

    def set_color(self, group_id: str, color: str | TabGroupColor) -> None:
        group = self.get(group_id)
        if group is None:
            return
        group.color = TabGroupColor.parse(color)
        self.save()

    def toggle_collapse(self, group_id: str) -> None:
        group = self.get(group_id)
        if group is None:
            return
        group.is_collapsed = not group.is_collapsed
        self.save()

    def delete(self, group_id: str) -> TabGroup | None:
        """Drop the group record and return it so callers can detach its tabs."""
        group = self.get(group_id)
        if group is None:
            return None
        self._groups.remove(group)
        self.save()
        return group

    def assign(self, tab_id: str, group_id: str | None) -> None:
        """Make ``group_id`` the only group listing ``tab_id`` (None: no group)."""
        for group in self._groups:
            if tab_id in group.tab_ids and group.id != group_id:
                group.tab_ids.remove(tab_id)
        group = self.get(group_id)
        if group is not None and tab_id not in group.tab_ids:
            group.tab_ids.append(tab_id)
        self.save()

    def sync_members(self, memberships: dict[str, str | None]) -> None:
        """Rebuild every member list from a ``tab id -> group id`` mapping."""
        for group in self._groups:
            group.tab_ids = [tab_id for tab_id, gid in memberships.items() if gid == group.id]
        self.save()

    def save(self) -> None:
        if self.autosave:
            self.port.save(StorageKeys.TAB_GROUPS, self._groups)
