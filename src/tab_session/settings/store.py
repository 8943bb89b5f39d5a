"""Privacy and UI settings, each a single persisted record."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from tab_session.config import StorageKeys
from tab_session.settings.models import PrivacySettings, UISettings
from tab_session.storage.port import PersistencePort

logger = logging.getLogger(__name__)


class SettingsStore:
    """Partial updates merge over the stored record."""

    def __init__(self, port: PersistencePort):
        self.port = port

    def load_privacy(self) -> PrivacySettings:
        return self.port.load(StorageKeys.PRIVACY, PrivacySettings(), PrivacySettings.from_dict)

    def save_privacy(self, **changes: Any) -> PrivacySettings:
        settings = _merge(self.load_privacy(), changes)
        self.port.save(StorageKeys.PRIVACY, settings)
        return settings

    def load_ui(self) -> UISettings:
        return self.port.load(StorageKeys.SETTINGS, UISettings(), UISettings.from_dict)

    def save_ui(self, **changes: Any) -> UISettings:
        settings = _merge(self.load_ui(), changes)
        self.port.save(StorageKeys.SETTINGS, settings)
        return settings


def _merge(current: Any, changes: dict[str, Any]) -> Any:
    known = {f.name for f in dataclasses.fields(current)}
    unknown = set(changes) - known
    if unknown:
        logger.debug("Ignoring unknown settings: %s", ", ".join(sorted(unknown)))
    return dataclasses.replace(current, **{k: v for k, v in changes.items() if k in known})
