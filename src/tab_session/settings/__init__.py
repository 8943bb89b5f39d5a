"""Privacy and UI settings records."""

from tab_session.settings.models import SIDEBAR_SECTIONS, PrivacySettings, UISettings
from tab_session.settings.store import SettingsStore

__all__ = [
    "SIDEBAR_SECTIONS",
    "PrivacySettings",
    "UISettings",
    "SettingsStore",
]
