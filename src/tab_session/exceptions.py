"""Unified exception hierarchy for tab-session."""


class TabSessionError(Exception):
    """Base exception for all tab-session errors."""


# Storage
class StorageError(TabSessionError):
    """Base exception for key-value store operations."""


class StorageReadError(StorageError):
    """Failed to read a value from the key-value store."""


class StorageWriteError(StorageError):
    """Failed to write or delete a value in the key-value store."""


# Bookmarks
class BookmarkError(TabSessionError):
    """Base exception for bookmark tree operations."""


class BookmarkImportError(BookmarkError):
    """Import payload is malformed or missing required fields."""


# Tab groups
class InvalidColorError(TabSessionError, ValueError):
    """Unknown tab group color name."""
