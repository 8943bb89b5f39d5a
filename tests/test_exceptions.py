"""Tests for exception hierarchy."""

from tab_session.exceptions import (
    BookmarkError,
    BookmarkImportError,
    InvalidColorError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    TabSessionError,
)


def test_all_inherit_from_base():
    for exc_class in [
        StorageError, StorageReadError, StorageWriteError,
        BookmarkError, BookmarkImportError,
        InvalidColorError,
    ]:
        assert issubclass(exc_class, TabSessionError)


def test_storage_hierarchy():
    assert issubclass(StorageReadError, StorageError)
    assert issubclass(StorageWriteError, StorageError)


def test_invalid_color_is_value_error():
    assert issubclass(InvalidColorError, ValueError)


def test_exception_message():
    e = BookmarkImportError("test error")
    assert str(e) == "test error"
