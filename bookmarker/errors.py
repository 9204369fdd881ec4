"""
Exceptions raised by bookmarker.

Storage and export failures are wrapped in these types so callers never
have to inspect SQLAlchemy or driver errors. A missing bookmark is not an
error: lookups return ``None`` and mutations report zero affected rows.
"""


class BookmarkerError(Exception):
    """Base exception for all bookmarker errors."""
    pass


class StorageError(BookmarkerError):
    """Raised when a database statement fails."""
    pass


class StorageConnectionError(StorageError):
    """Raised when the database file cannot be opened or created."""
    pass


class DuplicateURLError(StorageError):
    """Raised when a URL is already stored under another bookmark."""

    def __init__(self, url: str):
        super().__init__(f"url already exists: {url}")
        self.url = url


class ConfigError(BookmarkerError):
    """Raised when a config file or BOOKMARKER_* variable cannot be parsed."""
    pass


class ExportError(BookmarkerError, OSError):
    """Raised when an export file cannot be written."""
    pass


class EmptyResultError(BookmarkerError):
    """Raised by callers that treat an empty collection as a failure."""
    pass


class InvalidURLError(BookmarkerError, ValueError):
    """Raised when a URL is not well formed."""

    def __init__(self, url: str):
        super().__init__(f"invalid url format: {url}")
        self.url = url


class TitleFetchError(BookmarkerError):
    """Raised when a page title cannot be retrieved."""
    pass


class BrowserOpenError(BookmarkerError):
    """Raised when the default browser cannot be launched."""
    pass
