"""
bookmarker - a command-line bookmark manager

Keeps name/URL pairs in a single SQLite file and renders them as text,
JSON or Markdown.

Example Usage:
    >>> from bookmarker import Database, to_text
    >>> db = Database("bookmarks.db")
    >>> db.add("Google", "google.com")
    1
    >>> print(to_text(db.all()), end="")
    1. Google - google.com
"""

__version__ = "1.0.0"

# Core database API
from bookmarker.db import Database

# Configuration
from bookmarker.config import BookmarkerConfig, get_config, init_config, get_base_dir

# Models
from bookmarker.models import Bookmark

# Export
from bookmarker.exporters import export_file, to_text, to_json, to_markdown, format_for_path

# Errors
from bookmarker.errors import (
    BookmarkerError,
    StorageError,
    StorageConnectionError,
    DuplicateURLError,
    ConfigError,
    ExportError,
    EmptyResultError,
    InvalidURLError,
)

__all__ = [
    # Database
    "Database",
    # Config
    "BookmarkerConfig",
    "get_config",
    "init_config",
    "get_base_dir",
    # Models
    "Bookmark",
    # Export
    "export_file",
    "to_text",
    "to_json",
    "to_markdown",
    "format_for_path",
    # Errors
    "BookmarkerError",
    "StorageError",
    "StorageConnectionError",
    "DuplicateURLError",
    "ConfigError",
    "ExportError",
    "EmptyResultError",
    "InvalidURLError",
]
