import os

import pytest

from bookmarker import config as config_module
from bookmarker.db import Database
from bookmarker.models import Bookmark


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep every test away from the real home directory and config files."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / "data"))
    for key in list(os.environ):
        if key.startswith("BOOKMARKER_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "_config", None)
    yield


@pytest.fixture
def db_path(tmp_path):
    """Path for a fresh database file."""
    return str(tmp_path / "test.db")


@pytest.fixture
def db(db_path):
    """Create an empty temporary database."""
    database = Database(db_path)
    yield database
    database.close()


@pytest.fixture
def seeded_db(db):
    """Database holding the Google and Reddit bookmarks."""
    db.add("Google", "google.com")
    db.add("Reddit", "reddit.com")
    return db


@pytest.fixture
def sample_bookmarks():
    """In-memory bookmarks for renderer tests."""
    return [
        Bookmark(id=1, name="Google", url="google.com"),
        Bookmark(id=2, name="Reddit", url="reddit.com"),
    ]
