"""
Database interface for bookmarker.

A Database owns one SQLite file and the single ``bookmarks`` table inside it.
Every method runs in its own session and commits before returning, so each
call is durable on its own. Records handed back to callers are detached
copies; changing them has no effect until update() is called.
"""
import logging
from pathlib import Path
from typing import Optional, List, Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, select, func
from sqlalchemy import delete as sql_delete, update as sql_update
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from bookmarker.models import Base, Bookmark
from bookmarker.config import get_config
from bookmarker.errors import DuplicateURLError, StorageConnectionError, StorageError

logger = logging.getLogger(__name__)


class Database:
    """
    Bookmark store backed by a single SQLite file.

    Examples:
        Database()  # Uses the configured default path
        Database(path="bookmarks.db")
    """

    def __init__(self, path: Optional[str] = None):
        """
        Open or create the database file and make sure the schema exists.

        Args:
            path: Database file path. Uses config default if not provided.

        Raises:
            StorageConnectionError: The file or its directory cannot be opened or created
        """
        config = get_config()

        self.path = Path(path) if path else config.get_database_path()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageConnectionError(
                f"failed to create database directory {self.path.parent}: {exc}"
            ) from exc

        self.url = f"sqlite:///{self.path}"
        self.engine = create_engine(
            self.url,
            poolclass=NullPool,  # one short-lived connection per session
            echo=config.database_echo
        )
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            self.engine.dispose()
            raise StorageConnectionError(f"failed to open database {self.path}: {exc}") from exc

        logger.debug("opened database %s", self.path)

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        """Release the engine and any pooled connections."""
        self.engine.dispose()

    @contextmanager
    def session(self, action: str = "database operation") -> Generator[Session, None, None]:
        """
        Context manager for database sessions.

        Args:
            action: Description used in the StorageError message on failure

        Yields:
            SQLAlchemy session with automatic commit/rollback
        """
        session = self.Session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(f"{action} failed: {exc}") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def add(self, name: str, url: str) -> int:
        """
        Add a bookmark.

        Args:
            name: Display name
            url: The URL to bookmark (must not already be stored)

        Returns:
            The id assigned to the new bookmark

        Raises:
            DuplicateURLError: The URL is already stored
            StorageError: Any other write failure
        """
        with self.session("add bookmark") as session:
            if self._find_by_url(session, url) is not None:
                raise DuplicateURLError(url)

            bookmark = Bookmark(name=name, url=url)
            session.add(bookmark)
            try:
                session.flush()
            except IntegrityError as exc:
                # Another writer may have stored the URL since the check above
                session.rollback()
                if self._find_by_url(session, url) is not None:
                    raise DuplicateURLError(url) from exc
                raise
            bookmark_id = bookmark.id

        logger.info("bookmark %d added", bookmark_id)
        return bookmark_id

    def get(self, id: int) -> Optional[Bookmark]:
        """
        Get a bookmark by id.

        Returns:
            Bookmark instance or None if no row has that id
        """
        with self.session("get bookmark") as session:
            return session.execute(
                select(Bookmark).where(Bookmark.id == id)
            ).scalar_one_or_none()

    def get_by_url(self, url: str) -> Optional[Bookmark]:
        """Get the bookmark stored under an exact URL, or None."""
        with self.session("get bookmark") as session:
            return self._find_by_url(session, url)

    def all(self) -> List[Bookmark]:
        """
        Get all bookmarks in insertion order (id ascending).

        Returns:
            List of bookmarks, empty when the table is empty
        """
        with self.session("list bookmarks") as session:
            result = session.execute(select(Bookmark).order_by(Bookmark.id))
            return list(result.scalars())

    def count(self) -> int:
        """Number of stored bookmarks."""
        with self.session("count bookmarks") as session:
            return session.execute(select(func.count(Bookmark.id))).scalar_one()

    def update(self, id: int, name: str, url: str) -> int:
        """
        Overwrite the name and URL of a bookmark.

        Args:
            id: Bookmark id (unchanged by the update)
            name: New name
            url: New URL

        Returns:
            Rows affected: 1 if updated, 0 if no bookmark has that id

        Raises:
            DuplicateURLError: The URL belongs to a different bookmark
        """
        with self.session("update bookmark") as session:
            if session.get(Bookmark, id) is None:
                return 0

            owner = self._find_by_url(session, url)
            if owner is not None and owner.id != id:
                raise DuplicateURLError(url)

            result = session.execute(
                sql_update(Bookmark).where(Bookmark.id == id).values(name=name, url=url)
            )
            affected = result.rowcount

        if affected:
            logger.info("bookmark %d updated", id)
        return affected

    def delete(self, id: int) -> int:
        """
        Delete a bookmark.

        Returns:
            Rows affected: 1 if deleted, 0 if not found
        """
        with self.session("delete bookmark") as session:
            result = session.execute(sql_delete(Bookmark).where(Bookmark.id == id))
            affected = result.rowcount

        if affected:
            logger.info("bookmark %d deleted", id)
        return affected

    def delete_all(self) -> int:
        """
        Delete every bookmark. Ids are not reused afterwards.

        Returns:
            Number of bookmarks removed
        """
        with self.session("delete all bookmarks") as session:
            result = session.execute(sql_delete(Bookmark))
            affected = result.rowcount

        logger.info("deleted %d bookmarks", affected)
        return affected

    @staticmethod
    def _find_by_url(session: Session, url: str) -> Optional[Bookmark]:
        return session.execute(
            select(Bookmark).where(Bookmark.url == url)
        ).scalar_one_or_none()
