"""
SQLAlchemy models for bookmarker.

A single table holds every bookmark. The schema is static: there are no
migrations, and ``create_all`` is safe to run on every start-up.
"""
from sqlalchemy import Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class Bookmark(Base):
    """
    A saved URL with a human-readable name.

    Attributes:
        id: Primary key, assigned by the store and never reused
        name: Label shown in listings and exports
        url: The bookmarked address, unique across the table
    """
    __tablename__ = 'bookmarks'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    # AUTOINCREMENT keeps ids monotonic even after every row is deleted
    __table_args__ = {'sqlite_autoincrement': True}

    def to_dict(self) -> dict:
        """Serializable view of the bookmark; the id is internal and omitted."""
        return {"name": self.name, "url": self.url}

    def __repr__(self):
        return f"<Bookmark(id={self.id}, name='{self.name[:50]}', url='{self.url[:50]}')>"
