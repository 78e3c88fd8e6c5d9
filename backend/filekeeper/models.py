from datetime import datetime
from typing import Optional

from sqlalchemy import Index, Integer, LargeBinary, String
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class ISODatetime(TypeDecorator):
    """Timezone-aware datetime persisted as an ISO-8601 string."""

    impl = String(64)

    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(
                "Naive datetime is not allowed. Please provide a timezone-aware datetime."
            )
        return value.isoformat()

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return datetime.fromisoformat(value)


class Base(AsyncAttrs, DeclarativeBase):
    """SQLAlchemy declarative base for the embedded store's collections."""

    pass


class StoredFile(Base):
    """Row of the ``files`` collection, keyed by file name."""

    __tablename__ = "files"

    name: Mapped[str] = mapped_column(String, primary_key=True)
    # Not a foreign key: the repository enforces folder references itself
    folder_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    content: Mapped[bytes] = mapped_column(LargeBinary)

    __table_args__ = (Index("ix_files_folder_id", "folder_id"),)


class StoredFolder(Base):
    """Row of the ``folders`` collection, keyed by a store-assigned id."""

    __tablename__ = "folders"
    # AUTOINCREMENT keeps ids monotonic and never reused after deletion
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String)
    created_at: Mapped[datetime] = mapped_column(ISODatetime())
