"""
Storage gateway over the embedded SQLite store.

Exposes two record collections, ``files`` keyed by name and ``folders`` keyed
by a store-assigned integer id, through a small key-value contract:
``get``, ``get_all``, ``put``, ``add`` and ``delete``. Each call runs in its
own session and commits once, so a single call is atomic. Sequences of calls
are not; ordering them safely is the repository's job.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, Literal, NamedTuple, Optional, Union

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from ..errors import InvalidInput, NameCollision, StorageFailure
from ..logger import log_exception, logger
from ..models import Base, StoredFile, StoredFolder
from .database import create_engine, create_session_factory, init_db
from .records import FileRecord, FolderRecord

Collection = Literal["files", "folders"]
Key = Union[str, int]
Record = Union[FileRecord, FolderRecord]


class _CollectionSpec(NamedTuple):
    model: type[Base]
    record: type[BaseModel]
    key_field: str


_COLLECTIONS: dict[str, _CollectionSpec] = {
    "files": _CollectionSpec(StoredFile, FileRecord, "name"),
    "folders": _CollectionSpec(StoredFolder, FolderRecord, "id"),
}


def _spec(collection: str) -> _CollectionSpec:
    try:
        return _COLLECTIONS[collection]
    except KeyError:
        raise InvalidInput(f"Unknown collection {collection!r}") from None


def _to_row(spec: _CollectionSpec, record: BaseModel, exclude: Iterable[str] = ()):
    # Only persisted fields; runtime extras such as display links are dropped
    fields = set(spec.record.model_fields) - set(exclude)
    return spec.model(**record.model_dump(include=fields))


class StorageGateway:
    """Process-wide handle on the embedded store."""

    def __init__(self, engine: Optional[AsyncEngine] = None):
        self._engine = engine if engine is not None else create_engine()
        self._session_factory = create_session_factory(self._engine)
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def init(self) -> None:
        """Create both collections if absent. Safe to call repeatedly."""
        if self._initialized:
            return
        async with self._init_lock:
            if self._initialized:
                return
            try:
                await init_db(self._engine)
            except (SQLAlchemyError, OSError) as e:
                logger.error(f"Failed to initialize store at {self._engine.url}: {e}")
                raise StorageFailure("init", "*") from e
            self._initialized = True
            logger.info(f"Store initialized at {self._engine.url}")

    @log_exception("Closing store")
    async def close(self) -> None:
        await self._engine.dispose()

    @asynccontextmanager
    async def _session(
        self, operation: str, collection: str
    ) -> AsyncIterator[AsyncSession]:
        await self.init()
        try:
            async with self._session_factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Storage {operation} on {collection!r} failed: {e}")
            raise StorageFailure(operation, collection) from e

    async def get(self, collection: Collection, key: Key) -> Optional[Record]:
        spec = _spec(collection)
        async with self._session("get", collection) as session:
            row = await session.get(spec.model, key)
            if row is None:
                return None
            return spec.record.model_validate(row)  # type: ignore[return-value]

    async def get_all(self, collection: Collection) -> list[Record]:
        spec = _spec(collection)
        key_column = getattr(spec.model, spec.key_field)
        async with self._session("get_all", collection) as session:
            result = await session.execute(select(spec.model).order_by(key_column))
            return [spec.record.model_validate(row) for row in result.scalars().all()]  # type: ignore[misc]

    async def put(self, collection: Collection, record: Record) -> None:
        """Insert or replace the record stored under the record's key."""
        spec = _spec(collection)
        if not isinstance(record, spec.record):
            raise InvalidInput(f"Expected {spec.record.__name__} for {collection!r}")
        if getattr(record, spec.key_field) is None:
            raise InvalidInput(f"Cannot put into {collection!r} without a key")

        async with self._session("put", collection) as session:
            await session.merge(_to_row(spec, record))
            await session.commit()
        logger.debug(f"put {collection}[{getattr(record, spec.key_field)!r}]")

    async def add(self, collection: Collection, record: Record) -> Key:
        """Insert a new record and return its key.

        Folder ids are generated by the store; file names must not exist yet.
        """
        spec = _spec(collection)
        if not isinstance(record, spec.record):
            raise InvalidInput(f"Expected {spec.record.__name__} for {collection!r}")

        async with self._session("add", collection) as session:
            if collection == "folders":
                if record.id is not None:  # type: ignore[union-attr]
                    raise InvalidInput("Folder ids are assigned by the store")
                row = _to_row(spec, record, exclude={"id"})
            else:
                key = getattr(record, spec.key_field)
                if await session.get(spec.model, key) is not None:
                    raise NameCollision(key)
                row = _to_row(spec, record)
            session.add(row)
            await session.commit()
            key = getattr(row, spec.key_field)
        logger.debug(f"add {collection}[{key!r}]")
        return key

    async def delete(self, collection: Collection, key: Key) -> None:
        """Remove the record under ``key``; absent keys are ignored."""
        spec = _spec(collection)
        key_column = getattr(spec.model, spec.key_field)
        async with self._session("delete", collection) as session:
            await session.execute(delete(spec.model).where(key_column == key))
            await session.commit()
        logger.debug(f"delete {collection}[{key!r}]")
