from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import settings
from ..models import Base


def create_engine(database_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """Create the async engine for the embedded store.

    Plain ``sqlite:///`` URLs are rewritten to use the aiosqlite driver.
    """
    url = database_url or settings.database_url
    if url.startswith("sqlite:///"):
        url = "sqlite+aiosqlite:///" + url.removeprefix("sqlite:///")
    return create_async_engine(url, echo=settings.echo_sql if echo is None else echo)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine):
    """Create the ``files`` and ``folders`` tables if they are missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
