"""
Async SQLAlchemy setup for the cash-flow store.

  - engine / AsyncSessionLocal: one engine per process, one session per request
  - Base: declarative base for User, Transaction and Category
  - init_database() / close_database(): called from the app lifespan
  - get_db(): request-scoped session dependency

Services scope every statement to the owning user; report generation reads
one snapshot of transactions and never writes.
"""

from pathlib import Path

import structlog
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

logger = structlog.get_logger()


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
)

# Objects stay readable after commit; an expired attribute would need a
# synchronous refresh, which async sessions cannot do.
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE unless this pragma is on per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if engine.url.get_backend_name() == "sqlite":
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)


def _sqlite_file(url: str) -> Path | None:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite" or parsed.database in (None, "", ":memory:"):
        return None
    return Path(parsed.database)


async def init_database() -> None:
    """Create the SQLite directory if needed, then any missing tables."""
    db_file = _sqlite_file(settings.DATABASE_URL)
    if db_file is not None:
        db_file.parent.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("database_initialized", backend=engine.url.get_backend_name())


async def close_database() -> None:
    await engine.dispose()
    logger.info("database_closed")


async def get_db():
    """
    Yield a session for one request.

    Commits when the handler returns and rolls back if it raises, so a
    failed edit or bulk delete never leaves partial changes behind.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
