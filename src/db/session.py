"""Database wiring: declarative base, async engine and the request session.

Every HTTP request gets one AsyncSession from get_async_session. Repositories
add and flush through it; the dependency commits once when the handler
returns and rolls back if it raises. A bank or apply request therefore reads
the ledger, appends its entry and releases its advisory lock in one
transaction.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from src.config.settings import Environment, LogLevel, get_settings


class Base(DeclarativeBase):
    """Metadata owner for the tables in src.db.tables."""


_settings = get_settings()

engine = create_async_engine(
    _settings.DATABASE_URL,
    # SQL echo only when debugging locally
    echo=(_settings.ENVIRONMENT == Environment.DEV and _settings.LOG_LEVEL == LogLevel.DEBUG),
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one transaction per request."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
