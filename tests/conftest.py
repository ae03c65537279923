"""Fixtures shared by the repository, API and seed tests.

Every test runs against a fresh in-memory SQLite database. The session a test
sees is bound to a connection whose outer transaction is rolled back at
teardown, so commits made by the request dependency never persist.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from src.db.session import Base, get_async_session
import src.db.tables  # noqa: F401  routes, ship_compliance, bank_entries, pools


@pytest.fixture
async def db_engine():
    """In-memory SQLite with the FuelEU schema; one shared connection."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Session nested in a SAVEPOINT that is reopened after every commit."""
    async with db_engine.connect() as conn:
        outer = await conn.begin()
        await conn.begin_nested()
        session = AsyncSession(bind=conn, expire_on_commit=False)

        @event.listens_for(session.sync_session, "after_transaction_end")
        def _reopen_savepoint(sync_session, transaction):  # noqa: ARG001
            if transaction.nested and not transaction._parent.nested:
                conn.sync_connection.begin_nested()

        yield session

        await session.close()
        await outer.rollback()


@pytest.fixture
async def client(db_session):
    """HTTP client for the app, with every request using db_session."""
    from src.api.main import app

    async def _test_session():
        yield db_session

    app.dependency_overrides[get_async_session] = _test_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded_routes(db_session):
    """Sample routes R001–R005 (R001 is the baseline), without snapshots."""
    from scripts.seed import seed_routes

    return await seed_routes(db_session)
