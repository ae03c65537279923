"""FastAPI dependency injection factories for repositories and engine services.

Each repository factory takes AsyncSession via Depends(get_async_session) and
returns a repository instance. Engine services are stateless; the factories
only bind settings. API endpoints use these via Depends().
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import Settings, get_settings
from src.db.session import get_async_session
from src.engine.banking import BankingLedger
from src.engine.pooling import PoolAllocator
from src.repositories.banking import BankEntryRepository
from src.repositories.compliance import ComplianceRepository
from src.repositories.pooling import PoolRepository
from src.repositories.routes import RouteRepository

# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


async def get_route_repo(
    session: AsyncSession = Depends(get_async_session),
) -> RouteRepository:
    return RouteRepository(session)


# ---------------------------------------------------------------------------
# Compliance
# ---------------------------------------------------------------------------


async def get_compliance_repo(
    session: AsyncSession = Depends(get_async_session),
) -> ComplianceRepository:
    return ComplianceRepository(session)


# ---------------------------------------------------------------------------
# Banking
# ---------------------------------------------------------------------------


async def get_bank_entry_repo(
    session: AsyncSession = Depends(get_async_session),
) -> BankEntryRepository:
    return BankEntryRepository(session)


def get_banking_ledger() -> BankingLedger:
    return BankingLedger()


# ---------------------------------------------------------------------------
# Pooling
# ---------------------------------------------------------------------------


async def get_pool_repo(
    session: AsyncSession = Depends(get_async_session),
) -> PoolRepository:
    return PoolRepository(session)


def get_pool_allocator(
    settings: Settings = Depends(get_settings),
) -> PoolAllocator:
    return PoolAllocator(conservation_tol=settings.POOL_TOLERANCE)
