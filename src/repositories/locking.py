"""Transaction-scoped advisory locks for read-validate-write sequences.

The lock id is hashed from a deterministic string key, so every writer of the
same resource contends on the same lock. The lock is released when the
request transaction commits or rolls back. Dialects other than PostgreSQL
(SQLite in tests) run single-writer and skip it.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession


async def advisory_xact_lock(session: AsyncSession, key: str) -> None:
    if session.get_bind().dialect.name != "postgresql":
        return
    await session.execute(
        text("SELECT pg_advisory_xact_lock(hashtext(:key))"),
        {"key": key},
    )
