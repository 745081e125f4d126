"""Legacy Statistics Source — read-only async engine for the SMO_V1 database.

Invariants:
    - Optional: None when LEGACY_DATABASE_URL is unset (routes report a config error)
    - Only raw SQL via text(); no ORM models map legacy tables
    - Rows are returned as plain dicts (JSON-serializable by FastAPI)
"""

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

logger = logging.getLogger(__name__)


class StatisticsSource:
    """Executes raw queries against the legacy statistics database."""

    def __init__(self, database_url: str, pool_size: int = 5):
        self.engine: AsyncEngine = create_async_engine(
            database_url, pool_size=pool_size, pool_pre_ping=True,
        )

    async def fetch_all(
        self, sql: str, params: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        async with self.engine.connect() as conn:
            result = await conn.execute(text(sql), params or {})
            return [dict(row) for row in result.mappings().all()]

    async def dispose(self) -> None:
        await self.engine.dispose()


statistics_source: StatisticsSource | None = None


def init_statistics_source(database_url: str | None) -> None:
    global statistics_source
    if not database_url:
        logger.info("Legacy statistics database not configured")
        statistics_source = None
        return
    statistics_source = StatisticsSource(database_url)


async def close_statistics_source() -> None:
    global statistics_source
    if statistics_source:
        await statistics_source.dispose()
        statistics_source = None


def get_statistics_source() -> StatisticsSource | None:
    """FastAPI dependency — returns the configured source or None."""
    return statistics_source
