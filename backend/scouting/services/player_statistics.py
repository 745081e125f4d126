"""Player/Club Statistics — reads pre-computed analytics from the legacy statistics cache.

Invariants:
    - Table lookup order follows probe_targets(): configured schema, fallback
      schemas, unqualified name; the first query that runs wins (even if empty)
    - Only "does not exist" errors advance the probe; any other error propagates
    - Every query is raced against the configured timeout (QueryTimeoutError)
    - When no location works, the error lists candidate tables from information_schema
"""

import asyncio
import logging
from typing import Any, Awaitable

from sqlalchemy.exc import DBAPIError

from scouting.core.errors import (
    ConfigurationError, QueryTimeoutError, ResourceNotFoundError,
    StatisticsSourceError,
)
from scouting.core.statistics_queries import (
    CANDIDATE_TABLES_QUERY, StatisticsScope, build_statistics_query,
    is_missing_relation_error, is_safe_identifier, probe_targets,
    qualified_table,
)
from scouting.infrastructure.statistics_source import StatisticsSource

logger = logging.getLogger(__name__)


async def _within(awaitable: Awaitable, timeout: float, operation: str):
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"{operation} exceeded {timeout}s")
        raise QueryTimeoutError(operation, timeout)


async def fetch_statistics(
    source: StatisticsSource | None,
    scope: StatisticsScope,
    entity_id: int,
    schema: str,
    table: str,
    timeout: float,
) -> list[dict[str, Any]]:
    """Return statistics rows for one player or club; 404 when none exist."""
    if source is None:
        raise ConfigurationError(
            "Legacy statistics database connection not configured. "
            "Please set LEGACY_DATABASE_URL environment variable.",
        )
    if not (is_safe_identifier(schema) and is_safe_identifier(table)):
        raise ConfigurationError("Invalid statistics schema or table name")

    first_error: DBAPIError | None = None
    for target in probe_targets(schema):
        sql = build_statistics_query(scope, target, table)
        try:
            rows = await _within(
                source.fetch_all(sql, {"entity_id": entity_id}),
                timeout, f"{scope.value} statistics query",
            )
        except DBAPIError as e:
            if not is_missing_relation_error(e):
                raise
            first_error = first_error or e
            logger.warning(
                f"Statistics table {qualified_table(target, table)} not found",
                extra={"schema": target, "table": table},
            )
            continue

        if target != schema:
            logger.info(
                f"Found statistics table at {qualified_table(target, table)}",
                extra={"schema": target, "table": table},
            )
        if not rows:
            raise ResourceNotFoundError(
                f"Statistics for {scope.value} {entity_id}",
            )
        return rows

    candidates = await _within(
        source.fetch_all(CANDIDATE_TABLES_QUERY), timeout, "table discovery",
    )
    raise StatisticsSourceError(
        f"Table '{table}' not found in schema '{schema}' or common schemas.",
        details={
            "cause": str(first_error.orig if first_error is not None else ""),
            "availableTables": candidates or (
                "No matching tables found. Please check your database "
                "connection and table name."
            ),
        },
    )
