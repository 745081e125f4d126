"""Statistics SQL — query text for the legacy statistics cache table.

Invariants:
    - Schema and table names are interpolated, so both must pass is_safe_identifier
    - The entity id is always a bind parameter (:entity_id), never interpolated
    - probe_targets() order: configured schema, fallback schemas (configured one
      skipped), then None meaning the unqualified table on the search path
"""

import re
from enum import Enum

FALLBACK_SCHEMAS: tuple[str, ...] = ("public", "smo_v1", "smo", "statistics")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


class StatisticsScope(str, Enum):
    """cache_type values and the id column each one filters on."""
    PLAYER = "player"
    CLUB = "club"

    @property
    def id_column(self) -> str:
        return f"{self.value}_id"


def is_safe_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name or ""))


def qualified_table(schema: str | None, table: str) -> str:
    return f"{schema}.{table}" if schema else table


def build_statistics_query(scope: StatisticsScope, schema: str | None, table: str) -> str:
    return f"""
        SELECT
            cache_type,
            {scope.id_column},
            action_type,
            statistics_data->'attacking' AS attacking_spider,
            statistics_data->'defensive' AS defensive_spider,
            donut_chart_data->'attacking' AS attacking_donut,
            donut_chart_data->'defensive' AS defensive_donut,
            heatmap_data->'attacking' AS attacking_heatmap,
            heatmap_data->'defensive' AS defensive_heatmap,
            goalpost_statistics_data,
            average_statistics AS summary_table
        FROM {qualified_table(schema, table)}
        WHERE cache_type = '{scope.value}'
          AND {scope.id_column} = :entity_id
    """


CANDIDATE_TABLES_QUERY = """
    SELECT table_schema, table_name
    FROM information_schema.tables
    WHERE table_name LIKE '%statistic%' OR table_name LIKE '%cache%'
    ORDER BY table_schema, table_name
"""


def probe_targets(configured_schema: str) -> list[str | None]:
    targets: list[str | None] = [configured_schema]
    targets.extend(s for s in FALLBACK_SCHEMAS if s != configured_schema)
    targets.append(None)
    return targets


def is_missing_relation_error(exc: BaseException) -> bool:
    """True for 'relation ... does not exist' style driver errors."""
    return "does not exist" in str(exc)
