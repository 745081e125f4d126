"""Print column structure, row count and sample rows of legacy tables.

Defaults to the SMO_V1 match analysis tables.
"""

import argparse
import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine

from scouting.config import get_settings
from scouting.core.statistics_queries import is_safe_identifier
from scouting.scripts._common import (
    LEGACY_V1_DATABASE, configure_script_logging, derive_database_url, to_json,
)

logger = logging.getLogger(__name__)

DEFAULT_TABLES = (
    "engine4_event_events",
    "engine4_event_matchs",
    "engine4_event_details",
    "engine4_event_photos",
)
SAMPLE_ROWS = 7
MAX_VALUE_WIDTH = 100

COLUMNS_QUERY = text("""
    SELECT column_name, data_type, character_maximum_length,
           is_nullable, column_default
    FROM information_schema.columns
    WHERE table_schema = 'public' AND table_name = :table
    ORDER BY ordinal_position
""")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Explore legacy database tables")
    parser.add_argument("tables", nargs="*", default=list(DEFAULT_TABLES))
    parser.add_argument(
        "--database", default=LEGACY_V1_DATABASE,
        help="Legacy database name on the DATABASE_URL server",
    )
    return parser.parse_args()


def describe_column(col) -> str:
    length = f"({col['character_maximum_length']})" if col["character_maximum_length"] else ""
    nullable = "NULL" if col["is_nullable"] == "YES" else "NOT NULL"
    default = f" DEFAULT {col['column_default']}" if col["column_default"] else ""
    return f"{col['column_name']:<30} {col['data_type'] + length:<20} {nullable}{default}"


def display_value(value) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, (dict, list)):
        return to_json(value)[:MAX_VALUE_WIDTH]
    return str(value)[:MAX_VALUE_WIDTH]


async def explore_table(conn: AsyncConnection, table: str) -> None:
    if not is_safe_identifier(table):
        logger.error(f"Refusing to explore invalid table name {table!r}")
        return
    print("=" * 80)
    print(f"Table: {table}")
    print("=" * 80)

    columns = (await conn.execute(COLUMNS_QUERY, {"table": table})).mappings().all()
    print("Structure:")
    for col in columns:
        print(f"  {describe_column(col)}")

    count = (await conn.execute(text(f"SELECT COUNT(*) FROM {table}"))).scalar_one()
    print(f"Total rows: {count}")

    rows = (await conn.execute(
        text(f"SELECT * FROM {table} LIMIT {SAMPLE_ROWS}"),
    )).mappings().all()
    print(f"Sample data ({len(rows)} rows):")
    for index, row in enumerate(rows, start=1):
        print(f"Row {index}:")
        for name, value in row.items():
            print(f"  {name}: {display_value(value)}")


async def explore(tables: list[str], database: str) -> None:
    settings = get_settings()
    engine = create_async_engine(derive_database_url(settings.database_url, database))
    try:
        for table in tables:
            async with engine.connect() as conn:
                try:
                    await explore_table(conn, table)
                except Exception as e:
                    logger.error(f"Error exploring {table}: {e}")
    finally:
        await engine.dispose()


def main() -> None:
    args = _parse_args()
    configure_script_logging()
    asyncio.run(explore(args.tables, args.database))


if __name__ == "__main__":
    main()
