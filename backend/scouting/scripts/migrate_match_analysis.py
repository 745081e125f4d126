"""Stage legacy match analysis from SMO_V1 into the SMO_V2 `smo_match` table.

Invariants:
    - smo_match is created if missing; match_id is unique there
    - Matches without a details row or without any video are skipped
    - A missing/unparseable score is stored as 0-0
    - Re-running never duplicates rows (ON CONFLICT (match_id) DO NOTHING)
"""

import argparse
import asyncio
import logging
from typing import Any

from sqlalchemy import bindparam, text
from sqlalchemy.ext.asyncio import AsyncConnection, create_async_engine

from scouting.config import get_settings
from scouting.scripts._common import (
    LEGACY_V1_DATABASE, LEGACY_V2_DATABASE, MigrationStats,
    configure_script_logging, derive_database_url, parse_legacy_datetime,
    parse_lineup, parse_score, to_json,
)

logger = logging.getLogger(__name__)

CREATE_STAGING_TABLE = (
    """
    CREATE TABLE IF NOT EXISTS smo_match (
        id SERIAL PRIMARY KEY,
        match_id INTEGER,
        event_id INTEGER,
        user_id INTEGER,
        my_team VARCHAR(255),
        opponent_team VARCHAR(255),
        match_date_time TIMESTAMP,
        competition_name VARCHAR(255),
        venue VARCHAR(255),
        video_url TEXT,
        youtube_link TEXT,
        home_score INTEGER,
        away_score INTEGER,
        team_formation VARCHAR(50),
        opponent_formation VARCHAR(50),
        winner VARCHAR(255),
        location VARCHAR(255),
        first_half_start VARCHAR(50),
        first_half_end VARCHAR(50),
        second_half_start VARCHAR(50),
        second_half_end VARCHAR(50),
        my_team_lineup JSONB,
        opponent_team_lineup JSONB,
        my_team_substitutes JSONB,
        opponent_team_substitutes JSONB,
        raw_data JSONB,
        created_at TIMESTAMP DEFAULT NOW(),
        updated_at TIMESTAMP DEFAULT NOW(),
        UNIQUE (match_id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_smo_match_match_id ON smo_match (match_id)",
    "CREATE INDEX IF NOT EXISTS idx_smo_match_event_id ON smo_match (event_id)",
    "CREATE INDEX IF NOT EXISTS idx_smo_match_user_id ON smo_match (user_id)",
)

_JSON_COLUMNS = (
    "my_team_lineup", "opponent_team_lineup",
    "my_team_substitutes", "opponent_team_substitutes", "raw_data",
)
_COLUMNS = (
    "match_id", "event_id", "user_id", "my_team", "opponent_team",
    "match_date_time", "competition_name", "venue", "video_url", "youtube_link",
    "home_score", "away_score", "team_formation", "opponent_formation", "winner",
    "location", "first_half_start", "first_half_end", "second_half_start",
    "second_half_end", *_JSON_COLUMNS, "created_at", "updated_at",
)

INSERT_STAGED_MATCH = text(
    f"INSERT INTO smo_match ({', '.join(_COLUMNS)}) VALUES ("
    + ", ".join(
        f"CAST(:{c} AS JSONB)" if c in _JSON_COLUMNS else f":{c}" for c in _COLUMNS
    )
    + ") ON CONFLICT (match_id) DO NOTHING"
)

EVENTS_QUERY = text(
    "SELECT * FROM engine4_event_events WHERE event_id IN :event_ids",
).bindparams(bindparam("event_ids", expanding=True))

DETAILS_QUERY = text(
    "SELECT * FROM engine4_event_details WHERE match_id = :match_id LIMIT 1",
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Stage legacy match analysis into smo_match")
    parser.add_argument(
        "--limit", type=int, default=None,
        help="Only process the first N legacy matches (test mode)",
    )
    return parser.parse_args()


def _to_int(value: Any) -> int | None:
    try:
        return int(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def video_url_for(detail: Any, media_prefix: str) -> str | None:
    """YouTube link wins; otherwise the uploaded video under the media prefix."""
    if detail["youtube_link"]:
        return detail["youtube_link"]
    if detail["match_video"]:
        return media_prefix + detail["match_video"]
    return None


def build_staging_row(match: Any, detail: Any, event: Any | None) -> dict:
    """One smo_match row from a legacy match, its details and (optional) event."""
    home, away = parse_score(detail["score"]) or (0, 0)
    played_at = (
        parse_legacy_datetime(match["match_date_time"])
        or parse_legacy_datetime(detail["created"])
    )
    event_id = _to_int(match["event_id"])
    return {
        "match_id": match["match_id"],
        "event_id": event_id,
        "user_id": _to_int(match["user_id"]),
        "my_team": match["my_team"],
        "opponent_team": match["opponent_team"],
        "match_date_time": played_at,
        "competition_name": event["title"] if event else None,
        "venue": detail["location"] or (event["location"] if event else None),
        "video_url": detail["match_video"] or None,
        "youtube_link": detail["youtube_link"] or None,
        "home_score": home,
        "away_score": away,
        "team_formation": detail["team_formation"] or None,
        "opponent_formation": detail["opponent_team_formation"] or None,
        "winner": detail["winner"] or None,
        "location": detail["location"] or None,
        "first_half_start": detail["first_half_start"] or None,
        "first_half_end": detail["first_half_end"] or None,
        "second_half_start": detail["second_half_start"] or None,
        "second_half_end": detail["second_half_end"] or None,
        "my_team_lineup": to_json(parse_lineup(detail["my_team"])),
        "opponent_team_lineup": to_json(parse_lineup(detail["opponent_team"])),
        "my_team_substitutes": to_json(parse_lineup(detail["my_team_substitute"])),
        "opponent_team_substitutes": to_json(
            parse_lineup(detail["opponent_team_substitute"]),
        ),
        "raw_data": to_json({
            "originalMatchDetail": dict(detail),
            "originalMatch": dict(match),
            "event": dict(event) if event else None,
        }),
        "created_at": parse_legacy_datetime(match["created"]),
        "updated_at": parse_legacy_datetime(match["modified"]),
    }


async def _ensure_staging_table(conn: AsyncConnection) -> None:
    for statement in CREATE_STAGING_TABLE:
        await conn.execute(text(statement))
    await conn.commit()


async def _load_events(conn: AsyncConnection, matches: list) -> dict[int, Any]:
    event_ids = sorted({
        eid for eid in (_to_int(m["event_id"]) for m in matches) if eid
    })
    if not event_ids:
        return {}
    rows = (await conn.execute(EVENTS_QUERY, {"event_ids": event_ids})).mappings().all()
    return {row["event_id"]: row for row in rows}


async def migrate_match_analysis(limit: int | None = None) -> MigrationStats:
    settings = get_settings()
    stats = MigrationStats("Match analysis staging")
    source = create_async_engine(
        derive_database_url(settings.database_url, LEGACY_V1_DATABASE),
    )
    staging = create_async_engine(
        derive_database_url(settings.database_url, LEGACY_V2_DATABASE),
    )
    try:
        async with source.connect() as src, staging.connect() as dst:
            await _ensure_staging_table(dst)

            query = "SELECT * FROM engine4_event_matchs ORDER BY match_id"
            params: dict = {}
            if limit:
                query += " LIMIT :limit"
                params["limit"] = limit
            matches = list((await src.execute(text(query), params)).mappings().all())
            stats.bump("total", len(matches))
            events = await _load_events(src, matches)

            for match in matches:
                try:
                    detail = (await src.execute(
                        DETAILS_QUERY, {"match_id": match["match_id"]},
                    )).mappings().first()
                    if detail is None:
                        stats.bump("skipped_no_details")
                        continue
                    if not video_url_for(detail, settings.media_url_prefix):
                        stats.bump("skipped_no_video")
                        continue

                    row = build_staging_row(
                        match, detail, events.get(_to_int(match["event_id"])),
                    )
                    await dst.execute(INSERT_STAGED_MATCH, row)
                    await dst.commit()
                    stats.bump("imported")
                    logger.info(
                        f"[{match['match_id']}] staged {match['my_team']} vs "
                        f"{match['opponent_team']} ({row['home_score']}-{row['away_score']})",
                    )
                except Exception as e:
                    await dst.rollback()
                    stats.bump("errors")
                    logger.error(f"[{match['match_id']}] error: {str(e)[:80]}")
    finally:
        await source.dispose()
        await staging.dispose()
    return stats


def main() -> None:
    args = _parse_args()
    configure_script_logging()
    stats = asyncio.run(migrate_match_analysis(args.limit))
    stats.log_summary()


if __name__ == "__main__":
    main()
