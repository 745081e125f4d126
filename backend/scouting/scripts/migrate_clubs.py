"""Migrate clubs from the legacy SMO_V2 `clubs` table.

Invariants:
    - Rows without a title are skipped (counted as no_data)
    - A club is identified by (name, country); country defaults to "Unknown"
    - Existing clubs are only backfilled when they have no legacy club_id yet
    - New clubs start UNCLAIMED
"""

import argparse
import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import bindparam, func, select, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from scouting.config import get_settings
from scouting.core.domain_types import ClubStatus
from scouting.db.session import create_session_factory
from scouting.models.club import Club
from scouting.scripts._common import (
    CLUB_THUMB_TYPES, LEGACY_V2_DATABASE, MigrationStats, build_media_map,
    configure_script_logging, derive_database_url, parse_legacy_datetime,
)

logger = logging.getLogger(__name__)

MEDIA_QUERY = text("""
    SELECT parent_id, type, storage_path
    FROM media_files
    WHERE parent_id IN :photo_ids
      AND parent_type = 'group'
      AND type IN :types
""").bindparams(
    bindparam("photo_ids", expanding=True),
    bindparam("types", expanding=True),
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Migrate clubs from the legacy platform")
    parser.add_argument(
        "--club-id", type=int, default=None,
        help="Only migrate the legacy club with this group_id",
    )
    return parser.parse_args()


def legacy_club_fields(row: Any, images: dict[str, str]) -> dict:
    """Legacy data shared by the create and backfill paths."""
    return {
        "club_id": row["group_id"],
        "description": row["description"],
        "member_count": row["member_count"] or 0,
        "view_count": row["view_count"] or 0,
        "modified_at": parse_legacy_datetime(row["modified_date"]),
        "thumb_url": images.get("thumb"),
        "thumb_profile_url": images.get("thumb.profile"),
        "thumb_normal_url": images.get("thumb.normal"),
        "thumb_icon_url": images.get("thumb.icon"),
    }


def _aware(value: datetime | None) -> datetime | None:
    return value.replace(tzinfo=timezone.utc) if value else None


async def _fetch_legacy_clubs(legacy_url: str, club_id: int | None) -> list:
    engine = create_async_engine(legacy_url)
    try:
        async with engine.connect() as conn:
            if club_id is not None:
                result = await conn.execute(
                    text("SELECT * FROM clubs WHERE group_id = :group_id"),
                    {"group_id": club_id},
                )
            else:
                result = await conn.execute(text("SELECT * FROM clubs ORDER BY group_id"))
            return list(result.mappings().all())
    finally:
        await engine.dispose()


async def _fetch_media(db: AsyncSession, photo_ids: list[int]) -> list:
    if not photo_ids:
        return []
    try:
        result = await db.execute(
            MEDIA_QUERY, {"photo_ids": photo_ids, "types": list(CLUB_THUMB_TYPES)},
        )
    except DBAPIError as e:
        await db.rollback()
        logger.warning(f"Media lookup failed, migrating clubs without images: {e.orig}")
        return []
    return list(result.mappings().all())


async def _migrate_one(
    db: AsyncSession, row: Any, images: dict[str, str], stats: MigrationStats,
) -> None:
    title = (row["club_title"] or "").strip()
    country = (row["country"] or "").strip() or "Unknown"
    if not title:
        stats.bump("skipped_no_data")
        logger.info(f"[{row['group_id']}] skipped: no club title")
        return

    fields = legacy_club_fields(row, images)
    fields["modified_at"] = _aware(fields["modified_at"])
    existing = (await db.execute(
        select(Club).where(Club.name == title, Club.country == country).limit(1),
    )).scalar_one_or_none()

    if existing is not None:
        if existing.club_id is not None:
            stats.bump("skipped_duplicate")
            logger.info(f"[{row['group_id']}] already migrated: {title}")
            return
        fields["description"] = fields["description"] or existing.description
        for name, value in fields.items():
            setattr(existing, name, value)
        await db.commit()
        stats.bump("created_or_updated")
        logger.info(f"[{row['group_id']}] updated: {title}")
        return

    club = Club(
        name=title,
        country=country,
        status=ClubStatus.UNCLAIMED.value,
        created_at=(
            _aware(parse_legacy_datetime(row["creation_date"]))
            or datetime.now(timezone.utc)
        ),
        **fields,
    )
    db.add(club)
    await db.commit()
    stats.bump("created_or_updated")
    logger.info(f"[{row['group_id']}] created: {title} -> {club.id}")


async def migrate_clubs(club_id: int | None = None) -> MigrationStats:
    settings = get_settings()
    stats = MigrationStats("Club migration")
    legacy_url = derive_database_url(settings.database_url, LEGACY_V2_DATABASE)

    rows = await _fetch_legacy_clubs(legacy_url, club_id)
    stats.bump("total", len(rows))
    if not rows:
        logger.info("No clubs found on the legacy platform")
        return stats

    engine, session_factory = create_session_factory(settings.database_url)
    try:
        async with session_factory() as db:
            photo_ids = [r["photo_id"] for r in rows if r["photo_id"]]
            media = build_media_map(
                await _fetch_media(db, photo_ids), settings.media_url_prefix,
            )
            logger.info(f"Found media for {len(media)} of {len(photo_ids)} club photos")

            for row in rows:
                images = media.get(row["photo_id"], {}) if row["photo_id"] else {}
                try:
                    await _migrate_one(db, row, images, stats)
                except Exception as e:
                    await db.rollback()
                    stats.bump("errors")
                    logger.error(f"[{row['group_id']}] error: {str(e)[:80]}")

            total = (await db.execute(select(func.count()).select_from(Club))).scalar_one()
            legacy = (await db.execute(
                select(func.count()).select_from(Club).where(Club.club_id.is_not(None)),
            )).scalar_one()
            logger.info(f"Clubs in database: {total} ({legacy} with legacy club id)")
    finally:
        await engine.dispose()
    return stats


def main() -> None:
    args = _parse_args()
    configure_script_logging()
    stats = asyncio.run(migrate_clubs(args.club_id))
    stats.log_summary()


if __name__ == "__main__":
    main()
