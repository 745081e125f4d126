"""Fill club logo/thumbnail URLs (and owner) from legacy `media_files`.

Invariants:
    - Only clubs with a legacy club_id are considered
    - Existing URLs are replaced only when media_files has a value for that slot
    - An untyped media file is the original upload and becomes the logo
    - owner_user_id is set only when empty and a User with that legacy player_id exists
"""

import argparse
import asyncio
import logging
from typing import Any

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.config import get_settings
from scouting.db.session import create_session_factory
from scouting.models.club import Club
from scouting.models.user import User
from scouting.scripts._common import MigrationStats, configure_script_logging

logger = logging.getLogger(__name__)

CLUB_MEDIA_QUERY = text("""
    SELECT type, storage_path, user_id
    FROM media_files
    WHERE parent_type = 'group'
      AND parent_id = :club_id
      AND storage_path IS NOT NULL
""")

_SLOT_BY_TYPE = {
    "": "logo_url",
    "thumb.profile": "thumb_profile_url",
    "thumb.normal": "thumb_normal_url",
    "thumb.icon": "thumb_icon_url",
}


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load club images from legacy media files")
    parser.add_argument(
        "--limit", type=int, default=None,
        help="Only process the first N clubs (test mode)",
    )
    return parser.parse_args()


def image_updates(media_rows: list[Any], prefix: str) -> dict[str, str]:
    """media_files rows -> {club column: url}; later rows win."""
    updates: dict[str, str] = {}
    for row in media_rows:
        if not row["storage_path"]:
            continue
        slot = _SLOT_BY_TYPE.get(row["type"] or "")
        if slot:
            updates[slot] = prefix + row["storage_path"]
    return updates


def legacy_owner_id(media_rows: list[Any]) -> int | None:
    return next((r["user_id"] for r in media_rows if r["user_id"] is not None), None)


async def _load_one(
    db: AsyncSession, club: Club, prefix: str, stats: MigrationStats,
) -> None:
    rows = list((await db.execute(
        CLUB_MEDIA_QUERY, {"club_id": club.club_id},
    )).mappings().all())
    if not rows:
        stats.bump("skipped_no_images")
        logger.info(f"[{club.club_id}] {club.name}: no images found")
        return

    for column, url in image_updates(rows, prefix).items():
        setattr(club, column, url)

    legacy_user = legacy_owner_id(rows)
    if legacy_user is not None and not club.owner_user_id:
        owner = (await db.execute(
            select(User.id).where(User.player_id == legacy_user),
        )).scalar_one_or_none()
        if owner:
            club.owner_user_id = owner
            stats.bump("owner_updated")

    await db.commit()
    stats.bump("updated")
    logger.info(f"[{club.club_id}] {club.name} ({club.country}): {len(rows)} images")


async def load_club_images(limit: int | None = None) -> MigrationStats:
    settings = get_settings()
    stats = MigrationStats("Club image load")
    engine, session_factory = create_session_factory(settings.database_url)
    try:
        async with session_factory() as db:
            query = (
                select(Club)
                .where(Club.club_id.is_not(None))
                .order_by(Club.created_at.asc())
            )
            if limit:
                query = query.limit(limit)
            clubs = list((await db.execute(query)).scalars().all())
            stats.bump("total", len(clubs))

            for club in clubs:
                try:
                    await _load_one(db, club, settings.media_url_prefix, stats)
                except Exception as e:
                    await db.rollback()
                    stats.bump("errors")
                    logger.error(f"[{club.club_id}] error: {str(e)[:80]}")
    finally:
        await engine.dispose()
    return stats


def main() -> None:
    args = _parse_args()
    configure_script_logging()
    stats = asyncio.run(load_club_images(args.limit))
    stats.log_summary()


if __name__ == "__main__":
    main()
