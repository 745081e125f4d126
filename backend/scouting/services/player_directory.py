"""Player Directory — profile listing, search, owner-only updates.

Invariants:
    - Search filters are case-insensitive substring matches; date of birth is exact
    - An unparseable dateOfBirth search filter is ignored, not rejected
    - Only the linked user may update a profile (migrated profiles with no
      user are read-only through the API)
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.core.dates import parse_date
from scouting.core.domain_types import UserId
from scouting.core.errors import PermissionDeniedError, ResourceNotFoundError
from scouting.models.player_profile import PlayerProfile
from scouting.schemas.player import PlayerProfileUpdate

logger = logging.getLogger(__name__)


async def list_profiles(
    db: AsyncSession, profile_type: str | None = None,
) -> list[PlayerProfile]:
    query = select(PlayerProfile).order_by(PlayerProfile.created_at.desc())
    if profile_type:
        query = query.where(PlayerProfile.profile_type == profile_type)
    return list((await db.execute(query)).scalars().all())


async def search_profiles(
    db: AsyncSession,
    first_name: str | None = None,
    last_name: str | None = None,
    date_of_birth: str | None = None,
    country: str | None = None,
) -> list[PlayerProfile]:
    query = select(PlayerProfile)
    if first_name:
        query = query.where(PlayerProfile.first_name.ilike(f"%{first_name}%"))
    if last_name:
        query = query.where(PlayerProfile.last_name.ilike(f"%{last_name}%"))
    if date_of_birth:
        parsed = parse_date(date_of_birth)
        if parsed is not None:
            query = query.where(PlayerProfile.date_of_birth == parsed)
    if country:
        query = query.where(PlayerProfile.country.ilike(f"%{country}%"))
    query = query.order_by(PlayerProfile.first_name.asc())
    return list((await db.execute(query)).scalars().all())


async def get_profile_or_404(
    db: AsyncSession, profile_id: uuid.UUID,
) -> PlayerProfile:
    profile = await db.get(PlayerProfile, profile_id)
    if not profile:
        raise ResourceNotFoundError("Player profile", str(profile_id))
    return profile


async def find_profile_for_user(
    db: AsyncSession, user_id: UserId,
) -> PlayerProfile | None:
    return (await db.execute(
        select(PlayerProfile)
        .where(PlayerProfile.user_id == user_id)
        .order_by(PlayerProfile.created_at.asc())
        .limit(1),
    )).scalar_one_or_none()


async def get_profile_for_user(db: AsyncSession, user_id: UserId) -> PlayerProfile:
    profile = await find_profile_for_user(db, user_id)
    if not profile:
        raise ResourceNotFoundError("Player profile")
    return profile


async def update_profile(
    db: AsyncSession,
    profile_id: uuid.UUID,
    user_id: UserId,
    body: PlayerProfileUpdate,
) -> PlayerProfile:
    profile = await get_profile_or_404(db, profile_id)
    if profile.user_id != user_id:
        raise PermissionDeniedError("You can only update your own profile")

    changes = body.model_dump(exclude_unset=True)
    if changes.get("primary_position") is not None:
        changes["primary_position"] = changes["primary_position"].value
    for field, value in changes.items():
        setattr(profile, field, value)
    profile.updated_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info("Player profile updated", extra={"profile_id": str(profile_id)})
    return profile
