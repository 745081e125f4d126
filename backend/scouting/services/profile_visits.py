"""Profile Visits — record who viewed a profile and summarize it for the owner.

Invariants:
    - Owners viewing their own profile are never recorded
    - Visitors without a registered User row are not recorded
    - "today" is the current UTC calendar day
    - todayStats is grouped by visitor profile type; missing types group as "Unknown"
    - recentVisits holds at most RECENT_VISITS_LIMIT entries, newest first
"""

import logging
from datetime import datetime, time, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.core.domain_types import UserId
from scouting.core.serializers import serialize_visit
from scouting.models.player_profile import PlayerProfile
from scouting.models.profile_visit import ProfileVisit
from scouting.models.user import User
from scouting.services.player_directory import (
    find_profile_for_user, get_profile_for_user,
)

logger = logging.getLogger(__name__)

RECENT_VISITS_LIMIT = 20
UNKNOWN_PROFILE_TYPE = "Unknown"


async def record_visit(
    db: AsyncSession, profile: PlayerProfile, visitor_user_id: UserId,
) -> ProfileVisit | None:
    if profile.user_id == visitor_user_id:
        return None
    visitor = await db.get(User, visitor_user_id)
    if not visitor:
        logger.info(
            "Skipping visit from unregistered user",
            extra={"user_id": visitor_user_id},
        )
        return None

    visitor_profile = await find_profile_for_user(db, visitor_user_id)
    visit = ProfileVisit(
        visited_profile_id=profile.id,
        visitor_user_id=visitor_user_id,
        visitor_profile_id=visitor_profile.id if visitor_profile else None,
        visitor_profile_type=(
            visitor_profile.profile_type if visitor_profile else visitor.profile_type
        ),
    )
    db.add(visit)
    await db.commit()
    return visit


def summarize_today(visits: list[ProfileVisit]) -> list[dict]:
    """Group visits by visitor profile type, preserving first-seen order."""
    groups: dict[str, list[ProfileVisit]] = {}
    for visit in visits:
        groups.setdefault(visit.visitor_profile_type or UNKNOWN_PROFILE_TYPE, []).append(visit)
    return [
        {
            "profileType": profile_type,
            "count": len(group),
            "uniqueVisitors": len({v.visitor_user_id for v in group}),
            "visitors": [serialize_visit(v) for v in group],
        }
        for profile_type, group in groups.items()
    ]


async def get_visit_analytics(
    db: AsyncSession, user_id: UserId, now: datetime | None = None,
) -> dict:
    profile = await get_profile_for_user(db, user_id)
    now = now or datetime.now(timezone.utc)
    start_of_day = datetime.combine(now.date(), time.min, tzinfo=timezone.utc)

    base = select(ProfileVisit).where(ProfileVisit.visited_profile_id == profile.id)
    today = (await db.execute(
        base.where(ProfileVisit.visited_at >= start_of_day)
        .order_by(ProfileVisit.visited_at.desc()),
    )).scalars().all()
    recent = (await db.execute(
        base.order_by(ProfileVisit.visited_at.desc()).limit(RECENT_VISITS_LIMIT),
    )).scalars().all()
    total = (await db.execute(
        select(func.count())
        .select_from(ProfileVisit)
        .where(ProfileVisit.visited_profile_id == profile.id),
    )).scalar_one()

    return {
        "todayStats": summarize_today(list(today)),
        "recentVisits": [serialize_visit(v) for v in recent],
        "totalVisits": total,
    }
