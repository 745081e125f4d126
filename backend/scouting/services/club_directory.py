"""Club Directory — club CRUD, cursor pagination, and membership.

Invariants:
    - Listing is ordered by id; cursor is the last id of the previous page and
      is itself excluded from the next page
    - One extra row is fetched to decide has_next_page
    - Club members are PlayerProfiles whose club name equals the club's name
    - member_count never drops below zero
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.core.domain_types import UserId
from scouting.core.errors import ConflictError, ResourceNotFoundError
from scouting.models.club import Club
from scouting.models.club_membership import ClubMembership
from scouting.models.player_profile import PlayerProfile
from scouting.models.user import User
from scouting.schemas.club import ClubCreate, ClubUpdate

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ClubPage:
    clubs: list[Club]
    has_next_page: bool
    next_cursor: str | None
    limit: int


async def list_clubs(
    db: AsyncSession, cursor: uuid.UUID | None, limit: int,
) -> ClubPage:
    query = select(Club).order_by(Club.id.asc()).limit(limit + 1)
    if cursor is not None:
        query = query.where(Club.id > cursor)
    rows = list((await db.execute(query)).scalars().all())

    has_next = len(rows) > limit
    page = rows[:limit]
    return ClubPage(
        clubs=page,
        has_next_page=has_next,
        next_cursor=str(page[-1].id) if has_next and page else None,
        limit=limit,
    )


async def get_club_or_404(db: AsyncSession, club_id: uuid.UUID) -> Club:
    club = await db.get(Club, club_id)
    if not club:
        raise ResourceNotFoundError("Club", str(club_id))
    return club


async def get_club_with_members(
    db: AsyncSession, club_id: uuid.UUID,
) -> tuple[Club, list[PlayerProfile]]:
    club = await get_club_or_404(db, club_id)
    members = (await db.execute(
        select(PlayerProfile)
        .where(PlayerProfile.club == club.name)
        .order_by(PlayerProfile.first_name.asc()),
    )).scalars().all()
    return club, list(members)


async def create_club(db: AsyncSession, body: ClubCreate) -> Club:
    club = Club(**body.model_dump())
    db.add(club)
    await db.commit()
    logger.info("Club created", extra={"club_id": str(club.id)})
    return club


async def update_club(
    db: AsyncSession, club_id: uuid.UUID, body: ClubUpdate,
) -> Club:
    club = await get_club_or_404(db, club_id)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(club, field, value)
    club.modified_at = datetime.now(timezone.utc)
    await db.commit()
    return club


async def delete_club(db: AsyncSession, club_id: uuid.UUID) -> None:
    club = await get_club_or_404(db, club_id)
    await db.delete(club)
    await db.commit()
    logger.info("Club deleted", extra={"club_id": str(club_id)})


async def _find_membership(
    db: AsyncSession, club_id: uuid.UUID, user_id: UserId,
) -> ClubMembership | None:
    return (await db.execute(
        select(ClubMembership).where(
            ClubMembership.club_id == club_id,
            ClubMembership.user_id == user_id,
        ),
    )).scalar_one_or_none()


async def join_club(
    db: AsyncSession, club_id: uuid.UUID, user_id: UserId,
) -> ClubMembership:
    club = await get_club_or_404(db, club_id)
    if not await db.get(User, user_id):
        raise ResourceNotFoundError("User", user_id)
    if await _find_membership(db, club_id, user_id):
        raise ConflictError("Already a member of this club")
    membership = ClubMembership(club_id=club_id, user_id=user_id)
    db.add(membership)
    club.member_count = (club.member_count or 0) + 1
    await db.commit()
    return membership


async def leave_club(db: AsyncSession, club_id: uuid.UUID, user_id: UserId) -> Club:
    club = await get_club_or_404(db, club_id)
    membership = await _find_membership(db, club_id, user_id)
    if not membership:
        raise ResourceNotFoundError("Club membership")
    await db.delete(membership)
    club.member_count = max((club.member_count or 0) - 1, 0)
    await db.commit()
    return club
