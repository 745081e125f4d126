"""Club Routes — directory listing, CRUD, and membership.

Invariants:
    - limit is clamped to [1, max_page_size]; default comes from settings
    - Join/leave act on the authenticated caller only
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.api.dependencies import get_current_user
from scouting.api.envelope import success
from scouting.config import Settings, get_settings
from scouting.core.serializers import serialize_club_detail, serialize_club_summary
from scouting.infrastructure.database import get_db
from scouting.infrastructure.firebase import VerifiedIdentity
from scouting.schemas.club import ClubCreate, ClubUpdate
from scouting.services import club_directory

router = APIRouter(prefix="/club", tags=["clubs"])


@router.get("")
async def list_clubs(
    cursor: UUID | None = Query(None),
    limit: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    page_size = limit if limit is not None else settings.default_page_size
    page_size = max(1, min(page_size, settings.max_page_size))
    page = await club_directory.list_clubs(db, cursor, page_size)
    return success(
        "Clubs fetched successfully",
        [serialize_club_summary(c) for c in page.clubs],
        pagination={
            "hasNextPage": page.has_next_page,
            "nextCursor": page.next_cursor,
            "limit": page.limit,
        },
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_club(body: ClubCreate, db: AsyncSession = Depends(get_db)):
    club = await club_directory.create_club(db, body)
    return success("Club created successfully", serialize_club_summary(club))


@router.get("/{club_id}")
async def get_club(club_id: UUID, db: AsyncSession = Depends(get_db)):
    club, members = await club_directory.get_club_with_members(db, club_id)
    return success(
        "Club fetched successfully", serialize_club_detail(club, members),
    )


@router.put("/{club_id}")
async def update_club(
    club_id: UUID, body: ClubUpdate, db: AsyncSession = Depends(get_db),
):
    club = await club_directory.update_club(db, club_id, body)
    return success("Club updated successfully", serialize_club_summary(club))


@router.delete("/{club_id}")
async def delete_club(club_id: UUID, db: AsyncSession = Depends(get_db)):
    await club_directory.delete_club(db, club_id)
    return success("Club deleted successfully", {"id": str(club_id)})


@router.post("/{club_id}/members", status_code=status.HTTP_201_CREATED)
async def join_club(
    club_id: UUID,
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    membership = await club_directory.join_club(db, club_id, identity.uid)
    return success(
        "Joined club successfully",
        {
            "clubId": str(membership.club_id),
            "userId": membership.user_id,
            "role": membership.role,
        },
    )


@router.delete("/{club_id}/members")
async def leave_club(
    club_id: UUID,
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    club = await club_directory.leave_club(db, club_id, identity.uid)
    return success(
        "Left club successfully",
        {"clubId": str(club.id), "memberCount": club.member_count},
    )
