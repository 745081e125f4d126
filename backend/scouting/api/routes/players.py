"""Player Routes — profile directory, search, owner updates, visit analytics.

Invariants:
    - Fixed paths (/search, /me, /analytics/visits) are registered before /{profile_id}
    - Viewing someone else's profile records a visit; viewing your own does not
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.api.dependencies import get_current_user
from scouting.api.envelope import success
from scouting.core.serializers import serialize_player_profile
from scouting.infrastructure.database import get_db
from scouting.infrastructure.firebase import VerifiedIdentity
from scouting.schemas.player import PlayerProfileUpdate
from scouting.services import player_directory, profile_visits

router = APIRouter(prefix="/player", tags=["players"])


@router.get("")
async def list_players(
    _identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profiles = await player_directory.list_profiles(db)
    return success(
        "Player profiles fetched successfully",
        [serialize_player_profile(p) for p in profiles],
    )


@router.get("/search")
async def search_players(
    first_name: str | None = Query(None, alias="firstName"),
    last_name: str | None = Query(None, alias="lastName"),
    date_of_birth: str | None = Query(None, alias="dateOfBirth"),
    country: str | None = Query(None),
    _identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profiles = await player_directory.search_profiles(
        db,
        first_name=first_name,
        last_name=last_name,
        date_of_birth=date_of_birth,
        country=country,
    )
    return success(
        "Search results fetched successfully",
        [serialize_player_profile(p) for p in profiles],
    )


@router.get("/me")
async def get_my_profile(
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await player_directory.get_profile_for_user(db, identity.uid)
    return success(
        "Player profile fetched successfully", serialize_player_profile(profile),
    )


@router.get("/analytics/visits")
async def get_visit_analytics(
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    analytics = await profile_visits.get_visit_analytics(db, identity.uid)
    return success("Profile visit analytics fetched successfully", analytics)


@router.get("/{profile_id}")
async def get_player(
    profile_id: UUID,
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await player_directory.get_profile_or_404(db, profile_id)
    await profile_visits.record_visit(db, profile, identity.uid)
    return success(
        "Player profile fetched successfully", serialize_player_profile(profile),
    )


@router.put("/{profile_id}")
async def update_player(
    profile_id: UUID,
    body: PlayerProfileUpdate,
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await player_directory.update_profile(
        db, profile_id, identity.uid, body,
    )
    return success(
        "Player profile updated successfully", serialize_player_profile(profile),
    )
