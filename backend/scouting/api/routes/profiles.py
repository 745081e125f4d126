"""Profile Routes — directory views filtered by profile type."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.api.envelope import success
from scouting.core.domain_types import ProfileType
from scouting.core.serializers import serialize_player_profile
from scouting.infrastructure.database import get_db
from scouting.services import player_directory

router = APIRouter(prefix="/profile", tags=["profiles"])


async def _profiles_of_type(db: AsyncSession, profile_type: ProfileType) -> list[dict]:
    profiles = await player_directory.list_profiles(db, profile_type.value)
    return [serialize_player_profile(p) for p in profiles]


@router.get("/players")
async def list_player_profiles(db: AsyncSession = Depends(get_db)):
    return success(
        "Player profiles fetched successfully",
        await _profiles_of_type(db, ProfileType.FOOTBALL_PLAYER),
    )


@router.get("/scouts")
async def list_scout_profiles(db: AsyncSession = Depends(get_db)):
    return success(
        "Scout profiles fetched successfully",
        await _profiles_of_type(db, ProfileType.SCOUT),
    )
