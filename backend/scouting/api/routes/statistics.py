"""Statistics Routes — pre-computed player and club analytics from the legacy database.

Invariants:
    - player_id must be present and an integer (400 otherwise)
    - Path prefix is /statics (kept for existing clients)
"""

from fastapi import APIRouter, Depends, Query

from scouting.api.dependencies import get_current_user
from scouting.api.envelope import success
from scouting.config import Settings, get_settings
from scouting.core.errors import RequestValidationFailed
from scouting.core.statistics_queries import StatisticsScope
from scouting.infrastructure.firebase import VerifiedIdentity
from scouting.infrastructure.statistics_source import (
    StatisticsSource, get_statistics_source,
)
from scouting.services.player_statistics import fetch_statistics

router = APIRouter(prefix="/statics", tags=["statistics"])


def _parse_entity_id(raw: str | None, field: str) -> int:
    if raw is None or not raw.strip():
        raise RequestValidationFailed(f"{field} query parameter is required", field)
    try:
        return int(raw)
    except ValueError:
        raise RequestValidationFailed(f"{field} must be a valid integer", field)


async def _statistics_for(
    scope: StatisticsScope,
    entity_id: int,
    source: StatisticsSource | None,
    settings: Settings,
) -> list[dict]:
    return await fetch_statistics(
        source,
        scope,
        entity_id,
        schema=settings.statistics_schema,
        table=settings.statistics_table,
        timeout=settings.statistics_query_timeout_seconds,
    )


@router.get("/player")
async def get_player_statistics(
    player_id: str | None = Query(None),
    _identity: VerifiedIdentity = Depends(get_current_user),
    source: StatisticsSource | None = Depends(get_statistics_source),
    settings: Settings = Depends(get_settings),
):
    entity_id = _parse_entity_id(player_id, "player_id")
    rows = await _statistics_for(StatisticsScope.PLAYER, entity_id, source, settings)
    return success("Player statistics fetched successfully", rows)


@router.get("/club/{club_id}")
async def get_club_statistics(
    club_id: str,
    _identity: VerifiedIdentity = Depends(get_current_user),
    source: StatisticsSource | None = Depends(get_statistics_source),
    settings: Settings = Depends(get_settings),
):
    entity_id = _parse_entity_id(club_id, "club_id")
    rows = await _statistics_for(StatisticsScope.CLUB, entity_id, source, settings)
    return success("Club statistics fetched successfully", rows)
