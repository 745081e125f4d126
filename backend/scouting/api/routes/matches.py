"""Match Routes — user-facing analysis requests.

Invariants:
    - All endpoints require a bearer token
    - POST /match/request returns 201 only after the credit transaction commits
    - Users only ever see their own matches
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.api.dependencies import get_current_user
from scouting.api.envelope import success
from scouting.core.serializers import serialize_match, serialize_match_summary
from scouting.infrastructure.database import get_db
from scouting.infrastructure.firebase import VerifiedIdentity
from scouting.schemas.match import MatchCreate
from scouting.services import match_lifecycle

router = APIRouter(prefix="/match", tags=["matches"])


@router.post("/request", status_code=status.HTTP_201_CREATED)
async def request_match_analysis(
    body: MatchCreate,
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Submit a match video for analysis (costs one credit unless pro)."""
    match = await match_lifecycle.create_match_request(db, identity.uid, body)
    return success("Match submitted for analysis", serialize_match(match))


@router.get("")
async def list_my_matches(
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    matches = await match_lifecycle.list_user_matches(db, identity.uid)
    return success(
        "Match requests fetched successfully",
        [serialize_match_summary(m) for m in matches],
    )


@router.get("/{match_id}")
async def get_my_match(
    match_id: UUID,
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    match = await match_lifecycle.get_user_match(db, identity.uid, match_id)
    return success(
        "Match fetched successfully",
        serialize_match(match, include_result=True),
    )
