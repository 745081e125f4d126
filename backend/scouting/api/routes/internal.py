"""Internal Worker Routes — poll/claim, status reports, result submission.

Invariants:
    - Every endpoint requires a valid x-api-key header
    - GET /internal/next-match claims by default; ?claim=false only peeks
    - POST .../results is idempotent per match: 201 on first submission, 200 after
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.api.dependencies import require_internal_api_key
from scouting.api.envelope import success
from scouting.core.serializers import serialize_match_result, serialize_work_item
from scouting.infrastructure.database import get_db
from scouting.schemas.match import MatchStatusUpdate
from scouting.services import match_lifecycle

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/internal",
    tags=["internal"],
    dependencies=[Depends(require_internal_api_key)],
)


@router.get("/next-match")
async def next_match(
    claim: bool = Query(True),
    db: AsyncSession = Depends(get_db),
):
    match = await match_lifecycle.claim_next_match(db, claim=claim)
    if match is None:
        return success("No pending matches available.", None)
    return success(
        "Next match is available to analyse", serialize_work_item(match),
    )


@router.put("/matches/{match_id}/status")
async def update_match_status(
    match_id: UUID,
    body: MatchStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    match = await match_lifecycle.update_match_status(db, match_id, body)
    return success(
        f"Match status updated to {match.status}",
        {"id": str(match.id), "status": match.status, "progress": match.progress},
    )


@router.post("/matches/{match_id}/results")
async def submit_match_results(
    match_id: UUID,
    body: Any = Body(...),
    db: AsyncSession = Depends(get_db),
):
    result, created = await match_lifecycle.upsert_match_result(db, match_id, body)
    data = serialize_match_result(result)
    return JSONResponse(
        status_code=201 if created else 200,
        content=success("Analysis data saved successfully", data),
    )
