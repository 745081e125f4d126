"""Match Lifecycle — credit-charged analysis requests and the worker claim/result loop.

Invariants:
    - create_match_request: balance check, match insert and credit decrement
      commit together or not at all; pro users are never charged
    - Exactly one credit is deducted per successfully created match
    - claim_next_match hands out the oldest PENDING match and moves it to
      PROCESSING in the same transaction (SKIP LOCKED on PostgreSQL)
    - upsert_match_result keeps at most one MatchResult per match; repeating
      a submission replaces the payload and bumps submission_count
    - Result submission never changes match status (the worker reports that)

Design Decisions:
    - Concurrency delegated to the database: row lock on the user for credits,
      ON CONFLICT (match_id) for result upserts
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.core.domain_types import MatchStatus, UserId
from scouting.core.errors import (
    ConfigurationError, InsufficientCreditsError, ResourceNotFoundError,
)
from scouting.models.match import Match
from scouting.models.match_result import MatchResult
from scouting.models.user import User
from scouting.schemas.match import (
    MatchCreate, MatchStatusUpdate, normalize_analysis_payload,
)

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert_insert_for(dialect: str):
    """Dialect-specific INSERT construct that supports ON CONFLICT."""
    insert = _UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise ConfigurationError(f"Result upsert not supported on {dialect}")
    return insert


def _now() -> datetime:
    return datetime.now(timezone.utc)


async def create_match_request(
    db: AsyncSession, user_id: UserId, body: MatchCreate,
) -> Match:
    """Create a PENDING match and charge one credit, atomically."""
    try:
        user = (await db.execute(
            select(User).where(User.id == user_id).with_for_update(),
        )).scalar_one_or_none()
        if not user:
            raise ResourceNotFoundError("User", user_id)
        if not user.is_pro and user.credits < 1:
            raise InsufficientCreditsError(user.credits)

        match = Match(
            user_id=user_id,
            video_url=str(body.video_url),
            home_team=body.home_team,
            away_team=body.away_team,
            match_level=body.match_level.value,
            focus_hint=body.focus_hint or None,
            status=MatchStatus.PENDING.value,
            title=f"{body.home_team} vs {body.away_team}",
        )
        db.add(match)

        if not user.is_pro:
            await db.execute(
                update(User)
                .where(User.id == user_id)
                .values(credits=User.credits - 1),
            )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Match submitted for analysis",
        extra={"user_id": user_id, "match_id": str(match.id)},
    )
    return match


async def list_user_matches(db: AsyncSession, user_id: UserId) -> list[Match]:
    """Caller's matches, newest first."""
    if not await db.get(User, user_id):
        raise ResourceNotFoundError("User", user_id)
    result = await db.execute(
        select(Match)
        .where(Match.user_id == user_id)
        .order_by(Match.created_at.desc()),
    )
    return list(result.scalars().all())


async def get_user_match(
    db: AsyncSession, user_id: UserId, match_id: uuid.UUID,
) -> Match:
    """Match owned by the caller; other users' matches look missing."""
    match = (await db.execute(
        select(Match).where(Match.id == match_id, Match.user_id == user_id),
    )).scalar_one_or_none()
    if not match:
        raise ResourceNotFoundError("Match", str(match_id))
    return match


async def get_match_or_404(db: AsyncSession, match_id: uuid.UUID) -> Match:
    match = await db.get(Match, match_id)
    if not match:
        raise ResourceNotFoundError("Match", str(match_id))
    return match


async def claim_next_match(db: AsyncSession, claim: bool = True) -> Match | None:
    """Oldest PENDING match; when claiming, flip it to PROCESSING."""
    query = (
        select(Match)
        .where(Match.status == MatchStatus.PENDING.value)
        .order_by(Match.created_at.asc(), Match.id.asc())
        .limit(1)
    )
    if claim:
        query = query.with_for_update(skip_locked=True)

    match = (await db.execute(query)).scalar_one_or_none()
    if match is None or not claim:
        return match

    match.status = MatchStatus.PROCESSING.value
    match.updated_at = _now()
    await db.commit()
    logger.info("Match claimed by worker", extra={"match_id": str(match.id)})
    return match


async def update_match_status(
    db: AsyncSession, match_id: uuid.UUID, body: MatchStatusUpdate,
) -> Match:
    match = await get_match_or_404(db, match_id)
    match.status = body.status.value
    if body.progress is not None:
        match.progress = body.progress
    elif body.status == MatchStatus.COMPLETED:
        match.progress = 100
    match.updated_at = _now()
    await db.commit()
    logger.info(
        f"Match status updated to {match.status}",
        extra={"match_id": str(match_id)},
    )
    return match


async def upsert_match_result(
    db: AsyncSession, match_id: uuid.UUID, body: Any,
) -> tuple[MatchResult, bool]:
    """Store the worker's analysis payload. Returns (result, created)."""
    payload, item_count = normalize_analysis_payload(body)
    await get_match_or_404(db, match_id)

    existed = (await db.execute(
        select(MatchResult.id).where(MatchResult.match_id == match_id),
    )).scalar_one_or_none() is not None

    insert = upsert_insert_for(db.get_bind().dialect.name)

    now = _now()
    table = MatchResult.__table__
    stmt = insert(table).values(
        id=uuid.uuid4(),
        match_id=match_id,
        payload=payload,
        item_count=item_count,
        submission_count=1,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.match_id],
        set_={
            "payload": stmt.excluded.payload,
            "item_count": stmt.excluded.item_count,
            "updated_at": stmt.excluded.updated_at,
            "submission_count": table.c.submission_count + 1,
        },
    )
    await db.execute(stmt)
    await db.commit()

    result = (await db.execute(
        select(MatchResult)
        .where(MatchResult.match_id == match_id)
        .execution_options(populate_existing=True),
    )).scalar_one()
    logger.info(
        "Analysis data saved",
        extra={"match_id": str(match_id)},
    )
    return result, not existed
