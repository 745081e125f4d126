"""Accounts — user registration and lookup keyed by Firebase uid."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.core.domain_types import UserId
from scouting.core.errors import ConflictError, ResourceNotFoundError
from scouting.models.user import User
from scouting.schemas.user import UserRegister

logger = logging.getLogger(__name__)


async def register_user(
    db: AsyncSession, uid: UserId, body: UserRegister, signup_credits: int,
) -> User:
    if await db.get(User, uid):
        raise ConflictError("User already registered")
    email_taken = (await db.execute(
        select(User.id).where(User.email == body.email),
    )).scalar_one_or_none()
    if email_taken:
        raise ConflictError("Email already in use")

    user = User(
        id=uid,
        name=body.name,
        email=body.email,
        phone=body.phone,
        photo_url=body.photo_url,
        credits=signup_credits,
    )
    db.add(user)
    await db.commit()
    logger.info("User registered", extra={"user_id": uid})
    return user


async def get_user_or_404(db: AsyncSession, uid: UserId) -> User:
    user = await db.get(User, uid)
    if not user:
        raise ResourceNotFoundError("User", uid)
    return user
