"""User Routes — account registration and the caller's own account."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from scouting.api.dependencies import get_current_user
from scouting.api.envelope import success
from scouting.config import Settings, get_settings
from scouting.core.serializers import serialize_user
from scouting.infrastructure.database import get_db
from scouting.infrastructure.firebase import VerifiedIdentity
from scouting.schemas.user import UserRegister
from scouting.services import accounts

router = APIRouter(prefix="/user", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(
    body: UserRegister,
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user = await accounts.register_user(
        db, identity.uid, body, settings.signup_credits,
    )
    return success("User registered successfully!", serialize_user(user))


@router.get("/me")
async def get_me(
    identity: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await accounts.get_user_or_404(db, identity.uid)
    return success("User fetched successfully", serialize_user(user))
