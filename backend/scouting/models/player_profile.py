"""PlayerProfile ORM — public scouting profile of a player, scout, or coach.

Invariants:
    - user_id is NULL for profiles migrated without a platform account
    - club stores the club NAME (legacy link); club membership lists match on it
    - primary_position is one of PlayerPosition values when set
    - profile_type defaults to "Football Player"
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from scouting.core.domain_types import ProfileType
from scouting.db.base import Base


class PlayerProfile(Base):
    __tablename__ = "player_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str | None] = mapped_column(
        String(128), ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    profile_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=ProfileType.FOOTBALL_PLAYER.value,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    primary_position: Mapped[str | None] = mapped_column(String(50), nullable=True)
    club: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumb_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumb_profile_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumb_normal_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumb_icon_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
