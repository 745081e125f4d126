"""Club ORM — football club directory entry, native or migrated from the legacy platform.

Invariants:
    - id is UUID primary key
    - club_id holds the legacy group_id; unique when set, NULL for native clubs
    - member_count/view_count are denormalized counters (never negative)
    - thumb_* columns hold absolute media URLs
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from scouting.core.domain_types import ClubStatus
from scouting.db.base import Base


class Club(Base):
    __tablename__ = "clubs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumb_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumb_profile_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumb_normal_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    thumb_icon_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    member_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    club_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, unique=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ClubStatus.UNCLAIMED.value,
    )
    owner_user_id: Mapped[str | None] = mapped_column(
        String(128), ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    modified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    memberships: Mapped[list["ClubMembership"]] = relationship(
        "ClubMembership", back_populates="club", cascade="all, delete-orphan",
    )
