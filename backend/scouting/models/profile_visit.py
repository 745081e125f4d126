"""ProfileVisit ORM — one row per view of a player profile by another user.

Invariants:
    - Never recorded for owners viewing their own profile
    - visitor_profile_type snapshots the visitor's profile type at visit time
    - Indexed on (visited_profile_id, visited_at) for the analytics window query
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from scouting.db.base import Base


class ProfileVisit(Base):
    __tablename__ = "profile_visits"
    __table_args__ = (
        Index("ix_profile_visits_visited_profile_visited_at", "visited_profile_id", "visited_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    visited_profile_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("player_profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    visitor_user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    visitor_profile_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("player_profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    visitor_profile_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    visited_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    visitor: Mapped["User"] = relationship("User", lazy="selectin")
