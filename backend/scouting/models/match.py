"""Match ORM — a user's request to analyse a match video.

Invariants:
    - Created PENDING inside the credit-deduction transaction
    - status transitions driven by the analysis worker via /internal
    - title is "<home_team> vs <away_team>"
    - at most one MatchResult per match (one-to-one)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from scouting.core.domain_types import MatchStatus
from scouting.db.base import Base


class Match(Base):
    __tablename__ = "matches"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(520), nullable=False)
    video_url: Mapped[str] = mapped_column(Text, nullable=False)
    home_team: Mapped[str] = mapped_column(String(255), nullable=False)
    away_team: Mapped[str] = mapped_column(String(255), nullable=False)
    match_level: Mapped[str] = mapped_column(String(30), nullable=False)
    focus_hint: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MatchStatus.PENDING.value, index=True,
    )
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    user: Mapped["User"] = relationship("User", back_populates="matches")
    result: Mapped["MatchResult"] = relationship(
        "MatchResult", back_populates="match", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
