"""User ORM — platform account keyed by Firebase uid; owns the credit balance.

Invariants:
    - id is the Firebase uid (string primary key, not generated here)
    - credits >= 0; only decremented inside the match-request transaction
    - is_pro users are never charged credits
    - player_id links back to the legacy platform user (migration only)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scouting.db.base import Base


class User(Base):
    """Account row; aggregate root for matches, visits, memberships."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    profile_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_pro: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    player_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    matches: Mapped[list["Match"]] = relationship(
        "Match", back_populates="user", cascade="all, delete-orphan",
    )
