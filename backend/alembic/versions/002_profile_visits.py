"""Add profile_visits for player profile view analytics.

Revision ID: 002_profile_visits
Revises: 001_initial
Create Date: 2026-10-19

One row per view of a player profile by another registered user. The
composite (visited_profile_id, visited_at) index serves the "today" and
"recent visits" queries.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "002_profile_visits"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "profile_visits",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "visited_profile_id", UUID(as_uuid=True),
            sa.ForeignKey("player_profiles.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "visitor_user_id", sa.String(128),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "visitor_profile_id", UUID(as_uuid=True),
            sa.ForeignKey("player_profiles.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("visitor_profile_type", sa.String(50), nullable=True),
        sa.Column("visited_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_profile_visits_visited_profile_visited_at",
        "profile_visits", ["visited_profile_id", "visited_at"],
    )
    op.create_index("ix_profile_visits_visitor_user_id", "profile_visits", ["visitor_user_id"])
    op.create_index("ix_profile_visits_visited_at", "profile_visits", ["visited_at"])


def downgrade() -> None:
    op.drop_index("ix_profile_visits_visited_at", table_name="profile_visits")
    op.drop_index("ix_profile_visits_visitor_user_id", table_name="profile_visits")
    op.drop_index("ix_profile_visits_visited_profile_visited_at", table_name="profile_visits")
    op.drop_table("profile_visits")
