"""Initial schema — users, clubs, memberships, player profiles, matches, results.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _thumb_columns() -> list[sa.Column]:
    return [
        sa.Column("thumb_url", sa.String(1024), nullable=True),
        sa.Column("thumb_profile_url", sa.String(1024), nullable=True),
        sa.Column("thumb_normal_url", sa.String(1024), nullable=True),
        sa.Column("thumb_icon_url", sa.String(1024), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("phone", sa.String(40), nullable=True),
        sa.Column("photo_url", sa.String(1024), nullable=True),
        sa.Column("profile_type", sa.String(50), nullable=True),
        sa.Column("credits", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_pro", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("player_id", sa.Integer, nullable=True, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "clubs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("logo_url", sa.String(1024), nullable=True),
        *_thumb_columns(),
        sa.Column("member_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("view_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("club_id", sa.Integer, nullable=True, unique=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="UNCLAIMED"),
        sa.Column(
            "owner_user_id", sa.String(128),
            sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("modified_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_clubs_name", "clubs", ["name"])

    op.create_table(
        "club_memberships",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "club_id", UUID(as_uuid=True),
            sa.ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "user_id", sa.String(128),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("club_id", "user_id", name="uq_club_memberships_club_user"),
    )
    op.create_index("ix_club_memberships_user_id", "club_memberships", ["user_id"])

    op.create_table(
        "player_profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id", sa.String(128),
            sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("profile_type", sa.String(50), nullable=False, server_default="Football Player"),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("date_of_birth", sa.Date, nullable=True),
        sa.Column("primary_position", sa.String(50), nullable=True),
        sa.Column("club", sa.String(255), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state", sa.String(100), nullable=True),
        sa.Column("country", sa.String(100), nullable=True),
        sa.Column("avatar", sa.String(1024), nullable=True),
        *_thumb_columns(),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_player_profiles_user_id", "player_profiles", ["user_id"])
    op.create_index("ix_player_profiles_club", "player_profiles", ["club"])

    op.create_table(
        "matches",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id", sa.String(128),
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(520), nullable=False),
        sa.Column("video_url", sa.Text, nullable=False),
        sa.Column("home_team", sa.String(255), nullable=False),
        sa.Column("away_team", sa.String(255), nullable=False),
        sa.Column("match_level", sa.String(30), nullable=False),
        sa.Column("focus_hint", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("progress", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_matches_user_id", "matches", ["user_id"])
    op.create_index("ix_matches_status", "matches", ["status"])

    op.create_table(
        "match_results",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "match_id", UUID(as_uuid=True),
            sa.ForeignKey("matches.id", ondelete="CASCADE"),
            nullable=False, unique=True,
        ),
        sa.Column("payload", sa.JSON, nullable=False),
        sa.Column("item_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("submission_count", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("match_results")
    op.drop_index("ix_matches_status", table_name="matches")
    op.drop_index("ix_matches_user_id", table_name="matches")
    op.drop_table("matches")
    op.drop_index("ix_player_profiles_club", table_name="player_profiles")
    op.drop_index("ix_player_profiles_user_id", table_name="player_profiles")
    op.drop_table("player_profiles")
    op.drop_index("ix_club_memberships_user_id", table_name="club_memberships")
    op.drop_table("club_memberships")
    op.drop_index("ix_clubs_name", table_name="clubs")
    op.drop_table("clubs")
    op.drop_table("users")
