"""Domain Types — enums and value types shared by models, schemas and services.

Invariants:
    - All valid states encoded as Enums — no raw string matching
    - str Enums serialize to JSON without custom encoders
    - Enum values are the exact strings stored in the database
"""

from enum import Enum
from typing import NewType

UserId = NewType("UserId", str)    # Firebase uid


class MatchStatus(str, Enum):
    """Match analysis lifecycle — PENDING -> PROCESSING -> COMPLETED | FAILED."""
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class MatchLevel(str, Enum):
    """Competition tier of the submitted match video."""
    PROFESSIONAL = "PROFESSIONAL"
    SEMI_PROFESSIONAL = "SEMI_PROFESSIONAL"
    ACADEMIC_TOP_TIER = "ACADEMIC_TOP_TIER"
    ACADEMIC_AMATEUR = "ACADEMIC_AMATEUR"
    SUNDAY_LEAGUE = "SUNDAY_LEAGUE"


class ClubStatus(str, Enum):
    """Migrated clubs start UNCLAIMED until an owner takes them over."""
    UNCLAIMED = "UNCLAIMED"
    CLAIMED = "CLAIMED"


class ProfileType(str, Enum):
    FOOTBALL_PLAYER = "Football Player"
    SCOUT = "Scout"
    COACH = "Coach"
    CLUB = "Club"


class PlayerPosition(str, Enum):
    """Simplified positions shown on player profiles."""
    KEEPER = "Keeper"
    DEFENDER = "Defender"       # centre-back
    FULLBACK = "Fullback"
    MIDFIELDER = "Midfielder"
    ANCHOR = "Anchor"           # holding midfielder
    PLAYMAKER = "Playmaker"     # number 10
    WINGER = "Winger"
    STRIKER = "Striker"


class MembershipRole(str, Enum):
    MEMBER = "member"
    OWNER = "owner"
