"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from scouting.models.user import User  # noqa: F401
from scouting.models.club import Club  # noqa: F401
from scouting.models.club_membership import ClubMembership  # noqa: F401
from scouting.models.player_profile import PlayerProfile  # noqa: F401
from scouting.models.match import Match  # noqa: F401
from scouting.models.match_result import MatchResult  # noqa: F401
from scouting.models.profile_visit import ProfileVisit  # noqa: F401
