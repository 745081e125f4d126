"""Domain Types — verifies enum members and their stored string values.

Tests:
    - Match lifecycle has exactly four states
    - Enum values are the strings stored in the database and sent on the wire
"""

from scouting.core.domain_types import (
    ClubStatus, MatchLevel, MatchStatus, PlayerPosition, ProfileType, UserId,
)


def test_user_id_wraps_str():
    assert UserId("abc") == "abc"


def test_match_status_has_four_states():
    assert set(MatchStatus) == {
        MatchStatus.PENDING,
        MatchStatus.PROCESSING,
        MatchStatus.COMPLETED,
        MatchStatus.FAILED,
    }


def test_match_levels():
    assert [level.value for level in MatchLevel] == [
        "PROFESSIONAL", "SEMI_PROFESSIONAL", "ACADEMIC_TOP_TIER",
        "ACADEMIC_AMATEUR", "SUNDAY_LEAGUE",
    ]


def test_positions_are_display_strings():
    assert len(PlayerPosition) == 8
    assert PlayerPosition("Playmaker") is PlayerPosition.PLAYMAKER


def test_profile_types_match_stored_values():
    assert ProfileType.FOOTBALL_PLAYER.value == "Football Player"
    assert ProfileType.SCOUT.value == "Scout"


def test_enums_compare_equal_to_their_values():
    assert MatchStatus.PENDING == "PENDING"
    assert ClubStatus.UNCLAIMED == "UNCLAIMED"
