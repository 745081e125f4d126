"""Migration Helpers — verifies legacy data parsing used by the migration scripts.

Tests:
    - Legacy URLs swap only the database name
    - Scores, lineups and timestamps parse leniently
    - Media rows map to absolute URLs per club slot
    - Staging rows default the score to 0-0 and keep raw data
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import DBAPIError

from scouting.scripts._common import (
    MigrationStats, build_media_map, derive_database_url, parse_legacy_datetime,
    parse_lineup, parse_score,
)
from scouting.scripts.load_club_images import image_updates, legacy_owner_id
from scouting.scripts.migrate_clubs import _fetch_media, legacy_club_fields
from scouting.scripts.migrate_match_analysis import build_staging_row, video_url_for

PREFIX = "https://media.example.com/"


def test_derive_database_url_swaps_database_only():
    url = derive_database_url("postgresql+asyncpg://smo:secret@db:5432/smo_dev", "smo_v1")
    assert url == "postgresql+asyncpg://smo:secret@db:5432/smo_v1"


@pytest.mark.parametrize("raw, expected", [
    ("3-2", (3, 2)),
    ("0/0", (0, 0)),
    ("Final: 10 - 1", (10, 1)),
    ("abandoned", None),
    (None, None),
])
def test_parse_score(raw, expected):
    assert parse_score(raw) == expected


def test_parse_lineup_keeps_complete_entries():
    raw = (
        '[{"player_name": "Ana", "jersy_number": "7", "position": "W"},'
        ' {"player_name": "", "jersy_number": "9"},'
        ' {"player_name": "Ben"}]'
    )
    assert parse_lineup(raw) == [{"player_name": "Ana", "jersy_number": "7", "position": "W"}]


@pytest.mark.parametrize("raw", [None, "", "not json", '{"player_name": "Ana"}'])
def test_parse_lineup_tolerates_bad_data(raw):
    assert parse_lineup(raw) == []


def test_parse_legacy_datetime():
    assert parse_legacy_datetime("2019-04-06 15:30:00") == datetime(2019, 4, 6, 15, 30)
    aware = datetime(2019, 4, 6, 16, 30, tzinfo=timezone.utc)
    assert parse_legacy_datetime(aware) == datetime(2019, 4, 6, 16, 30)
    assert parse_legacy_datetime("06/04/2019") is None
    assert parse_legacy_datetime(None) is None


def test_build_media_map_groups_by_parent():
    rows = [
        {"parent_id": 1, "type": "thumb", "storage_path": "a.png"},
        {"parent_id": 1, "type": "thumb.icon", "storage_path": "b.png"},
        {"parent_id": 2, "type": "thumb", "storage_path": None},
    ]
    assert build_media_map(rows, PREFIX) == {
        1: {"thumb": PREFIX + "a.png", "thumb.icon": PREFIX + "b.png"},
    }


def test_legacy_club_fields_defaults_counts():
    row = {
        "group_id": 12, "description": "Old club", "member_count": None,
        "view_count": 40, "modified_date": None,
    }
    fields = legacy_club_fields(row, {"thumb.normal": PREFIX + "n.png"})
    assert fields["club_id"] == 12
    assert fields["member_count"] == 0
    assert fields["view_count"] == 40
    assert fields["thumb_normal_url"] == PREFIX + "n.png"
    assert fields["thumb_url"] is None


def test_image_updates_map_untyped_media_to_logo():
    rows = [
        {"type": None, "storage_path": "orig.png", "user_id": None},
        {"type": "thumb.profile", "storage_path": "p.png", "user_id": 55},
        {"type": "thumb", "storage_path": "t.png", "user_id": None},
    ]
    assert image_updates(rows, PREFIX) == {
        "logo_url": PREFIX + "orig.png",
        "thumb_profile_url": PREFIX + "p.png",
    }
    assert legacy_owner_id(rows) == 55


def _detail(**overrides):
    detail = {
        "score": None, "created": datetime(2020, 1, 1), "location": None,
        "match_video": None, "youtube_link": None, "team_formation": "4-4-2",
        "opponent_team_formation": None, "winner": None,
        "first_half_start": None, "first_half_end": None,
        "second_half_start": None, "second_half_end": None,
        "my_team": '[{"player_name": "Ana", "jersy_number": "7"}]',
        "opponent_team": None, "my_team_substitute": None,
        "opponent_team_substitute": None,
    }
    detail.update(overrides)
    return detail


def test_video_url_prefers_youtube():
    assert video_url_for(_detail(youtube_link="https://yt/x", match_video="m.mp4"), PREFIX) == "https://yt/x"
    assert video_url_for(_detail(match_video="m.mp4"), PREFIX) == PREFIX + "m.mp4"
    assert video_url_for(_detail(), PREFIX) is None


def test_staging_row_defaults_score_and_falls_back_to_detail_date():
    match = {
        "match_id": 9, "event_id": "4", "user_id": "31", "my_team": "A",
        "opponent_team": "B", "match_date_time": None, "created": None, "modified": None,
    }
    event = {"title": "Spring Cup", "location": "Leeds"}

    row = build_staging_row(match, _detail(match_video="m.mp4"), event)

    assert (row["home_score"], row["away_score"]) == (0, 0)
    assert row["event_id"] == 4
    assert row["user_id"] == 31
    assert row["match_date_time"] == datetime(2020, 1, 1)
    assert row["competition_name"] == "Spring Cup"
    assert row["venue"] == "Leeds"
    assert '"Ana"' in row["my_team_lineup"]
    assert '"originalMatch"' in row["raw_data"]


def test_stats_summary_lines():
    stats = MigrationStats("Test")
    stats.bump("total", 3)
    stats.bump("errors")
    assert stats["total"] == 3
    assert stats["missing"] == 0
    assert stats.summary_lines() == ["total   3", "errors  1"]


class _FailingSession:
    def __init__(self):
        self.rolled_back = False

    async def execute(self, *args, **kwargs):
        raise DBAPIError("SELECT ...", {}, Exception('relation "media_files" does not exist'))

    async def rollback(self):
        self.rolled_back = True


async def test_media_lookup_failure_yields_no_images():
    db = _FailingSession()
    assert await _fetch_media(db, [1, 2]) == []
    assert db.rolled_back


async def test_media_lookup_skipped_without_photo_ids():
    assert await _fetch_media(_FailingSession(), []) == []
