"""Statistics SQL — verifies identifier checks, probe order and missing-table detection."""

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError

from scouting.core.statistics_queries import (
    StatisticsScope, build_statistics_query, is_missing_relation_error,
    is_safe_identifier, probe_targets, qualified_table,
)


@pytest.mark.parametrize("name", ["public", "smo_v1", "_x", "statistics_cache"])
def test_safe_identifiers(name):
    assert is_safe_identifier(name)


@pytest.mark.parametrize("name", ["", "1abc", "a.b", "x; DROP TABLE users", "a-b"])
def test_unsafe_identifiers(name):
    assert not is_safe_identifier(name)


def test_probe_order_starts_with_configured_schema():
    assert probe_targets("smo") == ["smo", "public", "smo_v1", "statistics", None]


def test_probe_order_for_unknown_schema():
    assert probe_targets("analytics") == [
        "analytics", "public", "smo_v1", "smo", "statistics", None,
    ]


def test_qualified_table():
    assert qualified_table("public", "stats") == "public.stats"
    assert qualified_table(None, "stats") == "stats"


def test_player_query_filters_on_player_id():
    sql = build_statistics_query(StatisticsScope.PLAYER, "public", "statistics_cache")
    assert "FROM public.statistics_cache" in sql
    assert "cache_type = 'player'" in sql
    assert "player_id = :entity_id" in sql


def test_club_query_filters_on_club_id():
    sql = build_statistics_query(StatisticsScope.CLUB, None, "statistics_cache")
    assert "FROM statistics_cache" in sql
    assert "club_id = :entity_id" in sql


def test_missing_relation_detected():
    err = ProgrammingError("SELECT 1", {}, Exception('relation "x.y" does not exist'))
    assert is_missing_relation_error(err)


def test_other_errors_not_treated_as_missing():
    err = OperationalError("SELECT 1", {}, Exception("connection refused"))
    assert not is_missing_relation_error(err)
