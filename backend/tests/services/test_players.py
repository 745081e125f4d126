"""Player Directory — verifies listing, search, owner-only updates and visit tracking.

Invariants:
    - dateOfBirth rendered DD-MM-YYYY
    - Search: case-insensitive contains on names/country; unparseable dates ignored
    - Only the owner may update a profile (403 otherwise)
    - Viewing another user's profile records one visit; viewing your own records none
"""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy import func, select

from scouting.models.player_profile import PlayerProfile
from scouting.models.profile_visit import ProfileVisit


@pytest.fixture
async def scout_profile(test_db, seed_other_user):
    profile = PlayerProfile(
        user_id=seed_other_user.id, profile_type="Scout",
        first_name="Ben", last_name="Okafor", country="Nigeria",
    )
    test_db.add(profile)
    await test_db.commit()
    return profile


async def _visit_count(db) -> int:
    return (await db.execute(select(func.count()).select_from(ProfileVisit))).scalar_one()


async def test_list_players_formats_dates(client, seed_profile):
    res = await client.get("/player")

    assert res.status_code == 200
    [player] = res.json()["data"]
    assert player["firstName"] == "Ana"
    assert player["dateOfBirth"] == "15-03-2005"


@pytest.mark.parametrize("params", [
    {"firstName": "an"},
    {"lastName": "SIL"},
    {"country": "eng"},
    {"dateOfBirth": "15-03-2005"},
    {"dateOfBirth": "2005-03-15"},
    {"dateOfBirth": "garbage"},
])
async def test_search_matches(client, seed_profile, scout_profile, params):
    res = await client.get("/player/search", params=params)

    assert res.status_code == 200
    names = {p["firstName"] for p in res.json()["data"]}
    assert "Ana" in names


async def test_search_excludes_non_matching(client, seed_profile, scout_profile):
    res = await client.get("/player/search", params={"country": "nigeria"})
    assert [p["firstName"] for p in res.json()["data"]] == ["Ben"]


async def test_me_returns_callers_profile(client, seed_profile):
    res = await client.get("/player/me")
    assert res.json()["data"]["id"] == str(seed_profile.id)


async def test_me_without_profile_returns_404(client, seed_user):
    res = await client.get("/player/me")
    assert res.status_code == 404


async def test_owner_can_update_profile(client, seed_profile, test_db):
    res = await client.put(
        f"/player/{seed_profile.id}",
        json={"firstName": "Ana Maria", "dateOfBirth": "01-02-2004", "primaryPosition": "Striker"},
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["firstName"] == "Ana Maria"
    assert data["dateOfBirth"] == "01-02-2004"
    assert data["primaryPosition"] == "Striker"
    await test_db.refresh(seed_profile)
    assert seed_profile.date_of_birth == date(2004, 2, 1)


async def test_non_owner_update_returns_403(client, seed_profile, seed_other_user, login_as):
    login_as(seed_other_user.id)

    res = await client.put(f"/player/{seed_profile.id}", json={"firstName": "Hacked"})

    assert res.status_code == 403


@pytest.mark.parametrize("body", [
    {"primaryPosition": "Sweeper"},
    {"dateOfBirth": "31-31-2000"},
    {"dateOfBirth": "yesterday"},
    {"firstName": None},
    {"lastName": None},
])
async def test_invalid_update_returns_400(client, seed_profile, body):
    res = await client.put(f"/player/{seed_profile.id}", json=body)
    assert res.status_code == 400


async def test_update_unknown_profile_returns_404(client, seed_user):
    res = await client.put(f"/player/{uuid4()}", json={"firstName": "X"})
    assert res.status_code == 404


async def test_viewing_other_profile_records_visit(
    client, seed_profile, seed_other_user, scout_profile, login_as, test_db,
):
    login_as(seed_other_user.id)

    res = await client.get(f"/player/{seed_profile.id}")

    assert res.status_code == 200
    visit = (await test_db.execute(select(ProfileVisit))).scalar_one()
    assert visit.visited_profile_id == seed_profile.id
    assert visit.visitor_user_id == seed_other_user.id
    assert visit.visitor_profile_type == "Scout"


async def test_viewing_own_profile_records_nothing(client, seed_profile, test_db):
    await client.get(f"/player/{seed_profile.id}")
    assert await _visit_count(test_db) == 0


async def test_unregistered_visitor_records_nothing(client, seed_profile, login_as, test_db):
    login_as("unregistered-uid")

    res = await client.get(f"/player/{seed_profile.id}")

    assert res.status_code == 200
    assert await _visit_count(test_db) == 0


async def test_visit_analytics(client, seed_profile, seed_other_user, scout_profile, test_db):
    now = datetime.now(timezone.utc)
    test_db.add_all([
        ProfileVisit(
            visited_profile_id=seed_profile.id, visitor_user_id=seed_other_user.id,
            visitor_profile_type="Scout", visited_at=now - timedelta(seconds=30),
        ),
        ProfileVisit(
            visited_profile_id=seed_profile.id, visitor_user_id=seed_other_user.id,
            visitor_profile_type="Scout", visited_at=now - timedelta(seconds=10),
        ),
        ProfileVisit(
            visited_profile_id=seed_profile.id, visitor_user_id=seed_other_user.id,
            visitor_profile_type="Scout", visited_at=now - timedelta(days=3),
        ),
    ])
    await test_db.commit()

    res = await client.get("/player/analytics/visits")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["totalVisits"] == 3
    assert len(data["recentVisits"]) == 3
    assert data["recentVisits"][0]["email"] == "ben@example.com"
    [scouts] = data["todayStats"]
    assert scouts["profileType"] == "Scout"
    assert scouts["count"] == 2
    assert scouts["uniqueVisitors"] == 1
    assert scouts["visitors"][0]["phone"] == "+44 7000 000000"
