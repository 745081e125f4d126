"""Club Directory — verifies cursor pagination, detail view, CRUD and membership.

Invariants:
    - Pages are ordered by id; nextCursor is the last id of a page with more after it
    - Club detail lists PlayerProfiles whose club name matches
    - Joining twice -> 409; leaving when not a member -> 404
    - memberCount never drops below zero
"""

from uuid import uuid4

import pytest

from scouting.models.club import Club


@pytest.fixture
async def many_clubs(test_db):
    clubs = [Club(name=f"Club {i}", country="Spain") for i in range(6)]
    test_db.add_all(clubs)
    await test_db.commit()
    return sorted(clubs, key=lambda c: c.id)


async def test_first_page_uses_default_limit(client, many_clubs):
    res = await client.get("/club")

    assert res.status_code == 200
    body = res.json()
    assert [c["id"] for c in body["data"]] == [str(c.id) for c in many_clubs[:4]]
    assert body["pagination"] == {
        "hasNextPage": True,
        "nextCursor": str(many_clubs[3].id),
        "limit": 4,
    }


async def test_cursor_returns_the_rest(client, many_clubs):
    res = await client.get("/club", params={"cursor": str(many_clubs[3].id)})

    body = res.json()
    assert [c["id"] for c in body["data"]] == [str(c.id) for c in many_clubs[4:]]
    assert body["pagination"]["hasNextPage"] is False
    assert body["pagination"]["nextCursor"] is None


async def test_limit_is_capped(client, many_clubs):
    res = await client.get("/club", params={"limit": 1000})

    body = res.json()
    assert body["pagination"]["limit"] == 100
    assert len(body["data"]) == 6


async def test_invalid_cursor_returns_400(client):
    res = await client.get("/club", params={"cursor": "not-a-uuid"})
    assert res.status_code == 400


async def test_club_summary_picks_image_url(client, seed_club):
    res = await client.get("/club")

    club = res.json()["data"][0]
    assert club["imageUrl"] == "https://cdn.example.com/profile.png"
    assert club["profile"]["logoUrl"] == "https://cdn.example.com/logo.png"


async def test_club_detail_lists_members(client, seed_club, seed_profile):
    res = await client.get(f"/club/{seed_club.id}")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["playerCount"] == 1
    member = data["members"][0]
    assert member["name"] == "Ana Silva"
    assert member["position"] == "Winger"
    assert member["location"] == "Leeds, West Yorkshire, England"
    assert isinstance(member["age"], int)
    assert len(data["createdAt"].split("-")) == 3


async def test_unknown_club_returns_404(client):
    res = await client.get(f"/club/{uuid4()}")
    assert res.status_code == 404


async def test_create_update_delete_club(client):
    created = await client.post(
        "/club", json={"name": "New Town", "country": "Wales", "description": "Est. 1901"},
    )
    assert created.status_code == 201
    club_id = created.json()["data"]["id"]

    updated = await client.put(f"/club/{club_id}", json={"description": "Est. 1902"})
    assert updated.status_code == 200
    assert updated.json()["data"]["description"] == "Est. 1902"
    assert updated.json()["data"]["name"] == "New Town"

    deleted = await client.delete(f"/club/{club_id}")
    assert deleted.status_code == 200
    assert (await client.get(f"/club/{club_id}")).status_code == 404


async def test_create_club_requires_name_and_country(client):
    res = await client.post("/club", json={"name": "Nowhere"})
    assert res.status_code == 400


@pytest.mark.parametrize("field", ["name", "country"])
async def test_update_rejects_null_required_field(client, seed_club, field, test_db):
    res = await client.put(f"/club/{seed_club.id}", json={field: None})

    assert res.status_code == 400
    await test_db.refresh(seed_club)
    assert seed_club.name == "Riverside FC"
    assert seed_club.country == "England"


async def test_update_allows_clearing_optional_field(client, seed_club):
    res = await client.put(f"/club/{seed_club.id}", json={"logoUrl": None})

    assert res.status_code == 200
    assert res.json()["data"]["profile"]["logoUrl"] is None


async def test_delete_unknown_club_returns_404(client):
    res = await client.delete(f"/club/{uuid4()}")
    assert res.status_code == 404


async def test_join_and_leave_club(client, seed_user, seed_club, test_db):
    joined = await client.post(f"/club/{seed_club.id}/members")
    assert joined.status_code == 201
    assert joined.json()["data"]["role"] == "member"
    await test_db.refresh(seed_club)
    assert seed_club.member_count == 1

    again = await client.post(f"/club/{seed_club.id}/members")
    assert again.status_code == 409

    left = await client.delete(f"/club/{seed_club.id}/members")
    assert left.status_code == 200
    assert left.json()["data"]["memberCount"] == 0


async def test_leave_without_membership_returns_404(client, seed_user, seed_club):
    res = await client.delete(f"/club/{seed_club.id}/members")
    assert res.status_code == 404


async def test_join_requires_registered_user(client, seed_club):
    res = await client.post(f"/club/{seed_club.id}/members")
    assert res.status_code == 404


async def test_member_count_never_negative(client, seed_user, seed_club, test_db):
    await client.post(f"/club/{seed_club.id}/members")
    await test_db.refresh(seed_club)
    seed_club.member_count = 0
    await test_db.commit()

    res = await client.delete(f"/club/{seed_club.id}/members")

    assert res.json()["data"]["memberCount"] == 0
