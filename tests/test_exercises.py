import uuid

from conftest import API

from app.core.seed_data import seed_uuid


async def test_list_requires_auth(client, seeded):
    resp = await client.get(f"{API}/exercises")
    assert resp.status_code == 401


async def test_list_paginates_sorted_by_name(client, seeded, auth):
    resp = await client.get(f"{API}/exercises", params={"limit": 5, "page": 2}, headers=auth["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["meta"] == {"total": 21, "page": 2, "limit": 5, "pages": 5}
    names = [e["name"] for e in body["data"]]
    assert len(names) == 5
    assert names == sorted(names)


async def test_filter_by_category(client, seeded, auth):
    resp = await client.get(f"{API}/exercises", params={"category": "CORE"}, headers=auth["headers"])
    body = resp.json()
    assert body["meta"]["total"] == 5
    assert {e["category"] for e in body["data"]} == {"CORE"}


async def test_filter_by_muscle_and_equipment(client, seeded, auth):
    glutes = await client.get(f"{API}/exercises", params={"muscle": "Glutes"}, headers=auth["headers"])
    names = {e["name"] for e in glutes.json()["data"]}
    assert {"Squats", "Glute Bridges", "Box Jumps"} <= names
    assert "Plank" not in names

    box = await client.get(f"{API}/exercises", params={"equipment": "box"}, headers=auth["headers"])
    assert [e["name"] for e in box.json()["data"]] == ["Box Jumps"]


async def test_invalid_category_is_422(client, seeded, auth):
    resp = await client.get(f"{API}/exercises", params={"category": "YOGA"}, headers=auth["headers"])
    assert resp.status_code == 422


async def test_search(client, seeded, auth):
    resp = await client.get(f"{API}/exercises/search", params={"q": "squat"}, headers=auth["headers"])
    assert resp.status_code == 200
    # Burpees mention a squat in their description
    assert {e["name"] for e in resp.json()} == {"Squats", "Jump Squats", "Burpees"}

    by_category = await client.get(f"{API}/exercises/search", params={"q": "flex"}, headers=auth["headers"])
    names = {e["name"] for e in by_category.json()}
    assert {"Downward Dog", "Child's Pose", "Hip Flexor Stretch"} <= names


async def test_search_requires_two_characters(client, seeded, auth):
    resp = await client.get(f"{API}/exercises/search", params={"q": " a "}, headers=auth["headers"])
    assert resp.status_code == 400


async def test_get_by_id(client, seeded, auth):
    resp = await client.get(f"{API}/exercises/{seed_uuid('ex-plank')}", headers=auth["headers"])
    assert resp.status_code == 200
    assert resp.json()["name"] == "Plank"
    assert resp.json()["calories_per_min"] == 5.0

    missing = await client.get(f"{API}/exercises/{uuid.uuid4()}", headers=auth["headers"])
    assert missing.status_code == 404


async def test_inactive_exercise_is_hidden(client, seeded, auth, session_maker):
    from app.models.exercise import Exercise

    async with session_maker() as session:
        plank = await session.get(Exercise, seed_uuid("ex-plank"))
        plank.is_active = False
        await session.commit()

    resp = await client.get(f"{API}/exercises/{seed_uuid('ex-plank')}", headers=auth["headers"])
    assert resp.status_code == 404
    listing = await client.get(f"{API}/exercises", headers=auth["headers"])
    assert listing.json()["meta"]["total"] == 20


async def test_wildcards_in_filters_match_literally(client, seeded, auth):
    for value in ("%", "_", "glut%"):
        resp = await client.get(f"{API}/exercises", params={"muscle": value}, headers=auth["headers"])
        assert resp.status_code == 200
        assert resp.json()["meta"]["total"] == 0

    resp = await client.get(f"{API}/exercises", params={"equipment": "%"}, headers=auth["headers"])
    assert resp.json()["meta"]["total"] == 0
