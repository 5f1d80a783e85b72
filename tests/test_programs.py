import uuid

from conftest import API

from app.core.seed_data import seed_uuid

BEGINNER = seed_uuid("prog-beginner")
FLEX = seed_uuid("prog-flex")


def day_id(program_slug: str, week: int, day: int) -> str:
    return str(seed_uuid(f"{program_slug}-w{week}-d{day}"))


async def test_list_programs_with_filters(client, seeded, auth):
    resp = await client.get(f"{API}/programs", headers=auth["headers"])
    assert resp.status_code == 200
    assert resp.json()["meta"]["total"] == 5

    beginner = await client.get(f"{API}/programs", params={"difficulty": "BEGINNER"}, headers=auth["headers"])
    titles = {p["title"] for p in beginner.json()["data"]}
    assert titles == {"Beginner Foundation", "Core Power", "Mobility & Flexibility"}

    hiit = await client.get(f"{API}/programs", params={"category": "HIIT"}, headers=auth["headers"])
    assert [p["title"] for p in hiit.json()["data"]] == ["Fat Burn HIIT"]


async def test_program_detail_is_nested_and_ordered(client, seeded, auth):
    resp = await client.get(f"{API}/programs/{BEGINNER}", headers=auth["headers"])
    assert resp.status_code == 200
    program = resp.json()
    assert [w["week_number"] for w in program["weeks"]] == [1, 2, 3, 4]
    first_week = program["weeks"][0]
    assert [d["day_number"] for d in first_week["days"]] == [1, 2, 3]
    first_day = first_week["days"][0]
    assert [e["order_index"] for e in first_day["exercises"]] == [1, 2, 3]
    assert [e["exercise"]["name"] for e in first_day["exercises"]] == ["Push-ups", "Tricep Dips", "Plank"]


async def test_program_detail_404(client, seeded, auth):
    resp = await client.get(f"{API}/programs/{uuid.uuid4()}", headers=auth["headers"])
    assert resp.status_code == 404


async def test_enroll_once(client, seeded, auth):
    resp = await client.post(f"{API}/programs/{BEGINNER}/enroll", headers=auth["headers"])
    assert resp.status_code == 201
    enrollment = resp.json()
    assert enrollment["progress"] == 0
    assert (enrollment["current_week"], enrollment["current_day"]) == (1, 1)
    assert enrollment["program"]["title"] == "Beginner Foundation"

    again = await client.post(f"{API}/programs/{BEGINNER}/enroll", headers=auth["headers"])
    assert again.status_code == 409

    missing = await client.post(f"{API}/programs/{uuid.uuid4()}/enroll", headers=auth["headers"])
    assert missing.status_code == 404


async def test_my_enrollments_newest_first(client, seeded, auth):
    await client.post(f"{API}/programs/{BEGINNER}/enroll", headers=auth["headers"])
    await client.post(f"{API}/programs/{FLEX}/enroll", headers=auth["headers"])

    resp = await client.get(f"{API}/programs/my-enrollments", headers=auth["headers"])
    assert resp.status_code == 200
    assert [e["program"]["title"] for e in resp.json()] == ["Mobility & Flexibility", "Beginner Foundation"]


async def test_completing_a_day_advances_position(client, seeded, auth):
    enrollment = (await client.post(f"{API}/programs/{BEGINNER}/enroll", headers=auth["headers"])).json()
    url = f"{API}/programs/enrollments/{enrollment['id']}/progress"

    resp = await client.put(url, json={"completed_day_id": day_id("prog-beginner", 1, 3)}, headers=auth["headers"])
    assert resp.status_code == 200
    updated = resp.json()["enrollment"]
    assert (updated["current_week"], updated["current_day"]) == (2, 1)
    assert updated["progress"] == 25.0
    assert updated["is_completed"] is False
    assert updated["last_activity_at"] is not None


async def test_finishing_final_day_completes_and_unlocks_graduate(client, seeded, auth):
    enrollment = (await client.post(f"{API}/programs/{FLEX}/enroll", headers=auth["headers"])).json()
    url = f"{API}/programs/enrollments/{enrollment['id']}/progress"

    resp = await client.put(url, json={"completed_day_id": day_id("prog-flex", 3, 4)}, headers=auth["headers"])
    body = resp.json()
    assert body["enrollment"]["is_completed"] is True
    assert body["enrollment"]["progress"] == 100
    assert body["enrollment"]["completed_at"] is not None
    assert [a["name"] for a in body["new_achievements"]] == ["Program Graduate"]


async def test_progress_is_clamped(client, seeded, auth):
    enrollment = (await client.post(f"{API}/programs/{BEGINNER}/enroll", headers=auth["headers"])).json()
    url = f"{API}/programs/enrollments/{enrollment['id']}/progress"

    low = await client.put(url, json={"progress": -20}, headers=auth["headers"])
    assert low.json()["enrollment"]["progress"] == 0

    high = await client.put(url, json={"progress": 140}, headers=auth["headers"])
    assert high.json()["enrollment"]["progress"] == 100
    assert high.json()["enrollment"]["is_completed"] is True


async def test_day_from_other_program_is_rejected(client, seeded, auth):
    enrollment = (await client.post(f"{API}/programs/{BEGINNER}/enroll", headers=auth["headers"])).json()
    resp = await client.put(
        f"{API}/programs/enrollments/{enrollment['id']}/progress",
        json={"completed_day_id": day_id("prog-flex", 1, 1)},
        headers=auth["headers"],
    )
    assert resp.status_code == 400


async def test_cannot_touch_another_users_enrollment(client, seeded, auth, other_auth):
    enrollment = (await client.post(f"{API}/programs/{BEGINNER}/enroll", headers=auth["headers"])).json()
    resp = await client.put(
        f"{API}/programs/enrollments/{enrollment['id']}/progress",
        json={"progress": 50},
        headers=other_auth["headers"],
    )
    assert resp.status_code == 404
