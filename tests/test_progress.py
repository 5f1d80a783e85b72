import uuid
from datetime import datetime, timedelta, timezone

from conftest import API

from app.core.seed_data import seed_uuid
from app.services.achievements import collect_user_stats

PUSHUP = str(seed_uuid("ex-pushup"))
BURPEE = str(seed_uuid("ex-burpee"))


async def log(client, auth, exercise_id=PUSHUP, **extra):
    payload = {"exercise_id": exercise_id, "duration": 30, **extra}
    return await client.post(f"{API}/progress", json=payload, headers=auth["headers"])


async def test_first_log_updates_streak_and_unlocks_first_workout(client, seeded, auth):
    resp = await log(client, auth)
    assert resp.status_code == 201
    body = resp.json()
    assert body["log"]["exercise"]["name"] == "Push-ups"
    assert body["log"]["completed"] is True
    assert body["streak"]["current_streak"] == 1
    assert [a["name"] for a in body["new_achievements"]] == ["First Workout"]

    second = await log(client, auth)
    assert second.json()["new_achievements"] == []
    assert second.json()["streak"]["current_streak"] == 1


async def test_calories_estimated_when_omitted(client, seeded, auth):
    resp = await log(client, auth)
    # 8.0 kcal/min x 30 min at moderate effort, no body weight known
    assert resp.json()["log"]["calories_burned"] == 240.0

    hard = await log(client, auth, difficulty="HARD")
    assert hard.json()["log"]["calories_burned"] == 288.0

    easy = await log(client, auth, difficulty="EASY")
    assert easy.json()["log"]["calories_burned"] == 192.0

    supplied = await log(client, auth, calories_burned=100)
    assert supplied.json()["log"]["calories_burned"] == 100


async def test_calorie_estimate_uses_latest_body_weight(client, seeded, auth):
    await client.post(f"{API}/users/metrics", json={"weight": 84}, headers=auth["headers"])
    resp = await log(client, auth, duration=10)
    assert resp.json()["log"]["calories_burned"] == 96.0


async def test_log_validation(client, seeded, auth):
    missing = await log(client, auth, exercise_id=str(uuid.uuid4()))
    assert missing.status_code == 404

    zero = await log(client, auth, duration=0)
    assert zero.status_code == 422


async def test_backdated_logs_build_a_streak(client, seeded, auth):
    now = datetime.now(timezone.utc)
    for days_back in (2, 0, 1):
        await log(client, auth, date=(now - timedelta(days=days_back)).isoformat())

    resp = await client.get(f"{API}/progress/streaks", headers=auth["headers"])
    assert resp.status_code == 200
    assert resp.json()["current_streak"] == 3
    assert resp.json()["longest_streak"] == 3
    assert resp.json()["last_workout_date"] == now.date().isoformat()


async def test_offset_dates_are_bucketed_by_utc_day(client, seeded, auth, session_maker):
    # 22:00 at UTC-5 is 03:00 the next day in UTC
    resp = await log(client, auth, date="2026-03-14T22:00:00-05:00")
    assert resp.status_code == 201
    assert resp.json()["log"]["date"].startswith("2026-03-15T03:00:00")
    assert resp.json()["streak"]["last_workout_date"] == "2026-03-15"

    # 09:00 at UTC+5 is 04:00 UTC, before the early-bird cutoff
    await log(client, auth, date="2026-03-16T09:00:00+05:00")
    async with session_maker() as session:
        stats = await collect_user_stats(session, uuid.UUID(auth["user"]["id"]))
    assert stats.early_workouts == 2


async def test_streaks_default_to_zero(client, auth):
    resp = await client.get(f"{API}/progress/streaks", headers=auth["headers"])
    assert resp.json() == {"current_streak": 0, "longest_streak": 0, "last_workout_date": None}


async def test_me_and_history_are_newest_first_and_private(client, seeded, auth, other_auth):
    now = datetime.now(timezone.utc)
    await log(client, auth, date=(now - timedelta(hours=3)).isoformat(), notes="older")
    await log(client, auth, exercise_id=BURPEE, date=now.isoformat(), notes="newer")
    await log(client, other_auth)

    mine = await client.get(f"{API}/progress/me", headers=auth["headers"])
    assert [l["notes"] for l in mine.json()] == ["newer", "older"]

    history = await client.get(f"{API}/progress/history", params={"limit": 1}, headers=auth["headers"])
    assert [l["notes"] for l in history.json()] == ["newer"]


async def test_stats(client, seeded, auth):
    now = datetime.now(timezone.utc)
    await log(client, auth, duration=20, calories_burned=100)
    await log(client, auth, exercise_id=BURPEE, duration=40, calories_burned=300)
    await log(client, auth, duration=10, calories_burned=50, date=(now - timedelta(days=20)).isoformat())

    week = (await client.get(f"{API}/progress/stats", params={"period": "7d"}, headers=auth["headers"])).json()
    assert week["period"] == "7d"
    assert week["total_workouts"] == 2
    assert week["total_duration"] == 60
    assert week["total_calories"] == 400
    assert week["avg_duration"] == 30
    assert week["by_category"] == {"STRENGTH": 1, "CARDIO": 1}
    assert sum(week["by_date"].values()) == 2

    month = (await client.get(f"{API}/progress/stats", params={"period": "bogus"}, headers=auth["headers"])).json()
    assert month["period"] == "30d"
    assert month["total_workouts"] == 3


async def test_early_bird_counts_logs_before_8am(client, seeded, auth):
    base = datetime.now(timezone.utc).replace(hour=6, minute=30, second=0, microsecond=0)
    for days_back in range(10):
        await log(client, auth, date=(base - timedelta(days=days_back)).isoformat())

    resp = await client.get(f"{API}/progress/achievements", headers=auth["headers"])
    unlocked = {a["name"] for a in resp.json() if a["unlocked"]}
    assert {"First Workout", "Week Warrior", "Early Bird"} <= unlocked


async def test_achievements_list_flags_unlocks(client, seeded, auth):
    await log(client, auth)
    resp = await client.get(f"{API}/progress/achievements", headers=auth["headers"])
    assert resp.status_code == 200
    achievements = resp.json()
    assert len(achievements) == 10
    points = [a["points"] for a in achievements]
    assert points == sorted(points)

    by_name = {a["name"]: a for a in achievements}
    assert by_name["First Workout"]["unlocked"] is True
    assert by_name["First Workout"]["unlocked_at"] is not None
    assert by_name["Century Club"]["unlocked"] is False
    assert by_name["Century Club"]["unlocked_at"] is None
