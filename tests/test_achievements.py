import pytest
from sqlalchemy import func, select

from app.core.enums import ExerciseCategory
from app.models.exercise import Exercise
from app.models.progress import Achievement, UserAchievement, WorkoutLog
from app.models.user import User
from app.services.achievements import UserStats, evaluate_achievements, requirement_met


@pytest.mark.parametrize(
    "requirement, stats, expected",
    [
        ({"type": "total_workouts", "value": 1}, UserStats(total_workouts=1), True),
        ({"type": "total_workouts", "value": 100}, UserStats(total_workouts=99), False),
        ({"type": "streak_days", "value": 7}, UserStats(longest_streak=7), True),
        ({"type": "total_calories", "value": 10000}, UserStats(total_calories=9999.9), False),
        ({"type": "early_workouts", "value": 10}, UserStats(early_workouts=12), True),
        ({"type": "programs_completed", "value": 1}, UserStats(programs_completed=1), True),
        (
            {"type": "category_workouts", "category": "CARDIO", "value": 25},
            UserStats(workouts_by_category={"CARDIO": 25}),
            True,
        ),
        (
            {"type": "category_workouts", "category": "core", "value": 25},
            UserStats(workouts_by_category={"CORE": 24, "CARDIO": 50}),
            False,
        ),
    ],
)
def test_requirement_met(requirement, stats, expected):
    assert requirement_met(requirement, stats) is expected


@pytest.mark.parametrize(
    "requirement",
    [{}, {"type": "moon_landings", "value": 1}, {"type": "total_workouts", "value": "lots"}],
)
def test_unknown_or_malformed_requirements_never_match(requirement):
    assert requirement_met(requirement, UserStats(total_workouts=10_000)) is False


async def test_evaluate_unlocks_once(db):
    user = User(name="A", email="a@example.com", password_hash="x")
    exercise = Exercise(name="Burpees", category=ExerciseCategory.CARDIO, calories_per_min=12.0)
    first = Achievement(
        name="First Workout", description="d", category="MILESTONE",
        requirement={"type": "total_workouts", "value": 1}, points=10,
    )
    cardio = Achievement(
        name="Cardio King", description="d", category="CATEGORY",
        requirement={"type": "category_workouts", "category": "CARDIO", "value": 2}, points=100,
    )
    db.add_all([user, exercise, first, cardio])
    await db.flush()
    db.add(WorkoutLog(user_id=user.id, exercise_id=exercise.id, duration=10, calories_burned=120))
    await db.flush()

    unlocked = await evaluate_achievements(db, user.id)
    assert [a.name for a in unlocked] == ["First Workout"]

    db.add(WorkoutLog(user_id=user.id, exercise_id=exercise.id, duration=10, calories_burned=120))
    await db.flush()
    unlocked = await evaluate_achievements(db, user.id)
    assert [a.name for a in unlocked] == ["Cardio King"]

    assert await evaluate_achievements(db, user.id) == []
    count = await db.scalar(select(func.count(UserAchievement.id)).where(UserAchievement.user_id == user.id))
    assert count == 2
