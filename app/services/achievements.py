"""Achievement rules: gather per-user counters in SQL, then unlock whatever is newly met."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import EARLY_WORKOUT_HOUR
from app.core.enums import RequirementType
from app.db.base import as_utc
from app.models.exercise import Exercise
from app.models.program import Enrollment
from app.models.progress import Achievement, Streak, UserAchievement, WorkoutLog

logger = logging.getLogger(__name__)


@dataclass
class UserStats:
    total_workouts: int = 0
    total_calories: float = 0.0
    longest_streak: int = 0
    early_workouts: int = 0
    programs_completed: int = 0
    workouts_by_category: dict[str, int] = field(default_factory=dict)


def requirement_met(requirement: dict[str, Any], stats: UserStats) -> bool:
    """Pure check of one requirement against the user's counters. Unknown types never match."""
    try:
        kind = RequirementType(requirement.get("type"))
        target = float(requirement.get("value", 0))
    except (ValueError, TypeError):
        return False

    if kind == RequirementType.TOTAL_WORKOUTS:
        return stats.total_workouts >= target
    if kind == RequirementType.STREAK_DAYS:
        return stats.longest_streak >= target
    if kind == RequirementType.TOTAL_CALORIES:
        return stats.total_calories >= target
    if kind == RequirementType.EARLY_WORKOUTS:
        return stats.early_workouts >= target
    if kind == RequirementType.PROGRAMS_COMPLETED:
        return stats.programs_completed >= target
    if kind == RequirementType.CATEGORY_WORKOUTS:
        category = str(requirement.get("category", "")).upper()
        return stats.workouts_by_category.get(category, 0) >= target
    return False


async def collect_user_stats(db: AsyncSession, user_id: uuid.UUID) -> UserStats:
    completed = (WorkoutLog.user_id == user_id, WorkoutLog.completed.is_(True))

    totals = (
        await db.execute(
            select(
                func.count(WorkoutLog.id).label("n"),
                func.coalesce(func.sum(WorkoutLog.calories_burned), 0).label("kcal"),
            ).where(*completed)
        )
    ).one()

    # Hour of day in UTC, whatever zone the driver hands timestamps back in
    log_times = (await db.execute(select(WorkoutLog.date).where(*completed))).scalars()
    early = sum(1 for t in log_times if as_utc(t).hour < EARLY_WORKOUT_HOUR)

    by_category_rows = (
        await db.execute(
            select(Exercise.category, func.count(WorkoutLog.id))
            .join(Exercise, Exercise.id == WorkoutLog.exercise_id)
            .where(*completed)
            .group_by(Exercise.category)
        )
    ).all()

    programs_completed = (
        await db.execute(
            select(func.count(Enrollment.id)).where(
                Enrollment.user_id == user_id, Enrollment.is_completed.is_(True)
            )
        )
    ).scalar_one()

    longest = (
        await db.execute(select(Streak.longest_streak).where(Streak.user_id == user_id))
    ).scalar_one_or_none()

    return UserStats(
        total_workouts=int(totals.n or 0),
        total_calories=float(totals.kcal or 0),
        longest_streak=int(longest or 0),
        early_workouts=int(early or 0),
        programs_completed=int(programs_completed or 0),
        workouts_by_category={
            (cat.value if hasattr(cat, "value") else str(cat)): int(n) for cat, n in by_category_rows
        },
    )


async def evaluate_achievements(db: AsyncSession, user_id: uuid.UUID) -> list[Achievement]:
    """Unlock every achievement the user now qualifies for but doesn't hold yet. Returns the new ones."""
    unlocked_ids = set(
        (
            await db.execute(
                select(UserAchievement.achievement_id).where(UserAchievement.user_id == user_id)
            )
        ).scalars()
    )
    candidates = (
        await db.execute(select(Achievement).order_by(Achievement.points))
    ).scalars().all()
    pending = [a for a in candidates if a.id not in unlocked_ids]
    if not pending:
        return []

    stats = await collect_user_stats(db, user_id)
    newly_unlocked = [a for a in pending if requirement_met(a.requirement or {}, stats)]
    for achievement in newly_unlocked:
        db.add(UserAchievement(user_id=user_id, achievement_id=achievement.id))
        logger.info("User %s unlocked achievement %r", user_id, achievement.name)
    if newly_unlocked:
        await db.flush()
    return newly_unlocked
