"""Workout logging, stats, streaks and achievements."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_current_user
from app.api.v1.endpoints.users import get_latest_weight
from app.core.constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_STATS_PERIOD,
    MAX_PAGE_SIZE,
    RECENT_LOGS_LIMIT,
    STATS_PERIOD_DAYS,
)
from app.db.base import as_utc
from app.db.session import get_db
from app.models.exercise import Exercise
from app.models.progress import Achievement, UserAchievement, WorkoutLog
from app.models.user import User
from app.schemas.progress import (
    AchievementRead,
    AchievementStatus,
    ProgressStats,
    StreakRead,
    WorkoutLogCreate,
    WorkoutLogCreated,
    WorkoutLogRead,
)
from app.services.achievements import evaluate_achievements
from app.services.calorie_estimation import estimate_calories
from app.services.streaks import get_streak_summary, refresh_streak

logger = logging.getLogger(__name__)
router = APIRouter()


def _logs_query(user: User):
    return (
        select(WorkoutLog)
        .options(selectinload(WorkoutLog.exercise))
        .where(WorkoutLog.user_id == user.id)
        .order_by(WorkoutLog.date.desc())
    )


@router.post("", response_model=WorkoutLogCreated, status_code=201)
async def log_workout(
    payload: WorkoutLogCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Log a completed workout, then recompute the streak and unlock any
    achievements it earned. Calories are estimated when not supplied.
    """
    exercise = await db.get(Exercise, payload.exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")

    data = payload.model_dump(exclude_none=True)
    if payload.date is not None:
        data["date"] = as_utc(payload.date)
    if payload.calories_burned is None:
        weight = await get_latest_weight(db, current_user.id)
        data["calories_burned"] = estimate_calories(
            exercise.calories_per_min, payload.duration, payload.difficulty, weight
        )

    log = WorkoutLog(user_id=current_user.id, completed=True, **data)
    db.add(log)
    await db.flush()

    streak = await refresh_streak(db, current_user.id)
    new_achievements = await evaluate_achievements(db, current_user.id)

    result = await db.execute(
        select(WorkoutLog).options(selectinload(WorkoutLog.exercise)).where(WorkoutLog.id == log.id)
    )
    return WorkoutLogCreated(
        log=WorkoutLogRead.model_validate(result.scalar_one()),
        streak=StreakRead.model_validate(streak),
        new_achievements=[AchievementRead.model_validate(a) for a in new_achievements],
    )


@router.get("/me", response_model=list[WorkoutLogRead])
async def my_logs(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Latest logs, newest first."""
    result = await db.execute(_logs_query(current_user).limit(RECENT_LOGS_LIMIT))
    return list(result.scalars().all())


@router.get("/history", response_model=list[WorkoutLogRead])
async def history(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(_logs_query(current_user).limit(min(limit, MAX_PAGE_SIZE)))
    return list(result.scalars().all())


@router.get("/stats", response_model=ProgressStats)
async def stats(
    period: str = DEFAULT_STATS_PERIOD,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Totals over the last 7/30/90 days plus per-day and per-category counts."""
    if period not in STATS_PERIOD_DAYS:
        period = DEFAULT_STATS_PERIOD
    since = datetime.now(timezone.utc) - timedelta(days=STATS_PERIOD_DAYS[period])

    result = await db.execute(
        select(WorkoutLog)
        .options(selectinload(WorkoutLog.exercise))
        .where(WorkoutLog.user_id == current_user.id, WorkoutLog.date >= since)
    )
    logs = result.scalars().all()

    total_workouts = len(logs)
    total_duration = sum(l.duration for l in logs)
    total_calories = round(sum(l.calories_burned or 0 for l in logs), 1)
    by_date = Counter(as_utc(l.date).date().isoformat() for l in logs)
    by_category = Counter(l.exercise.category.value for l in logs if l.exercise is not None)

    return ProgressStats(
        period=period,
        total_workouts=total_workouts,
        total_duration=total_duration,
        total_calories=total_calories,
        avg_duration=round(total_duration / total_workouts) if total_workouts else 0,
        by_date=dict(sorted(by_date.items())),
        by_category=dict(by_category),
    )


@router.get("/streaks", response_model=StreakRead)
async def streaks(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Current streak drops to 0 once a full day passes without a workout."""
    return StreakRead.model_validate(await get_streak_summary(db, current_user.id))


@router.get("/achievements", response_model=list[AchievementStatus])
async def achievements(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Every achievement by points, flagged with whether (and when) the user unlocked it."""
    all_achievements = (
        await db.execute(select(Achievement).order_by(Achievement.points, Achievement.name))
    ).scalars().all()
    unlocked = dict(
        (
            await db.execute(
                select(UserAchievement.achievement_id, UserAchievement.unlocked_at).where(
                    UserAchievement.user_id == current_user.id
                )
            )
        ).all()
    )
    return [
        AchievementStatus(
            **AchievementRead.model_validate(a).model_dump(),
            unlocked=a.id in unlocked,
            unlocked_at=unlocked.get(a.id),
        )
        for a in all_achievements
    ]
