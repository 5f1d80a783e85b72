"""Streak calculation: consecutive UTC calendar days with at least one completed log."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import as_utc
from app.models.progress import Streak, WorkoutLog


@dataclass(frozen=True)
class StreakSummary:
    current_streak: int
    longest_streak: int
    last_workout_date: date | None


def compute_streak(workout_dates: Iterable[date], today: date) -> StreakSummary:
    """
    Current streak counts back from the most recent logged day and is only
    "current" if that day is today or yesterday. Longest is the best run ever.
    """
    days = sorted(set(workout_dates), reverse=True)
    if not days:
        return StreakSummary(0, 0, None)

    last_workout = days[0]
    one_day = timedelta(days=1)

    current = 0
    if last_workout >= today - one_day:
        current = 1
        for i in range(1, len(days)):
            if days[i] == days[i - 1] - one_day:
                current += 1
            else:
                break

    longest = 1
    run = 1
    for i in range(1, len(days)):
        if days[i] == days[i - 1] - one_day:
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    return StreakSummary(current, longest, last_workout)


async def workout_dates_for_user(db: AsyncSession, user_id: uuid.UUID) -> list[date]:
    """Distinct UTC days with a completed log, newest first.

    Days are taken in Python so Postgres session time zones and SQLite's
    naive timestamps both land on the UTC calendar.
    """
    result = await db.execute(
        select(WorkoutLog.date).where(WorkoutLog.user_id == user_id, WorkoutLog.completed.is_(True))
    )
    return sorted({as_utc(d).date() for d in result.scalars()}, reverse=True)


async def refresh_streak(db: AsyncSession, user_id: uuid.UUID, today: date | None = None) -> Streak:
    """Recompute from the full log history and upsert the user's streak row.

    Recomputing (rather than incrementing) keeps the row right when a log is
    backdated or arrives out of order.
    """
    today = today or datetime.now(timezone.utc).date()
    summary = compute_streak(await workout_dates_for_user(db, user_id), today)

    result = await db.execute(select(Streak).where(Streak.user_id == user_id))
    streak = result.scalar_one_or_none()
    if streak is None:
        streak = Streak(user_id=user_id)
        db.add(streak)
    streak.current_streak = summary.current_streak
    streak.longest_streak = summary.longest_streak
    streak.last_workout_date = summary.last_workout_date
    await db.flush()
    return streak


async def get_streak_summary(db: AsyncSession, user_id: uuid.UUID, today: date | None = None) -> StreakSummary:
    """Persisted streak with the current count decayed to 0 if the user missed a day since."""
    today = today or datetime.now(timezone.utc).date()
    result = await db.execute(select(Streak).where(Streak.user_id == user_id))
    streak = result.scalar_one_or_none()
    if streak is None:
        return StreakSummary(0, 0, None)
    current = streak.current_streak
    if streak.last_workout_date is None or streak.last_workout_date < today - timedelta(days=1):
        current = 0
    return StreakSummary(current, streak.longest_streak, streak.last_workout_date)
