"""Enrollment progress: advance the position past a completed day and detect completion."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from app.models.program import Enrollment, Program


@dataclass(frozen=True)
class DaySlot:
    day_id: uuid.UUID
    week_number: int
    day_number: int


@dataclass(frozen=True)
class Advance:
    """Where the user lands after finishing a day. next_slot is None past the final day."""

    next_slot: DaySlot | None
    progress: float


def program_schedule(program: Program) -> list[DaySlot]:
    """Every day of the program in training order (week, then day). Needs weeks + days loaded."""
    return [
        DaySlot(day.id, week.week_number, day.day_number)
        for week in sorted(program.weeks, key=lambda w: w.week_number)
        for day in sorted(week.days, key=lambda d: d.day_number)
    ]


def advance_after(schedule: list[DaySlot], completed_day_id: uuid.UUID) -> Advance | None:
    """None when the day is not part of the schedule."""
    for i, slot in enumerate(schedule):
        if slot.day_id == completed_day_id:
            done = i + 1
            next_slot = schedule[done] if done < len(schedule) else None
            return Advance(next_slot=next_slot, progress=round(done / len(schedule) * 100, 1))
    return None


def clamp_progress(value: float) -> float:
    return max(0.0, min(100.0, float(value)))


def apply_progress(
    enrollment: Enrollment,
    schedule: list[DaySlot],
    *,
    progress: float | None = None,
    completed_day_id: uuid.UUID | None = None,
    current_week: int | None = None,
    current_day: int | None = None,
    now: datetime | None = None,
) -> bool:
    """
    Mutate the enrollment in place. Returns True when this update completed the program.

    Raises ValueError if completed_day_id is not a day of the enrolled program.
    """
    now = now or datetime.now(timezone.utc)
    finished = False

    if completed_day_id is not None:
        step = advance_after(schedule, completed_day_id)
        if step is None:
            raise ValueError("Day does not belong to this program.")
        enrollment.completed_day_id = completed_day_id
        enrollment.progress = max(enrollment.progress or 0.0, step.progress)
        if step.next_slot is None:
            finished = True
        else:
            enrollment.current_week = step.next_slot.week_number
            enrollment.current_day = step.next_slot.day_number

    if current_week is not None:
        enrollment.current_week = current_week
    if current_day is not None:
        enrollment.current_day = current_day
    if progress is not None:
        enrollment.progress = clamp_progress(progress)

    if enrollment.progress >= 100:
        finished = True

    enrollment.last_activity_at = now
    if finished and not enrollment.is_completed:
        enrollment.is_completed = True
        enrollment.completed_at = now
        enrollment.progress = 100.0
        return True
    return False
