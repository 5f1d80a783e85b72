"""Workout log, stats, streak and achievement schemas."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import EffortLevel
from app.schemas.exercise import ExerciseRef


class WorkoutLogCreate(BaseModel):
    exercise_id: UUID
    duration: int = Field(..., gt=0, le=1440, description="Minutes")
    sets: int | None = Field(None, ge=1, le=100)
    reps: int | None = Field(None, ge=1, le=10000)
    calories_burned: float | None = Field(None, ge=0, description="Estimated from the exercise when omitted")
    heart_rate: int | None = Field(None, ge=20, le=250)
    difficulty: EffortLevel | None = None
    notes: str | None = Field(None, max_length=1000)
    date: datetime | None = Field(None, description="When the workout happened; defaults to now")


class WorkoutLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    exercise_id: UUID
    date: datetime
    duration: int
    sets: int | None = None
    reps: int | None = None
    calories_burned: float | None = None
    heart_rate: int | None = None
    difficulty: EffortLevel | None = None
    notes: str | None = None
    completed: bool
    exercise: ExerciseRef | None = None


class StreakRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: date | None = None


class AchievementRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    icon: str | None = None
    category: str
    requirement: dict[str, Any]
    points: int


class AchievementStatus(AchievementRead):
    unlocked: bool = False
    unlocked_at: datetime | None = None


class WorkoutLogCreated(BaseModel):
    log: WorkoutLogRead
    streak: StreakRead
    new_achievements: list[AchievementRead] = []


class ProgressStats(BaseModel):
    period: str
    total_workouts: int
    total_duration: int
    total_calories: float
    avg_duration: int
    by_date: dict[str, int]
    by_category: dict[str, int]
