"""Program catalog and enrollment schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import Difficulty, ExerciseCategory
from app.schemas.common import PageMeta
from app.schemas.exercise import ExerciseRef
from app.schemas.progress import AchievementRead


class ProgramRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None = None
    difficulty: Difficulty
    category: ExerciseCategory | None = None
    duration_weeks: int
    days_per_week: int
    image_url: str | None = None
    is_premium: bool = False
    created_at: datetime


class ProgramPage(BaseModel):
    data: list[ProgramRead]
    meta: PageMeta


class DayExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    exercise_id: UUID
    order_index: int
    sets: int | None = None
    reps: int | None = None
    duration_seconds: int | None = None
    rest_seconds: int | None = None
    exercise: ExerciseRef | None = None


class ProgramDayRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    day_number: int
    title: str | None = None
    exercises: list[DayExerciseRead] = []


class ProgramWeekRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    week_number: int
    title: str | None = None
    days: list[ProgramDayRead] = []


class ProgramDetail(ProgramRead):
    weeks: list[ProgramWeekRead] = []


class EnrollmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    program_id: UUID
    progress: float
    current_week: int
    current_day: int
    completed_day_id: UUID | None = None
    is_completed: bool
    completed_at: datetime | None = None
    enrolled_at: datetime
    last_activity_at: datetime | None = None
    program: ProgramRead | None = None


class EnrollmentProgressUpdate(BaseModel):
    """Any subset; completed_day_id advances the position past that day."""

    progress: float | None = Field(None, description="Percent complete; clamped to 0-100")
    completed_day_id: UUID | None = None
    current_week: int | None = Field(None, ge=1)
    current_day: int | None = Field(None, ge=1)


class EnrollmentProgressResponse(BaseModel):
    enrollment: EnrollmentRead
    new_achievements: list[AchievementRead] = []
