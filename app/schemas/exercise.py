"""Exercise catalog schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.core.enums import Difficulty, ExerciseCategory
from app.schemas.common import PageMeta


class ExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    instructions: str | None = None
    category: ExerciseCategory
    difficulty: Difficulty
    target_muscles: list[str] = []
    equipment: list[str] = []
    calories_per_min: float
    video_url: str | None = None
    image_url: str | None = None


class ExerciseRef(BaseModel):
    """Minimal exercise info for embedding in logs and program days."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    category: ExerciseCategory


class ExercisePage(BaseModel):
    data: list[ExerciseRead]
    meta: PageMeta
