"""Exercise model - catalog entry with category, difficulty and calorie rate."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Float, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import Difficulty, ExerciseCategory
from app.db.base import Base, JSONType, utcnow


class Exercise(Base):
    """Exercise definition. Inactive rows stay for history but drop out of the catalog."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[ExerciseCategory] = mapped_column(Enum(ExerciseCategory), nullable=False, index=True)
    difficulty: Mapped[Difficulty] = mapped_column(
        Enum(Difficulty), default=Difficulty.BEGINNER, nullable=False, index=True
    )
    # Lists of lowercase tags, e.g. ["chest", "triceps"] / ["mat"]
    target_muscles: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    equipment: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    calories_per_min: Mapped[float] = mapped_column(Float, default=5.0, nullable=False)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    workout_logs: Mapped[list["WorkoutLog"]] = relationship("WorkoutLog", back_populates="exercise")
    day_entries: Mapped[list["DayExercise"]] = relationship("DayExercise", back_populates="exercise")
