"""Training programs (program -> weeks -> days -> exercises) and user enrollments."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import Difficulty, ExerciseCategory
from app.db.base import Base, utcnow


class Program(Base):
    """Structured multi-week plan."""

    __tablename__ = "programs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty: Mapped[Difficulty] = mapped_column(
        Enum(Difficulty), default=Difficulty.BEGINNER, nullable=False, index=True
    )
    category: Mapped[ExerciseCategory | None] = mapped_column(Enum(ExerciseCategory), nullable=True, index=True)
    duration_weeks: Mapped[int] = mapped_column(Integer, nullable=False)
    days_per_week: Mapped[int] = mapped_column(Integer, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    weeks: Mapped[list["ProgramWeek"]] = relationship(
        "ProgramWeek",
        back_populates="program",
        cascade="all, delete-orphan",
        order_by="ProgramWeek.week_number",
    )
    enrollments: Mapped[list["Enrollment"]] = relationship(
        "Enrollment", back_populates="program", cascade="all, delete-orphan"
    )


class ProgramWeek(Base):
    __tablename__ = "program_weeks"
    __table_args__ = (UniqueConstraint("program_id", "week_number", name="uq_program_week_number"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    program_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)

    program: Mapped["Program"] = relationship("Program", back_populates="weeks")
    days: Mapped[list["ProgramDay"]] = relationship(
        "ProgramDay",
        back_populates="week",
        cascade="all, delete-orphan",
        order_by="ProgramDay.day_number",
    )


class ProgramDay(Base):
    __tablename__ = "program_days"
    __table_args__ = (UniqueConstraint("week_id", "day_number", name="uq_program_day_number"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    week_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("program_weeks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)

    week: Mapped["ProgramWeek"] = relationship("ProgramWeek", back_populates="days")
    exercises: Mapped[list["DayExercise"]] = relationship(
        "DayExercise",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="DayExercise.order_index",
    )


class DayExercise(Base):
    """Exercise slot within a program day (prescribed volume is optional)."""

    __tablename__ = "day_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    day_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("program_days.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    order_index: Mapped[int] = mapped_column(Integer, default=0)
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)

    day: Mapped["ProgramDay"] = relationship("ProgramDay", back_populates="exercises")
    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="day_entries")


class Enrollment(Base):
    """A user's position in a program: current week/day, percent progress, completion."""

    __tablename__ = "enrollments"
    __table_args__ = (UniqueConstraint("user_id", "program_id", name="uq_enrollment_user_program"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    program_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("programs.id", ondelete="CASCADE"), nullable=False
    )
    progress: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)  # 0-100
    current_week: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    current_day: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    completed_day_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)  # Last finished day
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    last_activity_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    program: Mapped["Program"] = relationship("Program", back_populates="enrollments")
