"""Program catalog and enrollment endpoints."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_current_user
from app.core import cache
from app.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.core.enums import Difficulty, ExerciseCategory
from app.db.session import get_db
from app.models.program import DayExercise, Enrollment, Program, ProgramDay, ProgramWeek
from app.models.user import User
from app.schemas.common import PageMeta
from app.schemas.progress import AchievementRead
from app.schemas.program import (
    EnrollmentProgressResponse,
    EnrollmentProgressUpdate,
    EnrollmentRead,
    ProgramDetail,
    ProgramPage,
    ProgramRead,
)
from app.services.achievements import evaluate_achievements
from app.services.enrollment import apply_progress, program_schedule

logger = logging.getLogger(__name__)
router = APIRouter()

CACHE_PREFIX = "programs:"


async def _get_enrollment(db: AsyncSession, enrollment_id: uuid.UUID, user_id: uuid.UUID) -> Enrollment | None:
    result = await db.execute(
        select(Enrollment)
        .options(
            selectinload(Enrollment.program).selectinload(Program.weeks).selectinload(ProgramWeek.days)
        )
        .where(Enrollment.id == enrollment_id, Enrollment.user_id == user_id)
    )
    return result.scalar_one_or_none()


@router.get("", response_model=ProgramPage)
async def list_programs(
    db: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
    difficulty: Difficulty | None = None,
    category: ExerciseCategory | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    """Programs newest first, filtered and paginated."""
    cache_key = f"{CACHE_PREFIX}list:{difficulty and difficulty.value}:{category and category.value}:{page}:{limit}"
    cached = await cache.get_json(cache_key)
    if cached is not None:
        return cached

    filters = []
    if difficulty:
        filters.append(Program.difficulty == difficulty)
    if category:
        filters.append(Program.category == category)

    total = (await db.execute(select(func.count(Program.id)).where(*filters))).scalar_one()
    result = await db.execute(
        select(Program)
        .where(*filters)
        .order_by(Program.created_at.desc(), Program.title)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    body = ProgramPage(
        data=[ProgramRead.model_validate(p) for p in result.scalars().all()],
        meta=PageMeta.build(total, page, limit),
    )
    await cache.set_json(cache_key, body.model_dump(mode="json"))
    return body


# Declared before /{program_id} so the literal path wins
@router.get("/my-enrollments", response_model=list[EnrollmentRead])
async def my_enrollments(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Enrollment)
        .options(selectinload(Enrollment.program))
        .where(Enrollment.user_id == current_user.id)
        .order_by(Enrollment.enrolled_at.desc())
    )
    return list(result.scalars().all())


@router.get("/{program_id}", response_model=ProgramDetail)
async def get_program(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """Program with weeks -> days -> exercises."""
    result = await db.execute(
        select(Program)
        .options(
            selectinload(Program.weeks)
            .selectinload(ProgramWeek.days)
            .selectinload(ProgramDay.exercises)
            .selectinload(DayExercise.exercise)
        )
        .where(Program.id == program_id)
    )
    program = result.scalar_one_or_none()
    if not program:
        raise HTTPException(status_code=404, detail="Program not found.")
    return program


@router.post("/{program_id}/enroll", response_model=EnrollmentRead, status_code=201)
async def enroll(
    program_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    program = await db.get(Program, program_id)
    if not program:
        raise HTTPException(status_code=404, detail="Program not found.")

    existing = await db.execute(
        select(Enrollment.id).where(Enrollment.user_id == current_user.id, Enrollment.program_id == program_id)
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="You are already enrolled in this program.")

    enrollment = Enrollment(user_id=current_user.id, program_id=program_id, progress=0.0)
    db.add(enrollment)
    await db.flush()
    logger.info("User %s enrolled in program %s", current_user.id, program_id)
    result = await db.execute(
        select(Enrollment).options(selectinload(Enrollment.program)).where(Enrollment.id == enrollment.id)
    )
    return result.scalar_one()


@router.put("/enrollments/{enrollment_id}/progress", response_model=EnrollmentProgressResponse)
async def update_progress(
    enrollment_id: uuid.UUID,
    payload: EnrollmentProgressUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Record progress; completing the final day (or reaching 100%) completes the program."""
    enrollment = await _get_enrollment(db, enrollment_id, current_user.id)
    if not enrollment:
        raise HTTPException(status_code=404, detail="Enrollment not found.")

    try:
        completed_now = apply_progress(
            enrollment,
            program_schedule(enrollment.program),
            progress=payload.progress,
            completed_day_id=payload.completed_day_id,
            current_week=payload.current_week,
            current_day=payload.current_day,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await db.flush()

    if completed_now:
        logger.info("User %s completed program %s", current_user.id, enrollment.program_id)
    new_achievements = await evaluate_achievements(db, current_user.id)
    return EnrollmentProgressResponse(
        enrollment=EnrollmentRead.model_validate(enrollment),
        new_achievements=[AchievementRead.model_validate(a) for a in new_achievements],
    )
