"""Exercise catalog endpoints (read-only; rows come from seeding)."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.core import cache
from app.core.constants import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_SEARCH_LENGTH,
    SEARCH_RESULT_LIMIT,
)
from app.core.enums import Difficulty, ExerciseCategory
from app.db.session import get_db
from app.models.exercise import Exercise
from app.schemas.common import PageMeta
from app.schemas.exercise import ExercisePage, ExerciseRead

router = APIRouter(dependencies=[Depends(get_current_user)])

CACHE_PREFIX = "exercises:"


def _json_list_contains(column, value: str):
    # Portable membership test on a JSON array of strings (JSONB on Postgres, TEXT on SQLite)
    literal = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return cast(column, String).like(f'%"{literal}"%', escape="\\")


@router.get("", response_model=ExercisePage)
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    category: ExerciseCategory | None = None,
    difficulty: Difficulty | None = None,
    muscle: str | None = Query(None, max_length=50),
    equipment: str | None = Query(None, max_length=50),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
):
    """Active exercises ordered by name, filtered and paginated."""
    cache_key = (
        f"{CACHE_PREFIX}list:{category and category.value}:{difficulty and difficulty.value}:"
        f"{muscle}:{equipment}:{page}:{limit}"
    )
    cached = await cache.get_json(cache_key)
    if cached is not None:
        return cached

    filters = [Exercise.is_active.is_(True)]
    if category:
        filters.append(Exercise.category == category)
    if difficulty:
        filters.append(Exercise.difficulty == difficulty)
    if muscle:
        filters.append(_json_list_contains(Exercise.target_muscles, muscle.strip().lower()))
    if equipment:
        filters.append(_json_list_contains(Exercise.equipment, equipment.strip().lower()))

    total = (await db.execute(select(func.count(Exercise.id)).where(*filters))).scalar_one()
    result = await db.execute(
        select(Exercise)
        .where(*filters)
        .order_by(Exercise.name)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    body = ExercisePage(
        data=[ExerciseRead.model_validate(e) for e in result.scalars().all()],
        meta=PageMeta.build(total, page, limit),
    )
    await cache.set_json(cache_key, body.model_dump(mode="json"))
    return body


@router.get("/search", response_model=list[ExerciseRead])
async def search_exercises(
    q: str = Query(""),
    db: AsyncSession = Depends(get_db),
):
    """Case-insensitive match on name, description or category."""
    term = q.strip()
    if len(term) < MIN_SEARCH_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Search query must be at least {MIN_SEARCH_LENGTH} characters.",
        )
    pattern = f"%{term}%"
    conditions = [Exercise.name.ilike(pattern), Exercise.description.ilike(pattern)]
    matching_categories = [c for c in ExerciseCategory if term.lower() in c.value.lower()]
    if matching_categories:
        conditions.append(Exercise.category.in_(matching_categories))

    result = await db.execute(
        select(Exercise)
        .where(Exercise.is_active.is_(True), or_(*conditions))
        .order_by(Exercise.name)
        .limit(SEARCH_RESULT_LIMIT)
    )
    return list(result.scalars().all())


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    exercise = await db.get(Exercise, exercise_id)
    if exercise is None or not exercise.is_active:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise
