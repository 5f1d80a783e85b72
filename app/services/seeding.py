"""Idempotent catalog seeding (exercises, achievements, programs)."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import seed_data
from app.core.enums import Difficulty, ExerciseCategory
from app.core.seed_data import seed_uuid
from app.models.exercise import Exercise
from app.models.program import DayExercise, Program, ProgramDay, ProgramWeek
from app.models.progress import Achievement

logger = logging.getLogger(__name__)


async def _upsert(db: AsyncSession, model, id_, **values):
    obj = await db.get(model, id_)
    if obj is None:
        obj = model(id=id_, **values)
        db.add(obj)
    else:
        for k, v in values.items():
            setattr(obj, k, v)
    return obj


async def seed_exercises(db: AsyncSession) -> int:
    for slug, name, category, difficulty, kcal, muscles, equipment, description in seed_data.EXERCISES:
        await _upsert(
            db,
            Exercise,
            seed_uuid(slug),
            name=name,
            category=ExerciseCategory(category),
            difficulty=Difficulty(difficulty),
            calories_per_min=kcal,
            target_muscles=muscles,
            equipment=equipment,
            description=description,
            is_active=True,
        )
    await db.flush()
    return len(seed_data.EXERCISES)


async def seed_achievements(db: AsyncSession) -> int:
    # Achievements are matched by unique name (ids may predate seeding)
    for data in seed_data.ACHIEVEMENTS:
        result = await db.execute(select(Achievement).where(Achievement.name == data["name"]))
        achievement = result.scalar_one_or_none()
        if achievement is None:
            db.add(Achievement(id=seed_uuid(f"ach-{data['name']}"), **data))
        else:
            for k, v in data.items():
                setattr(achievement, k, v)
    await db.flush()
    return len(seed_data.ACHIEVEMENTS)


async def seed_programs(db: AsyncSession) -> int:
    for p in seed_data.PROGRAMS:
        program_id = seed_uuid(p["slug"])
        await _upsert(
            db,
            Program,
            program_id,
            title=p["title"],
            description=p["description"],
            difficulty=Difficulty(p["difficulty"]),
            category=ExerciseCategory(p["category"]),
            duration_weeks=p["duration_weeks"],
            days_per_week=len(p["week"]),
        )
        await db.flush()
        for wi in range(p["duration_weeks"]):
            week_slug = f"{p['slug']}-w{wi + 1}"
            await _upsert(
                db, ProgramWeek, seed_uuid(week_slug),
                program_id=program_id, week_number=wi + 1, title=f"Week {wi + 1}",
            )
            for di, exercise_slugs in enumerate(p["week"]):
                day_slug = f"{week_slug}-d{di + 1}"
                await _upsert(
                    db, ProgramDay, seed_uuid(day_slug),
                    week_id=seed_uuid(week_slug), day_number=di + 1, title=f"Day {di + 1}",
                )
                for ei, ex_slug in enumerate(exercise_slugs):
                    await _upsert(
                        db, DayExercise, seed_uuid(f"{day_slug}-ex{ei + 1}"),
                        day_id=seed_uuid(day_slug), exercise_id=seed_uuid(ex_slug), order_index=ei + 1,
                    )
        await db.flush()
    return len(seed_data.PROGRAMS)


async def seed_catalog(db: AsyncSession) -> dict[str, int]:
    """Seed everything; safe to run repeatedly. Returns counts per table group."""
    summary = {
        "exercises": await seed_exercises(db),
        "achievements": await seed_achievements(db),
        "programs": await seed_programs(db),
    }
    logger.info("Catalog seeded: %s", summary)
    return summary
