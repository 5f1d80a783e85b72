"""Profile and body-metric endpoints for the signed-in user."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_current_user
from app.core.constants import MAX_PAGE_SIZE, METRICS_HISTORY_DEFAULT
from app.db.session import get_db
from app.models.user import Profile, User, UserMetrics
from app.schemas.user import (
    USER_FIELDS,
    MetricsCreate,
    MetricsRead,
    UserProfileRead,
    UserProfileUpdate,
)
from app.services.calorie_estimation import compute_bmi

logger = logging.getLogger(__name__)
router = APIRouter()


async def get_profile(db: AsyncSession, user_id: uuid.UUID) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    return result.scalar_one_or_none()


async def get_latest_weight(db: AsyncSession, user_id: uuid.UUID) -> float | None:
    """
    Most recent known body weight in kg: the newest metric snapshot that has
    one, else the profile weight. None if the user never recorded a weight.
    """
    result = await db.execute(
        select(UserMetrics.weight)
        .where(UserMetrics.user_id == user_id, UserMetrics.weight.is_not(None))
        .order_by(UserMetrics.date.desc())
        .limit(1)
    )
    w = result.scalar_one_or_none()
    if w is not None:
        return float(w)
    profile = await get_profile(db, user_id)
    return float(profile.weight) if profile and profile.weight is not None else None


async def _load_user_with_profile(db: AsyncSession, user_id: uuid.UUID) -> User:
    result = await db.execute(
        select(User)
        .options(selectinload(User.profile))
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


@router.get("/me", response_model=UserProfileRead)
async def read_me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await _load_user_with_profile(db, current_user.id)


@router.put("/me", response_model=UserProfileRead)
async def update_me(
    payload: UserProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Update name/email and upsert the profile. Only fields sent in the body change."""
    data = payload.model_dump(exclude_unset=True)

    if data.get("email") is not None:
        email = str(data["email"]).strip().lower()
        clash = await db.execute(select(User.id).where(User.email == email, User.id != current_user.id))
        if clash.scalar_one_or_none() is not None:
            raise HTTPException(status_code=409, detail="Email already in use.")
        data["email"] = email

    for key in USER_FIELDS:
        if data.get(key) is not None:
            setattr(current_user, key, data[key])

    profile_data = {k: v for k, v in data.items() if k not in USER_FIELDS}
    if profile_data:
        profile = await get_profile(db, current_user.id)
        if profile is None:
            profile = Profile(user_id=current_user.id)
            db.add(profile)
        for k, v in profile_data.items():
            setattr(profile, k, v)

    await db.flush()
    return await _load_user_with_profile(db, current_user.id)


@router.post("/metrics", response_model=MetricsRead, status_code=201)
async def add_metrics(
    payload: MetricsCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Append a body-metric snapshot. BMI is derived from weight and profile height when omitted."""
    data = payload.model_dump()
    if data.get("bmi") is None and data.get("weight") is not None:
        profile = await get_profile(db, current_user.id)
        data["bmi"] = compute_bmi(data["weight"], profile.height if profile else None)

    metrics = UserMetrics(user_id=current_user.id, **data)
    db.add(metrics)
    await db.flush()
    await db.refresh(metrics)
    return metrics


@router.get("/metrics/history", response_model=list[MetricsRead])
async def metrics_history(
    limit: int = Query(METRICS_HISTORY_DEFAULT, ge=1),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Snapshots newest first."""
    result = await db.execute(
        select(UserMetrics)
        .where(UserMetrics.user_id == current_user.id)
        .order_by(UserMetrics.date.desc())
        .limit(min(limit, MAX_PAGE_SIZE))
    )
    return list(result.scalars().all())
