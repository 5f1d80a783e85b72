"""User profile and body-metric schemas."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.enums import UserRole


# ── Profile ──────────────────────────────────────────────────────────────

class ProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    target_weight: Optional[float] = None
    fitness_goal: Optional[str] = None
    fitness_level: Optional[str] = None
    timezone: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None


class UserProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: UserRole
    is_email_verified: bool
    last_login: Optional[datetime] = None
    created_at: datetime
    profile: Optional[ProfileRead] = None


class UserProfileUpdate(BaseModel):
    """User fields (name, email) and profile fields in one body; only sent keys change."""

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    email: Optional[EmailStr] = None

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = Field(None, max_length=20)
    height: Optional[float] = Field(None, gt=50, lt=300, description="Height in centimetres")
    weight: Optional[float] = Field(None, gt=20, lt=400, description="Body weight in kg")
    target_weight: Optional[float] = Field(None, gt=20, lt=400)
    fitness_goal: Optional[str] = Field(None, max_length=100)
    fitness_level: Optional[str] = Field(None, max_length=50)
    timezone: Optional[str] = Field(None, max_length=64)
    avatar_url: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = None


USER_FIELDS = {"name", "email"}


# ── Metrics ──────────────────────────────────────────────────────────────

class MetricsCreate(BaseModel):
    weight: Optional[float] = Field(None, gt=20, lt=400, description="kg")
    body_fat: Optional[float] = Field(None, ge=2, le=60, description="Body fat %")
    muscle_mass: Optional[float] = Field(None, gt=0, lt=200, description="kg")
    bmi: Optional[float] = Field(None, gt=5, lt=100, description="Computed from weight + profile height if omitted")
    resting_heart_rate: Optional[int] = Field(None, ge=20, le=250)
    notes: Optional[str] = Field(None, max_length=500)


class MetricsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    date: datetime
    weight: Optional[float] = None
    body_fat: Optional[float] = None
    muscle_mass: Optional[float] = None
    bmi: Optional[float] = None
    resting_heart_rate: Optional[int] = None
    notes: Optional[str] = None
