"""Shared enums for models and API."""

from enum import Enum


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class ExerciseCategory(str, Enum):
    """Catalog category; also used for category achievements."""

    STRENGTH = "STRENGTH"
    CARDIO = "CARDIO"
    CORE = "CORE"
    HIIT = "HIIT"
    FLEXIBILITY = "FLEXIBILITY"


class Difficulty(str, Enum):
    """Level for exercises and programs."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class EffortLevel(str, Enum):
    """Perceived effort reported on a workout log."""

    EASY = "EASY"
    MODERATE = "MODERATE"
    HARD = "HARD"


class SubscriptionPlan(str, Enum):
    FREE = "FREE"
    PRO = "PRO"
    PREMIUM = "PREMIUM"


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
    PAST_DUE = "PAST_DUE"
    TRIALING = "TRIALING"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class RequirementType(str, Enum):
    """Achievement requirement kinds (stored in Achievement.requirement["type"])."""

    TOTAL_WORKOUTS = "total_workouts"
    STREAK_DAYS = "streak_days"  # Longest streak ever
    TOTAL_CALORIES = "total_calories"
    EARLY_WORKOUTS = "early_workouts"  # Logged before EARLY_WORKOUT_HOUR
    CATEGORY_WORKOUTS = "category_workouts"  # Needs requirement["category"]
    PROGRAMS_COMPLETED = "programs_completed"
