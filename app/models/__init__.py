"""ORM models - import all so Base.metadata is complete for migrations."""

from app.models.exercise import Exercise
from app.models.program import DayExercise, Enrollment, Program, ProgramDay, ProgramWeek
from app.models.progress import Achievement, Streak, UserAchievement, WorkoutLog
from app.models.subscription import Payment, Subscription
from app.models.user import Profile, RefreshToken, User, UserMetrics

__all__ = [
    "Achievement",
    "DayExercise",
    "Enrollment",
    "Exercise",
    "Payment",
    "Profile",
    "Program",
    "ProgramDay",
    "ProgramWeek",
    "RefreshToken",
    "Streak",
    "Subscription",
    "User",
    "UserAchievement",
    "UserMetrics",
    "WorkoutLog",
]
