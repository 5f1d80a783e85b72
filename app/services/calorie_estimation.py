"""Calorie estimation for workout logs.

Each catalog exercise carries a calories-per-minute rate measured for a
reference adult. A log's estimate scales that rate by duration, by the
reported effort, and (when known) by the user's latest body weight, since
energy expenditure is roughly proportional to body mass for the same
activity (the MET formula: kcal/min = MET x 3.5 x kg / 200).
"""

from __future__ import annotations

from app.core.enums import EffortLevel

REFERENCE_WEIGHT_KG = 70.0

# Effort multipliers relative to the catalog rate (moderate = catalog value)
EFFORT_FACTORS = {
    EffortLevel.EASY: 0.8,
    EffortLevel.MODERATE: 1.0,
    EffortLevel.HARD: 1.2,
}

# Clamp body-weight scaling so bad metric entries can't produce absurd numbers
MIN_WEIGHT_FACTOR = 0.6
MAX_WEIGHT_FACTOR = 1.8


def get_effort_factor(effort: EffortLevel | str | None) -> float:
    """Map reported effort to a multiplier. Default moderate."""
    if not effort:
        return 1.0
    if isinstance(effort, EffortLevel):
        return EFFORT_FACTORS[effort]
    try:
        return EFFORT_FACTORS[EffortLevel(str(effort).upper())]
    except ValueError:
        return 1.0


def get_weight_factor(weight_kg: float | None) -> float:
    if weight_kg is None or weight_kg <= 0:
        return 1.0
    return min(MAX_WEIGHT_FACTOR, max(MIN_WEIGHT_FACTOR, weight_kg / REFERENCE_WEIGHT_KG))


def estimate_calories(
    calories_per_min: float,
    duration_minutes: float,
    effort: EffortLevel | str | None = None,
    weight_kg: float | None = None,
) -> float:
    """kcal = rate x minutes x effort factor x body-weight factor, rounded to 0.1."""
    if duration_minutes <= 0 or calories_per_min <= 0:
        return 0.0
    kcal = calories_per_min * duration_minutes * get_effort_factor(effort) * get_weight_factor(weight_kg)
    return round(kcal, 1)


def compute_bmi(weight_kg: float | None, height_cm: float | None) -> float | None:
    """BMI = kg / m^2, rounded to 0.1; None when either input is missing."""
    if not weight_kg or not height_cm or height_cm <= 0:
        return None
    metres = height_cm / 100.0
    return round(weight_kg / (metres * metres), 1)
