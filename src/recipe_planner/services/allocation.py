"""Protein budget allocation across meal slots."""

import math

from recipe_planner.domain.errors import InvalidTargetError
from recipe_planner.domain.meal_plans import (
    ProgressStatus,
    ProteinProgress,
    ProteinSplit,
)
from recipe_planner.domain.recipes import MealType

# Sums to 0.95; the remaining 5% is deliberate headroom.
SLOT_FRACTIONS: dict[MealType, float] = {
    MealType.BREAKFAST: 0.25,
    MealType.LUNCH: 0.30,
    MealType.SNACK: 0.10,
    MealType.DINNER: 0.30,
}

PROTEIN_PER_POUND = 1
EXCEEDED_PERCENTAGE = 105


def daily_protein_target(body_weight: int) -> int:
    """Return the daily protein target in grams for a body weight in pounds."""
    return body_weight * PROTEIN_PER_POUND


def allocate(daily_target: float) -> ProteinSplit:
    """Split a daily target into per-slot targets, each rounded on its own."""
    if daily_target <= 0:
        raise InvalidTargetError(f"Daily protein target must be positive: {daily_target}")
    return ProteinSplit(
        breakfast=round_half_up(daily_target * SLOT_FRACTIONS[MealType.BREAKFAST]),
        lunch=round_half_up(daily_target * SLOT_FRACTIONS[MealType.LUNCH]),
        snack=round_half_up(daily_target * SLOT_FRACTIONS[MealType.SNACK]),
        dinner=round_half_up(daily_target * SLOT_FRACTIONS[MealType.DINNER]),
    )


def attainment(consumed: float, daily_target: float) -> int:
    """Return consumed protein as a whole-number percentage of the target."""
    if daily_target <= 0:
        raise InvalidTargetError(f"Daily protein target must be positive: {daily_target}")
    return round_half_up(100 * consumed / daily_target)


def progress(consumed: float, daily_target: int) -> ProteinProgress:
    """Return attainment with its display status."""
    percentage = attainment(consumed, daily_target)
    if percentage > EXCEEDED_PERCENTAGE:
        status = ProgressStatus.EXCEEDED
    elif percentage >= 100:  # noqa: PLR2004
        status = ProgressStatus.REACHED
    else:
        status = ProgressStatus.BELOW
    return ProteinProgress(
        consumed=consumed,
        target=daily_target,
        percentage=percentage,
        status=status,
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up, not to even."""
    return math.floor(value + 0.5)
