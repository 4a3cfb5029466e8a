"""Domain models for daily meal plans."""

from dataclasses import dataclass, replace
from enum import StrEnum

from recipe_planner.domain.recipes import MealType, Recipe

MEAL_PLAN_SLOTS = (MealType.BREAKFAST, MealType.LUNCH, MealType.SNACK, MealType.DINNER)


@dataclass(frozen=True)
class ProteinSplit:
    """Per-slot protein targets in grams."""

    breakfast: int
    lunch: int
    snack: int
    dinner: int

    def for_slot(self, slot: MealType) -> int:
        """Return the target for a meal slot."""
        return getattr(self, slot.value)

    @property
    def total(self) -> int:
        return self.breakfast + self.lunch + self.snack + self.dinner


@dataclass(frozen=True)
class MealPlan:
    """One day's planned recipes, keyed by ISO date."""

    day: str
    breakfast: Recipe | None = None
    lunch: Recipe | None = None
    snack: Recipe | None = None
    dinner: Recipe | None = None
    stale: bool = False

    def recipe_for(self, slot: MealType) -> Recipe | None:
        """Return the recipe planned for a slot, if any."""
        return getattr(self, slot.value)

    @property
    def total_protein(self) -> float:
        return sum(
            recipe.protein
            for recipe in (self.breakfast, self.lunch, self.snack, self.dinner)
            if recipe is not None
        )

    def mark_stale(self) -> "MealPlan":
        """Return a copy flagged for regeneration."""
        return replace(self, stale=True)


class ProgressStatus(StrEnum):
    """Where the day's protein stands against the target."""

    BELOW = "below"
    REACHED = "reached"
    EXCEEDED = "exceeded"


@dataclass(frozen=True)
class ProteinProgress:
    """Goal attainment for display."""

    consumed: float
    target: int
    percentage: int
    status: ProgressStatus

    @property
    def bar_width(self) -> int:
        return min(self.percentage, 100)

    @property
    def message(self) -> str:
        if self.status is ProgressStatus.EXCEEDED:
            return "You're exceeding your daily protein goal!"
        if self.status is ProgressStatus.REACHED:
            return "You've reached your protein goal for today!"
        return f"{self.percentage}% of your daily protein goal"
