"""Meal plan storage and regeneration."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from recipe_planner.domain.meal_plans import MealPlan, ProteinProgress
from recipe_planner.domain.profiles import UserProfile
from recipe_planner.services.allocation import progress
from recipe_planner.services.recommendations import RecommendationService

_logger = logging.getLogger(__name__)


class MealPlanStore(Protocol):
    """Storage for meal plans keyed by ISO date."""

    def get(self, day: str) -> MealPlan | None:
        """Return the plan for a date, if present."""

    def put(self, plan: MealPlan) -> None:
        """Store a plan under its date."""

    def all(self) -> dict[str, MealPlan]:
        """Return every stored plan."""

    def clear(self) -> None:
        """Drop every stored plan."""


@dataclass
class InMemoryMealPlanStore(MealPlanStore):
    """In-memory meal plan store."""

    plans: dict[str, MealPlan] = field(default_factory=dict)

    def get(self, day: str) -> MealPlan | None:
        return self.plans.get(day)

    def put(self, plan: MealPlan) -> None:
        self.plans[plan.day] = plan

    def all(self) -> dict[str, MealPlan]:
        return dict(self.plans)

    def clear(self) -> None:
        self.plans.clear()


@dataclass
class MealPlanService:
    """Serves daily meal plans, generating them on demand."""

    recommendations: RecommendationService
    store: MealPlanStore

    async def get_plan(self, profile: UserProfile, day: date | str) -> MealPlan | None:
        """Return the plan for a date, generating it when missing or stale."""
        if not profile.enable_meal_planning:
            return None
        existing = self.store.get(_day_key(day))
        if existing is not None and not existing.stale:
            return existing
        return await self.regenerate(profile, day)

    async def regenerate(self, profile: UserProfile, day: date | str) -> MealPlan:
        """Generate and store a fresh plan for a date."""
        plan = await self.recommendations.build_meal_plan(profile, _day_key(day))
        self.store.put(plan)
        _logger.info("Generated meal plan for %s", plan.day)
        return plan

    def invalidate_all(self) -> None:
        """Flag every stored plan for regeneration."""
        for plan in self.store.all().values():
            self.store.put(plan.mark_stale())

    def progress(self, profile: UserProfile, day: date | str) -> ProteinProgress:
        """Return protein attainment for a stored plan (zero if none)."""
        plan = self.store.get(_day_key(day))
        consumed = plan.total_protein if plan is not None else 0
        return progress(consumed, profile.daily_protein_target)


def _day_key(day: date | str) -> str:
    return day.isoformat() if isinstance(day, date) else date.fromisoformat(day).isoformat()
