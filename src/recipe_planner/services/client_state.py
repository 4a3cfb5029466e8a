"""Export and restore of the persisted client state.

Key scheme: ``recipesData`` (id to recipe), ``mealPlan`` (date to slots),
``savedRecipes`` (bookmarked ids) and ``userProfile``. Profile scalars are
mirrored under their own keys for older readers and are never read back.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from recipe_planner.domain.meal_plans import MEAL_PLAN_SLOTS, MealPlan
from recipe_planner.domain.profiles import UserProfile
from recipe_planner.domain.recipes import Recipe
from recipe_planner.services.cache import RecipeCache
from recipe_planner.services.meal_plans import MealPlanStore
from recipe_planner.services.saved import SavedRecipesService

RECIPES_KEY = "recipesData"
MEAL_PLAN_KEY = "mealPlan"
SAVED_RECIPES_KEY = "savedRecipes"
USER_PROFILE_KEY = "userProfile"

_logger = logging.getLogger(__name__)


class ClientStateStore(Protocol):
    """Storage for the client state document."""

    def load(self) -> dict[str, object] | None:
        """Return the stored document, if any."""

    def save(self, payload: dict[str, object]) -> None:
        """Replace the stored document."""


@dataclass
class ClientStateService:
    """Moves cache, bookmarks and meal plans to and from a state document."""

    cache: RecipeCache
    saved: SavedRecipesService
    meal_plans: MealPlanStore
    store: ClientStateStore

    def snapshot(self, profile: UserProfile | None = None) -> dict[str, object]:
        """Return the current client state as a JSON-ready dict."""
        payload: dict[str, object] = {
            RECIPES_KEY: {recipe.id: recipe.to_payload() for recipe in self.cache.values()},
            MEAL_PLAN_KEY: {
                day: _meal_plan_payload(plan) for day, plan in self.meal_plans.all().items()
            },
            SAVED_RECIPES_KEY: list(self.saved.recipe_ids),
        }
        if profile is not None:
            profile_payload = _profile_payload(profile)
            payload[USER_PROFILE_KEY] = profile_payload
            for key in (
                "dietaryPreferences",
                "healthGoals",
                "allergies",
                "bodyWeight",
                "enableMealPlanning",
            ):
                payload[key] = profile_payload[key]
        return payload

    def save(self, profile: UserProfile | None = None) -> None:
        self.store.save(self.snapshot(profile))

    def restore(self) -> bool:
        """Load cache, bookmarks and meal plans; return False if nothing stored."""
        payload = self.store.load()
        if not payload:
            return False

        recipes = payload.get(RECIPES_KEY) or {}
        for recipe_id, raw in dict(recipes).items():
            try:
                recipe = Recipe.model_validate(raw)
            except ValidationError as exc:
                _logger.warning("Skipping stored recipe %s: %s", recipe_id, exc)
                continue
            self.cache.put(recipe if recipe.id else recipe.model_copy(update={"id": recipe_id}))

        plans = payload.get(MEAL_PLAN_KEY) or {}
        for day, raw_plan in dict(plans).items():
            try:
                self.meal_plans.put(_meal_plan_from_payload(day, raw_plan))
            except (ValidationError, TypeError, AttributeError) as exc:
                _logger.warning("Skipping stored meal plan %s: %s", day, exc)

        self.saved.recipe_ids = [str(item) for item in payload.get(SAVED_RECIPES_KEY) or []]
        return True


def _meal_plan_payload(plan: MealPlan) -> dict[str, object]:
    payload: dict[str, object] = {}
    for slot in MEAL_PLAN_SLOTS:
        recipe = plan.recipe_for(slot)
        payload[slot.value] = recipe.to_payload() if recipe else None
    if plan.stale:
        payload["stale"] = True
    return payload


def _meal_plan_from_payload(day: str, raw: dict[str, object]) -> MealPlan:
    slots = {
        slot.value: Recipe.model_validate(raw[slot.value]) if raw.get(slot.value) else None
        for slot in MEAL_PLAN_SLOTS
    }
    return MealPlan(day=day, stale=bool(raw.get("stale", False)), **slots)


def _profile_payload(profile: UserProfile) -> dict[str, object]:
    return {
        "id": profile.user_id,
        "email": profile.email,
        "dietaryPreferences": list(profile.dietary_preferences),
        "healthGoals": profile.health_goals,
        "allergies": list(profile.allergies),
        "enableMealPlanning": profile.enable_meal_planning,
        "bodyWeight": profile.body_weight,
    }
