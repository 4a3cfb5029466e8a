"""Recipe generation via an LLM backend with a local fallback."""

import json
import logging
import random
import re
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from recipe_planner.data.fallback_recipes import FALLBACK_RECIPES
from recipe_planner.domain.errors import (
    BackendUnavailableError,
    GenerationError,
    MalformedGenerationResponseError,
)
from recipe_planner.domain.profiles import UserProfile
from recipe_planner.domain.recipes import MealType, Recipe
from recipe_planner.services.allocation import round_half_up
from recipe_planner.services.cache import RecipeCache

SYSTEM_PROMPT = "You are a culinary expert specializing in vegetarian nutrition."

# Share of daily protein assumed for a single meal when only body weight is known.
SINGLE_MEAL_FRACTION = 0.25
DEFAULT_FALLBACK_PROTEIN = 15

MEAL_GUIDANCE: dict[MealType, str] = {
    MealType.BREAKFAST: (
        "This should be a morning meal that provides energy for the day. "
        "Focus on protein-rich breakfast options that are satisfying and quick "
        "to prepare."
    ),
    MealType.LUNCH: (
        "This should be a balanced midday meal that provides sustained energy. "
        "Include a good mix of protein, complex carbs, and vegetables."
    ),
    MealType.SNACK: (
        "This should be a quick, easy-to-prepare snack that is portable and "
        "protein-rich. Keep it under 300 calories but with significant protein "
        "content."
    ),
    MealType.DINNER: (
        "This should be a satisfying evening meal with substantial protein "
        "content. Focus on complete proteins and nutrient-dense ingredients."
    ),
}

RECIPE_SHAPE = """{
  "id": "unique-id",
  "title": "Recipe Title",
  "image": "placeholder-url",
  "prepTime": minutes,
  "protein": grams,
  "calories": number,
  "carbs": grams,
  "fat": grams,
  "tags": ["tag1", "tag2"],
  "keyBenefits": ["benefit1", "benefit2"],
  "ingredients": ["ingredient1", "ingredient2"],
  "instructions": ["step1", "step2"],
  "mealType": "breakfast/lunch/dinner/snack",
  "dietaryLabels": ["Vegetarian", "other-labels"]
}"""

_CODE_FENCE_RE = re.compile(r"^```[A-Za-z]*\s*|\s*```$")

_logger = logging.getLogger(__name__)


class RecipeBackend(Protocol):
    """Interface for a text-generation backend."""

    async def complete(self, *, system_prompt: str, prompt: str) -> str:
        """Return the raw completion text for a prompt."""


@dataclass(frozen=True)
class RecipeRequest:
    """Inputs for generating one recipe."""

    dietary_preferences: tuple[str, ...] = ()
    health_goals: str = ""
    allergies: tuple[str, ...] = ()
    meal_type: MealType | None = None
    protein_target: int | None = None
    body_weight: int | None = None

    @classmethod
    def from_profile(
        cls,
        profile: UserProfile,
        *,
        meal_type: MealType | None = None,
        protein_target: int | None = None,
    ) -> "RecipeRequest":
        """Build a request from a user's survey answers."""
        return cls(
            dietary_preferences=tuple(profile.dietary_preferences),
            health_goals=profile.health_goals,
            allergies=tuple(profile.allergies),
            meal_type=meal_type,
            protein_target=protein_target,
            body_weight=profile.body_weight,
        )

    def resolved_protein_target(self) -> int | None:
        """Return the protein the recipe must carry, or None if unconstrained."""
        if self.protein_target is not None:
            return self.protein_target
        if self.body_weight is not None:
            return round_half_up(self.body_weight * SINGLE_MEAL_FRACTION)
        return None


@dataclass
class RecipeGenerator:
    """Produces exactly one recipe per request and caches it by id."""

    cache: RecipeCache
    backend: RecipeBackend | None = None
    require_backend: bool = False
    fallback_recipes: Sequence[dict[str, object]] = FALLBACK_RECIPES
    rng: random.Random = field(default_factory=random.Random)

    @property
    def uses_backend(self) -> bool:
        """True when requests go to a real generation backend."""
        return self.backend is not None

    async def generate(self, request: RecipeRequest) -> Recipe:
        """Generate a recipe, falling back to canned recipes on any failure."""
        target = request.resolved_protein_target()
        if self.backend is None:
            if self.require_backend:
                raise BackendUnavailableError("Recipe generation backend is not configured")
            _logger.info("No generation backend configured, using fallback recipes")
            recipe = self._fallback(request, target)
        else:
            try:
                recipe = await self._from_backend(self.backend, request, target)
            except Exception as exc:
                if self.require_backend:
                    raise BackendUnavailableError(
                        f"Recipe generation backend failed: {exc}"
                    ) from exc
                _logger.warning("Recipe generation failed, using fallback: %s", exc)
                recipe = self._fallback(request, target)

        # Backends sometimes echo the placeholder id from the prompt.
        if not recipe.id or self.cache.get(recipe.id) is not None:
            recipe = recipe.model_copy(update={"id": self._unique_id()})
        if target is not None and recipe.protein != target:
            recipe = recipe.model_copy(update={"protein": target})
        return self.cache.put(recipe)

    async def get_or_generate(self, recipe_id: str, request: RecipeRequest) -> Recipe:
        """Resolve a recipe by id, generating one under that id when unknown."""
        cached = self.cache.get(recipe_id)
        if cached is not None:
            return cached
        generated = await self.generate(request)
        self.cache.remove(generated.id)
        return self.cache.put(generated.model_copy(update={"id": recipe_id}))

    async def _from_backend(
        self, backend: RecipeBackend, request: RecipeRequest, target: int | None
    ) -> Recipe:
        raw = await backend.complete(
            system_prompt=SYSTEM_PROMPT, prompt=build_prompt(request)
        )
        payload = parse_recipe_payload(raw)
        if request.meal_type is not None:
            payload["mealType"] = request.meal_type.value
        if target is not None:
            payload["protein"] = target
        try:
            return Recipe.model_validate(payload)
        except ValidationError as exc:
            raise MalformedGenerationResponseError(str(exc)) from exc

    def _fallback(self, request: RecipeRequest, target: int | None) -> Recipe:
        if not self.fallback_recipes:
            raise GenerationError("No fallback recipes available")
        candidates = [
            entry
            for entry in self.fallback_recipes
            if request.meal_type is not None
            and entry.get("mealType") == request.meal_type.value
        ]
        if not candidates:
            candidates = list(self.fallback_recipes)
        entry = self.rng.choice(candidates)
        return Recipe.model_validate(
            {
                **entry,
                "id": self._unique_id(),
                "protein": target if target is not None else DEFAULT_FALLBACK_PROTEIN,
            }
        )

    def _unique_id(self) -> str:
        while True:
            candidate = new_recipe_id(self.rng)
            if self.cache.get(candidate) is None:
                return candidate


def new_recipe_id(rng: random.Random | None = None) -> str:
    """Return a client-side id of the form ``gen-<millis>-<0..999>``."""
    source = rng or random
    return f"gen-{int(time.time() * 1000)}-{source.randrange(1000)}"


def build_prompt(request: RecipeRequest) -> str:
    """Build the natural-language brief for the generation backend."""
    target = request.resolved_protein_target()
    protein_text = f"{target}g" if target is not None else "high protein content"
    meal_type = request.meal_type.value if request.meal_type else "Any"
    guidance = MEAL_GUIDANCE.get(request.meal_type, "") if request.meal_type else ""
    lines = [
        "Generate a detailed vegetarian recipe (NO EGGS, NO MEAT, NO FISH) "
        "with the following specifications:",
        "",
        f"- Dietary preferences: {', '.join(request.dietary_preferences) or 'Vegetarian'}",
        f"- Health goal: {request.health_goals or 'Balanced nutrition'}",
        f"- Allergies to avoid: {', '.join(request.allergies) or 'None'}",
        f"- Meal type: {meal_type}",
        f"- Protein requirement: Approximately {protein_text}",
        "",
    ]
    if guidance:
        lines.extend([guidance, ""])
    lines.extend(
        [
            "The recipe should be strictly vegetarian (no eggs, no meat, no fish).",
            "Focus on plant-based protein sources like legumes, tofu, tempeh, "
            "seitan, quinoa, etc.",
            "",
            "Return the recipe in JSON format with the following structure:",
            RECIPE_SHAPE,
            "",
            "For the image URL, use a placeholder from Unsplash that matches the "
            "recipe (e.g., https://images.unsplash.com/photo-xxxx).",
            "",
            "Ensure the protein content is accurately calculated and prominently "
            "featured.",
            "The goal is to help users achieve 1g of protein per pound of body "
            "weight daily.",
        ]
    )
    return "\n".join(lines)


def parse_recipe_payload(raw: str) -> dict[str, object]:
    """Parse backend output into a recipe dict.

    Accepts a JSON object or an array of objects (the first is used), with or
    without surrounding code fences.
    """
    text = _strip_code_fences(raw)
    if not text:
        raise MalformedGenerationResponseError("Empty generation response")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedGenerationResponseError(f"Invalid JSON: {exc}") from exc
    if isinstance(data, list):
        data = next((item for item in data if isinstance(item, dict)), None)
    if not isinstance(data, dict):
        raise MalformedGenerationResponseError("Expected a JSON object")
    return data


def _strip_code_fences(raw: str) -> str:
    return _CODE_FENCE_RE.sub("", (raw or "").strip()).strip()
