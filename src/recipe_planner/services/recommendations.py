"""Recipe feeds, client-side narrowing and meal-plan assembly."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from recipe_planner.domain.meal_plans import MEAL_PLAN_SLOTS, MealPlan
from recipe_planner.domain.profiles import UserProfile
from recipe_planner.domain.recipes import MealType, Recipe
from recipe_planner.services.allocation import allocate
from recipe_planner.services.generation import RecipeGenerator, RecipeRequest

QUICK_PREP_MINUTES = 15
HIGH_PROTEIN_GRAMS = 20
WEIGHT_LOSS_CALORIES = 400
WEIGHT_LOSS_TAG = "weight-loss"
FEED_ERROR_MESSAGE = "Failed to load recipes. Please try again."

_logger = logging.getLogger(__name__)


class FeedFilter(StrEnum):
    """Quick filters offered over a fetched feed."""

    QUICK = "quick"
    HIGH_PROTEIN = "protein"
    WEIGHT_LOSS = "weight-loss"


class FeedState(StrEnum):
    """Loading state of a feed."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def filter_feed(feed: Sequence[Recipe], feed_filter: FeedFilter) -> list[Recipe]:
    """Return the recipes matching a quick filter, in feed order."""
    if feed_filter is FeedFilter.QUICK:
        return [recipe for recipe in feed if recipe.prep_time < QUICK_PREP_MINUTES]
    if feed_filter is FeedFilter.HIGH_PROTEIN:
        return [recipe for recipe in feed if recipe.protein > HIGH_PROTEIN_GRAMS]
    return [
        recipe
        for recipe in feed
        if WEIGHT_LOSS_TAG in recipe.tags or recipe.calories < WEIGHT_LOSS_CALORIES
    ]


def search_feed(feed: Sequence[Recipe], query: str) -> list[Recipe]:
    """Case-insensitive substring search over title, tags and ingredients."""
    needle = query.strip().lower()
    if not needle:
        return list(feed)
    return [
        recipe
        for recipe in feed
        if needle in recipe.title.lower()
        or any(needle in tag.lower() for tag in recipe.tags)
        or any(needle in ingredient.lower() for ingredient in recipe.ingredients)
    ]


def meal_type_for_hour(hour: int) -> MealType:
    """Suggest a meal type for the local hour of day."""
    if 5 <= hour < 11:  # noqa: PLR2004
        return MealType.BREAKFAST
    if 11 <= hour < 16:  # noqa: PLR2004
        return MealType.LUNCH
    return MealType.DINNER


def greeting_for_hour(hour: int) -> str:
    """Return a greeting for the local hour of day."""
    if 5 <= hour < 12:  # noqa: PLR2004
        return "Good Morning"
    if 12 <= hour < 18:  # noqa: PLR2004
        return "Good Afternoon"
    return "Good Evening"


@dataclass
class RecommendationService:
    """Builds recipe feeds and daily meal plans from the generator."""

    generator: RecipeGenerator
    request_delay_seconds: float = 0.5
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    @property
    def _spacing(self) -> float:
        if not self.generator.uses_backend:
            return 0.0
        return self.request_delay_seconds

    async def build_feed(self, request: RecipeRequest, count: int) -> list[Recipe]:
        """Generate ``count`` recipes one after another, in call order."""
        recipes: list[Recipe] = []
        for index in range(count):
            recipes.append(await self.generator.generate(request))
            if index < count - 1 and self._spacing > 0:
                await self.sleep(self._spacing)
        return recipes

    async def home_feed(self, profile: UserProfile, hour: int, count: int) -> list[Recipe]:
        """Build the home feed for the meal type suggested by the hour."""
        request = RecipeRequest.from_profile(profile, meal_type=meal_type_for_hour(hour))
        return await self.build_feed(request, count)

    async def surprise_me(self, profile: UserProfile) -> Recipe:
        """Generate a single recipe of any meal type."""
        return await self.generator.generate(RecipeRequest.from_profile(profile))

    async def build_meal_plan(self, profile: UserProfile, day: date | str) -> MealPlan:
        """Generate one recipe per slot with the slot's share of daily protein.

        Slots are requested concurrently; when a real backend is configured
        their starts are staggered by the request delay.
        """
        split = allocate(profile.daily_protein_target)
        spacing = self._spacing

        async def generate_slot(index: int, slot: MealType) -> Recipe:
            if index and spacing > 0:
                await self.sleep(index * spacing)
            request = RecipeRequest.from_profile(
                profile, meal_type=slot, protein_target=split.for_slot(slot)
            )
            return await self.generator.generate(request)

        # Every slot settles before a failure propagates.
        results = await asyncio.gather(
            *(generate_slot(index, slot) for index, slot in enumerate(MEAL_PLAN_SLOTS)),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        day_key = day.isoformat() if isinstance(day, date) else day
        by_slot = dict(zip(MEAL_PLAN_SLOTS, results, strict=True))
        return MealPlan(
            day=day_key,
            breakfast=by_slot[MealType.BREAKFAST],
            lunch=by_slot[MealType.LUNCH],
            snack=by_slot[MealType.SNACK],
            dinner=by_slot[MealType.DINNER],
        )


@dataclass
class FeedSession:
    """Browsable feed with a load state machine and client-side narrowing.

    The last good feed survives a failed reload. Each load carries a request
    token, and a response whose token is no longer the latest is dropped.
    """

    loader: Callable[[], Awaitable[list[Recipe]]]
    state: FeedState = FeedState.IDLE
    recipes: list[Recipe] = field(default_factory=list)
    error: str | None = None
    active_filter: FeedFilter | None = None
    query: str = ""
    _token: int = field(default=0, init=False, repr=False)

    async def load(
        self, loader: Callable[[], Awaitable[list[Recipe]]] | None = None
    ) -> bool:
        """Fetch a new feed; return True if this call's result was applied."""
        self._token += 1
        token = self._token
        self.state = FeedState.LOADING
        self.error = None
        try:
            recipes = await (loader or self.loader)()
        except Exception:
            if token != self._token:
                return False
            _logger.exception("Failed to load recipe feed")
            self.state = FeedState.ERROR
            self.error = FEED_ERROR_MESSAGE
            return False
        if token != self._token:
            _logger.info("Discarding stale feed response (token=%s)", token)
            return False
        self.recipes = list(recipes)
        self.state = FeedState.READY
        return True

    def toggle_filter(self, feed_filter: FeedFilter) -> FeedFilter | None:
        """Select a filter, or clear it when it is already active."""
        if self.active_filter is feed_filter:
            self.active_filter = None
        else:
            self.active_filter = feed_filter
        return self.active_filter

    def set_query(self, query: str) -> None:
        self.query = query

    def reset_filters(self) -> None:
        self.active_filter = None
        self.query = ""

    @property
    def visible(self) -> list[Recipe]:
        """Recipes after the active filter and search query."""
        recipes = self.recipes
        if self.active_filter is not None:
            recipes = filter_feed(recipes, self.active_filter)
        return search_feed(recipes, self.query)

    @property
    def is_empty_result(self) -> bool:
        """True when a loaded feed has nothing left to show."""
        return self.state is FeedState.READY and not self.visible
