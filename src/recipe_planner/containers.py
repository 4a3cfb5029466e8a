"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from recipe_planner.adapters.json_file_state_store import (
    InMemoryStateStore,
    JsonFileStateStore,
)
from recipe_planner.adapters.openai_recipe_client import OpenAIRecipeBackend
from recipe_planner.adapters.supabase_auth_client import SupabaseAuthClient
from recipe_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from recipe_planner.config import Settings, parse_openai_api_key
from recipe_planner.services.auth import AuthService
from recipe_planner.services.cache import InMemoryRecipeCache, RecipeCache
from recipe_planner.services.client_state import ClientStateService, ClientStateStore
from recipe_planner.services.generation import RecipeGenerator
from recipe_planner.services.meal_plans import InMemoryMealPlanStore, MealPlanService
from recipe_planner.services.profiles import ProfileService
from recipe_planner.services.recommendations import RecommendationService
from recipe_planner.services.saved import SavedRecipesService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    recipe_cache: RecipeCache
    recipe_generator: RecipeGenerator
    recommendation_service: RecommendationService
    meal_plan_service: MealPlanService
    profile_service: ProfileService
    saved_recipes_service: SavedRecipesService
    auth_service: AuthService
    client_state_service: ClientStateService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_anon_key
    )
    recipe_cache = InMemoryRecipeCache(
        max_entries=resolved_settings.recipe_cache_max_entries
    )

    openai_api_key = parse_openai_api_key(resolved_settings.openai_api_key)
    backend = None
    if openai_api_key:
        backend = OpenAIRecipeBackend.create(
            api_key=openai_api_key,
            model=resolved_settings.openai_model,
            temperature=resolved_settings.openai_temperature,
            timeout_seconds=resolved_settings.openai_timeout_seconds,
        )
    recipe_generator = RecipeGenerator(
        cache=recipe_cache,
        backend=backend,
        require_backend=resolved_settings.require_generation_backend,
    )
    recommendation_service = RecommendationService(
        generator=recipe_generator,
        request_delay_seconds=resolved_settings.request_delay_seconds,
    )
    meal_plan_store = InMemoryMealPlanStore()
    meal_plan_service = MealPlanService(
        recommendations=recommendation_service,
        store=meal_plan_store,
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        meal_plans=meal_plan_service,
    )
    saved_recipes_service = SavedRecipesService(recipe_cache)
    auth_service = AuthService(
        client=SupabaseAuthClient(supabase_client),
        profiles=profile_service,
        cache=recipe_cache,
        saved=saved_recipes_service,
        meal_plans=meal_plan_store,
    )
    state_store: ClientStateStore
    if resolved_settings.client_state_path:
        state_store = JsonFileStateStore(Path(resolved_settings.client_state_path))
    else:
        state_store = InMemoryStateStore()
    client_state_service = ClientStateService(
        cache=recipe_cache,
        saved=saved_recipes_service,
        meal_plans=meal_plan_store,
        store=state_store,
    )

    async def close_resources() -> None:
        if backend is not None:
            await backend.close()

    return AppContainer(
        settings=resolved_settings,
        recipe_cache=recipe_cache,
        recipe_generator=recipe_generator,
        recommendation_service=recommendation_service,
        meal_plan_service=meal_plan_service,
        profile_service=profile_service,
        saved_recipes_service=saved_recipes_service,
        auth_service=auth_service,
        client_state_service=client_state_service,
        close_resources=close_resources,
    )
