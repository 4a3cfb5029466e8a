"""Shared test fixtures."""

import json
from collections.abc import Callable
from dataclasses import dataclass, field, replace

import pytest

from recipe_planner.adapters.json_file_state_store import InMemoryStateStore
from recipe_planner.config import Settings
from recipe_planner.containers import AppContainer
from recipe_planner.domain.errors import AuthenticationError
from recipe_planner.domain.profiles import AuthSession, UserProfile
from recipe_planner.domain.recipes import Recipe
from recipe_planner.services.auth import AuthClient, AuthService, SessionListener
from recipe_planner.services.cache import InMemoryRecipeCache
from recipe_planner.services.client_state import ClientStateService
from recipe_planner.services.generation import RecipeBackend, RecipeGenerator
from recipe_planner.services.meal_plans import InMemoryMealPlanStore, MealPlanService
from recipe_planner.services.profiles import ProfileRepository, ProfileService
from recipe_planner.services.recommendations import RecommendationService
from recipe_planner.services.saved import SavedRecipesService


def make_recipe(**overrides: object) -> Recipe:
    """Build a recipe with sensible defaults for tests."""
    payload: dict[str, object] = {
        "id": "recipe-1",
        "title": "Lentil Bowl",
        "prepTime": 20,
        "protein": 25,
        "calories": 450,
        "tags": ["high-protein"],
        "ingredients": ["lentils", "quinoa"],
        "instructions": ["Cook lentils", "Serve"],
        "mealType": "lunch",
    }
    payload.update(overrides)
    return Recipe.model_validate(payload)


def recipe_json(**overrides: object) -> str:
    """Return backend-style JSON text for a recipe."""
    payload: dict[str, object] = {
        "title": "Chickpea Curry",
        "image": "https://images.unsplash.com/photo-1",
        "prepTime": 25,
        "protein": 30,
        "calories": 480,
        "carbs": 50,
        "fat": 12,
        "tags": ["high-protein"],
        "keyBenefits": ["Fiber"],
        "ingredients": ["chickpeas", "tomato"],
        "instructions": ["Simmer", "Serve"],
        "mealType": "dinner",
        "dietaryLabels": ["Vegetarian"],
    }
    payload.update(overrides)
    return json.dumps(payload)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)
    updates: list[tuple[str, dict[str, object]]] = field(default_factory=list)
    fail_updates: int = 0
    fail_create: bool = False

    def get_profile(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)

    def create_profile(self, profile: UserProfile) -> UserProfile:
        if self.fail_create:
            raise RuntimeError("insert failed")
        self.profiles[profile.user_id] = profile
        return profile

    def update_profile(self, user_id: str, changes: dict[str, object]) -> None:
        if self.fail_updates > 0:
            self.fail_updates -= 1
            raise RuntimeError("network down")
        self.updates.append((user_id, dict(changes)))
        self.profiles[user_id] = replace(self.profiles[user_id], **changes)


@dataclass
class FakeRecipeBackend(RecipeBackend):
    """Backend returning queued responses, or a default recipe."""

    responses: list[str] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)

    async def complete(self, *, system_prompt: str, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.responses:
            return self.responses.pop(0)
        return recipe_json()


@dataclass
class FailingBackend(RecipeBackend):
    """Backend that always raises."""

    calls: int = 0

    async def complete(self, *, system_prompt: str, prompt: str) -> str:
        self.calls += 1
        raise RuntimeError("backend unavailable")


@dataclass
class FakeAuthClient(AuthClient):
    """Auth client with an in-memory user table."""

    passwords: dict[str, str] = field(default_factory=dict)
    session: AuthSession | None = None
    listeners: list[SessionListener] = field(default_factory=list)
    sign_out_calls: int = 0
    fail_sign_out: bool = False

    def sign_up(self, email: str, password: str) -> AuthSession:
        if email in self.passwords:
            raise AuthenticationError("User already registered")
        self.passwords[email] = password
        self.session = AuthSession(user_id=f"user-{email}", email=email)
        return self.session

    def sign_in(self, email: str, password: str) -> AuthSession:
        if self.passwords.get(email) != password:
            raise AuthenticationError("Invalid login credentials")
        self.session = AuthSession(user_id=f"user-{email}", email=email)
        return self.session

    def sign_out(self) -> None:
        self.sign_out_calls += 1
        self.session = None
        if self.fail_sign_out:
            raise RuntimeError("sign-out request failed")

    def get_session(self) -> AuthSession | None:
        return self.session

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    def emit(self, session: AuthSession | None) -> None:
        for listener in list(self.listeners):
            listener(session)


@dataclass
class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_anon_key="header.payload.signature",
        openai_api_key=None,
        request_delay_seconds=0,
    )


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(user_id="user-1", email="cook@example.com", body_weight=160)


@pytest.fixture
def profile_repository(profile: UserProfile) -> InMemoryProfileRepository:
    return InMemoryProfileRepository(profiles={profile.user_id: profile})


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    auth_client: FakeAuthClient,
) -> AppContainer:
    recipe_cache = InMemoryRecipeCache(max_entries=settings.recipe_cache_max_entries)
    recipe_generator = RecipeGenerator(cache=recipe_cache)
    recommendation_service = RecommendationService(
        generator=recipe_generator,
        request_delay_seconds=settings.request_delay_seconds,
        sleep=RecordingSleep(),
    )
    meal_plan_store = InMemoryMealPlanStore()
    meal_plan_service = MealPlanService(
        recommendations=recommendation_service, store=meal_plan_store
    )
    profile_service = ProfileService(
        repository=profile_repository,
        meal_plans=meal_plan_service,
        sleep=RecordingSleep(),
    )
    saved_recipes_service = SavedRecipesService(recipe_cache)
    auth_service = AuthService(
        client=auth_client,
        profiles=profile_service,
        cache=recipe_cache,
        saved=saved_recipes_service,
        meal_plans=meal_plan_store,
    )
    client_state_service = ClientStateService(
        cache=recipe_cache,
        saved=saved_recipes_service,
        meal_plans=meal_plan_store,
        store=InMemoryStateStore(),
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
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
