"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import date, datetime

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from recipe_planner.api.models import (
    CredentialsRequest,
    GenerateRecipeRequest,
    ProfileUpdateRequest,
)
from recipe_planner.app_logging import configure_logging
from recipe_planner.containers import AppContainer
from recipe_planner.domain.errors import (
    AuthenticationError,
    BackendUnavailableError,
    InvalidBodyWeightError,
    InvalidTargetError,
    NotAuthenticatedError,
    ProfileNotFoundError,
)
from recipe_planner.domain.meal_plans import MEAL_PLAN_SLOTS, MealPlan
from recipe_planner.domain.profiles import (
    ALLERGY_OPTIONS,
    DIETARY_PREFERENCE_OPTIONS,
    HEALTH_GOAL_OPTIONS,
    UserProfile,
)
from recipe_planner.domain.recipes import Recipe
from recipe_planner.services.allocation import attainment
from recipe_planner.services.generation import RecipeRequest
from recipe_planner.services.recommendations import (
    FeedFilter,
    FeedSession,
    FeedState,
    greeting_for_hour,
    meal_type_for_hour,
)

# Starlette renamed the 422 constant; the literal works across versions.
HTTP_422_UNPROCESSABLE = 422

_ERROR_STATUS: dict[type[Exception], int] = {
    InvalidBodyWeightError: HTTP_422_UNPROCESSABLE,
    InvalidTargetError: HTTP_422_UNPROCESSABLE,
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ProfileNotFoundError: status.HTTP_404_NOT_FOUND,
    BackendUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        state_container.auth_service.restore_session()
        try:
            state_container.client_state_service.restore()
        except Exception:
            logger.exception("Failed to restore client state")
        yield
        try:
            session = state_container.auth_service.current_session
            profile = (
                state_container.profile_service.get_profile(session.user_id)
                if session
                else None
            )
            state_container.client_state_service.save(profile)
        except Exception:
            logger.exception("Failed to save client state")
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.state.feed_session = None
    # Hour the current home feed was generated for.
    app.state.feed_hour = None

    for error_type, status_code in _ERROR_STATUS.items():
        app.add_exception_handler(error_type, _error_handler(status_code))

    def current_profile(request: Request) -> UserProfile:
        state_container: AppContainer = request.app.state.container
        session = state_container.auth_service.require_session()
        return state_container.profile_service.require_profile(session.user_id)

    def home_feed_loader(
        request: Request, hour: int | None
    ) -> Callable[[], Awaitable[list[Recipe]]]:
        state_container: AppContainer = request.app.state.container

        async def load_home_feed() -> list[Recipe]:
            profile = current_profile(request)
            return await state_container.recommendation_service.home_feed(
                profile,
                hour=_resolve_hour(hour),
                count=state_container.settings.feed_size,
            )

        return load_home_feed

    def feed_session(request: Request) -> FeedSession:
        session: FeedSession | None = request.app.state.feed_session
        if session is None:
            session = FeedSession(loader=home_feed_loader(request, None))
            request.app.state.feed_session = session
        return session

    def reset_feed(request: Request) -> None:
        request.app.state.feed_session = None
        request.app.state.feed_hour = None

    async def load_home_feed_for(
        request: Request, session: FeedSession, hour: int
    ) -> None:
        if await session.load(home_feed_loader(request, hour)):
            request.app.state.feed_hour = hour

    def feed_payload(
        request: Request, session: FeedSession, hour: int | None
    ) -> dict[str, object]:
        if hour is None:
            hour = request.app.state.feed_hour
        return _feed_payload(session, hour)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/options")
    async def survey_options() -> dict[str, list[str]]:
        """Return the preferences survey choices."""
        return {
            "dietary_preferences": list(DIETARY_PREFERENCE_OPTIONS),
            "health_goals": list(HEALTH_GOAL_OPTIONS),
            "allergies": list(ALLERGY_OPTIONS),
        }

    @app.post("/auth/sign-up")
    async def sign_up(body: CredentialsRequest, request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        profile = state_container.auth_service.sign_up(body.email, body.password)
        reset_feed(request)
        return {"profile": _profile_payload(profile, synced=True)}

    @app.post("/auth/sign-in")
    async def sign_in(body: CredentialsRequest, request: Request) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        session = state_container.auth_service.sign_in(body.email, body.password)
        reset_feed(request)
        return {"user_id": session.user_id, "email": session.email}

    @app.post("/auth/sign-out")
    async def sign_out(request: Request) -> dict[str, str]:
        state_container: AppContainer = request.app.state.container
        state_container.auth_service.sign_out()
        reset_feed(request)
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(
        request: Request, profile: UserProfile = Depends(current_profile)
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        unsaved = state_container.profile_service.has_unsaved_changes(profile.user_id)
        return {"profile": _profile_payload(profile, synced=not unsaved)}

    @app.patch("/profile")
    async def update_profile(
        body: ProfileUpdateRequest,
        request: Request,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, object]:
        """Apply a profile edit; ``synced`` is False when it was kept locally only."""
        state_container: AppContainer = request.app.state.container
        result = state_container.profile_service.update_profile(
            profile.user_id, body.model_dump(exclude_unset=True, exclude_none=True)
        )
        return {
            "profile": _profile_payload(result.profile, synced=result.synced),
            "meal_plans_invalidated": result.body_weight_changed,
        }

    @app.post("/profile/sync")
    async def sync_profile(
        request: Request, profile: UserProfile = Depends(current_profile)
    ) -> dict[str, bool]:
        state_container: AppContainer = request.app.state.container
        synced = await state_container.profile_service.sync_pending(profile.user_id)
        return {"synced": synced}

    @app.get("/feed")
    async def get_feed(
        request: Request,
        q: str | None = None,
        hour: int | None = Query(default=None, ge=0, le=23),
        profile: UserProfile = Depends(current_profile),
        session: FeedSession = Depends(feed_session),
    ) -> dict[str, object]:
        """Return the home feed, reloading it when the meal period changed."""
        resolved = _resolve_hour(hour)
        loaded_hour: int | None = request.app.state.feed_hour
        period_changed = loaded_hour is not None and meal_type_for_hour(
            loaded_hour
        ) is not meal_type_for_hour(resolved)
        if session.state is FeedState.IDLE or period_changed:
            await load_home_feed_for(request, session, resolved)
        if q is not None:
            session.set_query(q)
        return feed_payload(request, session, resolved)

    @app.post("/feed/regenerate")
    async def regenerate_feed(
        request: Request,
        hour: int | None = Query(default=None, ge=0, le=23),
        profile: UserProfile = Depends(current_profile),
        session: FeedSession = Depends(feed_session),
    ) -> dict[str, object]:
        resolved = _resolve_hour(hour)
        await load_home_feed_for(request, session, resolved)
        return feed_payload(request, session, resolved)

    @app.post("/feed/surprise")
    async def surprise_feed(
        request: Request,
        profile: UserProfile = Depends(current_profile),
        session: FeedSession = Depends(feed_session),
    ) -> dict[str, object]:
        """Replace the feed with one recipe of any meal type."""
        state_container: AppContainer = request.app.state.container

        async def load_surprise() -> list[Recipe]:
            return [await state_container.recommendation_service.surprise_me(profile)]

        await session.load(load_surprise)
        return feed_payload(request, session, None)

    @app.post("/feed/filters/{feed_filter}")
    async def toggle_feed_filter(
        feed_filter: FeedFilter,
        request: Request,
        profile: UserProfile = Depends(current_profile),
        session: FeedSession = Depends(feed_session),
    ) -> dict[str, object]:
        session.toggle_filter(feed_filter)
        return feed_payload(request, session, None)

    @app.delete("/feed/filters")
    async def reset_feed_filters(
        request: Request,
        profile: UserProfile = Depends(current_profile),
        session: FeedSession = Depends(feed_session),
    ) -> dict[str, object]:
        session.reset_filters()
        return feed_payload(request, session, None)

    @app.post("/recipes")
    async def generate_recipe(
        body: GenerateRecipeRequest,
        request: Request,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        recipe = await state_container.recipe_generator.generate(
            RecipeRequest.from_profile(
                profile, meal_type=body.meal_type, protein_target=body.protein_target
            )
        )
        return {"recipe": recipe.to_payload()}

    @app.get("/recipes/{recipe_id}")
    async def recipe_detail(
        recipe_id: str,
        request: Request,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, object]:
        """Return a recipe by id, generating one for ids not seen before."""
        state_container: AppContainer = request.app.state.container
        recipe = await state_container.recipe_generator.get_or_generate(
            recipe_id, RecipeRequest.from_profile(profile)
        )
        return {
            "recipe": recipe.to_payload(),
            "steps": recipe.numbered_instructions(),
            "daily_protein_percentage": attainment(
                recipe.protein, profile.daily_protein_target
            ),
            "saved": state_container.saved_recipes_service.is_saved(recipe_id),
        }

    @app.get("/saved")
    async def saved_recipes(
        request: Request, profile: UserProfile = Depends(current_profile)
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        recipes = state_container.saved_recipes_service.list_saved()
        return {"recipes": [recipe.to_payload() for recipe in recipes]}

    @app.post("/saved/{recipe_id}")
    async def toggle_saved_recipe(
        recipe_id: str,
        request: Request,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, bool]:
        state_container: AppContainer = request.app.state.container
        return {"saved": state_container.saved_recipes_service.toggle(recipe_id)}

    @app.get("/meal-plans/{day}")
    async def get_meal_plan(
        day: date,
        request: Request,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, object]:
        """Return the plan for a date, generating it when missing or stale."""
        state_container: AppContainer = request.app.state.container
        plan = await state_container.meal_plan_service.get_plan(profile, day)
        if plan is None:
            return {"enabled": False, "plan": None, "progress": None}
        return _meal_plan_payload(state_container, profile, plan)

    @app.post("/meal-plans/{day}/regenerate")
    async def regenerate_meal_plan(
        day: date,
        request: Request,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, object]:
        state_container: AppContainer = request.app.state.container
        if not profile.enable_meal_planning:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Meal planning is disabled for this profile",
            )
        plan = await state_container.meal_plan_service.regenerate(profile, day)
        return _meal_plan_payload(state_container, profile, plan)

    return app


def _error_handler(status_code: int):  # type: ignore[no-untyped-def]
    async def handler(_request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def _resolve_hour(hour: int | None) -> int:
    return datetime.now().hour if hour is None else hour  # noqa: DTZ005


def _profile_payload(profile: UserProfile, *, synced: bool) -> dict[str, object]:
    return {
        "id": profile.user_id,
        "email": profile.email,
        "dietary_preferences": list(profile.dietary_preferences),
        "health_goals": profile.health_goals,
        "allergies": list(profile.allergies),
        "enable_meal_planning": profile.enable_meal_planning,
        "body_weight": profile.body_weight,
        "daily_protein_target": profile.daily_protein_target,
        "synced": synced,
    }


def _feed_payload(session: FeedSession, hour: int | None) -> dict[str, object]:
    return {
        "state": session.state.value,
        "error": session.error,
        "greeting": greeting_for_hour(_resolve_hour(hour)),
        "active_filter": session.active_filter.value if session.active_filter else None,
        "query": session.query,
        "empty": session.is_empty_result,
        "recipes": [recipe.to_payload() for recipe in session.visible],
    }


def _meal_plan_payload(
    container: AppContainer, profile: UserProfile, plan: MealPlan
) -> dict[str, object]:
    progress = container.meal_plan_service.progress(profile, plan.day)
    slots = {}
    for slot in MEAL_PLAN_SLOTS:
        recipe = plan.recipe_for(slot)
        slots[slot.value] = recipe.to_payload() if recipe else None
    return {
        "enabled": True,
        "plan": {"day": plan.day, **slots},
        "progress": {
            "consumed": progress.consumed,
            "target": progress.target,
            "percentage": progress.percentage,
            "bar_width": progress.bar_width,
            "status": progress.status.value,
            "message": progress.message,
        },
    }
