"""Authentication lifecycle and local state cleanup."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from recipe_planner.domain.errors import NotAuthenticatedError
from recipe_planner.domain.profiles import AuthSession, UserProfile
from recipe_planner.services.cache import RecipeCache
from recipe_planner.services.meal_plans import MealPlanStore
from recipe_planner.services.profiles import ProfileService
from recipe_planner.services.saved import SavedRecipesService

_logger = logging.getLogger(__name__)

SessionListener = Callable[[AuthSession | None], None]


class AuthClient(Protocol):
    """Interface for the hosted email/password auth provider."""

    def sign_up(self, email: str, password: str) -> AuthSession:
        """Register a user and return its session."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""

    def sign_out(self) -> None:
        """End the provider session."""

    def get_session(self) -> AuthSession | None:
        """Return the persisted session, if any."""

    def on_session_change(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener and return a function that unsubscribes it."""


@dataclass
class AuthService:
    """Tracks the signed-in user and purges local state on sign-out."""

    client: AuthClient
    profiles: ProfileService
    cache: RecipeCache
    saved: SavedRecipesService
    meal_plans: MealPlanStore
    current_session: AuthSession | None = None

    def sign_up(self, email: str, password: str) -> UserProfile:
        """Create an account and its default profile."""
        session = self.client.sign_up(email, password)
        self.current_session = session
        return self.profiles.create_default(session.user_id, session.email)

    def sign_in(self, email: str, password: str) -> AuthSession:
        session = self.client.sign_in(email, password)
        self.current_session = session
        self.profiles.get_profile(session.user_id)
        return session

    def sign_out(self) -> None:
        """Sign out remotely and clear every client-side cache."""
        try:
            self.client.sign_out()
        except Exception:
            _logger.exception("Failed to sign out from auth provider")
        finally:
            self.current_session = None
            self.cache.clear()
            self.saved.clear()
            self.meal_plans.clear()
            self.profiles.clear_local()

    def restore_session(self) -> AuthSession | None:
        """Load a persisted provider session on startup."""
        try:
            self.current_session = self.client.get_session()
        except Exception:
            _logger.exception("Failed to restore auth session")
            self.current_session = None
        return self.current_session

    def watch_sessions(self) -> Callable[[], None]:
        """Follow provider session changes; returns the unsubscribe function."""
        return self.client.on_session_change(self._on_session_change)

    def require_session(self) -> AuthSession:
        if self.current_session is None:
            raise NotAuthenticatedError("Sign in required")
        return self.current_session

    def _on_session_change(self, session: AuthSession | None) -> None:
        self.current_session = session
        if session is not None:
            self.profiles.get_profile(session.user_id)
