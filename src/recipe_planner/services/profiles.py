"""Profile reads and optimistic, retrying profile updates."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Protocol

from recipe_planner.domain.errors import InvalidBodyWeightError, ProfileNotFoundError
from recipe_planner.domain.profiles import MAX_BODY_WEIGHT, MIN_BODY_WEIGHT, UserProfile
from recipe_planner.services.meal_plans import MealPlanService

UPDATABLE_FIELDS = frozenset(
    {
        "dietary_preferences",
        "health_goals",
        "allergies",
        "enable_meal_planning",
        "body_weight",
    }
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user, if present."""

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Create and return a profile row."""

    def update_profile(self, user_id: str, changes: dict[str, object]) -> None:
        """Apply a partial update to a user's profile."""


@dataclass(frozen=True)
class ProfileUpdateResult:
    """Outcome of a profile edit."""

    profile: UserProfile
    synced: bool
    body_weight_changed: bool


def validate_body_weight(value: object) -> int:
    """Return a body weight in pounds, or raise InvalidBodyWeightError."""
    if isinstance(value, bool):
        raise InvalidBodyWeightError("Body weight must be a number")
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned.isdigit():
            raise InvalidBodyWeightError(f"Body weight must be a number: {value!r}")
        weight = int(cleaned)
    elif isinstance(value, int):
        weight = value
    elif isinstance(value, float) and value.is_integer():
        weight = int(value)
    else:
        raise InvalidBodyWeightError(f"Body weight must be a whole number: {value!r}")
    if not MIN_BODY_WEIGHT <= weight <= MAX_BODY_WEIGHT:
        raise InvalidBodyWeightError(
            f"Body weight must be between {MIN_BODY_WEIGHT} and {MAX_BODY_WEIGHT} lbs"
        )
    return weight


@dataclass
class ProfileService:
    """Keeps the local profile view and syncs edits to the repository.

    Edits are applied locally first. A failed remote write leaves the local
    view in place, marks the user dirty and reports ``synced=False``;
    ``sync_pending`` retries the accumulated changes.
    """

    repository: ProfileRepository
    meal_plans: MealPlanService
    retry_attempts: int = 2
    retry_delay_seconds: float = 0.5
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    _profiles: dict[str, UserProfile] = field(default_factory=dict, init=False)
    _pending: dict[str, dict[str, object]] = field(default_factory=dict, init=False)

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the local profile view, loading it on first access."""
        cached = self._profiles.get(user_id)
        if cached is not None:
            return cached
        profile = self.repository.get_profile(user_id)
        if profile is not None:
            self._profiles[user_id] = profile
        return profile

    def require_profile(self, user_id: str) -> UserProfile:
        profile = self.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"No profile for user {user_id}")
        return profile

    def create_default(self, user_id: str, email: str | None) -> UserProfile:
        """Create the empty profile a new account starts with."""
        profile = UserProfile(user_id=user_id, email=email)
        self._profiles[user_id] = profile
        try:
            return self.repository.create_profile(profile)
        except Exception:
            _logger.exception("Failed to create profile for user %s", user_id)
            return profile

    def update_profile(
        self, user_id: str, changes: Mapping[str, object]
    ) -> ProfileUpdateResult:
        """Apply an edit locally, then try to persist it."""
        current = self.require_profile(user_id)
        cleaned = _clean_changes(changes)
        updated = replace(current, **cleaned)
        self._profiles[user_id] = updated

        body_weight_changed = updated.body_weight != current.body_weight
        if body_weight_changed:
            self.meal_plans.invalidate_all()

        pending = {**self._pending.get(user_id, {}), **cleaned}
        try:
            self.repository.update_profile(user_id, pending)
        except Exception:
            _logger.exception("Failed to persist profile for user %s", user_id)
            self._pending[user_id] = pending
            return ProfileUpdateResult(updated, False, body_weight_changed)
        self._pending.pop(user_id, None)
        return ProfileUpdateResult(updated, True, body_weight_changed)

    def has_unsaved_changes(self, user_id: str) -> bool:
        return user_id in self._pending

    async def sync_pending(self, user_id: str) -> bool:
        """Retry unsaved changes; return True once nothing is pending."""
        pending = self._pending.get(user_id)
        if not pending:
            return True
        attempt = 0
        while True:
            try:
                self.repository.update_profile(user_id, pending)
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Profile sync failed (attempt %s/%s): %s",
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    return False
                await self.sleep(self.retry_delay_seconds * attempt)
                continue
            self._pending.pop(user_id, None)
            return True

    def clear_local(self) -> None:
        """Forget the local view; server state is untouched."""
        self._profiles.clear()
        self._pending.clear()


def _clean_changes(changes: Mapping[str, object]) -> dict[str, object]:
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
    cleaned: dict[str, object] = {}
    for key, value in changes.items():
        if key == "body_weight":
            cleaned[key] = validate_body_weight(value)
        elif key in {"dietary_preferences", "allergies"}:
            cleaned[key] = tuple(str(item) for item in value or ())  # type: ignore[attr-defined]
        elif key == "health_goals":
            cleaned[key] = str(value or "")
        else:
            cleaned[key] = bool(value)
    return cleaned
