"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from recipe_planner.domain.errors import ProfilePersistenceError
from recipe_planner.domain.profiles import DEFAULT_BODY_WEIGHT, UserProfile
from recipe_planner.services.profiles import ProfileRepository

_COLUMNS = {
    "dietary_preferences": "dietaryPreferences",
    "health_goals": "healthGoals",
    "allergies": "allergies",
    "enable_meal_planning": "enableMealPlanning",
    "body_weight": "bodyWeight",
}


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the ``profiles`` table."""

    client: Client

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("profiles")
            .select(
                "id, email, dietaryPreferences, healthGoals, allergies, "
                "enableMealPlanning, bodyWeight"
            )
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_profile(response.data[0])

    def create_profile(self, profile: UserProfile) -> UserProfile:
        """Insert a profile row and return it."""
        response = (
            self.client.table("profiles")
            .insert(
                {
                    "id": profile.user_id,
                    "email": profile.email,
                    "dietaryPreferences": list(profile.dietary_preferences),
                    "healthGoals": profile.health_goals,
                    "allergies": list(profile.allergies),
                    "enableMealPlanning": profile.enable_meal_planning,
                    "bodyWeight": profile.body_weight,
                    "created_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise ProfilePersistenceError("Failed to create profile in Supabase")
        return _row_to_profile(response.data[0])

    def update_profile(self, user_id: str, changes: dict[str, object]) -> None:
        """Apply a partial update to a profile row."""
        payload: dict[str, object] = {
            _COLUMNS[key]: list(value) if isinstance(value, tuple) else value
            for key, value in changes.items()
        }
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("profiles").update(payload).eq("id", user_id).execute()
        )
        if not response.data:
            raise ProfilePersistenceError(f"Profile update for {user_id} matched no rows")


def _row_to_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        user_id=str(row["id"]),
        email=row.get("email"),
        dietary_preferences=tuple(row.get("dietaryPreferences") or ()),
        health_goals=str(row.get("healthGoals") or ""),
        allergies=tuple(row.get("allergies") or ()),
        enable_meal_planning=bool(row.get("enableMealPlanning", True)),
        body_weight=int(row.get("bodyWeight") or DEFAULT_BODY_WEIGHT),
    )
