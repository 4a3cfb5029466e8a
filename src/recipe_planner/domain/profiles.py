"""Domain models for user profiles."""

from dataclasses import dataclass

MIN_BODY_WEIGHT = 50
MAX_BODY_WEIGHT = 400
DEFAULT_BODY_WEIGHT = 150

DIETARY_PREFERENCE_OPTIONS = (
    "Vegetarian",
    "Vegan",
    "Gluten-Free",
    "Dairy-Free",
    "Low-Carb",
    "High-Protein",
    "Keto-Friendly",
    "Low-Fat",
)

HEALTH_GOAL_OPTIONS = (
    "Weight Loss",
    "Muscle Gain",
    "Maintenance",
    "Improved Energy",
    "Better Digestion",
)

ALLERGY_OPTIONS = ("Nuts", "Soy", "Gluten", "Dairy", "Mushrooms", "Eggplant")


@dataclass(frozen=True)
class UserProfile:
    """Preferences survey answers for one user."""

    user_id: str
    email: str | None
    dietary_preferences: tuple[str, ...] = ()
    health_goals: str = ""
    allergies: tuple[str, ...] = ()
    enable_meal_planning: bool = True
    body_weight: int = DEFAULT_BODY_WEIGHT

    @property
    def daily_protein_target(self) -> int:
        """Daily protein target in grams (1 g per pound)."""
        return self.body_weight


@dataclass(frozen=True)
class AuthSession:
    """Authenticated session returned by the auth provider."""

    user_id: str
    email: str | None
    access_token: str | None = None
