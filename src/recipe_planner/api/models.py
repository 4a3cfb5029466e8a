"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from recipe_planner.domain.recipes import MealType


class CredentialsRequest(BaseModel):
    """Email and password for sign-up or sign-in."""

    email: str
    password: str = Field(min_length=1)


class ProfileUpdateRequest(BaseModel):
    """Partial profile edit; omitted fields are left unchanged."""

    dietary_preferences: list[str] | None = None
    health_goals: str | None = None
    allergies: list[str] | None = None
    enable_meal_planning: bool | None = None
    body_weight: int | str | None = None


class GenerateRecipeRequest(BaseModel):
    """Explicit recipe generation request."""

    meal_type: MealType | None = None
    protein_target: int | None = Field(default=None, gt=0)
