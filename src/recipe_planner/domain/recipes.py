"""Recipe domain models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class MealType(StrEnum):
    """Meal slot a recipe is intended for."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class Recipe(BaseModel):
    """Structured recipe, immutable once created.

    Field names are snake_case in Python and camelCase on the wire
    (``prepTime``, ``keyBenefits``, ``mealType``, ``dietaryLabels``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = ""
    title: str
    image: str = ""
    prep_time: int = Field(default=0, ge=0)
    protein: float = Field(ge=0)
    calories: float = Field(default=0, ge=0)
    carbs: float = Field(default=0, ge=0)
    fat: float = Field(default=0, ge=0)
    tags: tuple[str, ...] = ()
    key_benefits: tuple[str, ...] = ()
    ingredients: tuple[str, ...] = ()
    instructions: tuple[str, ...] = ()
    meal_type: MealType
    dietary_labels: tuple[str, ...] = ()

    @field_validator("meal_type", mode="before")
    @classmethod
    def _normalize_meal_type(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def numbered_instructions(self) -> list[str]:
        """Return instructions prefixed with their 1-based step number."""
        return [f"{index}. {step}" for index, step in enumerate(self.instructions, 1)]

    def to_payload(self) -> dict[str, object]:
        """Serialize to the camelCase JSON shape."""
        return self.model_dump(mode="json", by_alias=True)
