"""Bookmarked recipes."""

from dataclasses import dataclass, field

from recipe_planner.domain.recipes import Recipe
from recipe_planner.services.cache import RecipeCache


@dataclass
class SavedRecipesService:
    """Ordered list of bookmarked recipe ids, resolved through the cache."""

    cache: RecipeCache
    recipe_ids: list[str] = field(default_factory=list)

    def is_saved(self, recipe_id: str) -> bool:
        return recipe_id in self.recipe_ids

    def toggle(self, recipe_id: str) -> bool:
        """Save or unsave a recipe; return True when it ends up saved."""
        if recipe_id in self.recipe_ids:
            self.recipe_ids.remove(recipe_id)
            return False
        self.recipe_ids.append(recipe_id)
        return True

    def remove(self, recipe_id: str) -> None:
        if recipe_id in self.recipe_ids:
            self.recipe_ids.remove(recipe_id)

    def list_saved(self) -> list[Recipe]:
        """Return saved recipes still present in the cache, in save order."""
        recipes = []
        for recipe_id in self.recipe_ids:
            recipe = self.cache.get(recipe_id)
            if recipe is not None:
                recipes.append(recipe)
        return recipes

    def clear(self) -> None:
        self.recipe_ids.clear()
