"""Recipe cache abstractions."""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Protocol

from recipe_planner.domain.recipes import Recipe


class RecipeCache(Protocol):
    """Lookup of previously generated recipes by id."""

    def put(self, recipe: Recipe) -> Recipe:
        """Insert or replace a recipe and return it."""

    def get(self, recipe_id: str) -> Recipe | None:
        """Return the cached recipe for an id, if present."""

    def remove(self, recipe_id: str) -> None:
        """Drop a recipe from the cache."""

    def clear(self) -> None:
        """Drop every cached recipe."""

    def values(self) -> list[Recipe]:
        """Return all cached recipes."""


@dataclass
class InMemoryRecipeCache(RecipeCache):
    """In-memory LRU cache bounded by entry count.

    ``max_entries=None`` keeps every recipe for the lifetime of the process.
    """

    _entries: "OrderedDict[str, Recipe]"
    max_entries: int | None

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive or None")
        self._entries = OrderedDict()
        self.max_entries = max_entries

    def put(self, recipe: Recipe) -> Recipe:
        """Upsert a recipe by id, evicting the least recently used if full."""
        self._entries[recipe.id] = recipe
        self._entries.move_to_end(recipe.id)
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return recipe

    def get(self, recipe_id: str) -> Recipe | None:
        """Return a cached recipe and mark it recently used."""
        recipe = self._entries.get(recipe_id)
        if recipe is not None:
            self._entries.move_to_end(recipe_id)
        return recipe

    def remove(self, recipe_id: str) -> None:
        self._entries.pop(recipe_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def values(self) -> list[Recipe]:
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._entries
