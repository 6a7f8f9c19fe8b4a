"""Recipe read and save operations."""

from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.errors import RecordNotFoundError
from meal_planner.domain.models import Recipe, RecipeDraft


class RecipeRepository(Protocol):
    """Persistence interface for recipes."""

    def add_recipe(self, draft: RecipeDraft) -> Recipe:
        """Store a new recipe and return it with its id."""

    def get_all_recipes(self) -> list[Recipe]:
        """Return every stored recipe."""

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe by id, if present."""

    def update_recipe(self, recipe_id: int, draft: RecipeDraft) -> Recipe:
        """Replace a stored recipe."""

    def toggle_recipe_saved(self, recipe_id: int) -> Recipe | None:
        """Flip the saved flag and return the updated recipe."""


@dataclass
class RecipeService:
    """Application service for stored recipes."""

    repository: RecipeRepository

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes. Recipes are not scoped to an owner."""
        return self.repository.get_all_recipes()

    def get(self, recipe_id: int) -> Recipe:
        """Return a recipe or raise RecordNotFoundError."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None:
            raise RecordNotFoundError("Recipe", recipe_id)
        return recipe

    def toggle_saved(self, recipe_id: int) -> Recipe:
        """Toggle whether a recipe is saved."""
        recipe = self.repository.toggle_recipe_saved(recipe_id)
        if recipe is None:
            raise RecordNotFoundError("Recipe", recipe_id)
        return recipe
