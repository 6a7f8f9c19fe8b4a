"""Pantry ingredient service."""

from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.errors import InputValidationError
from meal_planner.domain.models import Ingredient


class IngredientRepository(Protocol):
    """Persistence interface for pantry ingredients."""

    def get_user_ingredients(self, owner_id: int) -> list[Ingredient]:
        """Return all ingredients for an owner."""

    def add_ingredient(self, owner_id: int, name: str) -> Ingredient:
        """Create an ingredient and return it."""

    def remove_ingredient(self, ingredient_id: int) -> None:
        """Delete an ingredient, ignoring unknown ids."""


@dataclass
class IngredientService:
    """Application service for pantry ingredients."""

    repository: IngredientRepository

    def list_ingredients(self, owner_id: int) -> list[Ingredient]:
        """Return the owner's ingredients."""
        return self.repository.get_user_ingredients(owner_id)

    def add(self, owner_id: int, name: str) -> Ingredient:
        """Add an ingredient by name."""
        cleaned = name.strip()
        if not cleaned:
            raise InputValidationError("Ingredient name is required")
        return self.repository.add_ingredient(owner_id, cleaned)

    def remove(self, ingredient_id: int) -> None:
        """Remove an ingredient; unknown ids are a no-op."""
        self.repository.remove_ingredient(ingredient_id)
