"""Grocery list service and category rules."""

from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.errors import InputValidationError, RecordNotFoundError
from meal_planner.domain.models import GroceryItem

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Protein", ("chicken", "beef", "fish", "meat")),
    ("Vegetable", ("broccoli", "carrot", "lettuce", "vegetable")),
    ("Grain", ("rice", "pasta", "bread", "flour")),
    ("Seasoning", ("salt", "pepper", "spice", "herb")),
)
OTHER_CATEGORY = "Other"


def categorize(name: str) -> str:
    """Return the grocery category for an item name."""
    lowered = name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return OTHER_CATEGORY


class GroceryRepository(Protocol):
    """Persistence interface for grocery items."""

    def get_user_grocery_items(self, owner_id: int) -> list[GroceryItem]:
        """Return all grocery items for an owner."""

    def get_grocery_item(self, item_id: int) -> GroceryItem | None:
        """Return a grocery item by id, if present."""

    def add_grocery_item(
        self, owner_id: int, name: str, category: str, completed: bool = False
    ) -> GroceryItem:
        """Create a grocery item and return it."""

    def toggle_grocery_item(self, item_id: int) -> GroceryItem | None:
        """Flip the completed flag and return the updated item."""

    def remove_grocery_item(self, item_id: int) -> None:
        """Delete a grocery item, ignoring unknown ids."""


@dataclass
class GroceryService:
    """Application service for the grocery list."""

    repository: GroceryRepository

    def list_items(self, owner_id: int) -> list[GroceryItem]:
        """Return the owner's grocery list."""
        return self.repository.get_user_grocery_items(owner_id)

    def add(self, owner_id: int, name: str) -> GroceryItem:
        """Add an item; its category is fixed at creation time."""
        cleaned = name.strip()
        if not cleaned:
            raise InputValidationError("Grocery item name is required")
        return self.repository.add_grocery_item(owner_id, cleaned, categorize(cleaned))

    def toggle(self, item_id: int) -> GroceryItem:
        """Toggle the completed flag of an item."""
        item = self.repository.toggle_grocery_item(item_id)
        if item is None:
            raise RecordNotFoundError("Grocery item", item_id)
        return item

    def remove(self, item_id: int) -> None:
        """Remove an item; unknown ids are a no-op."""
        self.repository.remove_grocery_item(item_id)
