"""Process-lifetime in-memory record store."""

import itertools
import threading
from dataclasses import replace
from datetime import date

from meal_planner.domain.models import (
    GroceryItem,
    Ingredient,
    Recipe,
    RecipeDraft,
    UserRecord,
)
from meal_planner.domain.nutrition import NutritionSnapshot, NutritionValues
from meal_planner.services.groceries import GroceryRepository
from meal_planner.services.ingredients import IngredientRepository
from meal_planner.services.nutrition import NutritionRepository
from meal_planner.services.recipes import RecipeRepository
from meal_planner.services.users import UserRepository


class InMemoryRecordStore(
    IngredientRepository,
    RecipeRepository,
    GroceryRepository,
    NutritionRepository,
    UserRepository,
):
    """Dictionary-backed store for every record type.

    Ingredients, grocery items and nutrition snapshots are kept per owner;
    recipes are global. Ids are per-collection counters and are never reused.
    A re-entrant lock guards every read-modify-write.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[int, UserRecord] = {}
        self._ingredients: dict[int, dict[int, Ingredient]] = {}
        self._recipes: dict[int, Recipe] = {}
        self._grocery_items: dict[int, dict[int, GroceryItem]] = {}
        self._nutrition: dict[tuple[int, date], NutritionSnapshot] = {}
        self._user_ids = itertools.count(1)
        self._ingredient_ids = itertools.count(1)
        self._recipe_ids = itertools.count(1)
        self._grocery_ids = itertools.count(1)
        self._nutrition_ids = itertools.count(1)

    # Users

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return the user with the given id, if present."""
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> UserRecord | None:
        """Return the user with the given username, if present."""
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user
            return None

    def create_user(self, username: str, password: str) -> UserRecord:
        """Create a user with empty ingredient and grocery collections."""
        with self._lock:
            user = UserRecord(
                id=next(self._user_ids), username=username, password=password
            )
            self._users[user.id] = user
            self._ingredients.setdefault(user.id, {})
            self._grocery_items.setdefault(user.id, {})
            return user

    # Ingredients

    def get_user_ingredients(self, owner_id: int) -> list[Ingredient]:
        """Return all ingredients for an owner."""
        with self._lock:
            return list(self._ingredients.get(owner_id, {}).values())

    def add_ingredient(self, owner_id: int, name: str) -> Ingredient:
        """Create an ingredient; duplicates by name are allowed."""
        with self._lock:
            ingredient = Ingredient(
                id=next(self._ingredient_ids), name=name, owner_id=owner_id
            )
            self._ingredients.setdefault(owner_id, {})[ingredient.id] = ingredient
            return ingredient

    def remove_ingredient(self, ingredient_id: int) -> None:
        """Delete an ingredient from whichever owner holds it."""
        with self._lock:
            for owned in self._ingredients.values():
                if owned.pop(ingredient_id, None) is not None:
                    return

    # Recipes

    def add_recipe(self, draft: RecipeDraft) -> Recipe:
        """Store a new recipe and assign its id."""
        with self._lock:
            recipe = _recipe_from_draft(next(self._recipe_ids), draft)
            self._recipes[recipe.id] = recipe
            return recipe

    def get_all_recipes(self) -> list[Recipe]:
        """Return every stored recipe."""
        with self._lock:
            return list(self._recipes.values())

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe by id, if present."""
        with self._lock:
            return self._recipes.get(recipe_id)

    def update_recipe(self, recipe_id: int, draft: RecipeDraft) -> Recipe:
        """Replace every field of a stored recipe."""
        with self._lock:
            if recipe_id not in self._recipes:
                raise RuntimeError(f"Recipe {recipe_id} not found in store")
            recipe = _recipe_from_draft(recipe_id, draft)
            self._recipes[recipe_id] = recipe
            return recipe

    def toggle_recipe_saved(self, recipe_id: int) -> Recipe | None:
        """Flip the saved flag of a recipe."""
        with self._lock:
            current = self._recipes.get(recipe_id)
            if current is None:
                return None
            updated = replace(current, saved=not current.saved)
            self._recipes[recipe_id] = updated
            return updated

    # Grocery items

    def get_user_grocery_items(self, owner_id: int) -> list[GroceryItem]:
        """Return all grocery items for an owner."""
        with self._lock:
            return list(self._grocery_items.get(owner_id, {}).values())

    def get_grocery_item(self, item_id: int) -> GroceryItem | None:
        """Return a grocery item by id from any owner."""
        with self._lock:
            for owned in self._grocery_items.values():
                item = owned.get(item_id)
                if item is not None:
                    return item
            return None

    def add_grocery_item(
        self, owner_id: int, name: str, category: str, completed: bool = False
    ) -> GroceryItem:
        """Create a grocery item."""
        with self._lock:
            item = GroceryItem(
                id=next(self._grocery_ids),
                name=name,
                category=category,
                completed=completed,
                owner_id=owner_id,
            )
            self._grocery_items.setdefault(owner_id, {})[item.id] = item
            return item

    def update_grocery_item(self, item: GroceryItem) -> GroceryItem:
        """Replace a stored grocery item."""
        with self._lock:
            for owned in self._grocery_items.values():
                if item.id in owned:
                    owned[item.id] = item
                    return item
            raise RuntimeError(f"Grocery item {item.id} not found in store")

    def toggle_grocery_item(self, item_id: int) -> GroceryItem | None:
        """Flip the completed flag of a grocery item."""
        with self._lock:
            current = self.get_grocery_item(item_id)
            if current is None:
                return None
            return self.update_grocery_item(
                replace(current, completed=not current.completed)
            )

    def remove_grocery_item(self, item_id: int) -> None:
        """Delete a grocery item from whichever owner holds it."""
        with self._lock:
            for owned in self._grocery_items.values():
                if owned.pop(item_id, None) is not None:
                    return

    # Nutrition

    def get_nutrition(self, owner_id: int, day: date) -> NutritionSnapshot | None:
        """Return the snapshot for an owner and day, if present."""
        with self._lock:
            return self._nutrition.get((owner_id, day))

    def upsert_nutrition(
        self, owner_id: int, day: date, values: NutritionValues
    ) -> NutritionSnapshot:
        """Create or overwrite the snapshot keyed by owner and day."""
        with self._lock:
            existing = self._nutrition.get((owner_id, day))
            snapshot_id = existing.id if existing else next(self._nutrition_ids)
            snapshot = NutritionSnapshot(
                id=snapshot_id, owner_id=owner_id, day=day, values=values
            )
            self._nutrition[(owner_id, day)] = snapshot
            return snapshot


def _recipe_from_draft(recipe_id: int, draft: RecipeDraft) -> Recipe:
    return Recipe(
        id=recipe_id,
        title=draft.title,
        description=draft.description,
        instructions=draft.instructions,
        image_url=draft.image_url,
        prep_time_minutes=draft.prep_time_minutes,
        calories=draft.calories,
        saved=draft.saved,
        meal_type=draft.meal_type,
        ingredients=list(draft.ingredients),
    )


_DEFAULT_INGREDIENTS = ("Chicken", "Broccoli", "Rice", "Garlic", "Olive oil")
_DEFAULT_GROCERY_ITEMS = (
    ("Chicken breast (1 lb)", "Protein"),
    ("Broccoli (2 heads)", "Vegetable"),
    ("Jasmine rice (16 oz)", "Grain"),
    ("Garlic (1 bulb)", "Seasoning"),
)


def seed_defaults(store: InMemoryRecordStore, today: date) -> UserRecord:
    """Seed the demo user with pantry, grocery list and today's nutrition."""
    user = store.get_user_by_username("alex") or store.create_user("alex", "password")
    for name in _DEFAULT_INGREDIENTS:
        store.add_ingredient(user.id, name)
    for name, category in _DEFAULT_GROCERY_ITEMS:
        store.add_grocery_item(user.id, name, category)
    store.upsert_nutrition(
        user.id,
        today,
        NutritionValues(calories=1500, protein=45, carbs=160, fat=24),
    )
    return user
