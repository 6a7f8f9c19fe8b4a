"""Domain records held by the record store."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UserRecord:
    """Represents an application user."""

    id: int
    username: str
    password: str


@dataclass(frozen=True)
class Ingredient:
    """A pantry ingredient owned by a user."""

    id: int
    name: str
    owner_id: int


@dataclass(frozen=True)
class Recipe:
    """A recipe produced by the recommendation flow."""

    id: int
    title: str
    description: str
    instructions: str
    image_url: str
    prep_time_minutes: int
    calories: int
    saved: bool
    meal_type: str
    ingredients: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RecipeDraft:
    """Recipe fields before the store assigns an id."""

    title: str
    description: str
    instructions: str
    image_url: str
    prep_time_minutes: int
    calories: int
    meal_type: str
    ingredients: list[str]
    saved: bool = False


@dataclass(frozen=True)
class GroceryItem:
    """A grocery list entry."""

    id: int
    name: str
    category: str
    completed: bool
    owner_id: int
