"""Recipe recommendation request and result models."""

from dataclasses import dataclass
from enum import StrEnum

from meal_planner.domain.models import Recipe


class Diet(StrEnum):
    """Supported diet preferences."""

    NONE = "none"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    HIGH_PROTEIN = "high-protein"


class MealType(StrEnum):
    """Supported meal types."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    BRUNCH = "brunch"
    SNACK = "snack"
    ANY = "any"


class Provenance(StrEnum):
    """Stage that satisfied a provider-backed request."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Preferences:
    """Normalized recommendation preferences."""

    diet: Diet = Diet.NONE
    meal_type: MealType = MealType.ANY


@dataclass(frozen=True)
class RecommendationRequest:
    """Validated recommendation input."""

    ingredients: list[str]
    preferences: Preferences


@dataclass(frozen=True)
class RecommendationResult:
    """Persisted recipes plus the stage that produced them."""

    recipes: list[Recipe]
    provider: Provenance
