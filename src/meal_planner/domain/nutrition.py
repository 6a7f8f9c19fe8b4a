"""Nutrition domain models."""

from dataclasses import dataclass
from datetime import date

DEFAULT_CALORIES_GOAL = 2000
DEFAULT_PROTEIN_GOAL = 90
DEFAULT_CARBS_GOAL = 200
DEFAULT_FAT_GOAL = 60


@dataclass(frozen=True)
class NutritionValues:
    """Daily intake totals and goals."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    calories_goal: int = DEFAULT_CALORIES_GOAL
    protein_goal: int = DEFAULT_PROTEIN_GOAL
    carbs_goal: int = DEFAULT_CARBS_GOAL
    fat_goal: int = DEFAULT_FAT_GOAL


@dataclass(frozen=True)
class NutritionSnapshot:
    """Nutrition totals for one owner on one calendar day."""

    id: int | None
    owner_id: int
    day: date
    values: NutritionValues
