"""Daily nutrition tracking service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from meal_planner.domain.nutrition import NutritionSnapshot, NutritionValues


class NutritionRepository(Protocol):
    """Persistence interface for nutrition snapshots."""

    def get_nutrition(self, owner_id: int, day: date) -> NutritionSnapshot | None:
        """Return the snapshot for an owner and day, if present."""

    def upsert_nutrition(
        self, owner_id: int, day: date, values: NutritionValues
    ) -> NutritionSnapshot:
        """Create or overwrite the snapshot for an owner and day."""


@dataclass
class NutritionService:
    """Service for daily nutrition totals against goals."""

    repository: NutritionRepository

    def get_day(self, owner_id: int, day: date) -> NutritionSnapshot:
        """Return the day's snapshot, or zeroed totals with standard goals."""
        snapshot = self.repository.get_nutrition(owner_id, day)
        if snapshot is None:
            return NutritionSnapshot(
                id=None, owner_id=owner_id, day=day, values=NutritionValues()
            )
        return snapshot

    def save_day(
        self, owner_id: int, day: date, values: NutritionValues
    ) -> NutritionSnapshot:
        """Store the day's totals, replacing any earlier write for that day."""
        return self.repository.upsert_nutrition(owner_id, day, values)
