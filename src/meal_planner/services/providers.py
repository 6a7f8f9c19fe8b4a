"""Provider interfaces and the ordered provider chain."""

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Protocol, TypeVar

from meal_planner.domain.recipes import Preferences, Provenance

T = TypeVar("T")


class RecipeProvider(Protocol):
    """Interface every AI provider adapter implements."""

    name: str

    async def recommend_recipes(
        self, ingredients: list[str], preferences: Preferences
    ) -> list[object]:
        """Return raw recipe objects for the ingredients.

        Raises ProviderError on network failure, non-2xx responses or a body
        without a decodable recipe list.
        """

    async def analyze_image(self, image_data: str) -> list[dict[str, object]]:
        """Return raw ``{label, confidence}`` candidates for a base64 image."""

    async def analyze_recipe(
        self, title: str, ingredients: list[str]
    ) -> dict[str, object]:
        """Return a nutritional analysis object for a recipe."""


@dataclass(frozen=True)
class ProviderSlot:
    """A configured provider and the stage it represents."""

    stage: Provenance
    provider: RecipeProvider


async def call_with_timeout(call: Awaitable[T], timeout_seconds: float) -> T:
    """Await a provider call, raising TimeoutError once the budget is spent."""
    return await asyncio.wait_for(call, timeout=timeout_seconds)
