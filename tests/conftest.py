"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from meal_planner.adapters.memory_store import InMemoryRecordStore
from meal_planner.config import Settings
from meal_planner.containers import AppContainer
from meal_planner.domain.errors import ProviderError
from meal_planner.domain.recipes import Preferences, Provenance
from meal_planner.services.analysis import RecipeAnalysisService
from meal_planner.services.groceries import GroceryService
from meal_planner.services.ingredients import IngredientService
from meal_planner.services.nutrition import NutritionService
from meal_planner.services.providers import ProviderSlot, RecipeProvider
from meal_planner.services.recipes import RecipeService
from meal_planner.services.recommendations import RecommendationService
from meal_planner.services.scan import IngredientScanService

_PNG_IMAGE = "iVBORw0KGgo" + "A" * 120


@dataclass
class ScriptedProvider(RecipeProvider):
    """Provider returning canned data and recording every call."""

    name: str = "scripted"
    recipes: object = field(
        default_factory=lambda: [
            {
                "title": "Kale Salad",
                "description": "Fresh kale with lemon.",
                "instructions": "Chop kale. Dress with lemon.",
                "prepTime": 10,
                "calories": 180,
                "mealType": "lunch",
                "ingredients": ["Kale", "Lemon"],
            }
        ]
    )
    labels: object = field(
        default_factory=lambda: [
            {"label": "Tomato", "confidence": 0.92},
            {"label": "Basil", "confidence": 0.4},
        ]
    )
    analysis: object = field(
        default_factory=lambda: {"nutritionalInfo": {"calories": 123}}
    )
    error: Exception | None = None
    delay_seconds: float = 0.0
    recommend_calls: list[tuple[list[str], Preferences]] = field(default_factory=list)
    image_calls: list[str] = field(default_factory=list)
    analysis_calls: list[tuple[str, list[str]]] = field(default_factory=list)

    async def recommend_recipes(
        self, ingredients: list[str], preferences: Preferences
    ) -> list[object]:
        self.recommend_calls.append((ingredients, preferences))
        await self._maybe_fail()
        return self.recipes

    async def analyze_image(self, image_data: str) -> list[dict[str, object]]:
        self.image_calls.append(image_data)
        await self._maybe_fail()
        return self.labels

    async def analyze_recipe(
        self, title: str, ingredients: list[str]
    ) -> dict[str, object]:
        self.analysis_calls.append((title, ingredients))
        await self._maybe_fail()
        return self.analysis

    async def _maybe_fail(self) -> None:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error


def _slots(
    primary: RecipeProvider | None, secondary: RecipeProvider | None
) -> list[ProviderSlot]:
    configured = []
    if primary is not None:
        configured.append(ProviderSlot(Provenance.PRIMARY, primary))
    if secondary is not None:
        configured.append(ProviderSlot(Provenance.SECONDARY, secondary))
    return configured


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="openai-key",
        nebius_api_key=None,
        provider_timeout_seconds=0.5,
    )


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def primary() -> ScriptedProvider:
    return ScriptedProvider(name="primary-fake")


@pytest.fixture
def secondary() -> ScriptedProvider:
    return ScriptedProvider(
        name="secondary-fake",
        recipes=[{"title": "Tomato Soup", "ingredients": ["Tomato"]}],
    )


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryRecordStore,
    primary: ScriptedProvider,
    secondary: ScriptedProvider,
) -> AppContainer:
    providers = _slots(primary, secondary)
    timeout = settings.provider_timeout_seconds

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        ingredient_service=IngredientService(store),
        recipe_service=RecipeService(store),
        recommendation_service=RecommendationService(
            repository=store, providers=providers, timeout_seconds=timeout
        ),
        scan_service=IngredientScanService(
            repository=store, providers=providers, timeout_seconds=timeout
        ),
        analysis_service=RecipeAnalysisService(
            providers=providers, timeout_seconds=timeout
        ),
        grocery_service=GroceryService(store),
        nutrition_service=NutritionService(store),
        close_resources=close_resources,
    )


@pytest.fixture
def valid_image() -> str:
    """Base64 PNG payload long enough to pass the scan size check."""
    return _PNG_IMAGE


@pytest.fixture
def make_provider() -> Callable[..., ScriptedProvider]:
    return ScriptedProvider


@pytest.fixture
def failing_provider() -> Callable[[str], ScriptedProvider]:
    def factory(name: str) -> ScriptedProvider:
        return ScriptedProvider(name=name, error=ProviderError(name, "HTTP 503"))

    return factory


@pytest.fixture
def make_slots() -> Callable[..., list[ProviderSlot]]:
    return _slots
