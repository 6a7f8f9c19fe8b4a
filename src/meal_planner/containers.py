"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from meal_planner.adapters.memory_store import InMemoryRecordStore, seed_defaults
from meal_planner.adapters.nebius_client import HttpxNebiusClient
from meal_planner.adapters.openai_client import OpenAIRecipeClient
from meal_planner.config import Settings
from meal_planner.domain.recipes import Provenance
from meal_planner.services.analysis import RecipeAnalysisService
from meal_planner.services.groceries import GroceryService
from meal_planner.services.ingredients import IngredientService
from meal_planner.services.nutrition import NutritionService
from meal_planner.services.providers import ProviderSlot
from meal_planner.services.recipes import RecipeService
from meal_planner.services.recommendations import RecommendationService
from meal_planner.services.scan import IngredientScanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: InMemoryRecordStore
    ingredient_service: IngredientService
    recipe_service: RecipeService
    recommendation_service: RecommendationService
    scan_service: IngredientScanService
    analysis_service: RecipeAnalysisService
    grocery_service: GroceryService
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, store: InMemoryRecordStore | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    if store is None:
        store = InMemoryRecordStore()
        seed_defaults(store, datetime.now(tz=UTC).date())

    providers: list[ProviderSlot] = []
    openai_client = None
    nebius_client = None
    if resolved_settings.primary_available:
        openai_client = OpenAIRecipeClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            store=resolved_settings.openai_store,
        )
        providers.append(ProviderSlot(Provenance.PRIMARY, openai_client))
    if resolved_settings.secondary_available:
        nebius_client = HttpxNebiusClient.create(
            api_key=resolved_settings.nebius_api_key,
            endpoint=resolved_settings.nebius_endpoint,
        )
        providers.append(ProviderSlot(Provenance.SECONDARY, nebius_client))

    timeout = resolved_settings.provider_timeout_seconds

    async def close_resources() -> None:
        if openai_client is not None:
            await openai_client.close()
        if nebius_client is not None:
            await nebius_client.close()

    return AppContainer(
        settings=resolved_settings,
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
