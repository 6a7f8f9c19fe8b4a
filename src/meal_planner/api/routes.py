"""REST endpoints for pantry, recipes, groceries and nutrition."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Query, Request, Response, status

from meal_planner.api.schemas import (
    GroceryItemCreate,
    GroceryItemOut,
    IngredientCreate,
    IngredientOut,
    NutritionBody,
    NutritionOut,
    RecipeAnalysisBody,
    RecipeOut,
    RecommendationBody,
    RecommendationOut,
    ScanBody,
    ScanOut,
)
from meal_planner.services.recommendations import build_request

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

router = APIRouter(tags=["meal-planner"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _owner_id(container: AppContainer) -> int:
    """Return the owner for this request; a single default user for now."""
    return container.settings.default_user_id


@router.get("/ingredients", response_model=list[IngredientOut])
async def list_ingredients(request: Request) -> list[IngredientOut]:
    """Return the owner's pantry."""
    container = _container(request)
    ingredients = container.ingredient_service.list_ingredients(_owner_id(container))
    return [IngredientOut.from_domain(item) for item in ingredients]


@router.post(
    "/ingredients",
    response_model=IngredientOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_ingredient(body: IngredientCreate, request: Request) -> IngredientOut:
    """Add an ingredient to the pantry."""
    container = _container(request)
    ingredient = container.ingredient_service.add(_owner_id(container), body.name)
    return IngredientOut.from_domain(ingredient)


@router.delete("/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_ingredient(ingredient_id: int, request: Request) -> Response:
    """Remove an ingredient; unknown ids still succeed."""
    _container(request).ingredient_service.remove(ingredient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/recipe-recommendations", response_model=RecommendationOut)
async def recommend_recipes(
    body: RecommendationBody, request: Request
) -> RecommendationOut:
    """Recommend recipes; provider failures fall back instead of erroring."""
    container = _container(request)
    recommendation = build_request(body.ingredients, body.diet, body.meal_type)
    result = await container.recommendation_service.recommend(recommendation)
    return RecommendationOut.from_domain(result)


@router.post("/scan-ingredients", response_model=ScanOut)
async def scan_ingredients(body: ScanBody, request: Request) -> ScanOut:
    """Detect ingredients in an image and add the confident ones."""
    container = _container(request)
    result = await container.scan_service.scan(_owner_id(container), body.image)
    return ScanOut.from_domain(result)


@router.get("/recipes", response_model=list[RecipeOut])
async def list_recipes(request: Request) -> list[RecipeOut]:
    """Return every generated recipe."""
    recipes = _container(request).recipe_service.list_recipes()
    return [RecipeOut.from_domain(recipe) for recipe in recipes]


@router.get("/recipes/{recipe_id}", response_model=RecipeOut)
async def get_recipe(recipe_id: int, request: Request) -> RecipeOut:
    """Return one recipe."""
    return RecipeOut.from_domain(_container(request).recipe_service.get(recipe_id))


@router.patch("/recipes/{recipe_id}/save", response_model=RecipeOut)
async def toggle_recipe_saved(recipe_id: int, request: Request) -> RecipeOut:
    """Toggle the saved flag of a recipe."""
    recipe = _container(request).recipe_service.toggle_saved(recipe_id)
    return RecipeOut.from_domain(recipe)


@router.post("/recipe-analysis")
async def analyze_recipe(body: RecipeAnalysisBody, request: Request) -> dict:
    """Return a nutritional analysis for a recipe."""
    return await _container(request).analysis_service.analyze(
        body.title, body.ingredients
    )


@router.get("/grocery-items", response_model=list[GroceryItemOut])
async def list_grocery_items(request: Request) -> list[GroceryItemOut]:
    """Return the owner's grocery list."""
    container = _container(request)
    items = container.grocery_service.list_items(_owner_id(container))
    return [GroceryItemOut.from_domain(item) for item in items]


@router.post(
    "/grocery-items",
    response_model=GroceryItemOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_grocery_item(body: GroceryItemCreate, request: Request) -> GroceryItemOut:
    """Add a grocery item; the category is derived from its name."""
    container = _container(request)
    item = container.grocery_service.add(_owner_id(container), body.name)
    return GroceryItemOut.from_domain(item)


@router.patch("/grocery-items/{item_id}/toggle", response_model=GroceryItemOut)
async def toggle_grocery_item(item_id: int, request: Request) -> GroceryItemOut:
    """Toggle the completed flag of a grocery item."""
    item = _container(request).grocery_service.toggle(item_id)
    return GroceryItemOut.from_domain(item)


@router.delete("/grocery-items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_grocery_item(item_id: int, request: Request) -> Response:
    """Remove a grocery item; unknown ids still succeed."""
    _container(request).grocery_service.remove(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/nutrition", response_model=NutritionOut)
async def get_nutrition(
    request: Request, day: date | None = Query(default=None, alias="date")
) -> NutritionOut:
    """Return the day's totals, defaulting to today."""
    container = _container(request)
    snapshot = container.nutrition_service.get_day(
        _owner_id(container), day or datetime.now(tz=UTC).date()
    )
    return NutritionOut.from_domain(snapshot)


@router.post(
    "/nutrition",
    response_model=NutritionOut,
    status_code=status.HTTP_201_CREATED,
)
async def save_nutrition(body: NutritionBody, request: Request) -> NutritionOut:
    """Store the day's totals, overwriting an earlier write for the same day."""
    container = _container(request)
    snapshot = container.nutrition_service.save_day(
        _owner_id(container), body.day, body.to_values()
    )
    return NutritionOut.from_domain(snapshot)


@router.get("/service-info")
async def service_info(request: Request) -> dict[str, object]:
    """Report which AI providers are configured."""
    settings = _container(request).settings
    return {
        "services": {
            "primaryAvailable": settings.primary_available,
            "secondaryAvailable": settings.secondary_available,
        }
    }
