"""Request and response models for the REST API."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from meal_planner.domain.models import GroceryItem, Ingredient, Recipe
from meal_planner.domain.nutrition import (
    DEFAULT_CALORIES_GOAL,
    DEFAULT_CARBS_GOAL,
    DEFAULT_FAT_GOAL,
    DEFAULT_PROTEIN_GOAL,
    NutritionSnapshot,
    NutritionValues,
)
from meal_planner.domain.recipes import RecommendationResult
from meal_planner.domain.vision import ScanResult


class ApiModel(BaseModel):
    """Base model using camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngredientCreate(ApiModel):
    name: str = Field(min_length=1)


class IngredientOut(ApiModel):
    id: int
    name: str
    owner_id: int

    @classmethod
    def from_domain(cls, ingredient: Ingredient) -> "IngredientOut":
        return cls(id=ingredient.id, name=ingredient.name, owner_id=ingredient.owner_id)


class RecipeOut(ApiModel):
    id: int
    title: str
    description: str
    instructions: str
    image_url: str
    prep_time_minutes: int
    calories: int
    saved: bool
    meal_type: str
    ingredients: list[str]

    @classmethod
    def from_domain(cls, recipe: Recipe) -> "RecipeOut":
        return cls(
            id=recipe.id,
            title=recipe.title,
            description=recipe.description,
            instructions=recipe.instructions,
            image_url=recipe.image_url,
            prep_time_minutes=recipe.prep_time_minutes,
            calories=recipe.calories,
            saved=recipe.saved,
            meal_type=recipe.meal_type,
            ingredients=list(recipe.ingredients),
        )


class RecommendationBody(ApiModel):
    """Body of a recipe recommendation request."""

    ingredients: list[str]
    diet: str | None = None
    meal_type: str | None = None


class RecommendationOut(ApiModel):
    recipes: list[RecipeOut]
    provider: str

    @classmethod
    def from_domain(cls, result: RecommendationResult) -> "RecommendationOut":
        return cls(
            recipes=[RecipeOut.from_domain(recipe) for recipe in result.recipes],
            provider=result.provider.value,
        )


class ScanBody(ApiModel):
    """Body of an ingredient scan request; ``image`` is base64 or a data URL."""

    image: str | None = None


class ScanOut(ApiModel):
    ingredients: list[str]
    added: list[IngredientOut]
    provider: str

    @classmethod
    def from_domain(cls, result: ScanResult) -> "ScanOut":
        return cls(
            ingredients=result.labels,
            added=[IngredientOut.from_domain(item) for item in result.added],
            provider=result.provider.value,
        )


class RecipeAnalysisBody(ApiModel):
    title: str
    ingredients: list[str]


class GroceryItemCreate(ApiModel):
    name: str = Field(min_length=1)


class GroceryItemOut(ApiModel):
    id: int
    name: str
    category: str
    completed: bool
    owner_id: int

    @classmethod
    def from_domain(cls, item: GroceryItem) -> "GroceryItemOut":
        return cls(
            id=item.id,
            name=item.name,
            category=item.category,
            completed=item.completed,
            owner_id=item.owner_id,
        )


class NutritionBody(ApiModel):
    """Daily totals to store; omitted goals take the standard values."""

    day: date = Field(alias="date")
    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fat: int = Field(ge=0)
    calories_goal: int = Field(default=DEFAULT_CALORIES_GOAL, ge=0)
    protein_goal: int = Field(default=DEFAULT_PROTEIN_GOAL, ge=0)
    carbs_goal: int = Field(default=DEFAULT_CARBS_GOAL, ge=0)
    fat_goal: int = Field(default=DEFAULT_FAT_GOAL, ge=0)

    def to_values(self) -> NutritionValues:
        return NutritionValues(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            calories_goal=self.calories_goal,
            protein_goal=self.protein_goal,
            carbs_goal=self.carbs_goal,
            fat_goal=self.fat_goal,
        )


class NutritionOut(ApiModel):
    id: int | None
    owner_id: int
    day: date = Field(alias="date")
    calories: int
    protein: int
    carbs: int
    fat: int
    calories_goal: int
    protein_goal: int
    carbs_goal: int
    fat_goal: int

    @classmethod
    def from_domain(cls, snapshot: NutritionSnapshot) -> "NutritionOut":
        values = snapshot.values
        return cls(
            id=snapshot.id,
            owner_id=snapshot.owner_id,
            day=snapshot.day,
            calories=values.calories,
            protein=values.protein,
            carbs=values.carbs,
            fat=values.fat,
            calories_goal=values.calories_goal,
            protein_goal=values.protein_goal,
            carbs_goal=values.carbs_goal,
            fat_goal=values.fat_goal,
        )
