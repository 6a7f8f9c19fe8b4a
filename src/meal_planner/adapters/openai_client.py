"""OpenAI Responses API client for recipe generation and image labelling."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from meal_planner.domain.errors import ProviderError, ProviderShapeError
from meal_planner.domain.recipes import Diet, MealType, Preferences
from meal_planner.domain.vision import is_viable_image_payload, to_data_url
from meal_planner.services.providers import RecipeProvider

RECIPES_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "recipes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "description": {"type": "string"},
                    "instructions": {"type": "string"},
                    "imageUrl": {"type": "string"},
                    "prepTime": {"type": "integer", "minimum": 1},
                    "calories": {"type": "integer", "minimum": 1},
                    "mealType": {
                        "type": "string",
                        "enum": [meal_type.value for meal_type in MealType],
                    },
                    "ingredients": {"type": "array", "items": {"type": "string"}},
                },
                "required": [
                    "title",
                    "description",
                    "instructions",
                    "imageUrl",
                    "prepTime",
                    "calories",
                    "mealType",
                    "ingredients",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["recipes"],
    "additionalProperties": False,
}

LABELS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                },
                "required": ["label", "confidence"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["ingredients"],
    "additionalProperties": False,
}

_RECIPE_INSTRUCTIONS = (
    "You are a culinary expert who provides recipe recommendations based on "
    "available ingredients. Create recipes that maximize the ingredients provided "
    "and keep suggestions practical. Return JSON with a 'recipes' array. Each "
    "recipe has a title, description, step by step instructions, imageUrl (empty "
    "string), prepTime in minutes, calories per serving, mealType, and the list "
    "of ingredients it uses."
)
_ANALYSIS_INSTRUCTIONS = (
    "You are a nutrition expert who analyzes recipes and provides accurate "
    "nutritional information. Return detailed nutritional analysis in JSON format."
)


@dataclass
class OpenAIRecipeClient(RecipeProvider):
    """Recipe provider backed by the OpenAI Responses API."""

    client: AsyncOpenAI
    model: str = "gpt-4o"
    store: bool = False
    name: str = "openai"

    @classmethod
    def create(cls, api_key: str, model: str, store: bool) -> "OpenAIRecipeClient":
        """Create an OpenAI recipe client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model, store=store)

    async def recommend_recipes(
        self, ingredients: list[str], preferences: Preferences
    ) -> list[object]:
        """Generate three recipes for the ingredients."""
        payload = await self._respond(
            [
                {"role": "system", "content": _RECIPE_INSTRUCTIONS},
                {"role": "user", "content": recipe_prompt(ingredients, preferences)},
            ],
            text_format={
                "type": "json_schema",
                "name": "recipe_recommendations",
                "strict": True,
                "schema": RECIPES_SCHEMA,
            },
        )
        recipes = payload.get("recipes")
        if not isinstance(recipes, list):
            raise ProviderShapeError(self.name, "response has no recipes list")
        return recipes

    async def analyze_image(self, image_data: str) -> list[dict[str, object]]:
        """Label the food ingredients visible in a base64 image."""
        if not is_viable_image_payload(image_data):
            raise ProviderError(self.name, "malformed image payload")
        payload = await self._respond(
            [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "input_text",
                            "text": (
                                "Identify the raw cooking ingredients in the image. "
                                "Return each with a short label and a confidence "
                                "between 0 and 1."
                            ),
                        },
                        {"type": "input_image", "image_url": to_data_url(image_data)},
                    ],
                }
            ],
            text_format={
                "type": "json_schema",
                "name": "ingredient_labels",
                "strict": True,
                "schema": LABELS_SCHEMA,
            },
        )
        labels = payload.get("ingredients")
        if not isinstance(labels, list):
            raise ProviderShapeError(self.name, "response has no ingredients list")
        return labels

    async def analyze_recipe(
        self, title: str, ingredients: list[str]
    ) -> dict[str, object]:
        """Return a free-form nutritional analysis object."""
        return await self._respond(
            [
                {"role": "system", "content": _ANALYSIS_INSTRUCTIONS},
                {"role": "user", "content": analysis_prompt(title, ingredients)},
            ],
            text_format={"type": "json_object"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()

    async def _respond(
        self, messages: list[dict[str, object]], text_format: dict[str, object]
    ) -> dict[str, object]:
        """Call the Responses API and decode its JSON output."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": messages,
            "text": {"format": text_format},
            "store": self.store,
        }
        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            raise ProviderError(self.name, type(exc).__name__) from exc
        output_text = response.output_text
        if not output_text:
            raise ProviderShapeError(self.name, "empty response")
        try:
            decoded = json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise ProviderShapeError(self.name, "response is not JSON") from exc
        if not isinstance(decoded, dict):
            raise ProviderShapeError(self.name, "response is not a JSON object")
        return decoded


def recipe_prompt(ingredients: list[str], preferences: Preferences) -> str:
    """Build the user prompt for a recommendation request."""
    parts = [f"I have these ingredients: {', '.join(ingredients)}."]
    if preferences.diet is not Diet.NONE:
        parts.append(f"Please suggest {preferences.diet.value} recipes only.")
    if preferences.meal_type is not MealType.ANY:
        parts.append(f"The recipes should be suitable for {preferences.meal_type.value}.")
    parts.append(
        "Suggest 3 diverse recipes I can make with these ingredients. "
        "Provide detailed cooking instructions."
    )
    return " ".join(parts)


def analysis_prompt(title: str, ingredients: list[str]) -> str:
    """Build the user prompt for a recipe analysis request."""
    return (
        f'Analyze this recipe: "{title}" with ingredients: {", ".join(ingredients)}. '
        "Provide a nutritional breakdown including calories, protein, carbs, fat, "
        "fiber, sodium, vitamins, and minerals. Also include information about "
        "potential allergens and dietary considerations. Format as JSON."
    )
