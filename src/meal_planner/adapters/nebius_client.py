"""Nebius AI Studio client for recipe generation and image labelling."""

import json
import logging
from dataclasses import dataclass

import httpx

from meal_planner.domain.errors import ProviderError, ProviderShapeError
from meal_planner.domain.recipes import Preferences
from meal_planner.domain.vision import is_viable_image_payload, strip_data_url
from meal_planner.services.providers import RecipeProvider

DEFAULT_ENDPOINT = "https://api.nebius.cloud/v1"

# Wrapper keys that may hold the generated document.
_OUTPUT_KEYS = ("output", "result", "data", "text")
# Keys that mark a dict as the document itself rather than a wrapper.
_DOCUMENT_KEYS = ("recipes", "title")
_MAX_UNWRAP_DEPTH = 3

_logger = logging.getLogger(__name__)


@dataclass
class HttpxNebiusClient(RecipeProvider):
    """HTTPX-backed Nebius client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30.0
    name: str = "nebius"

    @classmethod
    def create(
        cls, api_key: str, endpoint: str = DEFAULT_ENDPOINT
    ) -> "HttpxNebiusClient":
        """Create a Nebius client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=normalize_endpoint(endpoint),
            http_client=httpx.AsyncClient(),
        )

    async def recommend_recipes(
        self, ingredients: list[str], preferences: Preferences
    ) -> list[object]:
        """Generate recipes for the ingredients."""
        preference_text = json.dumps(
            {"diet": preferences.diet.value, "mealType": preferences.meal_type.value}
        )
        payload = await self._post(
            "/ai/generate",
            {
                "prompt": {
                    "text": (
                        "Generate recipes using these ingredients: "
                        f"{', '.join(ingredients)}. Preferences: {preference_text}. "
                        "Return JSON with a 'recipes' array; each recipe has title, "
                        "description, ingredients, instructions, prepTime, calories "
                        "and mealType."
                    )
                },
                "outputFormat": "JSON",
            },
        )
        return extract_recipe_list(self.name, payload)

    async def analyze_image(self, image_data: str) -> list[dict[str, object]]:
        """Detect objects and labels in a base64 image."""
        if not is_viable_image_payload(image_data):
            raise ProviderError(self.name, "malformed image payload")
        payload = await self._post(
            "/vision/analyze",
            {
                "image": {"content": strip_data_url(image_data)},
                "features": [
                    {"type": "OBJECT_DETECTION"},
                    {"type": "LABEL_DETECTION"},
                ],
            },
        )
        return extract_labels(self.name, payload)

    async def analyze_recipe(
        self, title: str, ingredients: list[str]
    ) -> dict[str, object]:
        """Generate a nutritional analysis object for a recipe."""
        payload = await self._post(
            "/ai/generate",
            {
                "prompt": {
                    "text": (
                        f'Analyze this recipe: "{title}" with ingredients: '
                        f"{', '.join(ingredients)}. Provide calories, protein, carbs, "
                        "fat, fiber, sodium, vitamins, minerals, allergens and "
                        "dietary considerations as JSON."
                    )
                },
                "outputFormat": "JSON",
            },
        )
        document = _unwrap(self.name, payload)
        if not isinstance(document, dict):
            raise ProviderShapeError(self.name, "analysis is not a JSON object")
        return document

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _post(self, path: str, payload: dict[str, object]) -> object:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = await self.http_client.post(
                url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            _logger.warning(
                "Nebius request failed: path=%s status=%s",
                path,
                exc.response.status_code,
            )
            raise ProviderError(
                self.name, f"HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(self.name, type(exc).__name__) from exc
        try:
            return response.json()
        except ValueError as exc:
            raise ProviderShapeError(self.name, "response is not JSON") from exc


def normalize_endpoint(endpoint: str) -> str:
    """Ensure the endpoint has a scheme and no trailing slash."""
    cleaned = endpoint.strip() or DEFAULT_ENDPOINT
    if not cleaned.startswith(("http://", "https://")):
        cleaned = f"https://{cleaned}"
    return cleaned.rstrip("/")


def extract_recipe_list(provider: str, payload: object) -> list[object]:
    """Find the recipe list inside a generation response."""
    document = _unwrap(provider, payload)
    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        recipes = document.get("recipes")
        if isinstance(recipes, list):
            return recipes
        if "title" in document:
            return [document]
    raise ProviderShapeError(provider, "response has no recipe list")


def extract_labels(provider: str, payload: object) -> list[dict[str, object]]:
    """Merge object and label detections into ``{label, confidence}`` entries."""
    if not isinstance(payload, dict) or not (
        "labels" in payload or "objects" in payload
    ):
        raise ProviderShapeError(provider, "response has no detections")
    labels = []
    for entry in [*(payload.get("labels") or []), *(payload.get("objects") or [])]:
        if not isinstance(entry, dict):
            continue
        name = entry.get("name") or entry.get("description") or entry.get("label")
        score = entry.get("confidence", entry.get("score"))
        if not isinstance(name, str) or not isinstance(score, int | float):
            continue
        labels.append({"label": name, "confidence": min(max(float(score), 0.0), 1.0)})
    return labels


def _unwrap(provider: str, payload: object, depth: int = 0) -> object:
    """Decode JSON text and step into wrapper keys until a document is found."""
    if depth > _MAX_UNWRAP_DEPTH:
        raise ProviderShapeError(provider, "response is nested too deeply")
    if isinstance(payload, str):
        try:
            return _unwrap(provider, json.loads(payload), depth + 1)
        except json.JSONDecodeError as exc:
            raise ProviderShapeError(provider, "generated text is not JSON") from exc
    if isinstance(payload, dict) and not any(key in payload for key in _DOCUMENT_KEYS):
        for key in _OUTPUT_KEYS:
            if key in payload:
                return _unwrap(provider, payload[key], depth + 1)
    return payload
