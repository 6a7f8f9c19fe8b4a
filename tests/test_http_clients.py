"""Tests for the AI provider adapters."""

import asyncio
import json

import httpx
import pytest
from openai import APIConnectionError

from meal_planner.adapters.nebius_client import (
    HttpxNebiusClient,
    extract_labels,
    extract_recipe_list,
    normalize_endpoint,
)
from meal_planner.adapters.openai_client import OpenAIRecipeClient, recipe_prompt
from meal_planner.domain.errors import ProviderError, ProviderShapeError
from meal_planner.domain.recipes import Diet, MealType, Preferences


class _FakeResponses:
    def __init__(self, output_text: str = "", error: Exception | None = None) -> None:
        self.output_text = output_text
        self.error = error
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        if self.error is not None:
            raise self.error
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = "", error: Exception | None = None) -> None:
        self.responses = _FakeResponses(output_text, error)


def _nebius(handler) -> HttpxNebiusClient:  # type: ignore[no-untyped-def]
    return HttpxNebiusClient(
        api_key="key",
        base_url="https://nebius.test/v1",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def test_openai_recommend_sends_schema_and_parses_recipes() -> None:
    fake = _FakeOpenAI(json.dumps({"recipes": [{"title": "Soup"}]}))
    client = OpenAIRecipeClient(client=fake, model="gpt-4o")

    recipes = asyncio.run(
        client.recommend_recipes(
            ["Tomato"], Preferences(diet=Diet.VEGAN, meal_type=MealType.LUNCH)
        )
    )

    assert recipes == [{"title": "Soup"}]
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4o"
    assert payload["store"] is False
    assert payload["text"]["format"]["type"] == "json_schema"


def test_openai_image_uses_data_url(valid_image: str) -> None:
    fake = _FakeOpenAI(
        json.dumps({"ingredients": [{"label": "Tomato", "confidence": 0.9}]})
    )
    client = OpenAIRecipeClient(client=fake)

    labels = asyncio.run(client.analyze_image(valid_image))

    assert labels == [{"label": "Tomato", "confidence": 0.9}]
    content = fake.responses.last_payload["input"][0]["content"]
    assert content[1]["image_url"].startswith("data:image/png;base64,")


def test_openai_short_image_rejected_before_call() -> None:
    fake = _FakeOpenAI()
    client = OpenAIRecipeClient(client=fake)

    with pytest.raises(ProviderError):
        asyncio.run(client.analyze_image("abc"))

    assert fake.responses.last_payload is None


def test_openai_transport_error_wrapped() -> None:
    error = APIConnectionError(request=httpx.Request("POST", "https://api.test"))
    client = OpenAIRecipeClient(client=_FakeOpenAI(error=error))

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(client.analyze_recipe("Soup", ["Tomato"]))

    assert not isinstance(excinfo.value, ProviderShapeError)


@pytest.mark.parametrize("output_text", ["", "not json", "[1, 2]"])
def test_openai_bad_output_is_shape_error(output_text: str) -> None:
    client = OpenAIRecipeClient(client=_FakeOpenAI(output_text))

    with pytest.raises(ProviderShapeError):
        asyncio.run(client.analyze_recipe("Soup", ["Tomato"]))


def test_recipe_prompt_mentions_preferences() -> None:
    prompt = recipe_prompt(
        ["Eggs", "Spinach"],
        Preferences(diet=Diet.VEGETARIAN, meal_type=MealType.BREAKFAST),
    )

    assert "Eggs, Spinach" in prompt
    assert "vegetarian" in prompt
    assert "breakfast" in prompt
    assert "vegetarian" not in recipe_prompt(["Eggs"], Preferences())


def test_nebius_generate_unwraps_output_text() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"output": json.dumps({"recipes": [{"title": "Stew"}]})}
        )

    recipes = asyncio.run(_nebius(handler).recommend_recipes(["Beef"], Preferences()))

    assert recipes == [{"title": "Stew"}]
    assert seen[0].url.path == "/v1/ai/generate"
    assert seen[0].headers["Authorization"] == "Bearer key"


def test_nebius_image_sends_stripped_payload(valid_image: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content.decode())
        assert body["image"]["content"] == valid_image
        return httpx.Response(
            200,
            json={
                "labels": [{"description": "Tomato", "score": 0.95}],
                "objects": [{"name": "Bowl", "confidence": 1.4}],
            },
        )

    labels = asyncio.run(
        _nebius(handler).analyze_image(f"data:image/png;base64,{valid_image}")
    )

    assert labels == [
        {"label": "Tomato", "confidence": 0.95},
        {"label": "Bowl", "confidence": 1.0},
    ]


def test_nebius_non_2xx_is_provider_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "busy"})

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(_nebius(handler).recommend_recipes(["Rice"], Preferences()))

    assert "HTTP 503" in str(excinfo.value)


def test_nebius_non_json_is_shape_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(ProviderShapeError):
        asyncio.run(_nebius(handler).analyze_recipe("Soup", ["Tomato"]))


def test_nebius_missing_recipe_list_is_shape_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"message": "done"})

    with pytest.raises(ProviderShapeError):
        asyncio.run(_nebius(handler).recommend_recipes(["Rice"], Preferences()))


def test_extract_labels_requires_detections() -> None:
    with pytest.raises(ProviderShapeError):
        extract_labels("nebius", {"status": "ok"})


def test_normalize_endpoint() -> None:
    assert normalize_endpoint("api.nebius.test/v1/") == "https://api.nebius.test/v1"
    assert normalize_endpoint("http://localhost:8080") == "http://localhost:8080"


def test_extract_labels_from_objects_only() -> None:
    labels = extract_labels(
        "nebius", {"objects": [{"name": "Egg", "score": 0.8}, "noise"], "labels": None}
    )

    assert labels == [{"label": "Egg", "confidence": 0.8}]


def test_single_recipe_document_with_text_field() -> None:
    document = {"title": "Stew", "text": "A hearty stew.", "ingredients": ["Beef"]}

    assert extract_recipe_list("nebius", document) == [document]
    assert extract_recipe_list("nebius", {"result": document}) == [document]
