"""Tests for the REST API."""

from fastapi.testclient import TestClient

from meal_planner.api.app import create_app
from meal_planner.containers import AppContainer
from meal_planner.domain.errors import ProviderError


def _client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def test_health(container: AppContainer) -> None:
    response = _client(container).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_add_and_list_ingredients(container: AppContainer) -> None:
    client = _client(container)

    created = client.post("/api/ingredients", json={"name": "Kale"})
    listed = client.get("/api/ingredients")

    assert created.status_code == 201
    body = created.json()
    assert body["name"] == "Kale"
    assert body["ownerId"] == 1
    assert body in listed.json()


def test_blank_ingredient_rejected(container: AppContainer) -> None:
    client = _client(container)

    assert client.post("/api/ingredients", json={"name": "   "}).status_code == 400
    assert client.post("/api/ingredients", json={}).status_code == 400


def test_delete_ingredient_is_idempotent(container: AppContainer) -> None:
    client = _client(container)
    ingredient_id = client.post("/api/ingredients", json={"name": "Leek"}).json()["id"]

    assert client.delete(f"/api/ingredients/{ingredient_id}").status_code == 204
    assert client.delete(f"/api/ingredients/{ingredient_id}").status_code == 204
    assert client.get("/api/ingredients").json() == []


def test_recommendations_from_primary(
    container: AppContainer, primary
) -> None:
    response = _client(container).post(
        "/api/recipe-recommendations",
        json={"ingredients": ["Kale"], "diet": "vegan", "mealType": "lunch"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["provider"] == "primary"
    recipe = body["recipes"][0]
    assert recipe["title"] == "Kale Salad"
    assert recipe["prepTimeMinutes"] == 10
    assert recipe["saved"] is False
    assert len(primary.recommend_calls) == 1


def test_recommendations_fall_back_when_providers_fail(
    container: AppContainer, primary, secondary
) -> None:
    primary.error = ProviderError("primary-fake", "HTTP 500")
    secondary.error = ProviderError("secondary-fake", "HTTP 500")
    client = _client(container)

    response = client.post(
        "/api/recipe-recommendations", json={"ingredients": ["Chicken"]}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["provider"] == "fallback"
    assert len(body["recipes"]) == 4
    assert len(client.get("/api/recipes").json()) == 4


def test_recommendations_reject_bad_input(
    container: AppContainer, primary, secondary
) -> None:
    client = _client(container)

    empty = client.post("/api/recipe-recommendations", json={"ingredients": []})
    unknown = client.post(
        "/api/recipe-recommendations",
        json={"ingredients": ["Kale"], "diet": "carnivore"},
    )
    missing = client.post("/api/recipe-recommendations", json={})

    assert empty.status_code == 400
    assert unknown.status_code == 400
    assert missing.status_code == 400
    assert primary.recommend_calls == []
    assert secondary.recommend_calls == []


def test_recipe_lookup_and_save_toggle(container: AppContainer) -> None:
    client = _client(container)
    recipe_id = client.post(
        "/api/recipe-recommendations", json={"ingredients": ["Kale"]}
    ).json()["recipes"][0]["id"]

    fetched = client.get(f"/api/recipes/{recipe_id}")
    saved = client.patch(f"/api/recipes/{recipe_id}/save")
    unsaved = client.patch(f"/api/recipes/{recipe_id}/save")

    assert fetched.json()["id"] == recipe_id
    assert saved.json()["saved"] is True
    assert unsaved.json()["saved"] is False


def test_unknown_recipe_is_404(container: AppContainer) -> None:
    client = _client(container)

    assert client.get("/api/recipes/999").status_code == 404
    assert client.patch("/api/recipes/999/save").status_code == 404


def test_scan_adds_confident_ingredients(
    container: AppContainer, valid_image: str
) -> None:
    client = _client(container)

    response = client.post("/api/scan-ingredients", json={"image": valid_image})

    assert response.status_code == 200
    body = response.json()
    assert body["ingredients"] == ["Tomato"]
    assert body["provider"] == "primary"
    assert [item["name"] for item in client.get("/api/ingredients").json()] == [
        "Tomato"
    ]


def test_scan_rejects_missing_image(
    container: AppContainer, primary
) -> None:
    client = _client(container)

    assert client.post("/api/scan-ingredients", json={}).status_code == 400
    assert (
        client.post("/api/scan-ingredients", json={"image": "abc"}).status_code == 400
    )
    assert primary.image_calls == []


def test_scan_provider_failure_is_500(
    container: AppContainer, primary, valid_image: str
) -> None:
    primary.error = ProviderError("primary-fake", "HTTP 500")

    response = _client(container).post(
        "/api/scan-ingredients", json={"image": valid_image}
    )

    assert response.status_code == 500
    assert "clearer photo" in response.json()["message"]


def test_recipe_analysis_falls_back(
    container: AppContainer, primary, secondary
) -> None:
    primary.error = ProviderError("primary-fake", "HTTP 500")
    secondary.error = ProviderError("secondary-fake", "HTTP 500")

    response = _client(container).post(
        "/api/recipe-analysis", json={"title": "Veggie Bowl", "ingredients": ["Rice"]}
    )

    assert response.status_code == 200
    assert "nutritionalInfo" in response.json()


def test_grocery_items(container: AppContainer) -> None:
    client = _client(container)

    created = client.post("/api/grocery-items", json={"name": "Chicken breast"})
    item_id = created.json()["id"]
    toggled = client.patch(f"/api/grocery-items/{item_id}/toggle")

    assert created.status_code == 201
    assert created.json()["category"] == "Protein"
    assert toggled.json()["completed"] is True
    assert client.get("/api/grocery-items").json() == [toggled.json()]
    assert client.patch("/api/grocery-items/999/toggle").status_code == 404
    assert client.delete(f"/api/grocery-items/{item_id}").status_code == 204
    assert client.delete("/api/grocery-items/999").status_code == 204
    assert client.get("/api/grocery-items").json() == []


def test_nutrition_defaults_and_upsert(container: AppContainer) -> None:
    client = _client(container)

    default = client.get("/api/nutrition", params={"date": "2024-05-01"}).json()
    first = client.post(
        "/api/nutrition",
        json={
            "date": "2024-05-01",
            "calories": 900,
            "protein": 40,
            "carbs": 100,
            "fat": 20,
        },
    )
    second = client.post(
        "/api/nutrition",
        json={
            "date": "2024-05-01",
            "calories": 1300,
            "protein": 60,
            "carbs": 150,
            "fat": 35,
        },
    )
    stored = client.get("/api/nutrition", params={"date": "2024-05-01"}).json()

    assert default["id"] is None
    assert default["calories"] == 0
    assert default["caloriesGoal"] == 2000
    assert first.status_code == 201
    assert second.json()["id"] == first.json()["id"]
    assert stored["calories"] == 1300
    assert stored["date"] == "2024-05-01"


def test_nutrition_rejects_negative_values(container: AppContainer) -> None:
    response = _client(container).post(
        "/api/nutrition",
        json={
            "date": "2024-05-01",
            "calories": -1,
            "protein": 0,
            "carbs": 0,
            "fat": 0,
        },
    )

    assert response.status_code == 400


def test_service_info(container: AppContainer) -> None:
    response = _client(container).get("/api/service-info")

    assert response.json() == {
        "services": {"primaryAvailable": True, "secondaryAvailable": False}
    }
