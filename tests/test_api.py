"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from recipe_planner.api.app import create_app
from recipe_planner.domain.profiles import AuthSession
from recipe_planner.services.client_state import USER_PROFILE_KEY


def _signed_in_client(container) -> TestClient:  # type: ignore[no-untyped-def]
    container.auth_service.current_session = AuthSession(
        user_id="user-1", email="cook@example.com"
    )
    return TestClient(create_app(container))


def test_health_and_options(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/health").json() == {"status": "ok"}
    options = client.get("/options").json()
    assert "Vegan" in options["dietary_preferences"]
    assert "Muscle Gain" in options["health_goals"]
    assert "Nuts" in options["allergies"]


def test_profile_requires_sign_in(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/profile")

    assert response.status_code == 401


def test_sign_up_then_read_profile(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/auth/sign-up", json={"email": "new@example.com", "password": "secret"}
    )

    assert response.status_code == 200
    assert response.json()["profile"]["body_weight"] == 150
    profile = client.get("/profile").json()["profile"]
    assert profile["id"] == "user-new@example.com"
    assert profile["daily_protein_target"] == 150
    assert profile["synced"] is True


def test_sign_in_with_bad_credentials(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/auth/sign-in", json={"email": "cook@example.com", "password": "nope"}
    )

    assert response.status_code == 401


def test_update_profile_validates_body_weight(container) -> None:
    client = _signed_in_client(container)

    assert client.patch("/profile", json={"body_weight": "abc"}).status_code == 422
    assert client.patch("/profile", json={"body_weight": 500}).status_code == 422

    response = client.patch("/profile", json={"body_weight": "180"})

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["body_weight"] == 180
    assert body["profile"]["daily_protein_target"] == 180
    assert body["meal_plans_invalidated"] is True


def test_update_profile_reports_unsynced_write(container, profile_repository) -> None:
    client = _signed_in_client(container)
    profile_repository.fail_updates = 1

    response = client.patch("/profile", json={"allergies": ["Soy"]})

    assert response.json()["profile"]["synced"] is False
    assert response.json()["profile"]["allergies"] == ["Soy"]
    assert client.get("/profile").json()["profile"]["synced"] is False
    assert client.post("/profile/sync").json() == {"synced": True}
    assert client.get("/profile").json()["profile"]["synced"] is True


def test_feed_filters_and_search(container) -> None:
    client = _signed_in_client(container)

    feed = client.get("/feed", params={"hour": 8}).json()

    assert feed["state"] == "ready"
    assert feed["greeting"] == "Good Morning"
    assert len(feed["recipes"]) == 5
    assert {recipe["mealType"] for recipe in feed["recipes"]} == {"breakfast"}
    assert {recipe["protein"] for recipe in feed["recipes"]} == {40}

    quick = client.post("/feed/filters/quick").json()
    assert quick["active_filter"] == "quick"
    assert quick["recipes"] == []
    assert quick["empty"] is True

    reset = client.delete("/feed/filters").json()
    assert reset["active_filter"] is None
    assert len(reset["recipes"]) == 5

    searched = client.get("/feed", params={"q": "tofu", "hour": 8}).json()
    assert len(searched["recipes"]) == 5
    missing = client.get("/feed", params={"q": "pasta", "hour": 8}).json()
    assert missing["empty"] is True


def test_feed_follows_requested_hour(container) -> None:
    client = _signed_in_client(container)

    morning = client.get("/feed", params={"hour": 8}).json()
    assert {recipe["mealType"] for recipe in morning["recipes"]} == {"breakfast"}

    evening = client.get("/feed", params={"hour": 19}).json()
    assert evening["greeting"] == "Good Evening"
    assert {recipe["mealType"] for recipe in evening["recipes"]} == {"dinner"}

    same_period = client.get("/feed", params={"hour": 21}).json()
    assert [recipe["id"] for recipe in same_period["recipes"]] == [
        recipe["id"] for recipe in evening["recipes"]
    ]

    regenerated = client.post("/feed/regenerate", params={"hour": 12}).json()
    assert regenerated["greeting"] == "Good Afternoon"
    assert {recipe["mealType"] for recipe in regenerated["recipes"]} == {"lunch"}

    filtered = client.post("/feed/filters/protein").json()
    assert filtered["greeting"] == "Good Afternoon"


def test_feed_rejects_out_of_range_hour(container) -> None:
    client = _signed_in_client(container)

    assert client.get("/feed", params={"hour": 24}).status_code == 422
    assert client.post("/feed/regenerate", params={"hour": -1}).status_code == 422


def test_surprise_replaces_feed(container) -> None:
    client = _signed_in_client(container)
    client.get("/feed", params={"hour": 19})

    response = client.post("/feed/surprise")

    assert response.status_code == 200
    assert len(response.json()["recipes"]) == 1


def test_generate_recipe_with_explicit_target(container) -> None:
    client = _signed_in_client(container)

    response = client.post("/recipes", json={"meal_type": "snack", "protein_target": 16})

    recipe = response.json()["recipe"]
    assert recipe["mealType"] == "snack"
    assert recipe["protein"] == 16
    assert container.recipe_cache.get(recipe["id"]) is not None


def test_generate_recipe_rejects_non_positive_target(container) -> None:
    client = _signed_in_client(container)

    response = client.post("/recipes", json={"protein_target": 0})

    assert response.status_code == 422


def test_generate_recipe_without_required_backend(container) -> None:
    container.recipe_generator.require_backend = True
    client = _signed_in_client(container)

    response = client.post("/recipes", json={"meal_type": "lunch"})

    assert response.status_code == 503


def test_recipe_detail_and_saved(container) -> None:
    client = _signed_in_client(container)
    recipe_id = client.get("/feed", params={"hour": 8}).json()["recipes"][0]["id"]

    detail = client.get(f"/recipes/{recipe_id}").json()

    assert detail["recipe"]["id"] == recipe_id
    assert detail["steps"][0].startswith("1. ")
    assert detail["daily_protein_percentage"] == 25
    assert detail["saved"] is False

    assert client.post(f"/saved/{recipe_id}").json() == {"saved": True}
    saved = client.get("/saved").json()["recipes"]
    assert [recipe["id"] for recipe in saved] == [recipe_id]
    assert client.get(f"/recipes/{recipe_id}").json()["saved"] is True
    assert client.post(f"/saved/{recipe_id}").json() == {"saved": False}


def test_recipe_detail_generates_unknown_id(container) -> None:
    client = _signed_in_client(container)

    detail = client.get("/recipes/shared-link").json()

    assert detail["recipe"]["id"] == "shared-link"
    assert container.recipe_cache.get("shared-link") is not None


def test_meal_plan_with_progress(container) -> None:
    client = _signed_in_client(container)

    body = client.get("/meal-plans/2024-05-01").json()

    assert body["enabled"] is True
    assert body["plan"]["day"] == "2024-05-01"
    assert body["plan"]["breakfast"]["protein"] == 40
    assert body["plan"]["snack"]["protein"] == 16
    assert body["progress"]["percentage"] == 95
    assert body["progress"]["status"] == "below"
    assert body["progress"]["message"] == "95% of your daily protein goal"

    regenerated = client.post("/meal-plans/2024-05-01/regenerate").json()
    assert regenerated["plan"]["lunch"]["id"] != body["plan"]["lunch"]["id"]


def test_meal_plan_disabled(container) -> None:
    client = _signed_in_client(container)
    client.patch("/profile", json={"enable_meal_planning": False})

    body = client.get("/meal-plans/2024-05-01").json()

    assert body == {"enabled": False, "plan": None, "progress": None}
    assert client.post("/meal-plans/2024-05-01/regenerate").status_code == 409


def test_sign_out_clears_state(container) -> None:
    client = _signed_in_client(container)
    client.get("/meal-plans/2024-05-01")

    assert client.post("/auth/sign-out").json() == {"status": "ok"}

    assert container.recipe_cache.values() == []
    assert client.get("/profile").status_code == 401


def test_lifespan_restores_session_and_saves_state(container, auth_client) -> None:
    auth_client.session = AuthSession(user_id="user-1", email="cook@example.com")
    app = create_app(container)

    with TestClient(app) as client:
        assert client.get("/profile").status_code == 200

    payload = container.client_state_service.store.load()
    assert payload is not None
    assert payload[USER_PROFILE_KEY]["bodyWeight"] == 160
