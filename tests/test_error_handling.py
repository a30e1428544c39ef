"""
Error handling and edge case tests for the API.

This test suite covers the JSON error envelope and its codes:
- request validation failures (422 VALIDATION_ERROR)
- blank names rejected by the repository (400 SERVICE_VALIDATION_ERROR)
- missing restaurants, menus and places (404 NOT_FOUND)
- storage failures (503 STORAGE_ERROR)
- location errors (409 LOCATION_*)
- search failures reported in the map state instead of failing the request
- a store that cannot be opened aborts startup
"""

import uuid
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from test_fixtures import (
    client,
    location_provider,
    search_client,
    app_settings,
)
from app.exceptions import SearchError, StorageError
from domain.enums import FoodCategory, SearchErrorCode


def _error(r) -> dict:
    body = r.json()
    assert body["success"] is False
    assert "timestamp" in body
    return body["error"]


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


def test_create_without_name_is_validation_error(client: TestClient):
    r = client.post("/restaurants", json={})
    assert r.status_code == 422
    assert _error(r)["code"] == "VALIDATION_ERROR"


def test_create_with_blank_name_is_service_validation_error(client: TestClient):
    r = client.post("/restaurants", json={"name": "   "})
    assert r.status_code == 400
    assert _error(r)["code"] == "SERVICE_VALIDATION_ERROR"
    assert client.get("/restaurants").json() == []


def test_negative_menu_price_is_validation_error(client: TestClient):
    r = client.post("/restaurants", json={"name": "우래옥", "menus": [{"name": "물냉면", "price": -1}]})
    assert r.status_code == 422


def test_malformed_uuid_is_validation_error(client: TestClient):
    r = client.get("/restaurants/not-a-uuid")
    assert r.status_code == 422
    assert _error(r)["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize(
    "payload", [{"latitude": 91, "longitude": 0}, {"latitude": 37.5}, {}]
)
def test_invalid_location_report(client: TestClient, payload):
    r = client.post("/map/location", json=payload)
    assert r.status_code == 422


def test_unknown_category_is_validation_error(client: TestClient):
    r = client.put("/map/category", json={"category": "sushi-bar"})
    assert r.status_code == 422


# =============================================================================
# NOT FOUND
# =============================================================================


def test_unknown_restaurant_not_found(client: TestClient):
    missing = uuid.uuid4()
    for r in [
        client.get(f"/restaurants/{missing}"),
        client.patch(f"/restaurants/{missing}", json={"name": "x"}),
        client.delete(f"/restaurants/{missing}"),
        client.post(f"/restaurants/{missing}/menus", json={"name": "x"}),
    ]:
        assert r.status_code == 404
        assert _error(r)["code"] == "NOT_FOUND"


def test_menu_of_another_restaurant_not_found(client: TestClient):
    a = client.post("/restaurants", json={"name": "우래옥", "menus": [{"name": "물냉면"}]}).json()
    b = client.post("/restaurants", json={"name": "하동관"}).json()

    r = client.delete(f"/restaurants/{b['restaurant_id']}/menus/{a['menus'][0]['menu_id']}")
    assert r.status_code == 404
    assert len(client.get(f"/restaurants/{a['restaurant_id']}").json()["menus"]) == 1


def test_select_place_not_in_results(client: TestClient):
    r = client.post("/map/places/1/select")
    assert r.status_code == 404
    assert _error(r)["code"] == "NOT_FOUND"


def test_unknown_route(client: TestClient):
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert _error(r)["code"] == "HTTP_404"


# =============================================================================
# STORAGE
# =============================================================================


def test_storage_failure_is_503(client: TestClient):
    favorites = client.app.state.favorites
    with patch.object(favorites.store, "save", side_effect=StorageError("disk full")):
        r = client.post("/restaurants", json={"name": "하동관"})

    assert r.status_code == 503
    assert _error(r)["code"] == "STORAGE_ERROR"
    assert _error(r)["message"] == "disk full"


def test_startup_fails_when_store_cannot_open(tmp_path, search_client, location_provider):
    from app.config import Settings
    from main import create_app

    cfg = Settings(
        environment="testing",
        database_url=f"sqlite:///{tmp_path / 'missing' / 'db.sqlite'}",
        db_init_attempts=2,
        db_init_delay_sec=0,
    )
    app = create_app(cfg, search_client=search_client, location_provider=location_provider)

    with pytest.raises(StorageError):
        with TestClient(app):
            pass


# =============================================================================
# LOCATION AND SEARCH
# =============================================================================


def test_search_before_location_is_conflict(client: TestClient):
    r = client.post("/map/search")
    assert r.status_code == 409
    assert _error(r)["code"] == "LOCATION_UNAVAILABLE"


def test_search_failure_is_reported_in_map_state(client: TestClient, search_client):
    search_client.errors[FoodCategory.CAFE] = SearchError(
        SearchErrorCode.EMPTY_DATA, "Search response has no documents"
    )

    r = client.post("/map/location", json={"latitude": 37.5666, "longitude": 126.9784})

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "located"
    assert body["places"] == []
    assert body["error"] == "Search response has no documents"


def test_search_failure_keeps_previous_places(client: TestClient, search_client):
    client.post("/map/location", json={"latitude": 37.5666, "longitude": 126.9784})
    search_client.errors[FoodCategory.CAFE] = SearchError(SearchErrorCode.TRANSPORT, "offline")

    r = client.post("/map/search")

    assert r.status_code == 200
    assert len(r.json()["places"]) == 3
    assert r.json()["error"] == "offline"
