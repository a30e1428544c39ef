"""
API tests running the full application lifespan.

The store is a temporary SQLite file; place search and device location are
the in-memory fakes from test_fixtures.
"""

from decimal import Decimal

from fastapi.testclient import TestClient

from test_fixtures import (
    CITY_HALL,
    client,
    location_provider,
    search_client,
    app_settings,
)
from domain.enums import FoodCategory


def _create(client: TestClient, name: str, menus=None) -> dict:
    r = client.post("/restaurants", json={"name": name, "menus": menus or []})
    assert r.status_code == 201, r.text
    return r.json()


def _report(client: TestClient, coordinate=CITY_HALL):
    return client.post(
        "/map/location",
        json={"latitude": coordinate.latitude, "longitude": coordinate.longitude},
    )


# =============================================================================
# HEALTH
# =============================================================================


def test_health_check(client: TestClient):
    r = client.get("/health-check")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["service"] == "BestEats"
    assert body["store_open"] is True
    assert body["favorites"] == 0
    assert "X-Request-ID" in r.headers


# =============================================================================
# RESTAURANTS
# =============================================================================


def test_create_and_list_restaurants(client: TestClient):
    created = _create(
        client, "하동관", [{"name": "곰탕", "price": "15000"}, {"name": "수육", "price": 40000}]
    )
    _create(client, "을지면옥")

    assert created["name"] == "하동관"
    assert [m["name"] for m in created["menus"]] == ["곰탕", "수육"]
    assert Decimal(created["menus"][0]["price"]) == Decimal("15000")

    r = client.get("/restaurants")
    assert r.status_code == 200
    assert [x["name"] for x in r.json()] == ["하동관", "을지면옥"]


def test_list_restaurants_filtered_by_query(client: TestClient):
    for name in ["Café Onion", "하동관", "CAFE Knotted"]:
        _create(client, name)

    r = client.get("/restaurants", params={"q": "cafe"})
    assert [x["name"] for x in r.json()] == ["Café Onion", "CAFE Knotted"]

    r = client.get("/restaurants", params={"q": ""})
    assert len(r.json()) == 3


def test_get_restaurant(client: TestClient):
    created = _create(client, "우래옥")

    r = client.get(f"/restaurants/{created['restaurant_id']}")
    assert r.status_code == 200
    assert r.json()["restaurant_id"] == created["restaurant_id"]


def test_rename_restaurant(client: TestClient):
    created = _create(client, "하동관")

    r = client.patch(f"/restaurants/{created['restaurant_id']}", json={"name": "하동관 본점"})
    assert r.status_code == 200
    assert r.json()["name"] == "하동관 본점"


def test_rename_with_blank_name_keeps_name(client: TestClient):
    created = _create(client, "하동관")

    for payload in [{"name": "  "}, {}]:
        r = client.patch(f"/restaurants/{created['restaurant_id']}", json=payload)
        assert r.status_code == 200
        assert r.json()["name"] == "하동관"


def test_delete_restaurant_removes_menus(client: TestClient):
    created = _create(client, "하동관", [{"name": "곰탕", "price": 15000}])

    r = client.delete(f"/restaurants/{created['restaurant_id']}")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "removed": created["restaurant_id"]}

    assert client.get("/restaurants").json() == []
    assert client.get(f"/restaurants/{created['restaurant_id']}").status_code == 404


def test_add_and_delete_menu(client: TestClient):
    created = _create(client, "우래옥")
    rid = created["restaurant_id"]

    r = client.post(f"/restaurants/{rid}/menus", json={"name": "물냉면", "price": 16000})
    assert r.status_code == 201
    menu = r.json()
    assert menu["restaurant_id"] == rid

    r = client.delete(f"/restaurants/{rid}/menus/{menu['menu_id']}")
    assert r.status_code == 200
    assert client.get(f"/restaurants/{rid}").json()["menus"] == []


# =============================================================================
# MAP
# =============================================================================


def test_map_state_before_location(client: TestClient):
    r = client.get("/map")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "awaiting"
    assert body["places"] == []
    assert body["info"]["name"] == "정보없음"
    assert body["summary"] == "근처에 0개의 맛집이 있어요!"


def test_list_categories(client: TestClient):
    r = client.get("/map/categories")
    assert r.status_code == 200
    values = [c["value"] for c in r.json()]
    assert values == [c.value for c in FoodCategory]
    cafe = r.json()[0]
    assert cafe["keyword"] == "카페"


def test_first_location_report_searches(client: TestClient, search_client):
    r = _report(client)

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "located"
    assert [p["id"] for p in body["places"]] == ["1", "2", "3"]
    assert body["nearest"]["id"] == "1"
    assert body["info"]["distance"] == "120m"
    assert body["summary"] == "근처에 3개의 맛집이 있어요!"
    assert len(search_client.calls) == 1

    _report(client)
    assert len(search_client.calls) == 1


def test_change_category_clears_selection(client: TestClient, search_client):
    _report(client)
    client.post("/map/places/2/select")

    r = client.put("/map/category", json={"category": FoodCategory.KOREAN.value})

    assert r.status_code == 200
    body = r.json()
    assert body["category"] == FoodCategory.KOREAN.value
    assert body["selected"] is None
    assert body["nearest"]["id"] == "10"
    assert search_client.calls[-1][1] == FoodCategory.KOREAN


def test_select_and_clear_selection(client: TestClient):
    _report(client)

    r = client.post("/map/places/3/select")
    assert r.status_code == 200
    body = r.json()
    assert body["selected"]["id"] == "3"
    assert body["info"]["distance"] == "1.3km"
    assert body["viewport"]["center"]["latitude"] == body["selected"]["coordinate"]["latitude"]

    r = client.delete("/map/selection")
    assert r.json()["selected"] is None
    assert r.json()["info"]["name"] == "스타벅스 시청점"


def test_revoke_then_request_authorization(client: TestClient):
    _report(client)

    r = client.delete("/map/authorization")
    assert r.json()["status"] == "denied"

    r = client.post("/map/recenter")
    assert r.json()["status"] == "denied"

    r = client.post("/map/authorization")
    assert r.json()["status"] == "located"
    assert r.json()["error"] is None
