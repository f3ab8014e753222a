"""
Plant catalogue proxy tests: authentication, validation, caching and upstream failures.

Run: pytest tests/test_plant_library.py -v
"""

from tests.conftest import FakeTrefleClient


def test_requires_authentication(client):
    response = client.get("/api/v1/plants/")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Unauthorized"


def test_list_plants_envelope(client, user_a):
    response = client.get("/api/v1/plants/", headers=user_a["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert [plant["common_name"] for plant in body["data"]] == ["monstera", "fern"]
    assert body["links"]["next"] == "/api/v1/plants?page=2"
    assert body["meta"] == {"total": 2}
    assert "error" not in body


def test_repeated_search_hits_provider_once(client, user_a, fake_trefle: FakeTrefleClient):
    for _ in range(3):
        response = client.get("/api/v1/plants/search", params={"q": "fern"}, headers=user_a["headers"])
        assert response.status_code == 200
        assert response.json()["query"] == "fern"

    assert fake_trefle.calls == [("search", "fern", 1)]


def test_search_pages_cached_separately(client, user_a, fake_trefle: FakeTrefleClient):
    client.get("/api/v1/plants/search", params={"q": "fern", "page": 1}, headers=user_a["headers"])
    client.get("/api/v1/plants/search", params={"q": "fern", "page": 2}, headers=user_a["headers"])

    assert fake_trefle.calls == [("search", "fern", 1), ("search", "fern", 2)]


def test_cache_shared_between_users(client, user_a, user_b, fake_trefle: FakeTrefleClient):
    client.get("/api/v1/plants/search", params={"q": "ivy"}, headers=user_a["headers"])
    client.get("/api/v1/plants/search", params={"q": "ivy"}, headers=user_b["headers"])

    assert fake_trefle.calls == [("search", "ivy", 1)]


def test_search_without_query_rejected(client, user_a, fake_trefle: FakeTrefleClient):
    for params in ({}, {"q": "   "}):
        response = client.get("/api/v1/plants/search", params=params, headers=user_a["headers"])
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required parameter: q (query)"

    assert fake_trefle.calls == []


def test_filter_by_common_name(client, user_a, fake_trefle: FakeTrefleClient):
    response = client.get(
        "/api/v1/plants/filter/common-name", params={"name": "rose"}, headers=user_a["headers"]
    )

    assert response.status_code == 200
    assert response.json()["filter"] == "rose"
    assert fake_trefle.calls == [("common", "rose", 1)]


def test_filter_without_name_rejected(client, user_a):
    response = client.get("/api/v1/plants/filter/common-name", headers=user_a["headers"])

    assert response.status_code == 400


def test_plant_detail(client, user_a):
    response = client.get("/api/v1/plants/182512", headers=user_a["headers"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == 182512
    assert data["family"] == "Araceae"


def test_invalid_plant_id(client, user_a):
    response = client.get("/api/v1/plants/0", headers=user_a["headers"])

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid plant ID"


def test_unknown_plant_is_not_found(client, user_a, fake_trefle: FakeTrefleClient):
    fake_trefle.missing_ids.add(999)

    response = client.get("/api/v1/plants/999", headers=user_a["headers"])

    assert response.status_code == 404
    assert response.json()["error"] == "Plant not found"


def test_upstream_failure_is_502_and_not_cached(client, user_a, fake_trefle: FakeTrefleClient):
    fake_trefle.fail = True
    response = client.get("/api/v1/plants/search", params={"q": "fern"}, headers=user_a["headers"])

    assert response.status_code == 502
    body = response.json()
    assert body == {
        "success": False,
        "error": "Failed to search plants",
        "message": "The plant catalogue is currently unavailable. Please try again later.",
    }

    fake_trefle.fail = False
    response = client.get("/api/v1/plants/search", params={"q": "fern"}, headers=user_a["headers"])

    assert response.status_code == 200
    assert len(fake_trefle.calls) == 2
