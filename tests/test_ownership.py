"""
Owner isolation tests.

A record owned by user A must be "not found" for user B on every read, update and
delete, and must survive B's attempts unchanged.

Run: pytest tests/test_ownership.py -v
"""

import pytest

from tests.conftest import create_address, create_plant


@pytest.fixture
def owned_records(client, user_a):
    headers = user_a["headers"]
    address = create_address(client, headers)
    plant = create_plant(client, headers, address_id=address["id"])
    log = client.post(
        "/api/v1/plant-care-logs/",
        json={"user_plant_id": plant["id"], "care_type": "watering"},
        headers=headers,
    ).json()["data"]
    return {"address": address, "plant": plant, "log": log}


@pytest.mark.parametrize(
    "resource,path,update_body",
    [
        ("address", "/api/v1/addresses/{id}", {"city": "Hijacked"}),
        ("plant", "/api/v1/user-plants/{id}", {"nickname": "Hijacked"}),
        ("log", "/api/v1/plant-care-logs/{id}", {"notes": "Hijacked"}),
    ],
)
def test_other_user_gets_not_found(client, user_a, user_b, owned_records, resource, path, update_body):
    url = path.format(id=owned_records[resource]["id"])

    get_response = client.get(url, headers=user_b["headers"])
    put_response = client.put(url, json=update_body, headers=user_b["headers"])
    delete_response = client.delete(url, headers=user_b["headers"])

    for response in (get_response, put_response, delete_response):
        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["error"].endswith("not found")

    # Owner still sees the record unchanged
    owner_view = client.get(url, headers=user_a["headers"])
    assert owner_view.status_code == 200
    assert "Hijacked" not in owner_view.text


def test_not_found_matches_missing_record(client, user_b, owned_records):
    foreign = client.get(
        f"/api/v1/addresses/{owned_records['address']['id']}", headers=user_b["headers"]
    )
    missing = client.get(
        "/api/v1/addresses/00000000-0000-0000-0000-000000000000", headers=user_b["headers"]
    )

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()


def test_lists_only_contain_own_records(client, user_a, user_b, owned_records):
    for path in ("/api/v1/addresses/", "/api/v1/user-plants/"):
        response = client.get(path, headers=user_b["headers"])
        assert response.status_code == 200
        assert response.json()["data"] == []
        assert response.json()["count"] == 0


def test_care_history_of_foreign_plant_not_found(client, user_b, owned_records):
    plant_id = owned_records["plant"]["id"]

    history = client.get(f"/api/v1/plant-care-logs/plant/{plant_id}", headers=user_b["headers"])
    statistics = client.get(
        f"/api/v1/plant-care-logs/plant/{plant_id}/statistics", headers=user_b["headers"]
    )

    assert history.status_code == statistics.status_code == 404
    assert history.json()["error"] == "Plant not found"


def test_weather_of_foreign_address_not_found(client, user_b, owned_records, fake_weather):
    address_id = owned_records["address"]["id"]

    current = client.get(f"/api/v1/addresses/{address_id}/weather", headers=user_b["headers"])
    history = client.get(f"/api/v1/addresses/{address_id}/weather/history", headers=user_b["headers"])

    assert current.status_code == history.status_code == 404
    assert fake_weather.calls == []


def test_cannot_reference_foreign_records(client, user_b, owned_records):
    plant = client.post(
        "/api/v1/user-plants/",
        json={"common_name": "Fern", "address_id": owned_records["address"]["id"]},
        headers=user_b["headers"],
    )
    log = client.post(
        "/api/v1/plant-care-logs/",
        json={"user_plant_id": owned_records["plant"]["id"], "care_type": "watering"},
        headers=user_b["headers"],
    )

    assert plant.status_code == 400
    assert plant.json()["error"] == "Invalid address"
    assert log.status_code == 400
    assert log.json()["error"] == "Invalid plant"
