"""
Plant care log endpoint tests: history ordering, statistics and partial updates.
"""

import pytest

from tests.conftest import create_plant


@pytest.fixture
def plant(client, user_a):
    return create_plant(client, user_a["headers"])


def add_log(client, headers, plant_id, care_type, date_time=None, **extra):
    payload = {"user_plant_id": plant_id, "care_type": care_type, **extra}
    if date_time is not None:
        payload["date_time"] = date_time
    response = client.post("/api/v1/plant-care-logs/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_history_newest_event_first(client, user_a, plant):
    headers = user_a["headers"]
    add_log(client, headers, plant["id"], "watering", "2026-03-01T08:00:00Z")
    add_log(client, headers, plant["id"], "pruning", "2026-03-05T08:00:00Z")
    add_log(client, headers, plant["id"], "fertilizing", "2026-03-03T08:00:00Z")

    body = client.get(f"/api/v1/plant-care-logs/plant/{plant['id']}", headers=headers).json()

    assert body["count"] == 3
    assert [log["care_type"] for log in body["data"]] == ["pruning", "fertilizing", "watering"]


def test_date_time_defaults_to_now(client, user_a, plant):
    log = add_log(client, user_a["headers"], plant["id"], "watering", amount="250 ml")

    assert log["date_time"]
    assert log["amount"] == "250 ml"


def test_statistics_per_care_type(client, user_a, plant):
    headers = user_a["headers"]
    add_log(client, headers, plant["id"], "watering", "2026-03-01T08:00:00Z")
    add_log(client, headers, plant["id"], "watering", "2026-03-04T08:00:00Z")
    add_log(client, headers, plant["id"], "watering", "2026-03-07T08:00:00Z")
    add_log(client, headers, plant["id"], "fertilizing", "2026-03-02T08:00:00Z")

    response = client.get(f"/api/v1/plant-care-logs/plant/{plant['id']}/statistics", headers=headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total_logs"] == 4

    watering, fertilizing = data["care_types"]
    assert watering["care_type"] == "watering"
    assert watering["count"] == 3
    assert watering["first_entry"].startswith("2026-03-01T08:00:00")
    assert watering["last_entry"].startswith("2026-03-07T08:00:00")
    assert fertilizing == {
        "care_type": "fertilizing",
        "count": 1,
        "first_entry": fertilizing["last_entry"],
        "last_entry": fertilizing["last_entry"],
    }


def test_statistics_for_plant_without_logs(client, user_a, plant):
    response = client.get(
        f"/api/v1/plant-care-logs/plant/{plant['id']}/statistics", headers=user_a["headers"]
    )

    assert response.json()["data"] == {"total_logs": 0, "care_types": []}


def test_partial_update_and_delete(client, user_a, plant):
    headers = user_a["headers"]
    log = add_log(client, headers, plant["id"], "watering", notes="Soil was dry")

    response = client.put(
        f"/api/v1/plant-care-logs/{log['id']}", json={"amount": "500 ml"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Care log updated successfully"

    data = client.get(f"/api/v1/plant-care-logs/{log['id']}", headers=headers).json()["data"]
    assert data["amount"] == "500 ml"
    assert data["notes"] == "Soil was dry"
    assert data["care_type"] == "watering"

    deleted = client.delete(f"/api/v1/plant-care-logs/{log['id']}", headers=headers)
    assert deleted.json() == {"success": True, "message": "Care log deleted successfully"}
    assert client.get(f"/api/v1/plant-care-logs/{log['id']}", headers=headers).status_code == 404


def test_unknown_plant_rejected(client, user_a):
    response = client.post(
        "/api/v1/plant-care-logs/",
        json={"user_plant_id": "00000000-0000-0000-0000-000000000000", "care_type": "watering"},
        headers=user_a["headers"],
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid plant"


def test_history_of_unknown_plant_not_found(client, user_a):
    response = client.get(
        "/api/v1/plant-care-logs/plant/00000000-0000-0000-0000-000000000000",
        headers=user_a["headers"],
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Plant not found"
