"""
Address endpoint tests: CRUD, partial update and the delete guard.
"""

from tests.conftest import create_address, create_plant


def test_create_and_get_address(client, user_a):
    address = create_address(client, user_a["headers"], state="OR", postal_code="97201")

    response = client.get(f"/api/v1/addresses/{address['id']}", headers=user_a["headers"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["city"] == "Portland"
    assert data["postal_code"] == "97201"
    assert data["latitude"] is None


def test_create_requires_mandatory_fields(client, user_a):
    response = client.post("/api/v1/addresses/", json={"city": "Portland"}, headers=user_a["headers"])

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


def test_list_addresses_newest_first(client, user_a):
    first = create_address(client, user_a["headers"], address_line1="1 First Ave")
    second = create_address(client, user_a["headers"], address_line1="2 Second Ave")

    body = client.get("/api/v1/addresses/", headers=user_a["headers"]).json()

    assert body["count"] == 2
    assert [item["id"] for item in body["data"]] == [second["id"], first["id"]]


def test_partial_update_keeps_other_fields(client, user_a):
    address = create_address(client, user_a["headers"], state="OR")

    response = client.put(
        f"/api/v1/addresses/{address['id']}",
        json={"city": "Salem", "state": None},
        headers=user_a["headers"],
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Address updated successfully"}

    data = client.get(f"/api/v1/addresses/{address['id']}", headers=user_a["headers"]).json()["data"]
    assert data["city"] == "Salem"
    assert data["state"] == "OR"
    assert data["address_line1"] == "12 Fern Street"


def test_delete_refused_while_plants_reference_address(client, user_a):
    headers = user_a["headers"]
    address = create_address(client, headers)
    plant = create_plant(client, headers, address_id=address["id"])

    refused = client.delete(f"/api/v1/addresses/{address['id']}", headers=headers)

    assert refused.status_code == 409
    assert refused.json()["error"].startswith("Cannot delete address that is being used by plants")
    assert client.get(f"/api/v1/addresses/{address['id']}", headers=headers).status_code == 200

    client.delete(f"/api/v1/user-plants/{plant['id']}", headers=headers)
    deleted = client.delete(f"/api/v1/addresses/{address['id']}", headers=headers)

    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "message": "Address deleted successfully"}
    assert client.get(f"/api/v1/addresses/{address['id']}", headers=headers).status_code == 404


def test_invalid_address_id_format(client, user_a):
    response = client.get("/api/v1/addresses/not-a-uuid", headers=user_a["headers"])

    assert response.status_code == 400
