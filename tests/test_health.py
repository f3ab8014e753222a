"""
Health check, envelope and middleware tests.
"""

import logging
from uuid import uuid4

ACCESS_LOGGER = "botanical_buddy.api.middleware.logging"


def test_health_reports_database(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["version"] == "1.0.0"
    assert body["timestamp"]


def test_health_unavailable_when_database_down(client):
    async def disconnected():
        return {"status": "disconnected"}

    client.app.state.connection_manager.health_check = disconnected

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["database"] == "disconnected"


def test_request_id_generated_and_echoed(client):
    generated = client.get("/health")
    assert generated.headers["X-Request-ID"]

    request_id = uuid4().hex
    echoed = client.get("/health", headers={"X-Request-ID": request_id})
    assert echoed.headers["X-Request-ID"] == request_id


def test_access_log_names_authenticated_caller(client, user_a, caplog):
    with caplog.at_level(logging.INFO, logger=ACCESS_LOGGER):
        client.get("/api/v1/auth/me", headers=user_a["headers"])
        client.get("/health")

    access_lines = [record.getMessage() for record in caplog.records if record.name == ACCESS_LOGGER]
    me_line = next(line for line in access_lines if line.startswith("GET /api/v1/auth/me"))
    health_line = next(line for line in access_lines if line.startswith("GET /health"))

    assert me_line.endswith(f"user={user_a['user']['id']}")
    assert "user=" not in health_line


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/v1/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Not found"


def test_unexpected_error_returns_generic_500(app, client, user_a):
    from botanical_buddy.modules.plant_management.presentation.api.v1.addresses import (
        get_address_service,
    )

    class BrokenService:
        async def list_addresses(self, user_id):
            raise RuntimeError("secret internal detail")

    app.dependency_overrides[get_address_service] = lambda: BrokenService()

    response = client.get("/api/v1/addresses/", headers=user_a["headers"])

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}
    assert "secret internal detail" not in response.text
