"""
Outbound API client tests against a local aiohttp server.

Run: pytest tests/test_api_client.py -v
"""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer as ProviderServer

from botanical_buddy.modules.plant_library.infrastructure.external.trefle_client import TrefleClient
from botanical_buddy.modules.plant_library.presentation.api.v1.plants import get_trefle_client
from botanical_buddy.shared.core.exceptions import ExternalAPIError
from tests.conftest import run_in_app_loop

MAINTENANCE_PAGE = "<html><body>Down for maintenance</body></html>"


def provider_app(body: bytes, content_type: str, status: int = 200) -> web.Application:
    """Answer every GET with the same canned body."""

    async def handler(request: web.Request) -> web.Response:
        return web.Response(body=body, status=status, content_type=content_type)

    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", handler)
    return app


def trefle_for(server: ProviderServer) -> TrefleClient:
    return TrefleClient(base_url=f"http://{server.host}:{server.port}", api_token="trefle-token")


async def test_html_body_raises_external_api_error():
    async with ProviderServer(provider_app(MAINTENANCE_PAGE.encode(), "text/html")) as server:
        trefle = trefle_for(server)
        try:
            with pytest.raises(ExternalAPIError) as exc_info:
                await trefle.list_plants(1)
        finally:
            await trefle.close()

    assert exc_info.value.message == "Invalid JSON response"
    assert exc_info.value.api_status_code == 200
    assert exc_info.value.status_code == 502


async def test_undecodable_json_body_raises_external_api_error():
    async with ProviderServer(provider_app(b"\xff\xfe{", "application/json")) as server:
        trefle = trefle_for(server)
        try:
            with pytest.raises(ExternalAPIError) as exc_info:
                await trefle.get_plant(7)
        finally:
            await trefle.close()

    assert exc_info.value.message == "Invalid JSON response"


async def test_error_status_raises_with_provider_status():
    async with ProviderServer(provider_app(b'{"error": true}', "application/json", status=503)) as server:
        trefle = trefle_for(server)
        try:
            with pytest.raises(ExternalAPIError) as exc_info:
                await trefle.search_plants("fern")
        finally:
            await trefle.close()

    assert exc_info.value.api_status_code == 503


async def test_json_body_is_parsed():
    body = b'{"data": [{"id": 1, "common_name": "fern"}], "links": {}, "meta": {"total": 1}}'
    async with ProviderServer(provider_app(body, "application/json")) as server:
        trefle = trefle_for(server)
        try:
            page = await trefle.list_plants(1)
        finally:
            await trefle.close()

    assert [plant.common_name for plant in page.data] == ["fern"]
    assert page.meta == {"total": 1}


def test_catalogue_maintenance_page_returns_502(app, client, user_a):
    async def start_server() -> ProviderServer:
        server = ProviderServer(provider_app(MAINTENANCE_PAGE.encode(), "text/html"))
        await server.start_server()
        return server

    server = run_in_app_loop(client, start_server)
    trefle = trefle_for(server)
    app.dependency_overrides[get_trefle_client] = lambda: trefle
    try:
        response = client.get("/api/v1/plants/", headers=user_a["headers"])
    finally:
        run_in_app_loop(client, trefle.close)
        run_in_app_loop(client, server.close)

    assert response.status_code == 502
    assert response.json() == {
        "success": False,
        "error": "Failed to retrieve plants",
        "message": "The plant catalogue is currently unavailable. Please try again later.",
    }
