"""
Shared fixtures for the Botanical Buddy test suite.

Every test gets its own SQLite database file and a fresh application instance.
External providers are swapped for in-memory fakes through dependency overrides.
"""

import os
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

# Settings are read at import time by several modules
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-botanical-buddy")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("DB_CREATE_TABLES", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update

from botanical_buddy.main import create_app
from botanical_buddy.modules.plant_library.domain.models.plant_catalogue import (
    TreflePlant,
    TreflePlantDetail,
    TreflePlantPage,
)
from botanical_buddy.modules.plant_library.presentation.api.v1.plants import get_trefle_client
from botanical_buddy.modules.plant_management.infrastructure.database.models import AddressModel
from botanical_buddy.modules.user_management.infrastructure.database.models import UserModel
from botanical_buddy.modules.weather_environmental.infrastructure.external.openweather_client import (
    CurrentWeather,
)
from botanical_buddy.modules.weather_environmental.presentation.api.v1.weather import (
    get_weather_client,
)
from botanical_buddy.shared.config.settings import get_settings
from botanical_buddy.shared.core.exceptions import ExternalAPIError


# =============================================================================
# FAKE PROVIDERS
# =============================================================================

class FakeTrefleClient:
    """Records calls and answers with canned catalogue data."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.fail = False
        self.missing_ids: set = set()

    def _record(self, *call) -> None:
        self.calls.append(call)
        if self.fail:
            raise ExternalAPIError("Trefle", api_status_code=500)

    def _page(self, *names: str) -> TreflePlantPage:
        return TreflePlantPage(
            data=[
                TreflePlant(id=index + 1, common_name=name, scientific_name=f"{name.title()} sp.")
                for index, name in enumerate(names)
            ],
            links={"self": "/api/v1/plants?page=1", "next": "/api/v1/plants?page=2"},
            meta={"total": len(names)},
        )

    async def list_plants(self, page: int = 1) -> TreflePlantPage:
        self._record("list", page)
        return self._page("monstera", "fern")

    async def search_plants(self, query: str, page: int = 1) -> TreflePlantPage:
        self._record("search", query, page)
        return self._page(query)

    async def filter_by_common_name(self, common_name: str, page: int = 1) -> TreflePlantPage:
        self._record("common", common_name, page)
        return self._page(common_name)

    async def get_plant(self, plant_id: int) -> TreflePlantDetail:
        self._record("plant", plant_id)
        if plant_id in self.missing_ids:
            raise ExternalAPIError("Trefle", api_status_code=404)
        return TreflePlantDetail(id=plant_id, common_name="Swiss cheese plant", family="Araceae")

    async def close(self) -> None:
        pass


class FakeWeatherClient:
    """Answers with fixed conditions; an optional hook runs before returning."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.fail = False
        self.before_return = None
        self.weather = CurrentWeather(temperature=21.5, humidity=60, conditions="clear sky")

    async def current_weather(self, latitude: Decimal, longitude: Decimal) -> CurrentWeather:
        self.calls.append((latitude, longitude))
        if self.fail:
            raise ExternalAPIError("OpenWeather", api_status_code=503)
        if self.before_return is not None:
            await self.before_return()
        return self.weather

    async def close(self) -> None:
        pass


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================

@pytest.fixture
def database_url(tmp_path, monkeypatch) -> str:
    url = f"sqlite+aiosqlite:///{tmp_path / 'botanical_buddy_test.db'}"
    monkeypatch.setattr(get_settings(), "DATABASE_URL", url)
    return url


@pytest.fixture
def fake_trefle() -> FakeTrefleClient:
    return FakeTrefleClient()


@pytest.fixture
def fake_weather() -> FakeWeatherClient:
    return FakeWeatherClient()


@pytest.fixture
def app(database_url, fake_trefle, fake_weather):
    application = create_app()
    application.dependency_overrides[get_trefle_client] = lambda: fake_trefle
    application.dependency_overrides[get_weather_client] = lambda: fake_weather
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# HELPERS
# =============================================================================

def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register_user(client: TestClient, email: str, password: str = "password123") -> Dict[str, Any]:
    """Register through the API and return the token plus the user DTO."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": email, "password": password, "first_name": "Test", "last_name": "User"},
    )
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    return {"token": data["token"], "user": data["user"], "headers": auth_headers(data["token"])}


def create_address(client: TestClient, headers: Dict[str, str], **overrides: Any) -> Dict[str, Any]:
    payload = {"address_line1": "12 Fern Street", "city": "Portland", "country": "USA"}
    payload.update(overrides)
    response = client.post("/api/v1/addresses/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_plant(client: TestClient, headers: Dict[str, str], **overrides: Any) -> Dict[str, Any]:
    payload = {"common_name": "Monstera", "nickname": "Monty"}
    payload.update(overrides)
    response = client.post("/api/v1/user-plants/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def run_in_app_loop(client: TestClient, async_fn):
    """Run a coroutine function on the TestClient event loop, where the engine lives."""
    return client.portal.call(async_fn)


@pytest.fixture
def user_a(client) -> Dict[str, Any]:
    return register_user(client, "alice@example.com")


@pytest.fixture
def user_b(client) -> Dict[str, Any]:
    return register_user(client, "bob@example.com")


def set_address_coordinates(client: TestClient, address_id: str, latitude: Optional[str], longitude: Optional[str]) -> None:
    """Coordinates come from geocoding, so tests write them directly."""
    session_manager = client.app.state.session_manager

    async def write():
        async with session_manager.get_session() as session:
            await session.execute(
                update(AddressModel)
                .where(AddressModel.id == UUID(address_id))
                .values(
                    latitude=Decimal(latitude) if latitude is not None else None,
                    longitude=Decimal(longitude) if longitude is not None else None,
                )
            )

    run_in_app_loop(client, write)


def set_user_tier(client: TestClient, user_id: str, tier: str) -> None:
    session_manager = client.app.state.session_manager

    async def write():
        async with session_manager.get_session() as session:
            await session.execute(
                update(UserModel).where(UserModel.id == UUID(user_id)).values(subscription_tier=tier)
            )

    run_in_app_loop(client, write)
