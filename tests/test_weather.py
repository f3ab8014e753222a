"""
Weather endpoint tests: the daily row, the one-hour cache and racing first fetches.

Run: pytest tests/test_weather.py -v
"""

from datetime import timedelta
from decimal import Decimal
from uuid import UUID

import pytest
from sqlalchemy import func, select

from botanical_buddy.modules.weather_environmental.infrastructure.database.models import (
    WeatherDataModel,
)
from botanical_buddy.modules.weather_environmental.infrastructure.database.weather_repository_impl import (
    WeatherDataRepositoryImpl,
)
from botanical_buddy.shared.utils.helpers import utc_today
from tests.conftest import create_address, run_in_app_loop, set_address_coordinates


@pytest.fixture
def address(client, user_a):
    created = create_address(client, user_a["headers"])
    set_address_coordinates(client, created["id"], "45.51520000", "-122.67840000")
    return created


def weather_row_count(client, address_id: str) -> int:
    session_manager = client.app.state.session_manager

    async def count():
        async with session_manager.get_session() as session:
            result = await session.execute(
                select(func.count()).select_from(WeatherDataModel).where(
                    WeatherDataModel.address_id == UUID(address_id)
                )
            )
            return result.scalar_one()

    return run_in_app_loop(client, count)


def test_address_without_coordinates(client, user_a, fake_weather):
    plain = create_address(client, user_a["headers"])

    response = client.get(f"/api/v1/addresses/{plain['id']}/weather", headers=user_a["headers"])

    assert response.status_code == 400
    assert response.json()["error"] == "Address has no coordinates"
    assert fake_weather.calls == []


def test_first_fetch_stores_daily_row(client, user_a, address, fake_weather):
    response = client.get(f"/api/v1/addresses/{address['id']}/weather", headers=user_a["headers"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["address_id"] == address["id"]
    assert data["date"] == utc_today().isoformat()
    assert data["temperature"] == 21.5
    assert data["humidity"] == 60
    assert data["precipitation"] == 0
    assert data["conditions"] == "clear sky"

    assert fake_weather.calls == [(Decimal("45.51520000"), Decimal("-122.67840000"))]
    assert weather_row_count(client, address["id"]) == 1


def test_repeat_fetch_served_from_cache(client, user_a, address, fake_weather):
    url = f"/api/v1/addresses/{address['id']}/weather"

    first = client.get(url, headers=user_a["headers"]).json()
    second = client.get(url, headers=user_a["headers"]).json()

    assert first == second
    assert len(fake_weather.calls) == 1


def test_stored_row_used_when_cache_is_cold(client, user_a, address, fake_weather):
    url = f"/api/v1/addresses/{address['id']}/weather"
    client.get(url, headers=user_a["headers"])

    client.app.state.cache.clear()
    response = client.get(url, headers=user_a["headers"])

    assert response.status_code == 200
    assert len(fake_weather.calls) == 1
    assert weather_row_count(client, address["id"]) == 1


def test_racing_first_fetch_keeps_single_row(client, user_a, address, fake_weather):
    """A row written by a concurrent request wins; the late writer returns it."""
    session_manager = client.app.state.session_manager
    address_id = UUID(address["id"])

    async def rival_request_stores_first():
        async with session_manager.get_session() as session:
            await WeatherDataRepositoryImpl(session).insert_if_absent(
                address_id,
                utc_today(),
                {"temperature": 18.0, "humidity": 70, "precipitation": 0, "conditions": "overcast"},
            )

    fake_weather.before_return = rival_request_stores_first

    response = client.get(f"/api/v1/addresses/{address['id']}/weather", headers=user_a["headers"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["temperature"] == 18.0
    assert data["conditions"] == "overcast"
    assert weather_row_count(client, address["id"]) == 1


def test_insert_if_absent_is_idempotent(client, address):
    session_manager = client.app.state.session_manager
    address_id = UUID(address["id"])
    today = utc_today()

    async def insert_twice():
        async with session_manager.get_session() as session:
            repository = WeatherDataRepositoryImpl(session)
            first = await repository.insert_if_absent(address_id, today, {"temperature": 10, "humidity": 50})
            second = await repository.insert_if_absent(address_id, today, {"temperature": 30, "humidity": 90})
            return first.id, second.id, second.temperature

    first_id, second_id, temperature = run_in_app_loop(client, insert_twice)

    assert first_id == second_id
    assert temperature == 10
    assert weather_row_count(client, address["id"]) == 1


def test_provider_failure_is_502_and_nothing_stored(client, user_a, address, fake_weather):
    fake_weather.fail = True

    response = client.get(f"/api/v1/addresses/{address['id']}/weather", headers=user_a["headers"])

    assert response.status_code == 502
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Failed to retrieve weather"
    assert weather_row_count(client, address["id"]) == 0

    fake_weather.fail = False
    retry = client.get(f"/api/v1/addresses/{address['id']}/weather", headers=user_a["headers"])
    assert retry.status_code == 200
    assert len(fake_weather.calls) == 2


def test_history_lists_stored_days(client, user_a, address):
    url = f"/api/v1/addresses/{address['id']}"
    assert client.get(f"{url}/weather/history", headers=user_a["headers"]).json()["count"] == 0

    client.get(f"{url}/weather", headers=user_a["headers"])
    body = client.get(f"{url}/weather/history", params={"days": 7}, headers=user_a["headers"]).json()

    assert body["count"] == 1
    assert body["data"][0]["date"] == utc_today().isoformat()


def test_history_window_covers_exactly_the_requested_days(client, user_a, address):
    session_manager = client.app.state.session_manager
    address_id = UUID(address["id"])
    today = utc_today()

    async def store_four_days():
        async with session_manager.get_session() as session:
            repository = WeatherDataRepositoryImpl(session)
            for offset in range(4):
                await repository.insert_if_absent(address_id, today - timedelta(days=offset), {"temperature": offset})

    run_in_app_loop(client, store_four_days)

    body = client.get(
        f"/api/v1/addresses/{address['id']}/weather/history",
        params={"days": 3},
        headers=user_a["headers"],
    ).json()

    assert [row["date"] for row in body["data"]] == [
        today.isoformat(),
        (today - timedelta(days=1)).isoformat(),
        (today - timedelta(days=2)).isoformat(),
    ]


def test_history_days_validated(client, user_a, address):
    response = client.get(
        f"/api/v1/addresses/{address['id']}/weather/history",
        params={"days": 0},
        headers=user_a["headers"],
    )

    assert response.status_code == 400
