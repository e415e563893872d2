"""
API tests for GET /api/environmental-data.
Providers run against MockTransports; nothing leaves the process.
"""

import random
from datetime import datetime, timezone

import pytest

from fungimart.config import Settings
from fungimart.routers.dependencies import get_aggregator
from fungimart.services import (
    EnvironmentalAggregator,
    LightIntensityService,
    WaterPhService,
    WeatherService,
    estimate_water_ph,
)

from .utils import RecordingTransport, json_response

SUN_PAYLOAD = {
    "status": "OK",
    "results": {
        "sunrise": "2024-06-21T09:25:00+00:00",
        "sunset": "2024-06-22T00:31:00+00:00",
    },
}
# Halfway between the two above
SOLAR_NOON = datetime(2024, 6, 21, 16, 58, tzinfo=timezone.utc)


@pytest.fixture
def transports():
    return {
        "weather": RecordingTransport(json_response({"main": {"temp": 99, "humidity": 1}})),
        "sun": RecordingTransport(json_response(SUN_PAYLOAD)),
    }


@pytest.fixture
def env_client(app, client, transports):
    # No API key: weather is always the fallback
    settings = Settings()
    aggregator = EnvironmentalAggregator(
        weather_service=WeatherService(settings, transport=transports["weather"], rng=random.Random(1)),
        light_service=LightIntensityService(settings, transport=transports["sun"], clock=lambda: SOLAR_NOON),
        ph_service=WaterPhService(),
    )
    app.dependency_overrides[get_aggregator] = lambda: aggregator
    yield client
    app.dependency_overrides.clear()


def test_solar_noon_with_weather_fallback(env_client, transports):
    response = env_client.get("/api/environmental-data", params={"latitude": "40.7", "longitude": "-74.0"})

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"temperature", "humidity", "intensity", "pH"}
    assert 20 <= data["temperature"] < 30
    assert 40 <= data["humidity"] < 80
    assert data["intensity"] == 100
    assert data["pH"] == estimate_water_ph(40.7, -74.0)

    assert transports["weather"].requests == []
    assert len(transports["sun"].requests) == 1


@pytest.mark.parametrize("params", [
    {},
    {"latitude": "40.7"},
    {"longitude": "-74.0"},
    {"latitude": "", "longitude": "-74.0"},
])
def test_missing_coordinates_is_400_without_upstream_calls(env_client, transports, params):
    response = env_client.get("/api/environmental-data", params=params)

    assert response.status_code == 400
    assert response.json() == {"error": "Latitude and longitude are required"}
    assert transports["weather"].requests == []
    assert transports["sun"].requests == []


def test_unexpected_failure_is_500(app, client):
    class BrokenPh:
        async def fetch_ph(self, latitude, longitude):
            raise RuntimeError("disk on fire")

    settings = Settings()
    aggregator = EnvironmentalAggregator(
        weather_service=WeatherService(settings, transport=RecordingTransport(json_response({}))),
        light_service=LightIntensityService(settings, transport=RecordingTransport(json_response(SUN_PAYLOAD))),
        ph_service=BrokenPh(),
    )
    app.dependency_overrides[get_aggregator] = lambda: aggregator
    try:
        response = client.get("/api/environmental-data", params={"latitude": "1", "longitude": "2"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch environmental data"}


def test_root_health_and_connection_test(client):
    assert client.get("/").json()["name"] == "FungiMart API"
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/api/test").json() == {"message": "Backend connection successful!"}
