"""
Tests for the OpenWeatherMap client and its fallback.
All HTTP calls go through a MockTransport.
"""

import asyncio
import random

from fungimart.config import Settings
from fungimart.models import ReadingSource
from fungimart.services import WeatherService

from .utils import RecordingTransport, connect_error, json_response, timeout_error


def _service(handler, api_key="test-key", seed=7):
    transport = RecordingTransport(handler)
    settings = Settings(openweather_api_key=api_key)
    return WeatherService(settings, transport=transport, rng=random.Random(seed)), transport


def _fetch(service, lat="40.7", lon="-74.0"):
    return asyncio.run(service.fetch_weather(lat, lon))


def _assert_fallback(reading):
    assert reading.source == ReadingSource.FALLBACK
    assert 20 <= reading.temperature < 30
    assert 40 <= reading.humidity < 80


def test_provider_reading_is_rounded():
    service, transport = _service(json_response({"main": {"temp": 23.5, "humidity": 61}}))
    reading = _fetch(service)

    assert reading.temperature == 24
    assert reading.humidity == 61
    assert reading.source == ReadingSource.PROVIDER


def test_request_uses_metric_units_and_key():
    service, transport = _service(json_response({"main": {"temp": 10.2, "humidity": 50}}))
    _fetch(service, lat="40.7", lon="-74.0")

    assert len(transport.requests) == 1
    params = transport.requests[0].url.params
    assert params["lat"] == "40.7"
    assert params["lon"] == "-74.0"
    assert params["units"] == "metric"
    assert params["appid"] == "test-key"


def test_missing_key_uses_fallback_without_calling_provider():
    service, transport = _service(json_response({"main": {"temp": 1, "humidity": 1}}), api_key=None)

    for _ in range(50):
        _assert_fallback(_fetch(service))
    assert transport.requests == []


def test_http_error_uses_fallback():
    service, _ = _service(json_response({"cod": 401, "message": "Invalid API key"}, status_code=401))
    _assert_fallback(_fetch(service))


def test_timeout_uses_fallback():
    service, _ = _service(timeout_error)
    _assert_fallback(_fetch(service))


def test_connection_error_uses_fallback():
    service, _ = _service(connect_error)
    _assert_fallback(_fetch(service))


def test_unexpected_payload_uses_fallback():
    service, _ = _service(json_response({"weather": []}))
    _assert_fallback(_fetch(service))
