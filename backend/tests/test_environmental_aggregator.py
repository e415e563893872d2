"""
Tests for the concurrent weather/light/pH join.
Providers are replaced with small stubs so timing and failures are controlled.
"""

import asyncio

import pytest

from fungimart.errors import MissingParameterError, UpstreamAggregationError
from fungimart.models import LightReading, PhReading, WeatherReading
from fungimart.services import EnvironmentalAggregator


class StubWeather:
    def __init__(self, delay=0.0, error=None):
        self.delay = delay
        self.error = error
        self.calls = 0
        self.finished = False

    async def fetch_weather(self, latitude, longitude):
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        self.finished = True
        return WeatherReading(temperature=22, humidity=55)

    async def close(self):
        pass


class StubLight:
    def __init__(self, delay=0.0):
        self.delay = delay
        self.calls = 0
        self.finished = False

    async def fetch_light_intensity(self, latitude, longitude):
        self.calls += 1
        await asyncio.sleep(self.delay)
        self.finished = True
        return LightReading(intensity=80)

    async def close(self):
        pass


class StubPh:
    def __init__(self):
        self.calls = 0

    async def fetch_ph(self, latitude, longitude):
        self.calls += 1
        return PhReading(ph=7.4)


def _run(aggregator, lat="40.7", lon="-74.0"):
    return asyncio.run(aggregator.get_environmental_data(lat, lon))


@pytest.mark.parametrize("lat,lon", [(None, "-74.0"), ("40.7", None), ("", "-74.0"), ("40.7", "  ")])
def test_missing_coordinates_rejected_before_any_fetch(lat, lon):
    weather, light, ph = StubWeather(), StubLight(), StubPh()
    aggregator = EnvironmentalAggregator(weather, light, ph)

    with pytest.raises(MissingParameterError):
        _run(aggregator, lat, lon)

    assert weather.calls == light.calls == ph.calls == 0


def test_merges_all_three():
    aggregator = EnvironmentalAggregator(StubWeather(), StubLight(), StubPh())
    reading = _run(aggregator)

    assert reading.model_dump(by_alias=True) == {
        "temperature": 22,
        "humidity": 55,
        "intensity": 80,
        "pH": 7.4,
    }


def test_fetches_run_concurrently():
    # Each takes 0.2s; run one after another that would be 0.4s+
    aggregator = EnvironmentalAggregator(StubWeather(delay=0.2), StubLight(delay=0.2), StubPh(), timeout=0.35)
    reading = _run(aggregator)
    assert reading.temperature == 22


def test_unexpected_error_fails_whole_request_but_siblings_finish():
    light = StubLight(delay=0.05)
    aggregator = EnvironmentalAggregator(StubWeather(error=RuntimeError("boom")), light, StubPh())

    with pytest.raises(UpstreamAggregationError):
        _run(aggregator)

    assert light.finished


def test_deadline_covers_the_whole_group():
    aggregator = EnvironmentalAggregator(StubWeather(delay=1.0), StubLight(), StubPh(), timeout=0.05)

    with pytest.raises(UpstreamAggregationError):
        _run(aggregator)
