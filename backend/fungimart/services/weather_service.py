"""
Weather Service
===============

Gets the current temperature and humidity for a point from OpenWeatherMap.

THE DATA FLOW:
-------------
    GET /data/2.5/weather?lat=..&lon=..&units=metric&appid=KEY
            |
            v
    {"main": {"temp": 23.6, "humidity": 61}, ...}
            |
            v
    WeatherReading(temperature=24, humidity=61)

WHEN THINGS GO WRONG:
--------------------
No API key, timeout, HTTP error, garbage JSON... it doesn't matter which.
We log it and hand back a random but believable reading instead:

    temperature: 20-29 °C
    humidity:    40-79 %

The caller never sees the failure.

API Documentation: https://openweathermap.org/current

Author: FungiMart Backend Team
"""

import logging
import random
from typing import Optional, Union

import httpx

from fungimart.config import Settings
from fungimart.models import ReadingSource, WeatherReading
from fungimart.utils import round_half_up

logger = logging.getLogger(__name__)

Coordinate = Union[str, float]


class WeatherService:
    """
    Fetches current weather conditions.

    HOW TO USE:
    ----------
    service = WeatherService(settings)
    reading = await service.fetch_weather("40.7", "-74.0")
    print(reading.temperature, reading.humidity)
    """

    # Fallback ranges: [low, high)
    FALLBACK_TEMPERATURE = (20, 30)
    FALLBACK_HUMIDITY = (40, 80)

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Set up the service.

        Args:
            settings: App settings (API key, URL, timeout)
            transport: Optional httpx transport (tests pass a MockTransport)
            rng: Random source for fallback values
        """
        self.api_key = settings.openweather_api_key
        self.api_url = settings.weather_api_url
        self.http_client = httpx.AsyncClient(timeout=settings.upstream_timeout, transport=transport)
        self.rng = rng or random.Random()

        if not self.api_key:
            logger.warning("OPENWEATHER_API_KEY not set - weather will always use fallback values")

    async def fetch_weather(self, latitude: Coordinate, longitude: Coordinate) -> WeatherReading:
        """
        Get temperature (°C) and humidity (%) for a location.

        Never raises for provider problems - returns a fallback reading.
        """
        if not self.api_key:
            return self.fallback_reading()

        params = {
            "lat": latitude,
            "lon": longitude,
            "units": "metric",
            "appid": self.api_key,
        }

        try:
            response = await self.http_client.get(self.api_url, params=params)
            response.raise_for_status()
            return self.parse_weather_response(response.json())
        except httpx.HTTPStatusError as e:
            logger.warning(f"Weather provider returned HTTP {e.response.status_code}, using fallback")
        except httpx.HTTPError as e:
            logger.warning(f"Weather provider unreachable ({e.__class__.__name__}: {e}), using fallback")
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Weather provider sent an unexpected payload ({e}), using fallback")

        return self.fallback_reading()

    def parse_weather_response(self, data: dict) -> WeatherReading:
        """
        Pull temperature and humidity out of the OpenWeatherMap payload.

        Raises KeyError/TypeError/ValueError if the payload is not what we expect.
        """
        main = data["main"]
        return WeatherReading(
            temperature=round_half_up(float(main["temp"])),
            humidity=int(main["humidity"]),
            source=ReadingSource.PROVIDER,
        )

    def fallback_reading(self) -> WeatherReading:
        """A random, plausible reading used whenever the provider can't be used."""
        return WeatherReading(
            temperature=self.rng.randrange(*self.FALLBACK_TEMPERATURE),
            humidity=self.rng.randrange(*self.FALLBACK_HUMIDITY),
            source=ReadingSource.FALLBACK,
        )

    async def close(self):
        await self.http_client.aclose()
