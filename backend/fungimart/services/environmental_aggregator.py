"""
Environmental Aggregator
========================

Asks all three providers at the same time and merges the answers.

THE DATA FLOW:
-------------
                       +--> WeatherService.fetch_weather ---------+
                       |                                          |
    (lat, lon) --------+--> LightIntensityService.fetch_light ----+--> EnvironmentalReading
                       |                                          |
                       +--> WaterPhService.fetch_ph --------------+

RULES:
-----
1. Both latitude and longitude are required. If either is missing we fail
   straight away - no provider is called.
2. The three fetches run concurrently. One being slow or failing does NOT
   cancel the others; we wait for all of them.
3. The whole group has a deadline (AGGREGATION_TIMEOUT).
4. All or nothing: if anything escapes the group (or the deadline passes),
   the request fails with a 500 and partial results are thrown away.

Each provider already swallows its own network problems and returns a
fallback, so rule 4 only fires for genuinely unexpected errors.

Author: FungiMart Backend Team
"""

import asyncio
import logging
from typing import Optional, Union

from fungimart.errors import MissingParameterError, UpstreamAggregationError
from fungimart.models import EnvironmentalReading, LightReading, PhReading, WeatherReading
from fungimart.services.light_service import LightIntensityService
from fungimart.services.water_ph_service import WaterPhService
from fungimart.services.weather_service import WeatherService
from fungimart.utils import is_blank

logger = logging.getLogger(__name__)

Coordinate = Union[str, float, None]


class EnvironmentalAggregator:
    """Runs the weather, light and pH fetchers together and merges the results."""

    def __init__(
        self,
        weather_service: WeatherService,
        light_service: LightIntensityService,
        ph_service: WaterPhService,
        timeout: float = 12.0
    ):
        self.weather_service = weather_service
        self.light_service = light_service
        self.ph_service = ph_service
        self.timeout = timeout

    async def get_environmental_data(
        self,
        latitude: Optional[Coordinate],
        longitude: Optional[Coordinate]
    ) -> EnvironmentalReading:
        """
        Fetch and merge environmental data for a location.

        Raises:
            MissingParameterError: latitude or longitude missing/blank
            UpstreamAggregationError: a fetcher blew up or the deadline passed
        """
        if is_blank(latitude) or is_blank(longitude):
            raise MissingParameterError("Latitude and longitude are required")

        try:
            weather, light, ph = await asyncio.wait_for(
                self._gather(latitude, longitude),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.error(f"Environmental fetch for ({latitude}, {longitude}) exceeded {self.timeout}s")
            raise UpstreamAggregationError()

        return EnvironmentalReading(
            temperature=weather.temperature,
            humidity=weather.humidity,
            intensity=light.intensity,
            ph=ph.ph,
        )

    async def _gather(self, latitude: Coordinate, longitude: Coordinate) -> tuple[WeatherReading, LightReading, PhReading]:
        results = await asyncio.gather(
            self.weather_service.fetch_weather(latitude, longitude),
            self.light_service.fetch_light_intensity(latitude, longitude),
            self.ph_service.fetch_ph(latitude, longitude),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            for failure in failures:
                logger.error(
                    f"Error fetching environmental data: {failure!r}",
                    exc_info=(type(failure), failure, failure.__traceback__)
                )
            raise UpstreamAggregationError()

        return tuple(results)

    async def close(self):
        await self.weather_service.close()
        await self.light_service.close()
