"""
Light Intensity Service
=======================

Estimates how bright it is outside right now, on a 0-100 scale.

HOW IT WORKS:
------------
1. Ask sunrise-sunset.org when the sun rises and sets today at this location
2. Work out how far through the day we are:

       day_progress = (now - sunrise) / (sunset - sunrise)

   0.0 = sunrise, 0.5 = solar noon, 1.0 = sunset

3. Put that on a parabola that peaks at noon:

       intensity = 100 * (1 - 4 * (day_progress - 0.5)^2)

       100 |          ***
           |       *       *
           |     *           *
        10 |----*-------------*----   <- never below 10
           +---------------------------
          sunrise    noon    sunset

4. Clamp to [10, 100]. Before sunrise / after sunset it's always 10.

WHEN THINGS GO WRONG:
--------------------
- Provider answers but status isn't "OK"   -> 50 (neutral)
- Provider can't be reached / times out    -> rough guess from the hour:
      before 06:00 or after 18:00  -> 10
      10:00 - 14:59                -> 90
      anything else                -> 50

NOTE: that hour comes from THIS server's clock, not the clock at the
requested location. A server in Europe answering for New York will guess
wrong. Kept as-is for now; see DESIGN.md.

API Documentation: https://sunrise-sunset.org/api

Author: FungiMart Backend Team
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Union

import httpx

from fungimart.config import Settings
from fungimart.models import LightReading, ReadingSource
from fungimart.utils import round_half_up

logger = logging.getLogger(__name__)

Coordinate = Union[str, float]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def daylight_intensity(now: datetime, sunrise: datetime, sunset: datetime) -> int:
    """
    Intensity (10-100) for a moment, given that day's sunrise and sunset.

    All three datetimes must be timezone-aware.
    """
    if now < sunrise or now > sunset:
        return LightIntensityService.NIGHT_INTENSITY

    day_length = (sunset - sunrise).total_seconds()
    if day_length <= 0:
        # Polar night / degenerate data: no daylight to speak of
        return LightIntensityService.NIGHT_INTENSITY

    day_progress = (now - sunrise).total_seconds() / day_length
    intensity = round_half_up(100 * (1 - 4 * (day_progress - 0.5) ** 2))
    return max(LightIntensityService.NIGHT_INTENSITY, min(100, intensity))


def hour_of_day_intensity(hour: int) -> int:
    """Coarse intensity guess from the hour alone (0-23)."""
    if hour < 6 or hour > 18:
        return LightIntensityService.NIGHT_INTENSITY
    if 10 <= hour <= 14:
        return 90
    return LightIntensityService.NEUTRAL_INTENSITY


class LightIntensityService:
    """
    Estimates light intensity from sunrise/sunset times.

    HOW TO USE:
    ----------
    service = LightIntensityService(settings)
    reading = await service.fetch_light_intensity("40.7", "-74.0")
    print(reading.intensity)   # 10..100
    """

    NIGHT_INTENSITY = 10
    NEUTRAL_INTENSITY = 50

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], datetime] = utc_now,
        local_clock: Callable[[], datetime] = datetime.now
    ):
        """
        Args:
            settings: App settings (URL, timeout)
            transport: Optional httpx transport (tests pass a MockTransport)
            clock: Returns the current time, timezone-aware
            local_clock: Returns the server's local wall-clock time (fallback only)
        """
        self.api_url = settings.sunrise_sunset_api_url
        self.http_client = httpx.AsyncClient(timeout=settings.upstream_timeout, transport=transport)
        self.clock = clock
        self.local_clock = local_clock

    async def fetch_light_intensity(self, latitude: Coordinate, longitude: Coordinate) -> LightReading:
        """Get the light intensity for a location. Never raises for provider problems."""
        params = {"lat": latitude, "lng": longitude, "formatted": 0}

        try:
            response = await self.http_client.get(self.api_url, params=params)
            response.raise_for_status()
            data = response.json()

            if data.get("status") != "OK":
                logger.warning(f"Sunrise/sunset provider status {data.get('status')!r}, using neutral intensity")
                return LightReading(intensity=self.NEUTRAL_INTENSITY, source=ReadingSource.DEFAULT)

            results = data["results"]
            sunrise = datetime.fromisoformat(results["sunrise"])
            sunset = datetime.fromisoformat(results["sunset"])
            intensity = daylight_intensity(self.clock(), sunrise, sunset)
            return LightReading(intensity=intensity, source=ReadingSource.PROVIDER)

        except httpx.HTTPStatusError as e:
            logger.warning(f"Sunrise/sunset provider returned HTTP {e.response.status_code}, using hour-of-day fallback")
        except httpx.HTTPError as e:
            logger.warning(f"Sunrise/sunset provider unreachable ({e.__class__.__name__}: {e}), using hour-of-day fallback")
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Sunrise/sunset provider sent an unexpected payload ({e}), using hour-of-day fallback")

        return self.fallback_reading()

    def fallback_reading(self) -> LightReading:
        return LightReading(
            intensity=hour_of_day_intensity(self.local_clock().hour),
            source=ReadingSource.FALLBACK,
        )

    async def close(self):
        await self.http_client.aclose()
