"""
Water pH Service
================

There's no real pH provider - this is a deterministic placeholder so the
dashboard has something sensible to show. Same coordinates, same pH, every time.

    variation = (sin(latitude) + cos(longitude)) / 2      # -1 .. 1
    pH        = round(7.5 + variation, 1)                # 6.5 .. 8.5

The coordinates go straight into sin/cos (as radians), which scatters nearby
points around the range.

Bad input (not a number, nan, inf) gives a neutral 7.0.
"""

import logging
import math
from typing import Union

from fungimart.models import PhReading, ReadingSource
from fungimart.utils import parse_coordinate

logger = logging.getLogger(__name__)

NEUTRAL_PH = 7.0


def estimate_water_ph(latitude: Union[str, float], longitude: Union[str, float]) -> float:
    """Estimated water pH for a point, in [6.5, 8.5] with one decimal digit."""
    lat = parse_coordinate(latitude)
    lng = parse_coordinate(longitude)
    if lat is None or lng is None:
        logger.warning(f"Cannot estimate pH for ({latitude!r}, {longitude!r}), using neutral pH")
        return NEUTRAL_PH

    variation = (math.sin(lat) + math.cos(lng)) / 2
    return round(7.5 + variation, 1)


class WaterPhService:
    """Async wrapper so the aggregator can treat pH like the other providers."""

    async def fetch_ph(self, latitude: Union[str, float], longitude: Union[str, float]) -> PhReading:
        return PhReading(ph=estimate_water_ph(latitude, longitude), source=ReadingSource.ESTIMATE)
