"""
Environmental Data Router
=========================

GET /api/environmental-data?latitude=40.7&longitude=-74.0

Returns the current conditions for a point:

    {"temperature": 24, "humidity": 61, "intensity": 100, "pH": 7.9}

- 400 {"error": ...} if latitude or longitude is missing
- 500 {"error": ...} if the providers couldn't be combined

No login needed for this one.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fungimart.models import EnvironmentalReading
from fungimart.routers.dependencies import get_aggregator
from fungimart.services import EnvironmentalAggregator


router = APIRouter(prefix="/api", tags=["environmental"])


@router.get(
    "/environmental-data",
    response_model=EnvironmentalReading,
    summary="Current environmental conditions",
)
async def get_environmental_data(
    latitude: Optional[str] = Query(None, description="Latitude in decimal degrees"),
    longitude: Optional[str] = Query(None, description="Longitude in decimal degrees"),
    aggregator: EnvironmentalAggregator = Depends(get_aggregator),
):
    """
    Temperature, humidity, light intensity and water pH for a location.

    Coordinates are passed through as given (no range check). Weather and
    light providers that fail are replaced by fallback values, so a 500 only
    happens for unexpected errors.
    """
    return await aggregator.get_environmental_data(latitude, longitude)
