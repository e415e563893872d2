"""
Environmental Models
====================
Pydantic models for the environmental-data endpoint.

The three providers each return their own small reading. The aggregator
merges them into a single ``EnvironmentalReading`` which is what the
frontend receives. None of these are ever stored - they are built fresh
for every request.

Author: FungiMart Backend Team
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================

class ReadingSource(str, Enum):
    """
    Where a value came from.

    - PROVIDER: the third-party API answered and we computed from its data
    - FALLBACK: the provider failed, we substituted a plausible value
    - DEFAULT:  the provider answered but with a non-OK status
    - ESTIMATE: computed locally, no provider involved
    """
    PROVIDER = "provider"
    FALLBACK = "fallback"
    DEFAULT = "default"
    ESTIMATE = "estimate"


# =============================================================================
# PER-PROVIDER READINGS
# =============================================================================

class WeatherReading(BaseModel):
    """Temperature (°C, whole degrees) and relative humidity (%)."""
    temperature: Optional[int] = None
    humidity: Optional[int] = None
    source: ReadingSource = ReadingSource.PROVIDER


class LightReading(BaseModel):
    """Relative light intensity on a 0-100 scale."""
    intensity: Optional[int] = Field(None, ge=0, le=100)
    source: ReadingSource = ReadingSource.PROVIDER


class PhReading(BaseModel):
    """Estimated water pH, one decimal place."""
    ph: Optional[float] = None
    source: ReadingSource = ReadingSource.ESTIMATE


# =============================================================================
# RESPONSE MODEL
# =============================================================================

class EnvironmentalReading(BaseModel):
    """
    Combined response for ``GET /api/environmental-data``.

    Example Response:
        {
            "temperature": 24,
            "humidity": 61,
            "intensity": 100,
            "pH": 7.9
        }
    """
    model_config = ConfigDict(populate_by_name=True)

    temperature: Optional[int] = Field(None, description="Air temperature in °C")
    humidity: Optional[int] = Field(None, description="Relative humidity in %")
    intensity: Optional[int] = Field(None, description="Light intensity, 0-100")
    ph: Optional[float] = Field(None, alias="pH", description="Estimated water pH")
