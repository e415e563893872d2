"""
Services Package
================

These are the "workers" that do the actual work.

- WeatherService: Talks to OpenWeatherMap
- LightIntensityService: Talks to sunrise-sunset.org
- WaterPhService: Estimates water pH (no network)
- EnvironmentalAggregator: Runs the three above together
- ListingStore: Marketplace listings (JSON file)
- UserDirectory: Known users (JSON file)
- TokenVerifier: Checks caller tokens
"""

from .weather_service import WeatherService
from .light_service import LightIntensityService
from .water_ph_service import WaterPhService, estimate_water_ph
from .environmental_aggregator import EnvironmentalAggregator
from .user_directory import UserDirectory
from .listing_store import ListingStore
from .token_verifier import TokenVerifier

__all__ = [
    "WeatherService",
    "LightIntensityService",
    "WaterPhService",
    "estimate_water_ph",
    "EnvironmentalAggregator",
    "UserDirectory",
    "ListingStore",
    "TokenVerifier",
]
