"""
Models Package
==============

This is where all our data models live.
Import from here instead of the individual files.

Example:
    from fungimart.models import CreateListingRequest, EnvironmentalReading
"""

from .environment import (
    # Where a value came from
    ReadingSource,

    # One reading per provider
    WeatherReading,
    LightReading,
    PhReading,

    # What the environmental endpoint returns
    EnvironmentalReading,
)
from .listing import (
    GeoPoint,

    # What the frontend sends us
    CreateListingRequest,
    UpdateListingRequest,

    # What we send back
    SellerSummary,
    ListingResponse,
    MessageResponse,
)
from .user import CurrentUser, User

__all__ = [
    "ReadingSource",
    "WeatherReading",
    "LightReading",
    "PhReading",
    "EnvironmentalReading",
    "GeoPoint",
    "CreateListingRequest",
    "UpdateListingRequest",
    "SellerSummary",
    "ListingResponse",
    "MessageResponse",
    "CurrentUser",
    "User",
]
