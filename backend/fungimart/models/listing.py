"""
Marketplace Models
==================
Pydantic models for marketplace listings.

JSON field names are camelCase (``mushroomType``, ``createdAt``...) because
that's what the frontend speaks. Python code uses snake_case - the alias
generator translates between the two.

Request models reject unknown fields, so a typo like ``"prise": 10`` is a
400 instead of being silently ignored.

Author: FungiMart Backend Team
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StrictCamelModel(CamelModel):
    """Same as CamelModel but unknown fields are an error."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


# =============================================================================
# GEO
# =============================================================================

class GeoPoint(StrictCamelModel):
    """
    A GeoJSON point.

    NOTE: coordinates are [longitude, latitude] - in that order.

    Example:
        {"type": "Point", "coordinates": [-74.0, 40.7]}
    """
    type: Literal["Point"] = "Point"
    coordinates: list[float] = Field(..., min_length=2, max_length=2)

    @field_validator("coordinates")
    @classmethod
    def check_ranges(cls, value: list[float]) -> list[float]:
        longitude, latitude = value
        if not -180 <= longitude <= 180:
            raise ValueError("longitude must be between -180 and 180")
        if not -90 <= latitude <= 90:
            raise ValueError("latitude must be between -90 and 90")
        return value

    @property
    def longitude(self) -> float:
        return self.coordinates[0]

    @property
    def latitude(self) -> float:
        return self.coordinates[1]


# =============================================================================
# REQUEST MODELS
# =============================================================================

class CreateListingRequest(StrictCamelModel):
    """
    Request body for ``POST /api/marketplace``.

    Example Request:
        {
            "title": "Fresh Oyster Mushrooms",
            "description": "Grown on straw, picked this morning",
            "mushroomType": "oyster",
            "price": 12.5,
            "quantity": 20,
            "contactName": "Ada",
            "contactPhone": "+1 555 0100",
            "contactEmail": "ada@example.com",
            "location": {"type": "Point", "coordinates": [-74.0, 40.7]},
            "images": ["https://example.com/oyster.jpg"]
        }
    """
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=5000)
    mushroom_type: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., ge=0, strict=True)
    quantity: int = Field(..., ge=0, strict=True)
    contact_name: str = Field(..., min_length=1, max_length=100)
    contact_phone: str = Field(..., min_length=1, max_length=50)
    contact_email: Optional[str] = Field(None, max_length=200)
    location: Optional[GeoPoint] = None
    images: list[str] = Field(default_factory=list)


class UpdateListingRequest(StrictCamelModel):
    """
    Request body for ``PUT /api/marketplace/{id}``.

    All fields are optional. Empty values leave the stored field alone,
    except ``contactEmail`` which can be cleared by sending "".
    """
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    mushroom_type: Optional[str] = Field(None, max_length=100)
    price: Optional[float] = Field(None, ge=0, strict=True)
    quantity: Optional[int] = Field(None, ge=0, strict=True)
    contact_name: Optional[str] = Field(None, max_length=100)
    contact_phone: Optional[str] = Field(None, max_length=50)
    contact_email: Optional[str] = Field(None, max_length=200)
    location: Optional[GeoPoint] = None
    images: Optional[list[str]] = None


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class SellerSummary(CamelModel):
    """The seller as shown on a listing: just id and display name."""
    id: str
    full_name: Optional[str] = None


class ListingResponse(CamelModel):
    """A listing with its seller expanded."""
    id: str
    seller: SellerSummary
    title: str
    description: str = ""
    mushroom_type: str
    price: float
    quantity: int
    contact_name: str
    contact_phone: str
    contact_email: Optional[str] = None
    location: Optional[GeoPoint] = None
    images: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    message: str
