"""
Marketplace API Router
======================

Where growers list mushrooms for sale.

Every endpoint here needs a valid token (Authorization: Bearer <token>).
No token / bad token = 401.

ALL ENDPOINTS:
-------------
GET    /api/marketplace                     - All listings, newest first
POST   /api/marketplace                     - Create a listing (you're the seller)
GET    /api/marketplace/user/listings       - Just your listings
GET    /api/marketplace/nearby/{distance}   - Listings within {distance} km
                                              (?longitude=..&latitude=..)
GET    /api/marketplace/{id}                - One listing
PUT    /api/marketplace/{id}                - Update your listing
DELETE /api/marketplace/{id}                - Delete your listing

ERRORS:
------
- Unknown or malformed id            -> 404 {"error": "Listing not found"}
- Touching someone else's listing    -> 401 {"error": "Not authorized to ..."}
- Bad body (unknown/wrong-typed)     -> 400 {"error": "Invalid request", ...}

Author: FungiMart Backend Team
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from fungimart.errors import InvalidInputError, MissingParameterError
from fungimart.models import (
    CreateListingRequest,
    CurrentUser,
    ListingResponse,
    MessageResponse,
    UpdateListingRequest,
)
from fungimart.routers.dependencies import get_current_user, get_listing_store
from fungimart.services import ListingStore
from fungimart.utils import is_blank, parse_coordinate, parse_distance_km

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/marketplace", tags=["marketplace"])


# =============================================================================
# COLLECTION ENDPOINTS
# =============================================================================

@router.get("", response_model=list[ListingResponse])
async def get_all_listings(
    user: CurrentUser = Depends(get_current_user),
    store: ListingStore = Depends(get_listing_store),
):
    """Get all listings, newest first."""
    return store.list_listings()


@router.post("", response_model=ListingResponse)
async def create_listing(
    request: CreateListingRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ListingStore = Depends(get_listing_store),
):
    """
    Create a new listing.

    The seller is whoever the token says you are - you can't list on
    someone else's behalf.
    """
    return store.create_listing(user.id, request)


@router.get("/user/listings", response_model=list[ListingResponse])
async def get_my_listings(
    user: CurrentUser = Depends(get_current_user),
    store: ListingStore = Depends(get_listing_store),
):
    """Get the current user's listings, newest first."""
    return store.list_listings(seller_id=user.id)


# =============================================================================
# NEARBY SEARCH
# =============================================================================

@router.get("/nearby", response_model=list[ListingResponse])
@router.get("/nearby/{distance}", response_model=list[ListingResponse])
async def get_nearby_listings(
    distance: Optional[str] = None,
    longitude: Optional[str] = Query(None),
    latitude: Optional[str] = Query(None),
    user: CurrentUser = Depends(get_current_user),
    store: ListingStore = Depends(get_listing_store),
):
    """
    Get listings within ``distance`` km of a point.

    ``distance`` defaults to 10 km when it's missing or not a number.
    """
    if is_blank(longitude) or is_blank(latitude):
        raise MissingParameterError("Longitude and latitude are required")

    lng = parse_coordinate(longitude)
    lat = parse_coordinate(latitude)
    if lng is None or lat is None:
        raise InvalidInputError("Longitude and latitude must be numbers")

    distance_km = parse_distance_km(distance)
    logger.debug(f"Nearby search: ({lng}, {lat}) within {distance_km} km")
    return store.find_nearby(lng, lat, distance_km)


# =============================================================================
# SINGLE-LISTING ENDPOINTS
# =============================================================================

@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(
    listing_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: ListingStore = Depends(get_listing_store),
):
    """Get a specific listing."""
    return store.get_listing(listing_id)


@router.put("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: str,
    request: UpdateListingRequest,
    user: CurrentUser = Depends(get_current_user),
    store: ListingStore = Depends(get_listing_store),
):
    """
    Update a listing you own.

    Send only the fields you want to change.
    """
    return store.update_listing(listing_id, user.id, request)


@router.delete("/{listing_id}", response_model=MessageResponse)
async def delete_listing(
    listing_id: str,
    user: CurrentUser = Depends(get_current_user),
    store: ListingStore = Depends(get_listing_store),
):
    """Delete a listing you own."""
    store.delete_listing(listing_id, user.id)
    return MessageResponse(message="Listing removed")
