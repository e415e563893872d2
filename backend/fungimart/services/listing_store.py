"""
Listing Store
=============

All marketplace listings live here (persisted to a JSON file).

WHAT IT DOES:
------------
1. Create / read / update / delete listings
2. Enforces ownership: only the seller can update or delete their listing
3. Expands the seller id into {id, fullName} on the way out
4. Finds listings within N km of a point

IDs:
---
Listing ids are UUIDs. An id that isn't even a well-formed UUID is treated
exactly like an id that doesn't exist: NotFoundError (404), not a 400.

NEARBY SEARCH:
-------------
Distances are turned into an angle on a sphere the size of the Earth:

    radius_radians = distance_km / 6378.1

A listing matches when the great-circle angle between it and the search
point is <= that radius (a "spherical cap" containment check).

Author: FungiMart Backend Team
"""

import logging
import math
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from fungimart.errors import NotFoundError, UnauthorizedError
from fungimart.models import (
    CreateListingRequest,
    ListingResponse,
    SellerSummary,
    UpdateListingRequest,
)
from fungimart.services.json_store import JsonDocumentStore
from fungimart.services.user_directory import UserDirectory
from fungimart.utils import validate_listing_id

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6378.1
DEFAULT_NEARBY_DISTANCE_KM = 10

# Fields copied from an update request when the new value is truthy
_UPDATABLE_FIELDS = (
    "title",
    "description",
    "mushroom_type",
    "price",
    "quantity",
    "contact_name",
    "contact_phone",
    "location",
    "images",
)


def central_angle(lng1: float, lat1: float, lng2: float, lat2: float) -> float:
    """Great-circle angle (radians) between two points given in degrees (haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lng2 - lng1)
    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * math.asin(min(1.0, math.sqrt(h)))


def km_to_radians(distance_km: float) -> float:
    return distance_km / EARTH_RADIUS_KM


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ListingStore(JsonDocumentStore):
    """
    The marketplace collection.

    HOW TO USE:
    ----------
    store = ListingStore(Path("listings_db.json"), user_directory)
    listing = store.create_listing(seller_id, CreateListingRequest(...))
    store.update_listing(listing.id, seller_id, UpdateListingRequest(price=9.5))
    """

    COLLECTION_NAME = "listings"
    DATETIME_FIELDS = ("created_at", "updated_at")

    def __init__(
        self,
        db_file: Path,
        user_directory: UserDirectory,
        clock: Callable[[], datetime] = utc_now
    ):
        self.user_directory = user_directory
        self.clock = clock
        super().__init__(db_file)

    # =========================================================================
    # READING
    # =========================================================================

    def list_listings(self, seller_id: Optional[str] = None) -> list[ListingResponse]:
        """All listings (optionally only one seller's), newest first."""
        docs = self._iter()
        if seller_id is not None:
            docs = (doc for doc in docs if doc["seller"] == seller_id)
        return self._to_responses(docs)

    def get_listing(self, listing_id: str) -> ListingResponse:
        return self._to_response(self._require(listing_id))

    def find_nearby(
        self,
        longitude: float,
        latitude: float,
        distance_km: float = DEFAULT_NEARBY_DISTANCE_KM
    ) -> list[ListingResponse]:
        """Listings whose location is within ``distance_km`` of the point, newest first."""
        radius = km_to_radians(distance_km)

        def is_inside(doc: dict) -> bool:
            location = doc.get("location")
            if not location:
                return False
            lng, lat = location["coordinates"]
            return central_angle(longitude, latitude, lng, lat) <= radius

        return self._to_responses(doc for doc in self._iter() if is_inside(doc))

    # =========================================================================
    # WRITING
    # =========================================================================

    def create_listing(self, seller_id: str, request: CreateListingRequest) -> ListingResponse:
        """
        Create a listing owned by ``seller_id``.

        Raises:
            UnauthorizedError: the seller is not a known user
        """
        if not self.user_directory.exists(seller_id):
            raise UnauthorizedError("User not found")

        now = self.clock()
        listing_id = str(uuid.uuid4())
        doc = {
            "id": listing_id,
            "seller": seller_id,
            **request.model_dump(mode="json"),
            "created_at": now,
            "updated_at": now,
        }
        self._put(listing_id, doc)
        logger.info(f"Listing {listing_id} created by {seller_id}: {request.title}")
        return self._to_response(doc)

    def update_listing(self, listing_id: str, caller_id: str, request: UpdateListingRequest) -> ListingResponse:
        """
        Update a listing. Only truthy values replace what's stored, except
        ``contact_email`` which is applied whenever it is sent.

        Raises:
            NotFoundError: malformed or unknown id
            UnauthorizedError: caller is not the seller
        """
        doc = self._require(listing_id)
        if doc["seller"] != caller_id:
            raise UnauthorizedError("Not authorized to update this listing")

        updates = request.model_dump(mode="json", exclude_unset=True)
        changed = dict(doc)
        for field in _UPDATABLE_FIELDS:
            if updates.get(field):
                changed[field] = updates[field]
        if "contact_email" in updates:
            changed["contact_email"] = updates["contact_email"]
        changed["updated_at"] = self.clock()

        self._put(listing_id, changed)
        logger.info(f"Listing {listing_id} updated by {caller_id}")
        return self._to_response(changed)

    def delete_listing(self, listing_id: str, caller_id: str):
        """
        Raises:
            NotFoundError: malformed or unknown id
            UnauthorizedError: caller is not the seller
        """
        doc = self._require(listing_id)
        if doc["seller"] != caller_id:
            raise UnauthorizedError("Not authorized to delete this listing")

        self._delete(listing_id)
        logger.info(f"Listing {listing_id} deleted by {caller_id}")

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _require(self, listing_id: str) -> dict:
        if not validate_listing_id(listing_id):
            raise NotFoundError("Listing not found")
        doc = self._get(listing_id.lower())
        if doc is None:
            raise NotFoundError("Listing not found")
        return doc

    def _to_responses(self, docs) -> list[ListingResponse]:
        ordered = sorted(docs, key=lambda d: d["created_at"], reverse=True)
        return [self._to_response(doc) for doc in ordered]

    def _to_response(self, doc: dict) -> ListingResponse:
        seller = SellerSummary(id=doc["seller"], full_name=self.user_directory.display_name(doc["seller"]))
        fields = {k: v for k, v in doc.items() if k != "seller"}
        return ListingResponse(seller=seller, **fields)
