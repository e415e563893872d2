"""
Utility modules for the FungiMart backend.
"""

from fungimart.utils.validation import (
    validate_listing_id,
    is_blank,
    parse_coordinate,
    parse_distance_km,
    round_half_up,
)

__all__ = [
    "validate_listing_id",
    "is_blank",
    "parse_coordinate",
    "parse_distance_km",
    "round_half_up",
]
