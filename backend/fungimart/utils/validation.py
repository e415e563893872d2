"""
Input Validation Utilities
===========================

Small parsing/validation helpers shared by the routers and services.

Author: FungiMart Backend Team
"""

import math
import re
from typing import Optional, Union


_LISTING_ID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE
)

_LEADING_INT_PATTERN = re.compile(r'^\s*([+-]?\d+)')


def validate_listing_id(listing_id: str) -> bool:
    """
    Validate a listing ID (UUID format).

    Args:
        listing_id: Listing ID string (UUID)

    Returns:
        True if valid UUID format, False otherwise
    """
    if not isinstance(listing_id, str):
        return False
    return bool(_LISTING_ID_PATTERN.match(listing_id))


def is_blank(value: Optional[Union[str, float]]) -> bool:
    """True for None and for strings that are empty or whitespace."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_coordinate(value: Union[str, float, int, None]) -> Optional[float]:
    """
    Turn a query-string coordinate into a float.

    No range check is done here. Returns None if the value is missing,
    not a number, or not finite (nan/inf).
    """
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_distance_km(value: Optional[str], default: int = 10) -> int:
    """
    Parse a distance in kilometres from a path segment.

    Reads the leading integer (so "25km" -> 25, "7.9" -> 7). Anything that
    doesn't start with a number, or parses to 0, gives the default.

    Examples:
        >>> parse_distance_km("25")
        25
        >>> parse_distance_km("abc")
        10
        >>> parse_distance_km(None)
        10
    """
    if value is None:
        return default
    match = _LEADING_INT_PATTERN.match(str(value))
    if not match:
        return default
    distance = int(match.group(1))
    return distance or default


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with .5 always going up.

    Python's built-in round() sends .5 to the nearest EVEN number
    (round(2.5) == 2), which is not what people expect for a temperature.
    """
    return int(math.floor(value + 0.5))
