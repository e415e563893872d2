"""
User Models
===========
Who is calling, and who is selling.

``CurrentUser`` comes out of a verified token. ``User`` is what the user
directory keeps so listings can show a seller's name.
"""

from typing import Optional

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Identity extracted from a verified bearer token."""
    id: str
    full_name: Optional[str] = None
    email: Optional[str] = None


class User(BaseModel):
    """A known user (seller)."""
    id: str
    full_name: str
    email: Optional[str] = None
