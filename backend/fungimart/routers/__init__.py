"""
Routers Package
===============

Routers are like the reception desk - they direct incoming requests
to the right place.
"""

from .environmental import router as environmental_router
from .marketplace import router as marketplace_router

__all__ = [
    "environmental_router",
    "marketplace_router",
]
