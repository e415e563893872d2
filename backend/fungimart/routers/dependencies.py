"""
Router Dependencies
===================

This is how endpoints get hold of the services.

The services are built once when the app starts (see ``main.lifespan``) and
parked on ``app.state``. The functions below hand them to any endpoint that
asks via ``Depends(...)``. Tests can swap any of them out with
``app.dependency_overrides``.

They are all ``async`` so they run on the event loop, same as the stores
they hand out.
"""

from typing import Optional

from fastapi import Depends, Header, Request

from fungimart.errors import FungiMartError
from fungimart.models import CurrentUser
from fungimart.services import EnvironmentalAggregator, ListingStore, TokenVerifier, UserDirectory


def _get_state(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise FungiMartError("Server not fully started yet")
    return service


async def get_aggregator(request: Request) -> EnvironmentalAggregator:
    return _get_state(request, "aggregator")


async def get_listing_store(request: Request) -> ListingStore:
    return _get_state(request, "listing_store")


async def get_user_directory(request: Request) -> UserDirectory:
    return _get_state(request, "user_directory")


async def get_token_verifier(request: Request) -> TokenVerifier:
    return _get_state(request, "token_verifier")


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_auth_token: Optional[str] = Header(None),
    verifier: TokenVerifier = Depends(get_token_verifier),
    directory: UserDirectory = Depends(get_user_directory),
) -> CurrentUser:
    """
    Verify the caller's token and return who they are.

    Every marketplace endpoint depends on this. No token or a bad token is a 401.
    """
    token = verifier.extract_token(authorization, x_auth_token)
    user = verifier.verify(token)
    directory.record_user(user)
    return user
