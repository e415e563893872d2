"""
Token Verifier
==============

Checks the caller's bearer token and says who they are.

Tokens are issued by the identity service (not by this backend) and signed
with a shared secret. We only verify them.

ACCEPTED HEADERS:
----------------
    Authorization: Bearer <token>
    x-auth-token: <token>             (older frontends)

ACCEPTED CLAIMS:
---------------
    sub          user id                    (preferred)
    user.id      user id                    (older tokens: {"user": {"id": ...}})
    name         display name (optional)
    email        email (optional)
    exp          expiry (checked by PyJWT when present)
"""

import logging
from typing import Optional

import jwt

from fungimart.config import Settings
from fungimart.errors import UnauthorizedError
from fungimart.models import CurrentUser

logger = logging.getLogger(__name__)


class TokenVerifier:

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm

    @staticmethod
    def extract_token(authorization: Optional[str], x_auth_token: Optional[str] = None) -> str:
        """
        Pull the raw token out of the request headers.

        Raises:
            UnauthorizedError: no token, or a malformed Authorization header
        """
        if authorization:
            parts = authorization.split(" ")
            if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1]:
                raise UnauthorizedError("Invalid Authorization format. Expected: Bearer <token>")
            return parts[1]

        if x_auth_token:
            return x_auth_token.strip()

        raise UnauthorizedError("No token, authorization denied")

    def verify(self, token: str) -> CurrentUser:
        """
        Decode and verify a token.

        Raises:
            UnauthorizedError: bad signature, expired, malformed, or no user id
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            raise UnauthorizedError("Token is not valid")

        legacy_user = payload.get("user") if isinstance(payload.get("user"), dict) else {}
        user_id = payload.get("sub") or legacy_user.get("id")
        if not user_id:
            raise UnauthorizedError("Token is not valid")

        return CurrentUser(
            id=str(user_id),
            full_name=payload.get("name") or legacy_user.get("fullName"),
            email=payload.get("email") or legacy_user.get("email"),
        )
