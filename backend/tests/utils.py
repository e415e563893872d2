"""Helpers shared by the test modules."""

from typing import Callable

import httpx
import jwt


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it was asked to send."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def json_response(payload, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status_code, json=payload)


def timeout_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)


def connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def sign_token(secret: str, user_id: str = None, full_name: str = None, algorithm: str = "HS256", **claims) -> str:
    """Sign a token the way the identity service does."""
    payload = dict(claims)
    if user_id is not None:
        payload["sub"] = user_id
    if full_name:
        payload["name"] = full_name
    return jwt.encode(payload, secret, algorithm=algorithm)
