"""
Errors
======

Client-facing errors and the handlers that turn them into JSON.

Every error the API returns has the same shape::

    {"error": "Listing not found"}

Raise one of the classes below from a service or router and the handler
registered in ``main.create_app`` takes care of the status code and body.

Upstream provider failures (weather, sunrise/sunset) are NOT in this list on
purpose: those are absorbed inside their service and replaced by a fallback.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FungiMartError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingParameterError(FungiMartError):
    status_code = 400
    default_message = "Missing required parameter"


class InvalidInputError(FungiMartError):
    status_code = 400
    default_message = "Invalid request"


class UnauthorizedError(FungiMartError):
    status_code = 401
    default_message = "No token, authorization denied"


class NotFoundError(FungiMartError):
    status_code = 404
    default_message = "Not found"


class UpstreamAggregationError(FungiMartError):
    status_code = 500
    default_message = "Failed to fetch environmental data"


async def fungimart_error_handler(request: Request, exc: FungiMartError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} rejected (400): invalid request body")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


def register_exception_handlers(app: FastAPI):
    """Attach the JSON error handlers to an app."""
    app.add_exception_handler(FungiMartError, fungimart_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
