"""
FungiMart - Backend API
=======================
FastAPI application for the mushroom marketplace and its grow-conditions panel.

WHAT'S IN HERE:
    1. Marketplace - growers list mushrooms for sale, buyers browse and
       search nearby listings (needs a login token)
    2. Environmental data - current temperature, humidity, light intensity
       and an estimated water pH for any coordinates

    [Frontend] --HTTPS--> [This Backend] --+--> OpenWeatherMap
                                |          +--> sunrise-sunset.org
                                v
                     [listings_db.json / users_db.json]

HOW TO RUN:
    # Install dependencies
    pip install -e ".[test]"

    # Copy environment config
    cp .env.example .env
    # Edit .env with your settings (OPENWEATHER_API_KEY, JWT_SECRET...)

    # Run the server
    cd backend
    uvicorn fungimart.main:app --reload --port 5000

API DOCUMENTATION:
    After starting the server, visit:
    - Swagger UI: http://localhost:5000/docs
    - ReDoc: http://localhost:5000/redoc
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from fungimart import __version__
from fungimart.config import Settings
from fungimart.errors import register_exception_handlers
from fungimart.routers import environmental_router, marketplace_router
from fungimart.services import (
    EnvironmentalAggregator,
    LightIntensityService,
    ListingStore,
    TokenVerifier,
    UserDirectory,
    WaterPhService,
    WeatherService,
)


# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger("fungimart")


# =============================================================================
# LOGGING
# =============================================================================

def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='[%(asctime)s] %(levelname)s %(name)s: %(message)s',
        datefmt='%H:%M:%S',
        handlers=[logging.StreamHandler(sys.stderr)]
    )


# =============================================================================
# APPLICATION LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    STARTUP:
        1. Open the listing store and user directory (JSON files)
        2. Create the weather / light / pH services and the aggregator
        3. Park everything on app.state for the routers

    SHUTDOWN:
        1. Close HTTP clients
    """
    settings: Settings = app.state.settings

    # ========== STARTUP ==========
    logger.info("=" * 60)
    logger.info("FUNGIMART - Starting Backend")
    logger.info("=" * 60)

    user_directory = UserDirectory(settings.users_db_file)
    app.state.user_directory = user_directory
    app.state.listing_store = ListingStore(settings.listings_db_file, user_directory)
    app.state.token_verifier = TokenVerifier(settings)
    app.state.aggregator = EnvironmentalAggregator(
        weather_service=WeatherService(settings),
        light_service=LightIntensityService(settings),
        ph_service=WaterPhService(),
        timeout=settings.aggregation_timeout,
    )

    logger.info("Services initialized")
    logger.info(f"   Weather provider: {'configured' if settings.openweather_api_key else 'fallback mode (no API key)'}")
    logger.info(f"   Upstream timeout: {settings.upstream_timeout}s, aggregation deadline: {settings.aggregation_timeout}s")
    logger.info(f"   Listings: {len(app.state.listing_store)} loaded from {settings.listings_db_file}")
    logger.info(f"   CORS origins: {', '.join(settings.cors_origins)}")
    logger.info("=" * 60)

    yield  # Application runs here

    # ========== SHUTDOWN ==========
    logger.info("Shutting down...")
    await app.state.aggregator.close()
    logger.info("Shutdown complete")


# =============================================================================
# CREATE FASTAPI APPLICATION
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        settings: Settings to use (default: read from the environment)
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="FungiMart API",
        description="""
## Overview

Marketplace for mushroom growers plus a live environmental-conditions feed.

## Authentication

All `/api/marketplace` endpoints require `Authorization: Bearer <token>`
(or `x-auth-token: <token>`). `/api/environmental-data` is open.

## Errors

Every error body looks like `{"error": "..."}`.
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_methods,
        allow_headers=settings.cors_headers,
    )

    # One log line per request
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} - {elapsed_ms:.1f} ms")
        return response

    register_exception_handlers(app)

    app.include_router(environmental_router)
    app.include_router(marketplace_router)

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", summary="API Information")
    async def root():
        """Root endpoint with API overview."""
        return {
            "name": "FungiMart API",
            "version": __version__,
            "documentation": {
                "swagger": "/docs",
                "redoc": "/redoc",
                "openapi": "/openapi.json"
            },
            "endpoints": {
                "environmental_data": "GET /api/environmental-data?latitude=&longitude=",
                "marketplace": {
                    "list": "GET /api/marketplace",
                    "create": "POST /api/marketplace",
                    "get": "GET /api/marketplace/{id}",
                    "update": "PUT /api/marketplace/{id}",
                    "delete": "DELETE /api/marketplace/{id}",
                    "mine": "GET /api/marketplace/user/listings",
                    "nearby": "GET /api/marketplace/nearby/{distanceKm}?longitude=&latitude="
                },
                "connection_test": "GET /api/test"
            }
        }

    @app.get("/health", summary="Health Check")
    async def health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "weather_provider": "configured" if settings.openweather_api_key else "fallback",
        }

    @app.get("/api/test", summary="Connection Test")
    async def connection_test():
        return {"message": "Backend connection successful!"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
