"""
Configuration
=============

All runtime settings live in ONE object: ``Settings``.

It is built exactly once (in ``main.create_app``) from environment variables,
after ``python-dotenv`` has loaded a ``.env`` file if there is one. The same
object is then handed to every service when it is constructed, so nothing
below the app factory ever touches ``os.environ``.

ENVIRONMENT VARIABLES:
---------------------
    OPENWEATHER_API_KEY     OpenWeatherMap key (unset = weather fallback mode)
    WEATHER_API_URL         Current-weather endpoint
    SUNRISE_SUNSET_API_URL  Sunrise/sunset endpoint
    UPSTREAM_TIMEOUT        Per-request timeout for third-party APIs (seconds)
    AGGREGATION_TIMEOUT     Deadline for the whole environmental fetch (seconds)
    JWT_SECRET              Shared secret used to verify caller tokens
    JWT_ALGORITHM           Token signing algorithm (default: HS256)
    LISTINGS_DB_FILE        JSON file holding marketplace listings
    USERS_DB_FILE           JSON file holding known users
    CORS_ORIGINS            Comma-separated list of allowed origins ("*" = all)
    LOG_LEVEL               Logging level name (default: INFO)
    PORT                    Port used when running ``python -m fungimart.main``

Author: FungiMart Backend Team
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Immutable application settings."""

    model_config = {"frozen": True}

    # Third-party providers
    openweather_api_key: Optional[str] = Field(
        None, description="OpenWeatherMap API key; None means always use the fallback"
    )
    weather_api_url: str = "https://api.openweathermap.org/data/2.5/weather"
    sunrise_sunset_api_url: str = "https://api.sunrise-sunset.org/json"
    upstream_timeout: float = Field(5.0, gt=0)
    aggregation_timeout: float = Field(12.0, gt=0)

    # Auth
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    # Storage
    listings_db_file: Path = Path("listings_db.json")
    users_db_file: Path = Path("users_db.json")

    # HTTP
    cors_origins: list[str] = ["*"]
    cors_methods: list[str] = ["GET", "POST", "PUT", "DELETE"]
    cors_headers: list[str] = ["Content-Type", "Authorization"]
    port: int = 5000

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)
        """
        env = os.environ if environ is None else environ

        values = {}
        if env.get("OPENWEATHER_API_KEY"):
            values["openweather_api_key"] = env["OPENWEATHER_API_KEY"]
        if env.get("WEATHER_API_URL"):
            values["weather_api_url"] = env["WEATHER_API_URL"]
        if env.get("SUNRISE_SUNSET_API_URL"):
            values["sunrise_sunset_api_url"] = env["SUNRISE_SUNSET_API_URL"]
        if env.get("UPSTREAM_TIMEOUT"):
            values["upstream_timeout"] = float(env["UPSTREAM_TIMEOUT"])
        if env.get("AGGREGATION_TIMEOUT"):
            values["aggregation_timeout"] = float(env["AGGREGATION_TIMEOUT"])
        if env.get("JWT_SECRET"):
            values["jwt_secret"] = env["JWT_SECRET"]
        if env.get("JWT_ALGORITHM"):
            values["jwt_algorithm"] = env["JWT_ALGORITHM"]
        if env.get("LISTINGS_DB_FILE"):
            values["listings_db_file"] = Path(env["LISTINGS_DB_FILE"])
        if env.get("USERS_DB_FILE"):
            values["users_db_file"] = Path(env["USERS_DB_FILE"])
        if env.get("CORS_ORIGINS"):
            values["cors_origins"] = [
                origin.strip() for origin in env["CORS_ORIGINS"].split(",") if origin.strip()
            ]
        if env.get("PORT"):
            values["port"] = int(env["PORT"])
        if env.get("LOG_LEVEL"):
            values["log_level"] = env["LOG_LEVEL"].upper()

        return cls(**values)
