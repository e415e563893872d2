import uuid

import pytest

from fungimart.config import Settings
from fungimart.utils import (
    is_blank,
    parse_coordinate,
    parse_distance_km,
    round_half_up,
    validate_listing_id,
)


@pytest.mark.parametrize("value,expected", [
    ("25", 25),
    ("25km", 25),
    ("7.9", 7),
    ("abc", 10),
    ("0", 10),
    ("", 10),
    (None, 10),
])
def test_parse_distance_km(value, expected):
    assert parse_distance_km(value) == expected


def test_validate_listing_id():
    assert validate_listing_id(str(uuid.uuid4()))
    assert not validate_listing_id("not-an-id")
    assert not validate_listing_id("507f1f77bcf86cd799439011")


@pytest.mark.parametrize("value,expected", [(2.5, 3), (23.4, 23), (-0.5, 0), (-1.6, -2), (99.5, 100)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_parse_coordinate():
    assert parse_coordinate("40.7") == 40.7
    assert parse_coordinate(-74) == -74.0
    assert parse_coordinate("north") is None
    assert parse_coordinate("nan") is None
    assert parse_coordinate(None) is None


def test_is_blank():
    assert is_blank(None)
    assert is_blank("  ")
    assert not is_blank("0")
    assert not is_blank(0.0)


def test_settings_from_env():
    settings = Settings.from_env({
        "OPENWEATHER_API_KEY": "abc",
        "UPSTREAM_TIMEOUT": "2.5",
        "CORS_ORIGINS": "http://localhost:5173, https://fungimart.example",
        "LOG_LEVEL": "debug",
        "PORT": "8080",
    })

    assert settings.openweather_api_key == "abc"
    assert settings.upstream_timeout == 2.5
    assert settings.cors_origins == ["http://localhost:5173", "https://fungimart.example"]
    assert settings.log_level == "DEBUG"
    assert settings.port == 8080


def test_settings_defaults():
    settings = Settings.from_env({})

    assert settings.openweather_api_key is None
    assert settings.upstream_timeout == 5.0
    assert settings.cors_origins == ["*"]
