from __future__ import annotations

from unittest.mock import patch

from disc_admin.config import Settings


def test_defaults_without_environment() -> None:
    with patch.dict("os.environ", {}, clear=True):
        settings = Settings.from_env()

    assert settings.route_match == "segment"
    assert settings.require_tracking is False
    assert settings.api_host == "127.0.0.1"
    assert settings.api_port == 8000
    assert settings.log_level == "WARNING"
    assert settings.notes == []


def test_environment_overrides() -> None:
    env = {
        "DISCADMIN_ROUTE_MATCH": "prefix",
        "DISCADMIN_REQUIRE_TRACKING": "yes",
        "DISCADMIN_API_HOST": "0.0.0.0",
        "DISCADMIN_API_PORT": "9001",
        "DISCADMIN_LOG_LEVEL": "debug",
    }
    with patch.dict("os.environ", env, clear=True):
        settings = Settings.from_env()

    assert settings.route_match == "prefix"
    assert settings.require_tracking is True
    assert settings.api_host == "0.0.0.0"
    assert settings.api_port == 9001
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back_with_notes() -> None:
    env = {
        "DISCADMIN_ROUTE_MATCH": "regex",
        "DISCADMIN_REQUIRE_TRACKING": "maybe",
        "DISCADMIN_API_PORT": "eighty",
        "DISCADMIN_LOG_LEVEL": "loud",
    }
    with patch.dict("os.environ", env, clear=True):
        settings = Settings.from_env()

    assert settings.route_match == "segment"
    assert settings.require_tracking is False
    assert settings.api_port == 8000
    assert settings.log_level == "WARNING"
    assert len(settings.notes) == 4
