import pytest

from weatherapp.config import Settings
from weatherapp.errors import ConfigError


def test_defaults():
    settings = Settings.from_env({"WEATHERAPI_KEY": "secret"})

    assert settings.api_key == "secret"
    assert settings.days == 3
    assert settings.timeout == 10.0
    assert settings.location_timeout == 15.0
    assert settings.log_level == "INFO"


def test_overrides():
    settings = Settings.from_env({
        "WEATHERAPI_KEY": "secret",
        "WEATHERAPP_DAYS": "7",
        "WEATHERAPP_TIMEOUT": "2.5",
        "WEATHERAPP_LOCATION_TIMEOUT": "",
        "WEATHERAPP_LOG_LEVEL": "debug",
    })

    assert settings.days == 7
    assert settings.timeout == 2.5
    assert settings.location_timeout == 15.0
    assert settings.log_level == "DEBUG"


def test_missing_key():
    with pytest.raises(ConfigError, match="WEATHERAPI_KEY"):
        Settings.from_env({"WEATHERAPP_DAYS": "3"})


def test_invalid_number():
    with pytest.raises(ConfigError, match="WEATHERAPP_DAYS"):
        Settings.from_env({"WEATHERAPI_KEY": "secret", "WEATHERAPP_DAYS": "three"})
