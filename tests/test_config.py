"""
Tests for API configuration settings.
"""

import pytest
from pydantic import ValidationError

from books_api.config import APIConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove settings that may leak in from the environment."""
    for name in ("HOST", "PORT", "DEBUG", "LOG_LEVEL", "LOG_FORMAT", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    """Test default server settings."""
    config = APIConfig(_env_file=None)

    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert config.debug is False
    assert config.log_level == "INFO"
    assert config.log_format == "json"
    assert config.get_log_file_path() is None
    assert config.get_base_url() == "http://localhost:8080"


def test_environment_overrides(monkeypatch):
    """Test settings are read from the environment."""
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = APIConfig(_env_file=None)

    assert config.port == 9090
    assert config.log_level == "DEBUG"
    assert config.get_base_url() == "http://127.0.0.1:9090"


@pytest.mark.parametrize("overrides", [
    {"port": 0},
    {"port": 70000},
    {"log_level": "verbose"},
    {"log_format": "xml"},
])
def test_invalid_settings(overrides):
    """Test invalid settings are rejected."""
    with pytest.raises(ValidationError):
        APIConfig(_env_file=None, **overrides)


def test_log_file_path():
    """Test log file path conversion."""
    config = APIConfig(_env_file=None, log_file="logs/api.log", log_format="Console")

    assert str(config.get_log_file_path()) == "logs/api.log"
    assert config.log_format == "console"
