"""Tests for settings validation."""

import pytest

from deckvault.core.config import ConfigurationError, Environment, Settings


def _settings(**overrides) -> Settings:
    values = {
        "environment": Environment.PRODUCTION,
        "jwt_secret_key": "a" * 64,
        "cors_allowed_origins": "https://slides.example.com",
        "search_url": "http://search:7700",
        "search_api_key": "key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_clean_production_config():
    assert _settings().validate_production_config() == []


def test_default_secret_blocks_production():
    with pytest.raises(ConfigurationError):
        _settings(jwt_secret_key="dev-insecure-key-change-me").validate_production_config()


def test_missing_search_blocks_production():
    with pytest.raises(ConfigurationError):
        _settings(search_url="").validate_production_config()


def test_development_only_reports():
    problems = _settings(
        environment=Environment.DEVELOPMENT, cors_allowed_origins="http://localhost:3000"
    ).validate_production_config()
    assert any("localhost" in p for p in problems)


def test_wildcard_cors_rejected():
    with pytest.raises(ValueError):
        _settings(cors_allowed_origins="*").get_cors_origins()


def test_log_settings_are_normalised():
    s = _settings(log_level="debug", log_format="TEXT")
    assert s.log_level == "DEBUG"
    assert s.log_format == "text"


def test_invalid_log_level():
    with pytest.raises(ValueError):
        _settings(log_level="loud")
