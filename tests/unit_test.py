"""Unit tests that do not require a running API or external services."""
import pytest
from pydantic import ValidationError

from app.config import Settings, settings


def test_settings_load():
    """Settings load from environment (e.g. CI env vars)."""
    assert settings.API_V1_PREFIX == "/api/v1"
    assert settings.APP_NAME == "Bursar Ledger Backend"


def test_environment_flag():
    """Environment flags reflect ENVIRONMENT value."""
    assert settings.ENVIRONMENT.lower() in ("development", "test", "production")
    assert settings.is_development == (settings.ENVIRONMENT.lower() == "development")
    assert settings.is_production == (settings.ENVIRONMENT.lower() == "production")


def test_ledger_defaults():
    assert settings.CLEARANCE_THRESHOLD_PCT == 100.0
    assert settings.PROBATION_THRESHOLD_PCT == 80.0
    assert settings.DEFAULT_ACTOR == "Bursar"


def test_origins_parsed_to_list():
    s = Settings(ALLOWED_ORIGINS="http://a.test, http://b.test")
    assert s.ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]


def test_threshold_out_of_range_rejected():
    with pytest.raises(ValidationError):
        Settings(PROBATION_THRESHOLD_PCT=120)
