"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from planner.core.config import Settings


def test_default_settings():
    settings = Settings()
    assert settings.annual_return_rate == 0.05
    assert settings.retirement_age == 65
    assert settings.port == 4000
    assert settings.log_level == "INFO"


def test_assumptions_from_settings():
    assumptions = Settings(annual_return_rate=0.07, retirement_age=67).assumptions()
    assert assumptions.annual_return_rate == 0.07
    assert assumptions.retirement_age == 67


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PLANNER_RETIREMENT_AGE", "70")
    monkeypatch.setenv("PLANNER_ANNUAL_RETURN_RATE", "0.04")
    monkeypatch.setenv("PLANNER_CORS_ORIGINS", '["http://example.test"]')

    settings = Settings()
    assert settings.retirement_age == 70
    assert settings.annual_return_rate == 0.04
    assert settings.cors_origins == ["http://example.test"]


def test_rejects_out_of_range_return_rate():
    with pytest.raises(ValidationError):
        Settings(annual_return_rate=-0.1)
