"""Tests for runtime settings loading and validation."""

from __future__ import annotations

import pytest

from app.config import AppSettings, SettingsLoadError, config_load_database_url, config_load_settings


def test_config_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Load settings from environment variables with normalization.

    Args:
        monkeypatch: Pytest environment patcher.

    Returns:
        None: Assertions validate loaded values.

    Raises:
        AssertionError: Raised when values diverge.
    """

    monkeypatch.setenv("ENVIRONMENT_NAME", "staging")
    monkeypatch.setenv("APPLICATION_PORT", "9100")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ANALYTICS_REPORT_TIMEZONE", "America/New_York")
    monkeypatch.setenv("ANALYTICS_MINUTES_PER_INTERVIEW", "20")

    settings = config_load_settings()

    assert settings.environment_name == "staging"
    assert settings.application_port == 9100
    assert settings.log_level == "DEBUG"
    assert settings.analytics_report_timezone == "America/New_York"
    assert settings.analytics_minutes_per_interview == 20


@pytest.mark.parametrize(
    ("variable_name", "value"),
    [
        ("APPLICATION_PORT", "70000"),
        ("LOG_LEVEL", "verbose"),
        ("ANALYTICS_REPORT_TIMEZONE", "Mars/Olympus_Mons"),
        ("ANALYTICS_MINUTES_PER_INTERVIEW", "0"),
    ],
)
def test_config_load_settings_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch,
    variable_name: str,
    value: str,
) -> None:
    """Raise a settings load error for invalid values.

    Args:
        monkeypatch: Pytest environment patcher.
        variable_name: Environment variable to override.
        value: Invalid value.

    Returns:
        None: Assertions validate startup checks.

    Raises:
        AssertionError: Raised when invalid settings load.
    """

    monkeypatch.setenv(variable_name, value)

    with pytest.raises(SettingsLoadError):
        config_load_settings()


def test_config_load_database_url_rejects_blank_value(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reject a blank database URL for migration tooling.

    Args:
        monkeypatch: Pytest environment patcher.

    Returns:
        None: Assertions validate database URL checks.

    Raises:
        AssertionError: Raised when blank URLs are accepted.
    """

    monkeypatch.setenv("DATABASE_URL", "   ")

    with pytest.raises(SettingsLoadError):
        config_load_database_url()


def test_config_defaults_use_utc_reporting() -> None:
    """Default to UTC day buckets and fifteen-minute sessions.

    Returns:
        None: Assertions validate defaults.

    Raises:
        AssertionError: Raised when defaults diverge.
    """

    settings = AppSettings(_env_file=None, analytics_report_timezone="UTC")

    assert settings.analytics_report_timezone == "UTC"
    assert settings.analytics_minutes_per_interview == 15
