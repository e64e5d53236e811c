"""Regression tests for settings validation and binder bootstrap wiring."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from form_binding.binding import FieldTags, binding_parse_time
from form_binding.bootstrap import bootstrap_create_binder
from form_binding.config import BindingSettings, SettingsLoadError, config_load_settings


def test_config_settings_accept_known_timezone_and_blank_values() -> None:
    """Accept known IANA zones and normalize blank zone names to None."""

    assert BindingSettings(binding_local_timezone=" Europe/Berlin ").binding_local_timezone == "Europe/Berlin"
    assert BindingSettings(binding_local_timezone="  ").binding_local_timezone is None
    assert BindingSettings().api_error_status_code == 400


def test_config_settings_expose_only_binding_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    """Declare only consumed settings and ignore unrelated environment variables."""

    monkeypatch.setenv("ENVIRONMENT_NAME", "production")

    settings = BindingSettings()

    assert set(BindingSettings.model_fields) == {"binding_local_timezone", "api_error_status_code"}
    assert not hasattr(settings, "environment_name")


def test_config_settings_reject_invalid_values() -> None:
    """Reject unknown zones and non-client-error status codes.

    Returns:
        None: Assertions validate settings validation.

    Raises:
        AssertionError: Raised when invalid settings are accepted.
    """

    with pytest.raises(ValidationError, match="not a known IANA zone"):
        BindingSettings(binding_local_timezone="Nowhere/Invalid")
    with pytest.raises(ValidationError):
        BindingSettings(api_error_status_code=500)


def test_config_load_settings_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    """Wrap environment validation failures into SettingsLoadError."""

    monkeypatch.setenv("BINDING_LOCAL_TIMEZONE", "Nowhere/Invalid")

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings()


def test_bootstrap_create_binder_uses_configured_local_zone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Build binders whose local zone follows settings or the environment.

    Returns:
        None: Assertions validate binder bootstrap wiring.

    Raises:
        AssertionError: Raised when the local zone is not applied.
    """

    binder = bootstrap_create_binder(BindingSettings(binding_local_timezone="Asia/Jerusalem"))
    assert binder.local_timezone == ZoneInfo("Asia/Jerusalem")

    monkeypatch.setenv("BINDING_LOCAL_TIMEZONE", "UTC")
    environment_binder = bootstrap_create_binder()
    parsed_value = binding_parse_time(
        "2023-05-01",
        FieldTags(time_format="2006-01-02"),
        datetime,
        "created",
        local_timezone=environment_binder.local_timezone,
    )
    assert parsed_value == datetime(2023, 5, 1, tzinfo=timezone.utc)

    monkeypatch.delenv("BINDING_LOCAL_TIMEZONE")
    assert bootstrap_create_binder(BindingSettings()).local_timezone is None
