"""Bootstrap wiring for settings-driven binder assembly."""

from zoneinfo import ZoneInfo

from form_binding.binding import FormBinder
from form_binding.config import BindingSettings, config_load_settings


def bootstrap_create_binder(settings: BindingSettings | None = None) -> FormBinder:
    """Assemble a binder after validating runtime configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when None.

    Returns:
        FormBinder: Binder using the configured local time zone.

    Raises:
        SettingsLoadError: Raised when settings must be loaded and are invalid.
    """

    resolved_settings = settings or config_load_settings()
    local_timezone = None
    if resolved_settings.binding_local_timezone:
        local_timezone = ZoneInfo(resolved_settings.binding_local_timezone)
    return FormBinder(local_timezone=local_timezone)
