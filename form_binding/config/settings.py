"""Typed runtime settings with dotenv support and startup validation."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class BindingSettings(BaseSettings):
    """Settings for binder time handling and API error responses.

    Environment variable names map directly to field names in uppercase.
    Example: `binding_local_timezone` reads from `BINDING_LOCAL_TIMEZONE`.

    Attributes:
        binding_local_timezone: IANA zone used as "local" when parsing date/time
            fields; the host zone is used when unset.
        api_error_status_code: HTTP status returned for rejected bindings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    binding_local_timezone: str | None = Field(default=None)
    api_error_status_code: int = Field(default=400, ge=400, le=499)

    @field_validator("binding_local_timezone")
    @classmethod
    def _validate_timezone_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped_value = value.strip()
        if not stripped_value:
            return None
        try:
            ZoneInfo(stripped_value)
        except (ZoneInfoNotFoundError, ValueError) as error:
            raise ValueError(f"binding_local_timezone is not a known IANA zone: {stripped_value}") from error
        return stripped_value


def config_load_settings() -> BindingSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        BindingSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return BindingSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
