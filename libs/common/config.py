from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    """Centralised tracker configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    matomo_url_base: str | None = Field(default=None, alias="MATOMO_URL_BASE")
    matomo_tracker_url: str | None = Field(default=None, alias="MATOMO_TRACKER_URL")
    matomo_site_id: int | None = Field(default=None, alias="MATOMO_SITE_ID")
    matomo_user_id: str | None = Field(default=None, alias="MATOMO_USER_ID")
    matomo_disabled: bool = Field(default=False, alias="MATOMO_DISABLED")
    matomo_log: bool = Field(default=False, alias="MATOMO_LOG")
    matomo_timeout: float = Field(default=10.0, alias="MATOMO_TIMEOUT")

    @field_validator("matomo_url_base", "matomo_tracker_url", "matomo_user_id", "matomo_site_id", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        """Treat empty env values as unset."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


@lru_cache(maxsize=1)
def get_settings() -> TrackerSettings:
    return TrackerSettings()
