"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ThreadSettings(BaseModel):
    """Thread view configuration."""

    # Replies shown under a node that is neither expanded nor collapsed.
    # Older replies sit behind a "show N previous replies" affordance.
    default_visible_replies: int = Field(default=2, ge=1)

    # Longest reply content accepted by the reply service
    max_content_length: int = Field(default=10000, ge=1)

    # Display name used for authors who have not set one
    anonymous_display_name: str = "Anonymous"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using ``__`` for nested values:

        ENVIRONMENT=production
        THREAD__DEFAULT_VISIBLE_REPLIES=3
        OBSERVABILITY__LOGFIRE_TOKEN=...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows THREAD__MAX_CONTENT_LENGTH syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Nested settings
    thread: ThreadSettings = ThreadSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
