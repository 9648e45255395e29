"""
Configuration settings using Pydantic Settings.

Values come from the environment or a local ``.env`` file. Scoring, award and
leveling constants are fixed in code and intentionally absent here.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application (name and environment are stamped on every log line)
    app_name: str = Field("point-engine", alias="APP_NAME")
    app_env: str = Field("development", alias="APP_ENV")
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")

    # Observability
    # Force the JSON renderer even when attached to a terminal (always on in production)
    log_json: bool = Field(False, alias="LOG_JSON")
    # Toggle for the trace_performance decorator around engine entry points
    trace_enabled: bool = Field(True, alias="TRACE_ENABLED")
    metrics_enabled: bool = Field(True, alias="METRICS_ENABLED")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


# Global settings instance - loaded from environment
settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance.

    This function provides dependency injection support for settings.
    """
    return settings
