"""
Configuration Settings.

This module defines the support package configuration using Pydantic's BaseSettings.
Values are loaded from environment variables and an optional .env file without
explicit dotenv loading.
"""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", alias="HYPERVEL_SUPPORT_LOG_LEVEL", description="Console log level")
    format: str = Field(
        default="detailed", alias="HYPERVEL_SUPPORT_LOG_FORMAT", description="Log format (simple, detailed, json)"
    )
    file_dir: str = Field(default="logs", alias="HYPERVEL_SUPPORT_LOG_FILE_DIR", description="Log file directory")
    enable_file: bool = Field(
        default=False, alias="HYPERVEL_SUPPORT_ENABLE_FILE_LOGGING", description="Write logs to a file as well"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class SupportSettings(BaseSettings):
    """
    Support package settings model.

    All properties are bound from environment variables and the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Logging
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="HYPERVEL_SUPPORT_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Logging format (simple, detailed, json)",
        alias="HYPERVEL_SUPPORT_LOG_FORMAT",
    )
    log_file_dir: str = Field(
        default="logs",
        description="Directory used when file logging is enabled",
        alias="HYPERVEL_SUPPORT_LOG_FILE_DIR",
    )
    enable_file_logging: bool = Field(
        default=False,
        description="Enable file logging",
        alias="HYPERVEL_SUPPORT_ENABLE_FILE_LOGGING",
    )

    # =====================================================================
    # Data Objects
    # =====================================================================
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="strptime format tried when a data object parses a date string",
        alias="HYPERVEL_SUPPORT_DATE_FORMAT",
    )
    data_object_auto_casting: bool = Field(
        default=True,
        description="Cast data object input values to their annotated scalar types",
        alias="HYPERVEL_SUPPORT_DATA_OBJECT_AUTO_CASTING",
    )

    # =====================================================================
    # Once
    # =====================================================================
    once_enabled: bool = Field(
        default=True,
        description="Default state of once() memoization for a new context",
        alias="HYPERVEL_SUPPORT_ONCE_ENABLED",
    )

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig.model_validate(self.model_dump(by_alias=True))


@lru_cache(maxsize=1)
def get_settings() -> SupportSettings:
    """Return the process-wide settings instance."""
    return SupportSettings()


settings = get_settings()
