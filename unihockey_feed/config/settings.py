import logging
from typing import Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Upstream API
    api_base_url: HttpUrl = Field(
        "https://api-v2.swissunihockey.ch/api",
        description="Base URL of the Swiss Unihockey API.",
    )
    api_token: Optional[str] = Field(
        None, description="Optional bearer token for an authenticating proxy."
    )
    user_agent: str = Field("FloorLive/1.0.0", description="User-Agent header value.")
    request_timeout_seconds: float = Field(
        10.0, gt=0, description="Timeout applied to every upstream request."
    )
    api_max_attempts: int = Field(
        1,
        ge=1,
        le=5,
        description="Total attempts per request (1 = no transport retries).",
    )

    # Pagination / result limits
    team_schedule_page_size: int = Field(
        10, ge=1, description="Rows per page returned by the team schedule."
    )
    max_schedule_pages: int = Field(
        20, ge=1, description="Hard ceiling on pages fetched for one schedule."
    )
    head_to_head_limit: int = Field(
        5, ge=1, description="Maximum number of head-to-head games returned."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
