import logging
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # GitHub Configuration
    github_token: str = Field(
        ..., description="Token sent as 'Authorization: token <value>'."
    )
    github_org: str = Field(
        "giantswarm", description="Organization whose teams are graphed."
    )
    github_api_url: str = Field(
        "https://api.github.com", description="Base URL of the GitHub REST API."
    )

    # Fetch Settings
    page_size: int = Field(
        100, ge=1, le=100, description="per_page value for list requests."
    )
    follow_pagination: bool = Field(
        True,
        description="Follow Link rel=next headers instead of reading a single page.",
    )
    max_concurrency: int = Field(
        4, ge=1, description="Maximum member-list requests in flight at once."
    )
    request_timeout: float = Field(
        30.0, gt=0, description="Per-request timeout in seconds."
    )

    # Graph / Output Settings
    graph_namespace: str = Field(
        "giantswarm", description="Leading segment of every canonical node name."
    )
    output_path: str = Field(
        "assets/org-vis/teams-graph.json",
        description="Where the graph JSON is written (relative to the working dir).",
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


def load_settings(env_file: Optional[str] = ".env") -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings(_env_file=env_file)
    except ValidationError as e:
        logging.error(f"Error loading application settings: {e}")
        raise SystemExit(
            "Failed to load application settings (is GITHUB_TOKEN set?). Exiting."
        )

    log_level_upper = settings.log_level.upper()
    # Validate log_level even if loaded from .env
    if log_level_upper not in VALID_LOG_LEVELS:
        logging.warning(
            f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
        )
        settings.log_level = "INFO"
    else:
        settings.log_level = log_level_upper
    return settings
