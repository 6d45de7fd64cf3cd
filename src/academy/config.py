"""Academy configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class AcademyConfig(BaseSettings):
    """Academy configuration loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # Booking UI time slots
    slot_start_hour: int = Field(
        default=9,
        ge=0,
        le=23,
        description="First bookable hour (24-hour clock)",
    )
    slot_end_hour: int = Field(
        default=21,
        ge=0,
        le=23,
        description="Last bookable hour, always offered once as HH:00",
    )
    slot_interval_minutes: int = Field(
        default=30,
        gt=0,
        description="Minutes between consecutive slots",
    )

    # Schedules are stored in this timezone; student offsets are relative to it
    reference_timezone_label: str = Field(
        default="Egypt",
        description="Label of the timezone class times are stored in",
    )

    # Paths
    data_dir: str = Field(
        default="data",
        description="Directory holding exported record JSON files",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: AcademyConfig | None = None


def get_config() -> AcademyConfig:
    """Get the academy configuration singleton.

    Returns:
        AcademyConfig: Academy configuration instance
    """
    global _config
    if _config is None:
        _config = AcademyConfig()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
