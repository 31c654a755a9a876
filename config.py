"""
Configuration module for the Nursing Calendar.
Loads settings from environment variables and an optional .env file.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level"
    )

    # Opening hours used by the booking form
    clinic_open_hour: int = Field(
        default=8,
        ge=0,
        le=23,
        alias="CLINIC_OPEN_HOUR",
        description="First bookable hour (inclusive)"
    )
    clinic_close_hour: int = Field(
        default=18,
        ge=1,
        le=24,
        alias="CLINIC_CLOSE_HOUR",
        description="Closing hour (exclusive, no slot starts at this hour)"
    )
    slot_step_minutes: int = Field(
        default=30,
        gt=0,
        alias="SLOT_STEP_MINUTES",
        description="Spacing between bookable start times"
    )

    # Edit dialog defaults
    new_event_default_minutes: int = Field(
        default=30,
        gt=0,
        alias="NEW_EVENT_DEFAULT_MINUTES",
        description="Initial length of a new draft before a service is selected"
    )
    default_color_tag: str = Field(
        default="blue",
        alias="DEFAULT_COLOR_TAG",
        description="Color tag preselected on new drafts"
    )

    # Display preferences
    use_24_hour_format: bool = Field(
        default=True,
        alias="USE_24_HOUR_FORMAT",
        description="Render times as 14:30 instead of 2:30 PM"
    )
    agenda_group_by: str = Field(
        default="date",
        alias="AGENDA_GROUP_BY",
        description="Agenda grouping: 'date' or 'color'"
    )

    # Sample data
    sample_event_count: int = Field(
        default=80,
        ge=0,
        alias="SAMPLE_EVENT_COUNT",
        description="Number of sample appointments loaded by main.py"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True


# Global settings instance
settings = Settings()
