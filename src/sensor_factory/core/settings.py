"""Generator settings and configuration.

This module defines all configuration options for a fixture generation run.
Settings are loaded from environment variables with sensible defaults and can be
overridden per run from the command line.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Generator settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Time range
    start_year: int = Field(default=2022, alias="START_YEAR")
    span_years: int = Field(default=2, ge=0, alias="SPAN_YEARS")
    timezone: str | None = Field(default=None, alias="TIMEZONE")

    # Output
    output_dir: Path = Field(default=Path("."), alias="OUTPUT_DIR")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Value generation
    channels: int = Field(default=12, ge=1, alias="CHANNELS")
    value_step: float = Field(default=100.0, alias="VALUE_STEP")
    seed: int | None = Field(default=None, alias="SEED")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def run_parameters(self) -> tuple[int, int, str | None]:
        """Return the resolved ``(start_year, span_years, timezone)`` triple."""
        return self.start_year, self.span_years, self.timezone


settings = Settings()
