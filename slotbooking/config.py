"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.exceptions import ValidationError
from .domain.validation import validate_time, validate_time_range

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SeedConfig(BaseModel):
    """Shape of the demonstration data written by ``slotbooking seed``."""
    weekdays: List[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5])  # Monday..Friday
    start_hour: int = 9
    end_hour: int = 17
    flexible_days: int = 7
    flexible_windows: List[Tuple[str, str]] = Field(
        default_factory=lambda: [("10:00", "11:00"), ("14:00", "15:00")]
    )
    day_only_offset: int = 8
    day_only_days: int = 7

    @field_validator("weekdays")
    @classmethod
    def validate_weekdays(cls, value: List[int]) -> List[int]:
        """Weekdays use 0 = Sunday .. 6 = Saturday; duplicates are dropped."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"weekdays must be between 0 and 6, got {invalid_days}")
        return list(dict.fromkeys(value))

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("flexible_days", "day_only_offset", "day_only_days")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("day counts and offsets must not be negative")
        return value

    @field_validator("flexible_windows")
    @classmethod
    def validate_windows(cls, value: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
        """Each window is a pair of HH:MM times with start before end."""
        for start, end in value:
            try:
                validate_time(start)
                validate_time(end)
                validate_time_range(start, end)
            except ValidationError as exc:
                raise ValueError(f"Invalid window {start}-{end}: {exc.message}") from exc
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "SeedConfig":
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        return self


class AppConfig(BaseModel):
    """Application configuration."""
    database_url: str = "sqlite+aiosqlite:///slotbooking.sqlite3"
    echo_sql: bool = False
    log_level: str = "INFO"
    seed: SeedConfig = Field(default_factory=SeedConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        config_path = Path(__file__).parent.parent / "config.yaml"

    return config_path


def load_config(config_path: Path | None = None) -> AppConfig:
    """
    Load the given config file, or the default one if it exists.

    Without an explicit path and without a default file, built-in defaults
    are used.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()
