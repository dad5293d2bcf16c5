"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import BufferPolicy, BusinessHours

MAX_BUFFER_MINUTES = 180


class SchedulingDefaults(BaseModel):
    """Default settings for conflict checks and slot search."""
    buffer_minutes: int = 45
    slot_duration_minutes: int = 120
    start_hour: int = 9
    end_hour: int = 20
    suggestion_count: int = 3

    @field_validator("buffer_minutes")
    @classmethod
    def validate_buffer(cls, value: int) -> int:
        """Buffer time must be between 0 and 180 minutes."""
        if not 0 <= value <= MAX_BUFFER_MINUTES:
            raise ValueError(
                f"buffer_minutes must be between 0 and {MAX_BUFFER_MINUTES}, got {value}"
            )
        return value

    @field_validator("slot_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure slot duration is positive."""
        if value <= 0:
            raise ValueError("slot_duration_minutes must be greater than zero")
        return value

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("suggestion_count")
    @classmethod
    def validate_suggestion_count(cls, value: int) -> int:
        if value < 1:
            raise ValueError("suggestion_count must be at least 1")
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "SchedulingDefaults":
        """Ensure the venue opens before it closes."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        return self

    def buffer_policy(self) -> BufferPolicy:
        return BufferPolicy(buffer_minutes=self.buffer_minutes)

    def business_hours(self) -> BusinessHours:
        return BusinessHours(start_hour=self.start_hour, end_hour=self.end_hour)


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Belgrade"
    bookings_file: Path = Path("bookings.json")
    log_level: str = "WARNING"
    scheduling: SchedulingDefaults = Field(default_factory=SchedulingDefaults)
    resources: List[str] = Field(default_factory=list)

    @field_validator("resources")
    @classmethod
    def validate_resources(cls, value: List[str]) -> List[str]:
        """Normalise resource names to upper case and reject duplicates."""
        seen: set[str] = set()
        normalized: List[str] = []
        for resource in value:
            key = resource.strip().upper()
            if key in seen:
                raise ValueError(f"Duplicate resource detected: {resource}")
            seen.add(key)
            normalized.append(key)
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``bookings_file`` is resolved against the config file's
        directory.

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
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if not config.bookings_file.is_absolute():
            config = config.model_copy(
                update={"bookings_file": config_path.parent / config.bookings_file}
            )
        return config

    def is_known_resource(self, resource: str) -> bool:
        """Any resource is accepted when none are configured."""
        return not self.resources or resource.strip().upper() in self.resources


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
