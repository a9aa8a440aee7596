"""Configuration management for ekexport."""

from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.exceptions import ConfigurationError

load_dotenv()

DEFAULT_PROFILE_PATH = Path("ekexport.yaml")


class AppConfig(BaseSettings):
    """Application configuration."""

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[Path] = Field(default=None, validation_alias="LOG_FILE")

    # Export defaults
    default_format: str = Field(default="ics", validation_alias="EKEXPORT_FORMAT")
    timezone: str = Field(default="UTC", validation_alias="EKEXPORT_TIMEZONE")
    ics_line_ending: str = Field(
        default="lf", validation_alias="EKEXPORT_ICS_LINE_ENDING"
    )

    # Data store
    access_timeout: float = Field(
        default=30.0, validation_alias="EKEXPORT_ACCESS_TIMEOUT"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_parse_none_str="",  # Treat empty string as None
    )


class ExportProfile:
    """A named set of export options from the profile file."""

    def __init__(self, name: str, data: dict[str, Any]):
        self.name = name
        calendars = data.get("calendars", [])
        if isinstance(calendars, str):
            calendars = [calendars]
        self.calendars: list[str] = [str(c) for c in calendars]
        self.format: Optional[str] = data.get("format")
        self.include_reminders: bool = bool(data.get("include_reminders", False))
        self.include_completed: bool = bool(data.get("include_completed", False))
        output_dir = data.get("output_dir")
        self.output_dir: Optional[Path] = Path(output_dir) if output_dir else None


class ProfileConfig:
    """Export profiles loaded from YAML."""

    def __init__(self, config_path: Path = DEFAULT_PROFILE_PATH):
        self.path = config_path
        self.profiles: dict[str, ExportProfile] = {}

        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

            if not isinstance(data, dict):
                raise ConfigurationError(f"{config_path}: expected a mapping at top level")

            for name, profile_data in (data.get("profiles") or {}).items():
                if not isinstance(profile_data, dict):
                    raise ConfigurationError(
                        f"{config_path}: profile '{name}' must be a mapping"
                    )
                self.profiles[name] = ExportProfile(name, profile_data)

    @property
    def has_config(self) -> bool:
        return len(self.profiles) > 0

    def get(self, name: str) -> ExportProfile:
        if name not in self.profiles:
            available = ", ".join(sorted(self.profiles)) or "none"
            raise ConfigurationError(
                f"Unknown profile '{name}' in {self.path} (available: {available})"
            )
        return self.profiles[name]


# Global config instance
config = AppConfig()
