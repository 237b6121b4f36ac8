"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional, Sequence

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.exceptions import ConfigError


class DefaultsConfig(BaseModel):
    """Default settings for a meeting search."""
    duration_minutes: int = 30

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure meeting duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value


class Colleague(BaseModel):
    """Colleague/attendee configuration."""
    name: str  # Used as alias
    email: str


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    colleagues: List[Colleague] = Field(default_factory=list)
    calendar_file: Optional[Path] = None
    calendar_url: Optional[str] = None
    request_timeout: float = 10.0

    @field_validator("colleagues")
    @classmethod
    def validate_colleagues(cls, value: List[Colleague]) -> List[Colleague]:
        """Ensure colleague aliases and emails are unique."""
        seen_names: set[str] = set()
        seen_emails: set[str] = set()
        for colleague in value:
            name_key = colleague.name.lower()
            email_key = colleague.email.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate colleague name detected: {colleague.name}")
            if email_key in seen_emails:
                raise ValueError(f"Duplicate colleague email detected: {colleague.email}")
            seen_names.add(name_key)
            seen_emails.add(email_key)
        return value

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout must be greater than zero")
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Relative ``calendar_file`` entries are resolved against the
        directory holding the config file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigError: If the file is not valid YAML or not a mapping
            pydantic.ValidationError: If a field fails validation
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
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if config.calendar_file is not None and not config.calendar_file.is_absolute():
            config = config.model_copy(
                update={"calendar_file": config_path.parent / config.calendar_file}
            )
        return config

    def find_colleague_by_name(self, name: str) -> Colleague | None:
        """Find a colleague by their name (alias)."""
        for colleague in self.colleagues:
            if colleague.name.lower() == name.lower():
                return colleague
        return None

    def resolve_attendee(self, identifier: str) -> str:
        """
        Resolve an attendee identifier (alias or email) to the identifier
        used in the calendar.

        Emails pass through lower-cased. Names that are not configured
        aliases are returned unchanged, since calendars may tag events with
        plain names.
        """
        if "@" in identifier:
            return identifier.lower()

        colleague = self.find_colleague_by_name(identifier)
        if colleague:
            return colleague.email.lower()

        return identifier

    def resolve_attendees(self, identifiers: Sequence[str]) -> List[str]:
        """Resolve multiple identifiers, dropping duplicates while keeping order."""
        resolved: List[str] = []
        for identifier in identifiers:
            attendee = self.resolve_attendee(identifier)
            if attendee not in resolved:
                resolved.append(attendee)
        return resolved


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of meetingfinder/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
