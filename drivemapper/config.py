"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.models import DriveMapping
from .services.batch import FailurePolicy


class DriveEntry(BaseModel):
    """A desired drive mapping as written in the config file."""
    letter: str
    path: str

    @field_validator("letter")
    @classmethod
    def strip_colon(cls, value: str) -> str:
        """Accept both ``H`` and ``H:`` in the config file."""
        value = value.strip()
        if value.endswith(":"):
            value = value[:-1]
        return value

    def to_mapping(self) -> DriveMapping:
        return DriveMapping(letter=self.letter, target_path=self.path.strip())


class AppConfig(BaseModel):
    """Application configuration."""
    domain: Optional[str] = None
    on_failure: FailurePolicy = FailurePolicy.PROMPT
    persistent: bool = True
    timeout_seconds: float = 60.0
    log_file: Optional[Path] = None
    drives: List[DriveEntry] = Field(default_factory=list)

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Ensure the command timeout is positive."""
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value

    @field_validator("drives")
    @classmethod
    def validate_drives(cls, value: List[DriveEntry]) -> List[DriveEntry]:
        """Ensure each drive letter is configured only once."""
        seen: set[str] = set()
        for entry in value:
            key = entry.letter.upper()
            if key in seen:
                raise ValueError(f"Duplicate drive letter detected: {entry.letter}")
            seen.add(key)
        return value

    def to_mappings(self) -> List[DriveMapping]:
        """Desired mappings in config order."""
        return [entry.to_mapping() for entry in self.drives]

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
                f"Please create a drives.yaml file. See config.example.yaml for reference."
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
    # Look for drives.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "drives.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "drives.yaml"

    return config_path
