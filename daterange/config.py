"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path

import pendulum
import yaml
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)


class RangeConfig(BaseModel):
    """Library-wide defaults for coercing and displaying ranges."""
    timezone: str = "UTC"
    week_start: int = 0  # 0=Monday, 6=Sunday
    display_format: str = "YYYY-MM-DD HH:mm"

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone name is known to pendulum."""
        try:
            pendulum.timezone(value)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: {value!r}") from exc
        return value

    @field_validator("week_start")
    @classmethod
    def validate_week_start(cls, value: int) -> int:
        """Validate weekday is between 0 and 6."""
        if not 0 <= value <= 6:
            raise ValueError(f"week_start must be between 0 and 6, got {value}")
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "RangeConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            RangeConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Create a daterange.yaml file or omit --config to use defaults."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        logger.info("Loaded range configuration from %s", config_path)
        return cls(**data)


_active_config = RangeConfig()


def get_config() -> RangeConfig:
    """Return the configuration used when callers pass no explicit settings."""
    return _active_config


def configure(config: RangeConfig) -> RangeConfig:
    """
    Install a new active configuration and return the previous one.

    The active configuration is process-wide: it changes how offset-less
    input is read everywhere, in every thread. Code running concurrently
    should pass ``tz=`` explicitly instead of reconfiguring.
    """
    global _active_config
    previous = _active_config
    _active_config = config
    return previous


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for daterange.yaml in current directory
    config_path = Path.cwd() / "daterange.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "daterange.yaml"

    return config_path
