"""Configuration of named formatter profiles.

This module loads formatter profiles from a YAML file so applications
can refer to a number style by name ("usd", "eur", "ratio") instead of
repeating its options.

Example file:

    general:
      log_level: INFO
      log_file: logs/numfmt.log
    formatters:
      usd:
        preset: currency
      eur:
        group_separator: "."
        decimal_separator: ","
        round_places: 2
        min_decimal_places: 2
        template: "n €"
"""

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .formatter import FormatOptions, Formatter
from .presets import preset_options


logger = logging.getLogger(__name__)


CONFIG_PATH_ENV = "NUMFMT_CONFIG_PATH"
DEFAULT_CONFIG_PATHS = ["numfmt.yaml", "config/numfmt.yaml"]

TEXT_OPTIONS = ["group_separator", "decimal_separator", "template", "negative_template"]
INTEGER_OPTIONS = ["group_size", "round_places", "shift", "min_decimal_places"]


# ============================================================================
# Configuration Dataclasses
# ============================================================================


@dataclass
class GeneralConfig:
    """General application configuration."""

    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate_log_level()
        self._validate_log_file()
        self.log_level = self.log_level.upper()

    def _validate_log_level(self) -> None:
        """Validate that log level is one of the allowed values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if str(self.log_level).upper() not in valid_levels:
            raise ValueError(
                f"Log level must be one of {valid_levels}, got '{self.log_level}'"
            )

    def _validate_log_file(self) -> None:
        """Validate that log file is a path string when set."""
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ValueError(f"Log file must be a string, got {self.log_file!r}")


@dataclass
class ProfileConfig:
    """A named set of formatting options."""

    name: str
    options: FormatOptions

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.name:
            raise ValueError("Profile name is required")


@dataclass
class Config:
    """Main configuration container."""

    general: GeneralConfig = field(default_factory=GeneralConfig)
    profiles: Dict[str, ProfileConfig] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """Load configuration from YAML file.

        Args:
            config_path: Path to config YAML file. If None, uses default locations.

        Returns:
            Loaded and validated Config object

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If configuration is invalid
        """
        path = _find_config_file(config_path)
        data = _load_yaml_file(path)

        general = _parse_general_config(data)
        profiles = _parse_profiles(data)

        logger.info(f"Loaded {len(profiles)} formatter profile(s) from {path}")

        return cls(general=general, profiles=profiles)

    def profile_names(self) -> List[str]:
        """Get profile names in file order."""
        return list(self.profiles)

    def formatter(self, name: str) -> Formatter:
        """Create a formatter for a named profile.

        Args:
            name: Profile name

        Returns:
            Formatter configured with the profile's options

        Raises:
            KeyError: If profile is not configured
        """
        if name not in self.profiles:
            raise KeyError(
                f"Unknown formatter profile '{name}'. "
                f"Available: {self.profile_names()}"
            )
        return Formatter(self.profiles[name].options)


# ============================================================================
# Private Helper Functions (Config Loading)
# ============================================================================


def _find_config_file(config_path: Optional[str]) -> str:
    """Find configuration file from given path or default locations.

    Args:
        config_path: Optional path to config file

    Returns:
        Path to config file

    Raises:
        FileNotFoundError: If config file not found in any location
    """
    if config_path is not None:
        if Path(config_path).exists():
            return config_path
        raise FileNotFoundError(f"Config file not found: {config_path}")

    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path and Path(env_path).exists():
        return env_path

    for path in DEFAULT_CONFIG_PATHS:
        if Path(path).exists():
            return path

    raise FileNotFoundError(
        f"Config file not found. Tried: {CONFIG_PATH_ENV} env var, "
        f"{', '.join(DEFAULT_CONFIG_PATHS)}"
    )


def _load_yaml_file(path: str) -> Dict[str, Any]:
    """Load and parse YAML configuration file.

    Raises:
        ValueError: If file is empty or not a mapping
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        raise ValueError(f"Config file is empty: {path}")
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    return data


def _parse_string_to_int(name: str, value: Any) -> int:
    """Parse YAML integer or integer string.

    Args:
        name: Option name, for error reporting
        value: Value to parse

    Returns:
        Parsed integer
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass

    raise ValueError(f"Option '{name}' must be an integer, got {value!r}")


# ============================================================================
# Private Helper Functions (Config Parsing)
# ============================================================================


def _parse_general_config(data: Dict[str, Any]) -> GeneralConfig:
    """Parse general configuration section."""
    general_data = data.get("general") or {}

    return GeneralConfig(
        log_level=general_data.get("log_level", "INFO"),
        log_file=general_data.get("log_file"),
    )


def _parse_profiles(data: Dict[str, Any]) -> Dict[str, ProfileConfig]:
    """Parse formatters section into profiles.

    Args:
        data: Full configuration dictionary

    Returns:
        Profiles by name

    Raises:
        ValueError: If formatters section is missing or malformed
    """
    formatters_data = data.get("formatters")
    if not formatters_data:
        raise ValueError("Missing 'formatters' section in config")
    if not isinstance(formatters_data, dict):
        raise ValueError("'formatters' section must be a mapping of profiles")

    return {
        str(name): ProfileConfig(
            name=str(name),
            options=parse_options(profile_data or {}, profile=str(name)),
        )
        for name, profile_data in formatters_data.items()
    }


def parse_options(data: Dict[str, Any], profile: str = "") -> FormatOptions:
    """Build FormatOptions from a profile mapping.

    A "preset" key seeds the options; the remaining keys override it.

    Args:
        data: Option names (FormatOptions fields) and values
        profile: Profile name, for error reporting

    Returns:
        Validated FormatOptions

    Raises:
        ValueError: If a key is unknown or a value is invalid
    """
    if not isinstance(data, dict):
        raise ValueError(f"Profile '{profile}' must be a mapping of options")

    base = FormatOptions()
    overrides: Dict[str, Any] = {}

    for key, value in data.items():
        if key == "preset":
            base = preset_options(str(value))
        elif key in TEXT_OPTIONS:
            overrides[key] = "" if value is None else str(value)
        elif key in INTEGER_OPTIONS:
            if key == "round_places" and value is None:
                overrides[key] = None
            else:
                overrides[key] = _parse_string_to_int(key, value)
        else:
            raise ValueError(
                f"Unknown option '{key}' in profile '{profile}'. "
                f"Valid options: {['preset'] + TEXT_OPTIONS + INTEGER_OPTIONS}"
            )

    return dataclasses.replace(base, **overrides)
