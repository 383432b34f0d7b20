"""Configuration management for recipe_lens.

This module provides a centralized configuration system that supports:
- Default values for all settings
- Loading from TOML configuration files
- Environment variable overrides
- CLI argument overrides
- Validation of configuration values

Configuration priority (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (RECIPE_LENS_*)
3. Project config file (.recipe-lens.toml)
4. User config file (~/.config/recipe-lens/config.toml)
5. Default values

Example:
    >>> config = LensConfig.load()
    >>> config.unit_system = "Metric"  # Override
    >>> config.save("~/.config/recipe-lens/config.toml")
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from .exceptions import ConfigurationError
from .models import UnitSystem

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
BOOLEAN_KEYS = ("follow_graph",)


@dataclass
class LensConfig:
    """Configuration for recipe extraction and display.

    Attributes:
        Extraction Settings:
            recipe_type: The @type value that marks a recipe entity
            follow_graph: Also search entities nested in an @graph list

        Display Settings:
            unit_system: Unit system ingredients are shown in ("US" or "Metric")

        Logging Settings:
            log_file: File that detailed logs are written to
            log_level: Standard logging level name

    Example:
        >>> config = LensConfig()
        >>> config.unit_system = "Metric"
        >>> config.follow_graph = False
    """

    # Extraction settings
    recipe_type: str = "Recipe"
    follow_graph: bool = True

    # Display settings
    unit_system: str = UnitSystem.US.value

    # Logging settings
    log_file: Path = field(default_factory=lambda: Path("recipe_lens.log"))
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If any configuration value is invalid
        """
        if not isinstance(self.recipe_type, str) or not self.recipe_type.strip():
            raise ConfigurationError(
                "recipe_type must be a non-empty string",
                recipe_type=repr(self.recipe_type),
            )

        if not isinstance(self.follow_graph, bool):
            raise ConfigurationError(
                "follow_graph must be a boolean",
                follow_graph=repr(self.follow_graph),
            )

        valid_unit_systems = [system.value for system in UnitSystem]
        if self.unit_system not in valid_unit_systems:
            raise ConfigurationError(
                f"Invalid unit system: {self.unit_system}",
                unit_system=str(self.unit_system),
                valid_unit_systems=", ".join(valid_unit_systems),
            )

        if str(self.log_level).upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                log_level=str(self.log_level),
                valid_log_levels=", ".join(VALID_LOG_LEVELS),
            )
        self.log_level = str(self.log_level).upper()

        # Ensure log_file is a Path (may receive str from config/env)
        if not isinstance(self.log_file, Path):  # type: ignore[reportUnnecessaryIsInstance]
            self.log_file = Path(self.log_file)

    @property
    def units(self) -> UnitSystem:
        """The configured unit system as an enum member."""
        return UnitSystem(self.unit_system)

    @property
    def logging_level(self) -> int:
        """The configured log level as a ``logging`` constant."""
        return logging.getLevelName(self.log_level)

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        load_user_config: bool = True,
        load_env: bool = True,
    ) -> "LensConfig":
        """Load configuration from file(s) and environment variables.

        Configuration is loaded in this order (later overrides earlier):
        1. Default values
        2. User config file (~/.config/recipe-lens/config.toml)
        3. Project config file (.recipe-lens.toml or specified path)
        4. Environment variables (RECIPE_LENS_*)

        Args:
            config_path: Path to project config file (optional)
            load_user_config: Whether to load user config file
            load_env: Whether to load environment variables

        Returns:
            Loaded and validated configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_dict: dict[str, Any] = {}

        if load_user_config:
            user_config_path = Path.home() / ".config" / "recipe-lens" / "config.toml"
            if user_config_path.exists():
                config_dict.update(cls._load_toml(user_config_path))

        if config_path:
            project_path = Path(config_path)
            if project_path.exists():
                config_dict.update(cls._load_toml(project_path))
        else:
            default_path = Path(".recipe-lens.toml")
            if default_path.exists():
                config_dict.update(cls._load_toml(default_path))

        if load_env:
            config_dict.update(cls._load_env())

        unknown = set(config_dict) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(
                "Unknown configuration keys",
                keys=", ".join(sorted(unknown)),
            )

        return cls(**config_dict)

    @staticmethod
    def _load_toml(path: Path) -> dict[str, Any]:
        """Load configuration from TOML file.

        Args:
            path: Path to TOML file

        Returns:
            Dictionary of configuration values

        Raises:
            ConfigurationError: If TOML file is invalid
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            # Extract recipe-lens section if present
            if "recipe-lens" in data:
                return data["recipe-lens"]
            return data

        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {path}",
                path=str(path),
                error=str(e),
            ) from e

    @staticmethod
    def _load_env() -> dict[str, Any]:
        """Load configuration from environment variables.

        Environment variables should be prefixed with RECIPE_LENS_ and use
        uppercase snake_case. For example:
        - RECIPE_LENS_UNIT_SYSTEM=Metric
        - RECIPE_LENS_FOLLOW_GRAPH=false
        - RECIPE_LENS_LOG_LEVEL=DEBUG

        Returns:
            Dictionary of configuration values from environment
        """
        config: dict[str, Any] = {}
        prefix = "RECIPE_LENS_"

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue

            config_key = key[len(prefix) :].lower()

            # Type conversion; every other setting is a string
            if config_key in BOOLEAN_KEYS and value.lower() in ("true", "1", "yes"):
                config[config_key] = True
            elif config_key in BOOLEAN_KEYS and value.lower() in ("false", "0", "no"):
                config[config_key] = False
            else:
                config[config_key] = value

        return config

    def save(self, path: str | Path) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save configuration file

        Raises:
            ConfigurationError: If save fails
        """
        path = Path(path).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                tomli_w.dump(self.to_dict(), f)
        except (OSError, TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to save configuration to {path}",
                path=str(path),
                error=str(e),
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration
        """
        result: dict[str, Any] = {}
        for key, value in self.__dict__.items():
            if isinstance(value, Path):
                result[key] = str(value)
            else:
                result[key] = value
        return result

    def update(self, **kwargs: Any) -> None:
        """Update configuration values.

        Args:
            **kwargs: Configuration values to update

        Raises:
            ConfigurationError: If updated values are invalid
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ConfigurationError(
                    f"Unknown configuration key: {key}",
                    key=key,
                    valid_keys=", ".join(self.__dataclass_fields__.keys()),
                )

        # Revalidate after update
        self._validate()
