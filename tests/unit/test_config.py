"""Unit tests for recipe_lens.config module.

Tests LensConfig validation, loading, and serialization.
"""

import logging
import tomllib
from pathlib import Path

import pytest

from recipe_lens.config import LensConfig
from recipe_lens.exceptions import ConfigurationError
from recipe_lens.models import UnitSystem


class TestLensConfigDefaults:
    """Tests for LensConfig default values."""

    def test_default_recipe_type(self) -> None:
        """Default recipe marker is Recipe."""
        assert LensConfig().recipe_type == "Recipe"

    def test_default_follow_graph(self) -> None:
        """@graph is followed by default."""
        assert LensConfig().follow_graph is True

    def test_default_unit_system(self) -> None:
        """Default unit system is US."""
        config = LensConfig()
        assert config.unit_system == "US"
        assert config.units is UnitSystem.US

    def test_default_log_file_is_path(self) -> None:
        """Default log_file is a Path object."""
        config = LensConfig()
        assert isinstance(config.log_file, Path)
        assert config.log_file == Path("recipe_lens.log")

    def test_default_logging_level(self) -> None:
        """Default log level is INFO."""
        assert LensConfig().logging_level == logging.INFO


class TestLensConfigValidation:
    """Tests for LensConfig validation logic."""

    def test_valid_unit_systems(self) -> None:
        """Both unit systems are accepted."""
        assert LensConfig(unit_system="Metric").units is UnitSystem.METRIC
        assert LensConfig(unit_system="US").units is UnitSystem.US

    def test_invalid_unit_system_raises(self) -> None:
        """Unknown unit systems raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Invalid unit system"):
            LensConfig(unit_system="imperial")

    def test_empty_recipe_type_raises(self) -> None:
        """An empty recipe marker is rejected."""
        with pytest.raises(ConfigurationError, match="recipe_type"):
            LensConfig(recipe_type="  ")

    def test_follow_graph_must_be_bool(self) -> None:
        """follow_graph must be a real boolean."""
        with pytest.raises(ConfigurationError, match="follow_graph"):
            LensConfig(follow_graph="yes")  # type: ignore[arg-type]

    def test_log_level_normalized(self) -> None:
        """Log levels are case-insensitive and stored uppercase."""
        config = LensConfig(log_level="debug")
        assert config.log_level == "DEBUG"
        assert config.logging_level == logging.DEBUG

    def test_invalid_log_level_raises(self) -> None:
        """Unknown log levels are rejected."""
        with pytest.raises(ConfigurationError, match="Invalid log level"):
            LensConfig(log_level="LOUD")

    def test_log_file_string_converted(self) -> None:
        """A string log_file becomes a Path."""
        assert LensConfig(log_file="logs/run.log").log_file == Path("logs/run.log")  # type: ignore[arg-type]


class TestLensConfigLoad:
    """Tests for LensConfig.load."""

    def test_defaults_without_sources(self) -> None:
        """Loading with no files or env gives defaults."""
        config = LensConfig.load()
        assert config.to_dict() == LensConfig().to_dict()

    def test_project_file(self, tmp_path: Path) -> None:
        """Values are read from an explicit TOML file."""
        path = tmp_path / "custom.toml"
        path.write_text('unit_system = "Metric"\nfollow_graph = false\n')
        config = LensConfig.load(path)
        assert config.unit_system == "Metric"
        assert config.follow_graph is False

    def test_section_table(self, tmp_path: Path) -> None:
        """A [recipe-lens] table is unwrapped."""
        path = tmp_path / "pyproject-like.toml"
        path.write_text('[recipe-lens]\nrecipe_type = "HowTo"\n')
        assert LensConfig.load(path).recipe_type == "HowTo"

    def test_default_project_file(self, tmp_path: Path) -> None:
        """.recipe-lens.toml in the working directory is picked up."""
        (tmp_path / ".recipe-lens.toml").write_text('log_level = "WARNING"\n')
        assert LensConfig.load().log_level == "WARNING"

    def test_user_file(self, tmp_path: Path) -> None:
        """The user config file is read from the home directory."""
        user_dir = tmp_path / "home" / ".config" / "recipe-lens"
        user_dir.mkdir(parents=True)
        (user_dir / "config.toml").write_text('unit_system = "Metric"\n')
        assert LensConfig.load().unit_system == "Metric"
        assert LensConfig.load(load_user_config=False).unit_system == "US"

    def test_env_overrides_file(self, tmp_path: Path, mock_env: dict[str, str]) -> None:
        """Environment variables override file values."""
        path = tmp_path / "custom.toml"
        path.write_text('unit_system = "US"\n')
        mock_env["UNIT_SYSTEM"] = "Metric"
        mock_env["FOLLOW_GRAPH"] = "false"
        config = LensConfig.load(path)
        assert config.unit_system == "Metric"
        assert config.follow_graph is False

    def test_env_numeric_strings_kept(self, mock_env: dict[str, str]) -> None:
        """Numeric-looking values stay strings outside boolean settings."""
        mock_env["LOG_FILE"] = "2024"
        mock_env["RECIPE_TYPE"] = "1.5"
        config = LensConfig.load()
        assert config.log_file == Path("2024")
        assert config.recipe_type == "1.5"

    def test_env_ignored_when_disabled(self, mock_env: dict[str, str]) -> None:
        """load_env=False skips environment variables."""
        mock_env["UNIT_SYSTEM"] = "Metric"
        assert LensConfig.load(load_env=False).unit_system == "US"

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        """Malformed TOML raises ConfigurationError."""
        path = tmp_path / "bad.toml"
        path.write_text("unit_system = \n")
        with pytest.raises(ConfigurationError, match="Failed to load configuration"):
            LensConfig.load(path)

    def test_unknown_key_raises(self, tmp_path: Path) -> None:
        """Unknown keys raise ConfigurationError."""
        path = tmp_path / "custom.toml"
        path.write_text("model = 1\n")
        with pytest.raises(ConfigurationError, match="Unknown configuration keys"):
            LensConfig.load(path)


class TestLensConfigSerialization:
    """Tests for save, to_dict and update."""

    def test_to_dict_stringifies_paths(self) -> None:
        """Paths are converted to strings."""
        data = LensConfig().to_dict()
        assert data["log_file"] == "recipe_lens.log"
        assert data["unit_system"] == "US"

    def test_save_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back with the same values."""
        path = tmp_path / "nested" / "config.toml"
        LensConfig(unit_system="Metric", follow_graph=False).save(path)
        with open(path, "rb") as f:
            assert tomllib.load(f)["unit_system"] == "Metric"
        loaded = LensConfig.load(path, load_user_config=False, load_env=False)
        assert loaded.unit_system == "Metric"
        assert loaded.follow_graph is False

    def test_update(self) -> None:
        """update sets known keys."""
        config = LensConfig()
        config.update(unit_system="Metric")
        assert config.units is UnitSystem.METRIC

    def test_update_unknown_key(self) -> None:
        """update rejects unknown keys."""
        with pytest.raises(ConfigurationError, match="Unknown configuration key"):
            LensConfig().update(colour="red")

    def test_update_revalidates(self) -> None:
        """update validates the new values."""
        with pytest.raises(ConfigurationError):
            LensConfig().update(unit_system="imperial")
