"""Tests for configuration manager."""

import tempfile
from pathlib import Path

import pytest  # type: ignore[import-not-found]
import yaml  # type: ignore[import-untyped]

from tempo.core.config import ConfigManager


@pytest.fixture
def temp_config_path():  # type: ignore[no-untyped-def]
    """Create a temporary config file path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "config.yml"


class TestConfigManager:
    """Test ConfigManager."""

    def test_initialization_creates_default_config(self, temp_config_path: Path) -> None:
        """Test that initialization creates default configuration."""
        assert not temp_config_path.exists()

        config = ConfigManager(temp_config_path)

        assert temp_config_path.exists()
        assert config.get("version") == "1.0"
        assert config.get("general.data_dir") == "~/.tempo/data"
        assert config.get("display.time_format") == "%H:%M"
        assert config.get("advanced.log_level") == "WARNING"

    def test_merge_with_defaults(self, temp_config_path: Path) -> None:
        """Test that a partial config is merged with defaults."""
        with open(temp_config_path, "w") as f:
            yaml.dump({"version": "1.0", "general": {"data_dir": "/custom/path"}}, f)

        config = ConfigManager(temp_config_path)

        assert config.get("general.data_dir") == "/custom/path"
        assert config.data_dir == Path("/custom/path")
        assert config.get("display.time_format") == "%H:%M"

    def test_get_missing_key_returns_default(self, temp_config_path: Path) -> None:
        config = ConfigManager(temp_config_path)

        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"
        assert config.get("general.data_dir.deeper", 1) == 1

    def test_set_persists(self, temp_config_path: Path) -> None:
        """Test that set values are saved to disk."""
        config = ConfigManager(temp_config_path)
        config.set("advanced.log_level", "DEBUG")

        reloaded = ConfigManager(temp_config_path)
        assert reloaded.get("advanced.log_level") == "DEBUG"

    def test_set_invalid_value_is_rejected(self, temp_config_path: Path) -> None:
        """Test that schema violations raise and leave the config unchanged."""
        config = ConfigManager(temp_config_path)

        with pytest.raises(ValueError, match="Invalid configuration"):
            config.set("advanced.log_level", "LOUD")

        assert config.get("advanced.log_level") == "WARNING"

    def test_invalid_file_is_backed_up(self, temp_config_path: Path) -> None:
        """Test that an invalid config file is moved aside and replaced."""
        with open(temp_config_path, "w") as f:
            yaml.dump({"version": "1.0", "display": {"color": "sometimes"}}, f)

        with pytest.raises(ValueError, match="Config validation failed"):
            ConfigManager(temp_config_path)

        assert temp_config_path.with_suffix(".yml.backup").exists()
        assert ConfigManager(temp_config_path).get("display.color") is True

    def test_reset(self, temp_config_path: Path) -> None:
        config = ConfigManager(temp_config_path)
        config.set("display.time_format", "%I:%M")
        config.reset()

        assert config.get("display.time_format") == "%H:%M"

    def test_to_dict_is_a_copy(self, temp_config_path: Path) -> None:
        config = ConfigManager(temp_config_path)
        data = config.to_dict()
        data["general"]["data_dir"] = "/elsewhere"

        assert config.get("general.data_dir") == "~/.tempo/data"

    def test_get_all_keys(self, temp_config_path: Path) -> None:
        """Test that keys are listed as dotted leaf paths."""
        config = ConfigManager(temp_config_path)
        keys = config.get_all_keys()

        assert "version" in keys
        assert "general.data_dir" in keys
        assert "display.color" in keys
        assert "advanced.log_level" in keys
        assert "general" not in keys
        assert config.get_all_keys("display") == [
            "display.time_format",
            "display.color",
        ]
