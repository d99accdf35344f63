"""
Tests for ConfigManager.
"""

import json

import pytest
import yaml
from pydantic import ValidationError

from localbase.core.config_manager import (
    ConfigManager,
    LocalBaseConfig,
    DatabaseConfig,
    LogLevel,
)


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Keep LOCALBASE_* variables from the host out of the tests."""
    for name in ("LOCALBASE_LOG_LEVEL", "LOCALBASE_LOG_FORMAT", "LOCALBASE_LOG_FILE", "LOCALBASE_SEED_FILE"):
        monkeypatch.delenv(name, raising=False)


class TestConfigManager:
    """Test suite for ConfigManager."""

    def test_load_defaults(self):
        """Test loading default configuration."""
        config = ConfigManager().load()

        assert config.version == "0.1.0"
        assert config.logging.level == LogLevel.INFO
        assert config.logging.format == "json"
        assert config.database.seed_file is None
        assert config.database.tables == []

    def test_load_from_yaml_file(self, tmp_path):
        """Test loading configuration from YAML file."""
        config_file = tmp_path / "localbase.yaml"
        config_file.write_text(yaml.dump({
            "version": "1.0.0",
            "logging": {"level": "DEBUG", "format": "text"},
            "database": {"seed_file": "seed.yaml", "tables": ["users"]},
        }))

        config = ConfigManager().load(config_file=str(config_file))

        assert config.version == "1.0.0"
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.format == "text"
        assert config.database.seed_file == "seed.yaml"
        assert config.database.tables == ["users"]

    def test_load_from_json_file(self, tmp_path):
        """Test loading configuration from JSON file."""
        config_file = tmp_path / "localbase.json"
        config_file.write_text(json.dumps({"version": "2.0.0", "database": {"tables": ["a", "b"]}}))

        config = ConfigManager().load(config_file=str(config_file))

        assert config.version == "2.0.0"
        assert config.database.tables == ["a", "b"]

    def test_load_empty_yaml_file(self, tmp_path):
        """An empty file yields defaults."""
        config_file = tmp_path / "localbase.yml"
        config_file.write_text("")

        assert ConfigManager().load(config_file=str(config_file)).version == "0.1.0"

    def test_load_missing_file(self):
        """Test loading a file that doesn't exist."""
        with pytest.raises(FileNotFoundError):
            ConfigManager().load(config_file="/nonexistent/localbase.yaml")

    def test_load_unsupported_format(self, tmp_path):
        """Test loading a file with an unsupported suffix."""
        config_file = tmp_path / "localbase.toml"
        config_file.write_text("version = '1.0.0'")

        with pytest.raises(ValueError, match="Unsupported file format"):
            ConfigManager().load(config_file=str(config_file))

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Environment variables take precedence over the file."""
        config_file = tmp_path / "localbase.yaml"
        config_file.write_text(yaml.dump({"logging": {"level": "INFO"}}))
        monkeypatch.setenv("LOCALBASE_LOG_LEVEL", "warning")
        monkeypatch.setenv("LOCALBASE_LOG_FORMAT", "TEXT")
        monkeypatch.setenv("LOCALBASE_LOG_FILE", "/tmp/localbase.log")
        monkeypatch.setenv("LOCALBASE_SEED_FILE", "fixtures/seed.json")

        config = ConfigManager().load(config_file=str(config_file))

        assert config.logging.level == LogLevel.WARNING
        assert config.logging.format == "text"
        assert config.logging.file == "/tmp/localbase.log"
        assert config.database.seed_file == "fixtures/seed.json"

    def test_overrides_take_precedence(self, monkeypatch):
        """Explicit overrides beat environment variables."""
        monkeypatch.setenv("LOCALBASE_LOG_LEVEL", "WARNING")

        config = ConfigManager().load(overrides={"logging": {"level": "ERROR"}})

        assert config.logging.level == LogLevel.ERROR

    def test_deep_merge_keeps_sibling_keys(self, tmp_path):
        """Overriding one nested key leaves its siblings intact."""
        config_file = tmp_path / "localbase.yaml"
        config_file.write_text(yaml.dump({"database": {"seed_file": "seed.yaml", "tables": ["users"]}}))

        config = ConfigManager().load(
            config_file=str(config_file),
            overrides={"database": {"tables": ["posts"]}}
        )

        assert config.database.seed_file == "seed.yaml"
        assert config.database.tables == ["posts"]

    def test_invalid_log_level(self):
        """Test that an unknown log level fails validation."""
        with pytest.raises(ValidationError):
            ConfigManager().load(overrides={"logging": {"level": "LOUD"}})

    def test_get_config_before_load(self):
        """Test accessing config before it is loaded."""
        with pytest.raises(RuntimeError, match="Configuration not loaded"):
            ConfigManager().get_config()

    def test_get_config_after_load(self):
        manager = ConfigManager()
        config = manager.load()

        assert manager.get_config() is config

    def test_reload(self, tmp_path):
        """Test reloading picks up file changes."""
        config_file = tmp_path / "localbase.yaml"
        config_file.write_text(yaml.dump({"version": "1.0.0"}))
        manager = ConfigManager()
        manager.load(config_file=str(config_file))

        config_file.write_text(yaml.dump({"version": "1.1.0"}))

        assert manager.reload().version == "1.1.0"


class TestLocalBaseConfig:
    """Test suite for the configuration schema."""

    @pytest.mark.parametrize("version", ["1.0", "1.0.0.0", "a.b.c", "1.x.0"])
    def test_invalid_version(self, version):
        """Test version format validation."""
        with pytest.raises(ValidationError):
            LocalBaseConfig(version=version)

    def test_database_config_defaults(self):
        config = DatabaseConfig()

        assert config.seed_file is None
        assert config.tables == []
