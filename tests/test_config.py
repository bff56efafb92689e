"""Tests for configuration management."""

from pathlib import Path

import pytest

from lens_catalog.config import ConfigManager


@pytest.fixture
def config_file(tmp_path):
    """Create a temporary config file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text("""
[data]
storage_dir = "/custom/data"
backend = "sqlite"

[catalog]
directory = "/custom/catalog"
lens_file = "lenses.json"

[defaults]
format = "FF"
focal_category = "wide"
""")
    return config_path


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_load_config_file(self, config_file):
        """Load data configuration from file."""
        manager = ConfigManager(config_path=config_file)

        assert manager.data.storage_dir == Path("/custom/data")
        assert manager.data.backend == "sqlite"

    def test_catalog_config(self, config_file):
        """Load catalog locations, keeping the default camera file."""
        manager = ConfigManager(config_path=config_file)

        assert manager.catalog.directory == Path("/custom/catalog")
        assert manager.catalog.lens_file == "lenses.json"
        assert manager.catalog.camera_file == "CAMERADATA.json"

    def test_defaults_config(self, config_file):
        """Load list filter defaults."""
        manager = ConfigManager(config_path=config_file)

        assert manager.defaults.format == "FF"
        assert manager.defaults.focal_category == "wide"

    def test_catalog_dir_falls_back_to_storage_dir(self, tmp_path):
        """Without [catalog] directory, the catalog lives with the data."""
        config_path = tmp_path / "config.toml"
        config_path.write_text('[data]\nstorage_dir = "/custom/data"\n')
        manager = ConfigManager(config_path=config_path)

        assert manager.catalog.directory == Path("/custom/data")
        assert manager.data.backend == "json"

    def test_missing_file_uses_defaults(self, tmp_path):
        """Use defaults when config file doesn't exist."""
        manager = ConfigManager(config_path=tmp_path / "missing.toml")

        assert manager.data.storage_dir == Path.home() / "lens-catalog" / "data"
        assert manager.catalog.lens_file == "LENSDATA.json"
        assert manager.defaults.format == ""
        assert manager.defaults.focal_category == "all"

    def test_get_dot_path(self, config_file):
        """Get values by dot-separated path."""
        manager = ConfigManager(config_path=config_file)

        assert manager.get("defaults.format") == "FF"
        assert manager.get("catalog.lens_file") == "lenses.json"
        assert manager.get("nothing.here", "fallback") == "fallback"
