"""Configuration management for Lens Catalog."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .catalog_loader import DEFAULT_CAMERA_FILE, DEFAULT_LENS_FILE


@dataclass
class DataConfig:
    """User state storage configuration."""

    storage_dir: Path
    backend: str = "json"


@dataclass
class CatalogConfig:
    """Catalog file locations."""

    directory: Path
    lens_file: str = DEFAULT_LENS_FILE
    camera_file: str = DEFAULT_CAMERA_FILE


@dataclass
class DefaultsConfig:
    """Default filter values for the lens list."""

    format: str = ""
    focal_category: str = "all"


@dataclass
class Config:
    """Complete application configuration."""

    data: DataConfig
    catalog: CatalogConfig
    defaults: DefaultsConfig


class ConfigManager:
    """Manages application configuration from TOML files."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional explicit path to config file.
                        If not provided, searches standard locations.
        """
        self.config_path = config_path or self._find_config()
        self._config = self._load_config()

    @property
    def data(self) -> DataConfig:
        """Get data configuration."""
        return self._config.data

    @property
    def catalog(self) -> CatalogConfig:
        """Get catalog configuration."""
        return self._config.catalog

    @property
    def defaults(self) -> DefaultsConfig:
        """Get defaults configuration."""
        return self._config.defaults

    def _find_config(self) -> Path:
        """Find config file in standard locations."""
        locations = [
            Path.cwd() / "config.toml",
            Path.home() / ".config" / "lens-catalog" / "config.toml",
            Path.home() / ".lens-catalog" / "config.toml",
        ]

        for loc in locations:
            if loc.exists():
                return loc

        return Path.home() / ".config" / "lens-catalog" / "config.toml"

    def _load_config(self) -> Config:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            return self._default_config()

        with open(self.config_path, "rb") as f:
            data = tomllib.load(f)

        data_section = data.get("data", {})
        catalog_section = data.get("catalog", {})
        defaults_section = data.get("defaults", {})

        storage_dir = Path(
            data_section.get("storage_dir", "~/lens-catalog/data")
        ).expanduser()
        catalog_dir = catalog_section.get("directory")

        return Config(
            data=DataConfig(
                storage_dir=storage_dir,
                backend=data_section.get("backend", "json"),
            ),
            catalog=CatalogConfig(
                directory=Path(catalog_dir).expanduser() if catalog_dir else storage_dir,
                lens_file=catalog_section.get("lens_file", DEFAULT_LENS_FILE),
                camera_file=catalog_section.get("camera_file", DEFAULT_CAMERA_FILE),
            ),
            defaults=DefaultsConfig(
                format=defaults_section.get("format", ""),
                focal_category=defaults_section.get("focal_category", "all"),
            ),
        )

    def _default_config(self) -> Config:
        """Return default configuration."""
        storage_dir = Path.home() / "lens-catalog" / "data"
        return Config(
            data=DataConfig(storage_dir=storage_dir),
            catalog=CatalogConfig(directory=storage_dir),
            defaults=DefaultsConfig(),
        )

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value by dot-notation path.

        Args:
            key_path: Dot-separated path like 'data.storage_dir'
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value: Any = self._config

        for key in keys:
            if hasattr(value, key):
                value = getattr(value, key)
            elif isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default
