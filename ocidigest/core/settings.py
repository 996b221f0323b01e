"""
Pydantic Settings for ocidigest configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from ..services.logging import get_logger
from .exceptions import ConfigFileError
from .models.config import HashConfig, LoggingConfig

CONFIG_DIR_NAME = ".ocidigest"
CONFIG_FILE_NAME = "config.toml"


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find .ocidigest/config.toml by walking up from start_dir (or cwd).

    A pyproject.toml with a [tool.ocidigest] section also counts.

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            try:
                with open(pyproject, "rb") as f:
                    data = tomllib.load(f)
                if "tool" in data and "ocidigest" in data["tool"]:
                    return pyproject
            except tomllib.TOMLDecodeError as e:
                get_logger().debug("Failed to parse pyproject.toml at %s: %s", pyproject, e)
            except OSError as e:
                get_logger().debug("Failed to read pyproject.toml at %s: %s", pyproject, e)

    return None


class TomlConfigSource(PydanticBaseSettingsSource):
    """Settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None
        self.config_file: str | None = None
        self.config_error: str | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        self._data = {}

        path = self._config_path
        if path is None:
            path = find_config_file(self._start_dir)

        if path is None:
            return self._data

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if path.name == "pyproject.toml":
                data = data.get("tool", {}).get("ocidigest", {})

            self._data = data
            self.config_file = str(path)

        except tomllib.TOMLDecodeError as e:
            get_logger().warning("Failed to parse config file %s: %s", path, e)
            self.config_error = f"Failed to parse config file: {e}"
        except OSError as e:
            get_logger().warning("Failed to read config file %s: %s", path, e)
            self.config_error = f"Failed to read config file: {e}"

        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        return data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class DigestSettings(BaseSettings):
    """ocidigest settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (OCIDIGEST_<section>__<field>)
    3. TOML config file (.ocidigest/config.toml or pyproject.toml [tool.ocidigest])
    4. Model defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="OCIDIGEST_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    hash: HashConfig = Field(default_factory=HashConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    _config_file: str | None = None
    _config_error: str | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        The TOML source is built by load_settings() and handed over through
        a module-level variable, since this hook cannot take extra arguments.
        """
        toml_source = _current_toml_source or TomlConfigSource(settings_cls)
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    @property
    def config_file(self) -> str | None:
        """Path of the config file the settings were loaded from, if any."""
        return self._config_file

    @property
    def config_error(self) -> str | None:
        """Error message recorded when the config file could not be loaded."""
        return self._config_error

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain nested dict."""
        result: dict[str, Any] = {
            "hash": self.hash.model_dump(),
            "logging": self.logging.model_dump(),
        }
        if self._config_file:
            result["_config_file"] = self._config_file
        if self._config_error:
            result["_config_error"] = self._config_error
        return result


# Module-level handoff for settings_customise_sources, guarded by _load_lock
_current_toml_source: TomlConfigSource | None = None
_load_lock = threading.Lock()


def load_settings(
    config_path: Path | str | None = None, start_dir: str | None = None, **overrides: Any
) -> DigestSettings:
    """Load ocidigest settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)
        **overrides: Explicit section values, highest priority

    Returns:
        DigestSettings instance with all sources merged

    Raises:
        ConfigFileError: If an explicit config_path does not exist
    """
    global _current_toml_source

    path = Path(config_path) if config_path is not None else None
    if path is not None and not path.exists():
        raise ConfigFileError("Config file not found", file_path=str(path))

    with _load_lock:
        toml_source = TomlConfigSource(DigestSettings, config_path=path, start_dir=start_dir)
        _current_toml_source = toml_source
        try:
            settings = DigestSettings(**overrides)
        finally:
            _current_toml_source = None

    settings._config_file = toml_source.config_file
    settings._config_error = toml_source.config_error
    return settings
