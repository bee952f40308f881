"""
Configuration loader for the Certificate Review service.

Settings live in certreview_config.yaml at the project root. Two
environment variables take precedence:

- CERTREVIEW_CONFIG: alternative path of the YAML file
- CERTREVIEW_DATABASE_URL: database URL, overriding database.url
"""
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "certreview_config.yaml"

CONFIG_PATH_ENV = "CERTREVIEW_CONFIG"
DATABASE_URL_ENV = "CERTREVIEW_DATABASE_URL"

DEFAULT_DATABASE_URL = "sqlite:///./certreview.db"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConfigurationError(Exception):
    """The configuration file is missing or cannot be used."""
    pass


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a YAML mapping at the top level")
    return data


class ReviewConfig:
    """
    Typed view over certreview_config.yaml.

    Missing keys fall back to built-in defaults, so a file holding only
    `version` is still a usable configuration. Obtain the shared instance
    through get_config().
    """

    def __init__(self, config_path: Optional[Path] = None):
        env_path = os.environ.get(CONFIG_PATH_ENV)
        self._path = config_path or (Path(env_path) if env_path else DEFAULT_CONFIG_PATH)
        self._data = _read_yaml(self._path)

    def _section(self, name: str) -> dict:
        return self._data.get(name) or {}

    def get(self, key: str, default: Any = None) -> Any:
        """Raw top-level value."""
        return self._data.get(key, default)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def version(self) -> str:
        return str(self._data.get("version", "unknown"))

    # Database

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL; CERTREVIEW_DATABASE_URL wins over the file."""
        return (
            os.environ.get(DATABASE_URL_ENV)
            or self._section("database").get("url")
            or DEFAULT_DATABASE_URL
        )

    # Analysis records

    @property
    def default_document_code(self) -> str:
        return self._section("records").get("default_document_code", "RAC-001")

    @property
    def default_document_version(self) -> str:
        return str(self._section("records").get("default_version", "2.1"))

    # Evaluation

    @property
    def decimal_places(self) -> int:
        """Precision calibration errors are rounded to before the decision rule."""
        return int(self._section("evaluation").get("decimal_places", 4))

    # API

    @property
    def cors_origins(self) -> list[str]:
        return list(self._section("api").get("cors_origins", ["*"]))

    # Logging

    @property
    def log_level(self) -> str:
        return str(self._section("logging").get("level", "INFO")).upper()

    @property
    def log_format(self) -> str:
        return self._section("logging").get("format", DEFAULT_LOG_FORMAT)


@lru_cache(maxsize=1)
def get_config(config_path: Optional[str] = None) -> ReviewConfig:
    """
    Shared configuration instance.

    Args:
        config_path: Explicit YAML path; only honoured on the first call
    """
    return ReviewConfig(Path(config_path) if config_path else None)


def reload_config() -> ReviewConfig:
    """Drop the cached instance and read the file again."""
    get_config.cache_clear()
    return get_config()


def configure_logging(config: Optional[ReviewConfig] = None) -> None:
    """Apply the configured level and format to the root logger."""
    config = config or get_config()
    logging.basicConfig(level=config.log_level, format=config.log_format)
