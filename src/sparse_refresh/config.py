"""Configuration management."""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from sparse_refresh.core import ConfigurationUnavailable, EvaluationCriteria, RefreshIntensity
from sparse_refresh.core.heuristics import split_bad_names

DEFAULT_CONFIG_PATH = Path("config.yaml")


@dataclass
class ServerConfig:
    """Jellyfin server settings."""
    url: str = "http://localhost:8096"
    timeout: float = 30.0
    page_size: int = 200
    max_retries: int = 3
    initial_retry_delay: float = 2.0


@dataclass
class RefreshConfig:
    """Sparse detection and refresh options."""
    max_days: int = -1
    refresh_cooldown_minutes: int = 60
    minimum_provider_ids: int = 1
    missing_overview: bool = True
    missing_name: bool = True
    name_is_date: bool = True
    overview_bad_name: bool = False
    bad_names: str = ""
    missing_image: int = 1
    replace_all_images: bool = False
    replace_all_metadata: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"


@dataclass
class Settings:
    """Application settings."""

    # API key (from environment only)
    api_key: str = ""

    # Config sections
    server: ServerConfig = field(default_factory=ServerConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def server_url(self) -> str:
        return self.server.url.rstrip("/")

    @property
    def log_level(self) -> str:
        return self.logging.level

    def criteria(self) -> EvaluationCriteria:
        """Snapshot of the sparse-detection options."""
        options = self.refresh
        return EvaluationCriteria(
            max_days=options.max_days,
            refresh_cooldown_minutes=options.refresh_cooldown_minutes,
            minimum_provider_ids=options.minimum_provider_ids,
            check_missing_overview=options.missing_overview,
            check_missing_name=options.missing_name,
            check_name_is_date=options.name_is_date,
            check_overview_bad_name=options.overview_bad_name,
            bad_names=split_bad_names(options.bad_names),
            missing_image_threshold=options.missing_image,
        )

    def refresh_intensity(self) -> RefreshIntensity:
        return RefreshIntensity(
            replace_all_images=self.refresh.replace_all_images,
            replace_all_metadata=self.refresh.replace_all_metadata,
        )


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationUnavailable(
            f"Could not read {config_path}: {e}",
            suggestion="Check that the file exists and is valid YAML",
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationUnavailable(f"{config_path} must contain a mapping at the top level")
    return data


def _apply_section(section: Any, values: Any, name: str) -> None:
    """Copy YAML values onto a settings section, checking types."""
    if values is None:
        return
    if not isinstance(values, dict):
        raise ConfigurationUnavailable(f"Section '{name}' must be a mapping")

    known = {f.name for f in fields(section)}
    for key, value in values.items():
        if key not in known:
            raise ConfigurationUnavailable(f"Unknown option '{name}.{key}'")

        expected = type(getattr(section, key))
        if expected is float and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        elif expected is str and value is None:
            value = ""
        if (expected is int and isinstance(value, bool)) or not isinstance(value, expected):
            raise ConfigurationUnavailable(
                f"Option '{name}.{key}' must be {expected.__name__}, got {type(value).__name__}"
            )
        setattr(section, key, value)


def get_settings(config_path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Get application settings from YAML config and environment."""
    # Load YAML config
    config = load_config(config_path)

    # Build settings
    settings = Settings(api_key=os.getenv("JELLYFIN_API_KEY", ""))

    # Apply YAML config
    if "server" in config:
        _apply_section(settings.server, config["server"], "server")

    if "refresh" in config:
        _apply_section(settings.refresh, config["refresh"], "refresh")

    if "logging" in config:
        _apply_section(settings.logging, config["logging"], "logging")

    if settings.refresh.max_days < -1:
        raise ConfigurationUnavailable("Option 'refresh.max_days' must be -1 or a number of days")
    for option in ("page_size", "max_retries"):
        if getattr(settings.server, option) < 1:
            raise ConfigurationUnavailable(f"Option 'server.{option}' must be at least 1")

    # Environment overrides
    server_url: Optional[str] = os.getenv("JELLYFIN_URL")
    if server_url:
        settings.server.url = server_url

    return settings
