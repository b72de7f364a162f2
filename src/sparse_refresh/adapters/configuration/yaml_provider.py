"""YAML-backed configuration provider."""

import logging
from pathlib import Path

from sparse_refresh.config import DEFAULT_CONFIG_PATH, Settings, get_settings
from sparse_refresh.core import (
    ConfigProvider,
    ConfigurationUnavailable,
    EvaluationCriteria,
    RefreshIntensity,
)

logger = logging.getLogger(__name__)


class YamlConfigProvider(ConfigProvider):
    """Read options from a YAML file, re-reading it on every call.

    Nothing is cached between calls, so an operator can edit the file
    between runs (or between the criteria and intensity reads) and the
    next read picks the change up.
    """

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH) -> None:
        self.config_path = config_path

    def load_criteria(self) -> EvaluationCriteria:
        criteria = self._read().criteria()
        logger.debug("Loaded criteria from %s: %s", self.config_path, criteria)
        return criteria

    def load_refresh_intensity(self) -> RefreshIntensity:
        return self._read().refresh_intensity()

    def _read(self) -> Settings:
        try:
            return get_settings(self.config_path)
        except ConfigurationUnavailable:
            raise
        except Exception as e:
            raise ConfigurationUnavailable(f"Could not load {self.config_path}: {e}") from e
