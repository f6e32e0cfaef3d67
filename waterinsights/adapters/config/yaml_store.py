"""
YAML Threshold Store Adapter - File-based volume threshold configuration.

Loads threshold overrides from a YAML file of the form:

    volume_thresholds:
      METER:
        DAY: 25.0
      AMPHIRO:
        DAY: 4.0

Pairs not present in the file keep their built-in defaults.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from waterinsights.core.domain.enums import DeviceType, TimeUnit
from waterinsights.core.domain.thresholds import VolumeThresholds
from waterinsights.core.ports.config_service import ConfigService

logger = logging.getLogger(__name__)


class YamlThresholdStore(ConfigService):
    """
    Config service that reads volume thresholds from a YAML file.
    """

    def __init__(self, config_path: str | Path):
        self.config_path = Path(config_path)
        self._thresholds = VolumeThresholds()
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self._load_thresholds()
            self._loaded = True

    def _load_thresholds(self) -> None:
        if not self.config_path.exists():
            logger.info(f"Thresholds file '{self.config_path}' not found, using defaults")
            return

        with open(self.config_path) as f:
            data = yaml.safe_load(f) or {}

        try:
            self._thresholds = VolumeThresholds.with_overrides(data.get("volume_thresholds"))
        except ValidationError as e:
            raise RuntimeError(f"Invalid thresholds in {self.config_path}: {e}") from e

    def volume_threshold(self, device_type: DeviceType, unit: TimeUnit) -> float:
        self._ensure_loaded()
        return self._thresholds.get(device_type, unit)

    def save(self, thresholds: VolumeThresholds) -> None:
        """Replace the thresholds and persist them to the file."""
        self._thresholds = thresholds
        self._loaded = True

        with open(self.config_path, "w") as f:
            yaml.dump(thresholds.model_dump(mode="json"), f, default_flow_style=False)
