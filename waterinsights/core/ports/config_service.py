"""
ConfigService Port - Interface for consumption threshold configuration.
"""

from abc import ABC, abstractmethod

from waterinsights.core.domain.enums import DeviceType, TimeUnit


class ConfigService(ABC):
    """
    Abstract interface for per-device-type configuration lookups.

    Implementations:
    - YamlThresholdStore: File-based thresholds with built-in defaults
    """

    @abstractmethod
    def volume_threshold(self, device_type: DeviceType, unit: TimeUnit) -> float:
        """
        Minimum volume below which consumption is not considered real usage.

        Args:
            device_type: Device the consumption was measured by
            unit: Time unit the volume is aggregated over

        Returns:
            Threshold volume in litres
        """
        ...
