"""
Volume Thresholds - Minimum consumption considered real usage, per device
type and time unit.
"""

from pydantic import BaseModel, Field, PositiveFloat

from waterinsights.core.domain.enums import DeviceType, TimeUnit

# Litres
DEFAULT_VOLUME_THRESHOLDS: dict[DeviceType, dict[TimeUnit, float]] = {
    DeviceType.AMPHIRO: {
        TimeUnit.HOUR: 1.0,
        TimeUnit.DAY: 5.0,
        TimeUnit.WEEK: 35.0,
        TimeUnit.MONTH: 150.0,
        TimeUnit.YEAR: 1800.0,
    },
    DeviceType.METER: {
        TimeUnit.HOUR: 5.0,
        TimeUnit.DAY: 20.0,
        TimeUnit.WEEK: 140.0,
        TimeUnit.MONTH: 600.0,
        TimeUnit.YEAR: 7200.0,
    },
}


def _defaults() -> dict[DeviceType, dict[TimeUnit, float]]:
    return {device: dict(units) for device, units in DEFAULT_VOLUME_THRESHOLDS.items()}


class VolumeThresholds(BaseModel):
    """Thresholds table; every (device type, unit) pair has a value."""

    volume_thresholds: dict[DeviceType, dict[TimeUnit, PositiveFloat]] = Field(
        default_factory=_defaults
    )

    def get(self, device_type: DeviceType, unit: TimeUnit) -> float:
        return self.volume_thresholds[DeviceType(device_type)][TimeUnit(unit)]

    @classmethod
    def with_overrides(cls, overrides: dict | None) -> "VolumeThresholds":
        """Overlay a partial `{device: {unit: value}}` mapping on the defaults."""
        merged = {
            device.value: {unit.value: value for unit, value in units.items()}
            for device, units in DEFAULT_VOLUME_THRESHOLDS.items()
        }
        for device, units in (overrides or {}).items():
            merged.setdefault(str(device).upper(), {}).update(
                {str(unit).upper(): value for unit, value in (units or {}).items()}
            )
        return cls(volume_thresholds=merged)
