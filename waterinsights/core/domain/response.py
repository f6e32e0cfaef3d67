"""
Query Response Domain Models - Aggregated values returned by a DataService.
"""

from dataclasses import dataclass, field

from waterinsights.core.domain.enums import DataField, DeviceType, Metric


@dataclass(frozen=True)
class SeriesFacade:
    """Per-device-type view over a query response."""

    device_type: DeviceType
    values: dict[tuple[DataField, Metric], float | None] = field(default_factory=dict)

    def get(self, data_field: DataField, metric: Metric) -> float | None:
        """Aggregated value, or None when the window holds no data for it."""
        return self.values.get((data_field, metric))


@dataclass(frozen=True)
class QueryResponse:
    """Result of executing a DataQuery."""

    facades: dict[DeviceType, SeriesFacade] = field(default_factory=dict)

    def get_facade(self, device_type: DeviceType) -> SeriesFacade | None:
        return self.facades.get(device_type)

    @property
    def empty(self) -> bool:
        return not self.facades
