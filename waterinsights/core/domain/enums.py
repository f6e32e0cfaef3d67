"""
Shared enumerations for devices, measurement fields and time handling.
"""

from datetime import date
from enum import Enum


class DeviceType(str, Enum):
    """Kind of device producing water consumption measurements."""

    AMPHIRO = "AMPHIRO"  # shower-head sensor
    METER = "METER"  # smart water meter


class MeasurementDataSource(str, Enum):
    """Measurement store a query is evaluated against."""

    AMPHIRO = "AMPHIRO"
    METER = "METER"

    @classmethod
    def from_device_type(cls, device_type: DeviceType) -> "MeasurementDataSource":
        return cls(DeviceType(device_type).value)

    @property
    def device_type(self) -> DeviceType:
        return DeviceType(self.value)


class TimeUnit(str, Enum):
    HOUR = "HOUR"
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


class TimeAggregation(str, Enum):
    """Granularity of the points returned for a window (ALL = one point)."""

    HOUR = "HOUR"
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"
    ALL = "ALL"


class DataField(str, Enum):
    VOLUME = "VOLUME"
    ENERGY = "ENERGY"
    DURATION = "DURATION"
    TEMPERATURE = "TEMPERATURE"
    FLOW = "FLOW"

    @property
    def column(self) -> str:
        """Column name used for this field in measurement frames."""
        return self.value.lower()


class Metric(str, Enum):
    SUM = "SUM"
    MIN = "MIN"
    MAX = "MAX"
    AVERAGE = "AVERAGE"
    COUNT = "COUNT"


class DayOfWeek(str, Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @classmethod
    def from_date(cls, day: date) -> "DayOfWeek":
        return list(cls)[day.weekday()]
