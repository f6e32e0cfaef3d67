"""
Data Query Domain Model - Declarative aggregation queries over measurement series.

A query names a principal, a measurement source, the metrics to aggregate and
a sliding time window. Queries are immutable. The builder is an immutable
value as well: every call returns a new builder, so a builder configured once
(timezone, user, source, metrics) can be reused to issue queries for many
different windows.
"""

import re
from datetime import datetime, timedelta, timezone, tzinfo
from uuid import UUID
from zoneinfo import ZoneInfo

import pandas as pd
from pydantic import BaseModel, ConfigDict

from waterinsights.core.domain.enums import (
    MeasurementDataSource,
    Metric,
    TimeAggregation,
    TimeUnit,
)


class InvalidQueryError(ValueError):
    """Raised when a query is built without a principal or a data source."""


_OFFSET_PATTERN = re.compile(r"([+-])(\d{2}):(\d{2})")


def shift(moment: datetime, amount: int, unit: TimeUnit) -> datetime:
    """
    Move a timestamp by a number of time units.

    Day and week arithmetic keeps the wall-clock time of timezone-aware
    timestamps; months and years use calendar offsets.
    """
    if unit == TimeUnit.HOUR:
        return moment + timedelta(hours=amount)
    if unit == TimeUnit.DAY:
        return moment + timedelta(days=amount)
    if unit == TimeUnit.WEEK:
        return moment + timedelta(weeks=amount)
    if unit == TimeUnit.MONTH:
        return (pd.Timestamp(moment) + pd.DateOffset(months=amount)).to_pydatetime()
    if unit == TimeUnit.YEAR:
        return (pd.Timestamp(moment) + pd.DateOffset(years=amount)).to_pydatetime()
    raise ValueError(f"Unsupported time unit: {unit}")


def start_of_day(moment: datetime) -> datetime:
    """Midnight of the day `moment` falls in, in its own timezone."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _zone_name(zone: str | tzinfo) -> str:
    if isinstance(zone, str):
        return zone
    key = getattr(zone, "key", None)
    if key:
        return key
    offset = zone.utcoffset(None)
    if offset is None:
        return str(zone)
    if not offset:
        return "UTC"
    # Fixed offsets are named "+HH:MM" / "-HH:MM"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(offset) // timedelta(minutes=1)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def zone_info(name: str) -> tzinfo:
    """Resolve a query timezone name, IANA or fixed offset, to a tzinfo."""
    if name == "UTC":
        return timezone.utc
    match = _OFFSET_PATTERN.fullmatch(name)
    if match is None:
        return ZoneInfo(name)
    sign, hours, minutes = match.groups()
    offset = timedelta(hours=int(hours), minutes=int(minutes))
    return timezone(-offset if sign == "-" else offset)


class UserFilter(BaseModel):
    """The principal whose measurements are aggregated."""

    model_config = ConfigDict(frozen=True)

    label: str
    key: UUID


class SlidingWindow(BaseModel):
    """
    `duration` units of time starting at `anchor`.

    A negative duration describes the window ending at `anchor` instead.
    """

    model_config = ConfigDict(frozen=True)

    anchor: datetime
    duration: int = 1
    unit: TimeUnit = TimeUnit.DAY
    aggregation: TimeAggregation = TimeAggregation.ALL

    def bounds(self) -> tuple[datetime, datetime]:
        """Half-open interval [start, end) covered by the window."""
        other = shift(self.anchor, self.duration, self.unit)
        if self.duration >= 0:
            return self.anchor, other
        return other, self.anchor

    @property
    def start(self) -> datetime:
        return self.bounds()[0]

    @property
    def end(self) -> datetime:
        return self.bounds()[1]


class DataQuery(BaseModel):
    """An immutable aggregation query, ready to hand to a DataService."""

    model_config = ConfigDict(frozen=True)

    timezone: str = "UTC"
    user: UserFilter
    source: MeasurementDataSource
    metrics: tuple[Metric, ...] = (Metric.SUM,)
    window: SlidingWindow

    @property
    def zone(self) -> tzinfo:
        return zone_info(self.timezone)

    def to_payload(self) -> dict:
        """JSON-ready representation, including the resolved window bounds."""
        payload = self.model_dump(mode="json")
        start, end = self.window.bounds()
        payload["window"]["start"] = start.isoformat()
        payload["window"]["end"] = end.isoformat()
        return payload


class DataQueryBuilder(BaseModel):
    """
    Immutable, chainable builder for DataQuery objects.

    Example:
        builder = DataQueryBuilder().timezone("Europe/Athens").user("user", key)
        builder = builder.source(MeasurementDataSource.METER).sum()
        today = builder.with_window(midnight)
        last_week = builder.with_window(midnight - timedelta(weeks=1))
    """

    model_config = ConfigDict(frozen=True)

    zone_name: str = "UTC"
    user_filter: UserFilter | None = None
    data_source: MeasurementDataSource | None = None
    metric_set: tuple[Metric, ...] = ()
    sliding_window: SlidingWindow | None = None

    def timezone(self, zone: str | tzinfo) -> "DataQueryBuilder":
        return self.model_copy(update={"zone_name": _zone_name(zone)})

    def user(self, label: str, key: UUID) -> "DataQueryBuilder":
        return self.model_copy(update={"user_filter": UserFilter(label=label, key=key)})

    def source(self, source: MeasurementDataSource) -> "DataQueryBuilder":
        return self.model_copy(update={"data_source": MeasurementDataSource(source)})

    def metric(self, metric: Metric) -> "DataQueryBuilder":
        if metric in self.metric_set:
            return self
        return self.model_copy(update={"metric_set": self.metric_set + (metric,)})

    def sum(self) -> "DataQueryBuilder":
        return self.metric(Metric.SUM)

    def min(self) -> "DataQueryBuilder":
        return self.metric(Metric.MIN)

    def max(self) -> "DataQueryBuilder":
        return self.metric(Metric.MAX)

    def average(self) -> "DataQueryBuilder":
        return self.metric(Metric.AVERAGE)

    def count(self) -> "DataQueryBuilder":
        return self.metric(Metric.COUNT)

    def sliding(
        self,
        anchor: datetime,
        duration: int = 1,
        unit: TimeUnit = TimeUnit.DAY,
        aggregation: TimeAggregation = TimeAggregation.ALL,
    ) -> "DataQueryBuilder":
        """Replace the window descriptor, keeping everything else."""
        window = SlidingWindow(
            anchor=anchor,
            duration=duration,
            unit=unit,
            aggregation=aggregation,
        )
        return self.model_copy(update={"sliding_window": window})

    def build(self) -> DataQuery:
        if self.user_filter is None:
            raise InvalidQueryError("A query requires a user key")
        if self.data_source is None:
            raise InvalidQueryError("A query requires a data source")
        if self.sliding_window is None:
            raise InvalidQueryError("A query requires a time window")

        return DataQuery(
            timezone=self.zone_name,
            user=self.user_filter,
            source=self.data_source,
            metrics=self.metric_set or (Metric.SUM,),
            window=self.sliding_window,
        )

    def with_window(self, anchor: datetime) -> DataQuery:
        """Build the one-day, single-point query anchored at `anchor`."""
        return self.sliding(anchor, 1, TimeUnit.DAY, TimeAggregation.ALL).build()
