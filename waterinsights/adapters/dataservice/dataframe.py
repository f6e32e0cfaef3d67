"""
DataFrame Data Service Adapter - Evaluates queries against measurements held
in memory.

The frame has one row per measurement with columns:
    account_key, device_type, ds, and one column per data field
    (volume, energy, duration, temperature, flow), all optional except volume.
"""

from datetime import datetime, tzinfo
from pathlib import Path

import numpy as np
import pandas as pd

from waterinsights.core.domain.enums import DataField, Metric
from waterinsights.core.domain.query import DataQuery
from waterinsights.core.domain.response import QueryResponse, SeriesFacade
from waterinsights.core.ports.data_service import DataService

REQUIRED_COLUMNS = {"account_key", "device_type", "ds", "volume"}


def _as_timestamp(moment: datetime, zone: tzinfo) -> pd.Timestamp:
    ts = pd.Timestamp(moment)
    if ts.tzinfo is None:
        return ts.tz_localize(zone)
    return ts.tz_convert(zone)


def _aggregate(values: pd.Series, metric: Metric) -> float | None:
    if metric == Metric.COUNT:
        return float(values.count())
    if values.empty:
        return None
    if metric == Metric.SUM:
        return float(values.sum())
    if metric == Metric.MIN:
        return float(values.min())
    if metric == Metric.MAX:
        return float(values.max())
    if metric == Metric.AVERAGE:
        return float(values.mean())
    raise ValueError(f"Unsupported metric: {metric}")


class DataFrameDataService(DataService):
    """
    DataService backed by a pandas DataFrame.
    Naive timestamps are read as local time of the query timezone.
    """
    measurements: pd.DataFrame

    def model_post_init(self, __context):
        missing = REQUIRED_COLUMNS - set(self.measurements.columns)
        if missing:
            raise ValueError(f"DataFrame must contain columns: {sorted(missing)}")

    @classmethod
    def from_csv(cls, path: str | Path) -> "DataFrameDataService":
        """Load measurements from a CSV file with a header row."""
        return cls(measurements=pd.read_csv(path))

    def _timestamps(self, zone: tzinfo) -> pd.Series:
        ds = pd.to_datetime(self.measurements["ds"])
        if ds.dt.tz is None:
            # Wall-clock times repeated by a DST change are read as the first occurrence
            first_occurrence = np.ones(len(ds), dtype=bool)
            return ds.dt.tz_localize(zone, ambiguous=first_occurrence, nonexistent="shift_forward")
        return ds.dt.tz_convert(zone)

    async def execute(self, query: DataQuery) -> QueryResponse:
        df = self.measurements
        device_type = query.source.device_type
        start, end = query.window.bounds()

        zone = query.zone
        ds = self._timestamps(zone)
        mask = (
            (df["account_key"].astype(str) == str(query.user.key))
            & (df["device_type"].astype(str).str.upper() == device_type.value)
            & (ds >= _as_timestamp(start, zone))
            & (ds < _as_timestamp(end, zone))
        )
        rows = df.loc[mask]

        if rows.empty:
            return QueryResponse()

        values = {}
        for data_field in DataField:
            if data_field.column not in rows.columns:
                continue
            column = pd.to_numeric(rows[data_field.column], errors="coerce").dropna()
            for metric in query.metrics:
                values[(data_field, metric)] = _aggregate(column, metric)

        return QueryResponse(facades={device_type: SeriesFacade(device_type=device_type, values=values)})
