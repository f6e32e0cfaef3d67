"""
Shared test data: the account under test, its reference date and helpers
building per-day volume responses.
"""
from datetime import date, datetime, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from waterinsights.core.domain.enums import DataField, DeviceType, Metric
from waterinsights.core.domain.response import QueryResponse, SeriesFacade

ACCOUNT_KEY = UUID("6f1c2b9e-3a4d-4e8f-9b0a-1c2d3e4f5a6b")
ATHENS = ZoneInfo("Europe/Athens")
# A Monday afternoon
REF_DATE = datetime(2026, 10, 19, 15, 30, tzinfo=ATHENS)


def volume_response(device_type: DeviceType, value: float | None) -> QueryResponse:
    """Response with a single facade holding the summed volume."""
    facade = SeriesFacade(
        device_type=device_type,
        values={(DataField.VOLUME, Metric.SUM): value},
    )
    return QueryResponse(facades={device_type: facade})


def daily_volumes(target: float | None, history: list[float | None], ref_day: date | None = None) -> dict[date, float | None]:
    """Map the reference day and the same weekday of previous weeks to volumes."""
    ref_day = ref_day or REF_DATE.date()
    volumes = {ref_day: target}
    for weeks_back, value in enumerate(history, start=1):
        volumes[ref_day - timedelta(weeks=weeks_back)] = value
    return volumes
