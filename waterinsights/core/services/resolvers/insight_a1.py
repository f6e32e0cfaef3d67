"""
Insight A1 - Day-of-week consumption compared to the same weekday of
previous weeks.

The consumption of the reference day is compared to the mean consumption of
the same weekday over the last N weeks. The score is the absolute z-score of
the reference day, scaled so that a deviation of 2K standard deviations
scores 1.0.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from pydantic import Field

from waterinsights.core.domain.enums import DayOfWeek, DeviceType, MeasurementDataSource, TimeUnit
from waterinsights.core.domain.message import (
    MessageResolutionStatus,
    ParameterizedTemplate,
    RecommendationTemplate,
)
from waterinsights.core.domain.query import DataQueryBuilder, start_of_day
from waterinsights.core.domain.statistics import SummaryStatistics
from waterinsights.core.ports.config_service import ConfigService
from waterinsights.core.services.resolvers.base import RecommendationResolver

logger = logging.getLogger(__name__)

# Minimum value for a daily volume
MIN_VALUE = 1e-3


class InsightA1Parameters(ParameterizedTemplate):
    """Parameters of the day-of-week consumption message."""

    current_value: float = Field(ge=MIN_VALUE)
    average_value: float = Field(ge=MIN_VALUE)

    @property
    def day_of_week(self) -> DayOfWeek:
        return DayOfWeek.from_date(self.ref_date)

    @property
    def percent_change(self) -> int:
        # Truncated, not rounded
        return int(100.0 * abs((self.current_value - self.average_value) / self.average_value))

    @property
    def template(self) -> RecommendationTemplate:
        if self.average_value <= self.current_value:
            return RecommendationTemplate.INSIGHT_A1_DAYOFWEEK_CONSUMPTION_INCR
        return RecommendationTemplate.INSIGHT_A1_DAYOFWEEK_CONSUMPTION_DECR

    @property
    def parameters(self) -> dict[str, Any]:
        parameters = super().parameters

        parameters["value"] = self.current_value
        parameters["consumption"] = self.current_value

        parameters["average_value"] = self.average_value
        parameters["average_consumption"] = self.average_value

        parameters["percent_change"] = self.percent_change

        parameters["day"] = self.ref_date
        parameters["day_of_week"] = self.day_of_week

        return parameters

    def with_locale(self, locale: str, currency_rate: Any = None) -> "InsightA1Parameters":
        return self


class InsightA1Resolver(RecommendationResolver):
    """
    Resolver for the day-of-week consumption insight.

    Class attributes:
        K: Change, in standard deviations, that is considered significant
        N: Number of past weeks to examine
        F: Minimum ratio of past weeks that must have data
    """

    K = 1.28
    N = 12
    F = 0.5

    async def resolve(
        self,
        account_key: UUID,
        device_type: DeviceType,
        ref_date: datetime,
        config: ConfigService,
    ) -> list[MessageResolutionStatus]:
        # Volumes below MIN_VALUE can never be reported
        daily_threshold = max(config.volume_threshold(device_type, TimeUnit.DAY), MIN_VALUE)

        query_builder = (
            DataQueryBuilder()
            .timezone(ref_date.tzinfo or "UTC")
            .user("user", account_key)
            .source(MeasurementDataSource.from_device_type(device_type))
            .sum()
        )

        # Target day

        start = start_of_day(ref_date)
        target_value = await self.fetch_value(query_builder.with_window(start), device_type)
        if target_value is None or target_value < daily_threshold:
            return []  # nothing to compare to

        # Same day of week, for the past N weeks

        summary = SummaryStatistics()
        for _ in range(self.N):
            start = start - timedelta(weeks=1)
            value = await self.fetch_value(query_builder.with_window(start), device_type)
            if value is not None:
                summary.add_value(value)
        if summary.n < self.N * self.F:
            return []  # too few values

        average_value = summary.mean
        if average_value < daily_threshold:
            return []  # consumption too low to be a reliable baseline

        sd = math.sqrt(summary.population_variance)
        norm_value = (target_value - average_value) / sd if sd > 0 else math.inf
        score = abs(norm_value) / (2 * self.K) if sd > 0 else math.inf

        logger.debug(
            f"Insight A1 for account {account_key}/{device_type.value}: "
            f"Consumption for {ref_date:%A} of last {self.N} weeks to {ref_date:%d/%m/%Y}: "
            f"value={target_value:.2f} μ={average_value:.2f} σ={sd:.2f} "
            f"x*={norm_value:.2f} score={score:.2f}"
        )

        parameters = InsightA1Parameters(
            ref_date=ref_date,
            device_type=device_type,
            current_value=target_value,
            average_value=average_value,
        )
        return [MessageResolutionStatus(score=score, template=parameters)]
