"""
Recommendation Resolver base - common contract of all insight generators.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from waterinsights.core.domain.enums import DataField, DeviceType, Metric
from waterinsights.core.domain.message import MessageResolutionStatus
from waterinsights.core.domain.query import DataQuery
from waterinsights.core.ports.config_service import ConfigService
from waterinsights.core.ports.data_service import DataService


class RecommendationResolver(ABC):
    """
    Produces zero or more scored messages for one account and device type.

    Resolvers keep no state between calls: the reference date and the
    configuration are passed to every `resolve` call.
    """

    def __init__(self, data_service: DataService):
        self.data_service = data_service

    @abstractmethod
    async def resolve(
        self,
        account_key: UUID,
        device_type: DeviceType,
        ref_date: datetime,
        config: ConfigService,
    ) -> list[MessageResolutionStatus]:
        """
        Evaluate the insight for an account.

        Args:
            account_key: Account to evaluate
            device_type: Device type whose measurements are examined
            ref_date: Timezone-aware evaluation date ("today")
            config: Threshold configuration

        Returns:
            Scored messages; empty when the insight does not apply
        """
        ...

    async def fetch_value(
        self,
        query: DataQuery,
        device_type: DeviceType,
        data_field: DataField = DataField.VOLUME,
        metric: Metric = Metric.SUM,
    ) -> float | None:
        """Execute a query and pick one aggregate, or None if it has no data."""
        response = await self.data_service.execute(query)
        series = response.get_facade(device_type)
        if series is None:
            return None
        return series.get(data_field, metric)
