"""
DataService Port - Interface for executing aggregation queries over
measurement time series.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from waterinsights.core.domain.query import DataQuery
from waterinsights.core.domain.response import QueryResponse


class DataServiceError(RuntimeError):
    """Raised when the data service rejects a query or answers with garbage."""


class DataService(BaseModel, ABC):
    """
    Abstract interface for the time-series aggregation service.
    Also serves as a Pydantic Model for configuration validation.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    @abstractmethod
    async def execute(self, query: DataQuery) -> QueryResponse:
        """
        Execute an aggregation query.

        Args:
            query: Query describing principal, source, metrics and window

        Returns:
            QueryResponse with one facade per device type that has data
            in the window. Device types without data have no facade.
        """
        ...
