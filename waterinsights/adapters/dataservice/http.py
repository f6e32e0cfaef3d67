"""
HTTP Data Service Adapter - DataService client for the measurement query API.

The API accepts a serialized DataQuery and answers with one entry per device
type that has data in the requested window:

    {"success": true,
     "series": [{"deviceType": "METER", "values": {"VOLUME": {"SUM": 12.5}}}]}
"""

from typing import Any

import httpx
from pydantic import PrivateAttr

from waterinsights.core.domain.enums import DataField, DeviceType, Metric
from waterinsights.core.domain.query import DataQuery
from waterinsights.core.domain.response import QueryResponse, SeriesFacade
from waterinsights.core.ports.data_service import DataService, DataServiceError


class HttpDataService(DataService):
    """
    DataService adapter that calls the measurement query API over HTTP.
    Configured via Pydantic model fields.
    """
    base_url: str
    timeout: float = 30.0
    headers: dict[str, str] = {}

    _client: httpx.AsyncClient | None = PrivateAttr(default=None)

    def model_post_init(self, __context):
        """Normalize URL after initialization."""
        self.base_url = self.base_url.rstrip("/")

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self.headers,
            )
        return self._client

    async def execute(self, query: DataQuery) -> QueryResponse:
        """Execute a query and convert the payload into facades."""
        client = await self._get_client()

        response = await client.post(
            f"{self.base_url}/api/v1/data/query",
            json={"query": query.to_payload()},
        )
        response.raise_for_status()

        data = response.json()

        if not data.get("success", False):
            raise DataServiceError(f"Data query failed: {data.get('error', 'Unknown error')}")

        return parse_response(data)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None


def parse_response(data: dict[str, Any]) -> QueryResponse:
    """Build a QueryResponse from the API payload."""
    facades = {}
    for entry in data.get("series") or []:
        try:
            device_type = DeviceType(entry["deviceType"])
            values = {}
            for field_name, metrics in (entry.get("values") or {}).items():
                for metric_name, value in (metrics or {}).items():
                    values[(DataField(field_name), Metric(metric_name))] = (
                        None if value is None else float(value)
                    )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise DataServiceError(f"Malformed series in data service response: {e}") from e

        facades[device_type] = SeriesFacade(device_type=device_type, values=values)

    return QueryResponse(facades=facades)
