"""
Shared fixtures: a mocked DataService answering per-day volumes, and a
mocked threshold configuration.
"""
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.support import volume_response
from waterinsights.core.domain.enums import DeviceType
from waterinsights.core.domain.response import QueryResponse
from waterinsights.core.ports.config_service import ConfigService
from waterinsights.core.ports.data_service import DataService


@pytest.fixture
def config():
    config = MagicMock(spec=ConfigService)
    config.volume_threshold.return_value = 5.0
    return config


@pytest.fixture
def make_data_service():
    """
    Factory for a mocked DataService.

    Days mapped to None (or missing) answer without a facade.
    """
    def _factory(volumes: dict[date, float | None], device_type: DeviceType = DeviceType.METER):
        async def execute(query):
            value = volumes.get(query.window.anchor.date())
            if value is None:
                return QueryResponse()
            return volume_response(device_type, value)

        service = MagicMock(spec=DataService)
        service.execute = AsyncMock(side_effect=execute)
        return service

    return _factory
