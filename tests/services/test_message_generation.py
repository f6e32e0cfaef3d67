"""
Tests for MessageGenerationService and the resolver registry.
"""
import logging
import math
from datetime import timedelta
from unittest.mock import MagicMock
from uuid import UUID

import pytest

from tests.support import ACCOUNT_KEY, REF_DATE, daily_volumes
from waterinsights.core.domain.enums import DeviceType
from waterinsights.core.domain.message import MessageResolutionStatus
from waterinsights.core.services.message_generation import MessageGenerationService, select_best
from waterinsights.core.services.resolvers.base import RecommendationResolver
from waterinsights.core.services.resolvers.insight_a1 import InsightA1Parameters, InsightA1Resolver
from waterinsights.core.services.resolvers.registry import RESOLVERS, ResolverEntry, get_resolver

OTHER_KEY = UUID("aaaaaaaa-bbbb-4ccc-8ddd-eeeeeeeeeeee")


def status(score: float) -> MessageResolutionStatus:
    template = InsightA1Parameters(
        ref_date=REF_DATE,
        device_type=DeviceType.METER,
        current_value=12.0,
        average_value=10.0,
    )
    return MessageResolutionStatus(score=score, template=template)


class FixedResolver(RecommendationResolver):
    """Returns the same statuses for every call."""

    statuses: list[MessageResolutionStatus] = []

    async def resolve(self, account_key, device_type, ref_date, config):
        return list(self.statuses)


class BrokenResolver(RecommendationResolver):
    async def resolve(self, account_key, device_type, ref_date, config):
        if account_key == OTHER_KEY:
            raise RuntimeError("data service unavailable")
        return [status(1.0)]


def test_registry_contains_insight_a1():
    entry = get_resolver("insight-a1")
    assert entry.resolver_class is InsightA1Resolver
    assert entry.period == timedelta(days=1)
    assert set(RESOLVERS) == {"insight-a1"}


def test_registry_unknown_name():
    with pytest.raises(KeyError, match="Unknown resolver"):
        get_resolver("insight-z9")


def test_select_best():
    assert select_best([]) is None
    best = status(math.inf)
    assert select_best([status(0.2), best, status(3.0)]) is best


@pytest.mark.asyncio
async def test_generate_runs_registered_resolvers(make_data_service, config):
    data_service = make_data_service(daily_volumes(20.0, [10.0] * 12))
    service = MessageGenerationService(data_service, config)

    statuses = await service.generate(ACCOUNT_KEY, [DeviceType.METER, DeviceType.AMPHIRO], REF_DATE)

    # Meter data only: the shower sensor yields nothing
    assert len(statuses) == 1
    assert statuses[0].score == math.inf
    assert isinstance(service.resolvers["insight-a1"], InsightA1Resolver)


@pytest.mark.asyncio
async def test_generate_sorts_by_score(config):
    FixedResolver.statuses = [status(0.5), status(2.0), status(1.0)]
    resolvers = {"fixed": ResolverEntry(name="fixed", resolver_class=FixedResolver)}
    service = MessageGenerationService(MagicMock(), config, resolvers=resolvers)

    statuses = await service.generate(ACCOUNT_KEY, [DeviceType.METER], REF_DATE)

    assert [s.score for s in statuses] == [2.0, 1.0, 0.5]


@pytest.mark.asyncio
async def test_generate_all_skips_failed_accounts(config, caplog):
    resolvers = {"broken": ResolverEntry(name="broken", resolver_class=BrokenResolver)}
    service = MessageGenerationService(MagicMock(), config, resolvers=resolvers)

    with caplog.at_level(logging.ERROR):
        messages = await service.generate_all([ACCOUNT_KEY, OTHER_KEY], [DeviceType.METER], REF_DATE)

    assert list(messages) == [ACCOUNT_KEY]
    assert "data service unavailable" in caplog.text


@pytest.mark.asyncio
async def test_generate_all_fail_fast(config):
    resolvers = {"broken": ResolverEntry(name="broken", resolver_class=BrokenResolver)}
    service = MessageGenerationService(MagicMock(), config, resolvers=resolvers, fail_fast=True)

    with pytest.raises(RuntimeError, match="data service unavailable"):
        await service.generate_all([ACCOUNT_KEY, OTHER_KEY], [DeviceType.METER], REF_DATE)


class AmphiroDownResolver(RecommendationResolver):
    async def resolve(self, account_key, device_type, ref_date, config):
        if device_type == DeviceType.AMPHIRO:
            raise RuntimeError("amphiro store down")
        return [status(2.0)]


@pytest.mark.asyncio
async def test_generate_all_keeps_device_types_that_succeed(config, caplog):
    resolvers = {"partial": ResolverEntry(name="partial", resolver_class=AmphiroDownResolver)}
    service = MessageGenerationService(MagicMock(), config, resolvers=resolvers)

    with caplog.at_level(logging.ERROR):
        messages = await service.generate_all([ACCOUNT_KEY], [DeviceType.AMPHIRO, DeviceType.METER], REF_DATE)

    assert [s.score for s in messages[ACCOUNT_KEY]] == [2.0]
    assert "amphiro store down" in caplog.text
    assert "AMPHIRO" in caplog.text
