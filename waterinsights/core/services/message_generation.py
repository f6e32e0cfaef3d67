"""
Message Generation Service - Runs the registered resolvers over accounts.

This service is the caller of the resolvers:
1. Instantiate every registered resolver against the DataService
2. Resolve each (account, device type) pair, one query at a time
3. Rank the candidate messages by score
4. Isolate failures so one broken (account, device type) does not abort a batch
"""

import logging
from datetime import datetime
from uuid import UUID

from waterinsights.core.domain.enums import DeviceType
from waterinsights.core.domain.message import MessageResolutionStatus
from waterinsights.core.ports.config_service import ConfigService
from waterinsights.core.ports.data_service import DataService
from waterinsights.core.services.resolvers.registry import RESOLVERS, ResolverEntry

logger = logging.getLogger(__name__)


def select_best(statuses: list[MessageResolutionStatus]) -> MessageResolutionStatus | None:
    """Return the highest scoring candidate, or None if there are none."""
    if not statuses:
        return None
    return max(statuses, key=lambda status: status.score)


class MessageGenerationService:
    """
    Service that produces candidate messages for accounts.
    """

    def __init__(
        self,
        data_service: DataService,
        config: ConfigService,
        resolvers: dict[str, ResolverEntry] | None = None,
        fail_fast: bool = False,
    ):
        """
        Initialize the generation service.

        Args:
            data_service: Port used by resolvers to query measurements
            config: Threshold configuration handed to every resolver
            resolvers: Resolvers to run (default: all registered)
            fail_fast: Re-raise resolver failures instead of skipping the device type
        """
        self.data_service = data_service
        self.config = config
        self.fail_fast = fail_fast
        entries = RESOLVERS if resolvers is None else resolvers
        self.resolvers = {name: entry.create(data_service) for name, entry in entries.items()}

    async def generate(
        self,
        account_key: UUID,
        device_types: list[DeviceType],
        ref_date: datetime,
    ) -> list[MessageResolutionStatus]:
        """
        Run all resolvers for one account.

        Resolver errors propagate to the caller.

        Returns:
            Candidate messages sorted by descending score
        """
        statuses: list[MessageResolutionStatus] = []
        for device_type in device_types:
            for name, resolver in self.resolvers.items():
                results = await resolver.resolve(account_key, device_type, ref_date, self.config)
                logger.debug(f"Resolver '{name}' produced {len(results)} message(s) for {account_key}/{device_type.value}")
                statuses.extend(results)

        return sorted(statuses, key=lambda status: status.score, reverse=True)

    async def generate_all(
        self,
        account_keys: list[UUID],
        device_types: list[DeviceType],
        ref_date: datetime,
    ) -> dict[UUID, list[MessageResolutionStatus]]:
        """
        Run all resolvers for many accounts.

        Failures are isolated per (account, device type): the failing pair is
        logged and skipped, the other device types of the account are kept.
        Accounts with no successful device type are left out of the result.
        With fail_fast set the first failure is re-raised.
        """
        logger.info(f"Generating messages for {len(account_keys)} account(s) on {ref_date.date()}")

        messages: dict[UUID, list[MessageResolutionStatus]] = {}
        failed = 0
        for account_key in account_keys:
            statuses: list[MessageResolutionStatus] = []
            succeeded = False
            for device_type in device_types:
                try:
                    statuses.extend(await self.generate(account_key, [device_type], ref_date))
                    succeeded = True
                except Exception as e:
                    if self.fail_fast:
                        raise
                    failed += 1
                    logger.error(f"Message generation failed for {account_key}/{device_type.value}: {e}")
            if succeeded:
                messages[account_key] = sorted(statuses, key=lambda status: status.score, reverse=True)

        logger.info(f"Generated messages for {len(messages)} account(s), {failed} failure(s)")
        return messages
