"""
Run the registered insight resolvers for a set of accounts and print the best
message per account as JSON.

Measurements come either from a CSV file (see seed_data.py) or, when no file
is given, from the data service configured in config.yaml.
"""
import argparse
import asyncio
import json
import logging
from datetime import datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from waterinsights.adapters.config.settings_loader import load_settings
from waterinsights.adapters.config.yaml_store import YamlThresholdStore
from waterinsights.adapters.dataservice.dataframe import DataFrameDataService
from waterinsights.adapters.dataservice.http import HttpDataService
from waterinsights.core.domain.enums import DeviceType
from waterinsights.core.services.message_generation import MessageGenerationService, select_best

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Generate consumption insights")
    parser.add_argument("accounts", nargs="+", type=UUID, help="Account keys")
    parser.add_argument("--date", help="Reference date (YYYY-MM-DD), default: today")
    parser.add_argument("--device-type", action="append", choices=[d.value for d in DeviceType],
                        help="Device types to examine (repeatable), default: all")
    parser.add_argument("--measurements", help="CSV file with measurements")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--fail-fast", action="store_true", help="Abort on the first failing account")
    return parser.parse_args()


async def run(args) -> dict:
    settings = load_settings(args.config)
    logging.basicConfig(level=settings.log_level)

    zone = ZoneInfo(settings.timezone)
    if args.date:
        ref_date = datetime.strptime(args.date, "%Y-%m-%d").replace(tzinfo=zone)
    else:
        ref_date = datetime.now(zone)

    device_types = [DeviceType(d) for d in args.device_type] if args.device_type else list(DeviceType)

    if args.measurements:
        data_service = DataFrameDataService.from_csv(args.measurements)
    else:
        data_service = HttpDataService(
            base_url=settings.data_service_url,
            timeout=settings.data_service_timeout,
            headers=settings.get_headers(),
        )

    config = YamlThresholdStore(settings.thresholds_file)
    service = MessageGenerationService(data_service, config, fail_fast=args.fail_fast)

    try:
        messages = await service.generate_all(args.accounts, device_types, ref_date)
    finally:
        if isinstance(data_service, HttpDataService):
            await data_service.close()

    output = {}
    for account_key, statuses in messages.items():
        best = select_best(statuses)
        if best is None:
            output[str(account_key)] = None
            continue
        output[str(account_key)] = {
            "score": best.score,
            "template": best.template.template.value,
            "parameters": best.template.parameters,
        }
    return output


if __name__ == "__main__":
    result = asyncio.run(run(parse_args()))
    print(json.dumps(result, indent=2, default=str))
