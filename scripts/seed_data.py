"""
Seed Data Script for local insight runs.
Generates synthetic daily meter readings and writes them to a CSV file
readable by DataFrameDataService.
"""
import argparse
import random
import uuid
from datetime import datetime, timedelta

import pandas as pd


def seed_measurements(accounts=3, weeks=13, base_volume=150.0, spike=2.0, end=None):
    """
    Generate one METER reading per account per day.

    The last day of every account is multiplied by `spike`, so the day-of-week
    insight has something to report.
    """
    end = end or datetime.now().replace(hour=12, minute=0, second=0, microsecond=0)
    days = weeks * 7 + 1
    rows = []

    for _ in range(accounts):
        account_key = uuid.uuid4()
        # Per-account habits
        level = base_volume * random.uniform(0.7, 1.3)
        print(f"Seeding account {account_key} (~{level:.0f} l/day)")

        for i in range(days):
            ts = end - timedelta(days=days - 1 - i)
            volume = level * random.uniform(0.9, 1.1)
            if i == days - 1:
                volume *= spike  # SPIKE
            rows.append({
                "account_key": str(account_key),
                "device_type": "METER",
                "ds": ts.isoformat(),
                "volume": round(volume, 2),
            })

    return pd.DataFrame(rows)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate synthetic measurements")
    parser.add_argument("--output", default="measurements.csv")
    parser.add_argument("--accounts", type=int, default=3)
    parser.add_argument("--weeks", type=int, default=13)
    args = parser.parse_args()

    df = seed_measurements(accounts=args.accounts, weeks=args.weeks)
    df.to_csv(args.output, index=False)
    print(f"Wrote {len(df)} rows to {args.output}")
