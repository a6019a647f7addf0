"""Load sample defect records into the record store.

Every sample goes through the normal submission path, so records that
already exist are reported as duplicates instead of inserted twice.

Usage:
    defect-monitor-seed --days 60 --seed 42

Environment:
- DATABASE_URL / DATABASE_PASSWORD (read through Settings, .env supported)
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections import Counter

from defect_monitor.core import database
from defect_monitor.core.config import StoreConfigurationError, get_settings
from defect_monitor.core.logging import get_logger, setup_logging
from defect_monitor.schemas.defect_record_schema import AddOutcome
from defect_monitor.services.record_store import RecordStore
from defect_monitor.services.sample_data import generate_sample_records

logger = get_logger(__name__)


async def seed(days: int, seed_value: int | None) -> Counter:
    """Insert generated samples; returns the number of results per outcome."""
    await database.init_db()
    await database.create_tables()

    candidates = generate_sample_records(days=days, seed=seed_value)
    outcomes: Counter = Counter()
    try:
        async with database.get_db_context() as db:
            store = RecordStore(db)
            for candidate in candidates:
                result = await store.add(candidate)
                outcomes[result.outcome] += 1
    finally:
        await database.close_db()

    per_process = Counter(candidate.process_step.value for candidate in candidates)
    logger.info(
        "Sample data loaded",
        generated=len(candidates),
        created=outcomes[AddOutcome.CREATED],
        duplicates=outcomes[AddOutcome.DUPLICATE],
        process_distribution=dict(per_process),
    )
    return outcomes


async def main_async(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description="Load sample defect records")
    parser.add_argument("--days", type=int, default=60, help="Number of past days to cover")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible samples")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    try:
        outcomes = await seed(args.days, args.seed)
    except StoreConfigurationError as exc:
        sys.stderr.write(f"Configuration error: {exc}\n")
        return 2

    sys.stdout.write(f"created: {outcomes[AddOutcome.CREATED]}\n")
    sys.stdout.write(f"duplicates: {outcomes[AddOutcome.DUPLICATE]}\n")
    failed = outcomes[AddOutcome.CHECK_FAILED] + outcomes[AddOutcome.INSERT_FAILED]
    sys.stdout.write(f"failed: {failed}\n")
    return 1 if failed else 0


def main() -> None:
    raise SystemExit(asyncio.run(main_async(sys.argv[1:])))


if __name__ == "__main__":
    main()
