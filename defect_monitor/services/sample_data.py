"""
Sample defect data for demos and local development.

Generates 2-6 records per day for each of the past ``days`` days, with
random respondent, process step and cause category.
"""

import random
from datetime import date, timedelta
from typing import List, Optional

from defect_monitor.config.constants import CauseCategory, ProcessStep
from defect_monitor.schemas.defect_record_schema import DefectRecordCreate

SAMPLE_RESPONDENTS = ["田中", "佐藤", "高橋", "山田", "渡辺"]

MIN_RECORDS_PER_DAY = 2
MAX_RECORDS_PER_DAY = 6


def generate_sample_records(
    days: int = 60,
    seed: Optional[int] = None,
    today: Optional[date] = None,
) -> List[DefectRecordCreate]:
    """
    Build sample candidates, oldest day first.

    Args:
        days: Number of past days to cover (today itself is not included)
        seed: Random seed for reproducible output
        today: Reference date (defaults to the current date)
    """
    rng = random.Random(seed)
    today = today or date.today()
    process_steps = list(ProcessStep)
    causes = list(CauseCategory)

    candidates = []
    for offset in range(days, 0, -1):
        day = today - timedelta(days=offset)
        for _ in range(rng.randint(MIN_RECORDS_PER_DAY, MAX_RECORDS_PER_DAY)):
            candidates.append(
                DefectRecordCreate(
                    date=day,
                    respondent=rng.choice(SAMPLE_RESPONDENTS),
                    process_step=rng.choice(process_steps),
                    cause_category=rng.choice(causes),
                    comment=f"サンプル_{rng.randrange(999)}",
                )
            )
    return candidates
