"""
Sample data generation and the seed command.
"""
from collections import Counter
from datetime import date, timedelta

import pytest

from defect_monitor import seed as seed_module
from defect_monitor.core import database
from defect_monitor.core.config import get_settings
from defect_monitor.schemas.defect_record_schema import AddOutcome
from defect_monitor.services.record_store import validate_candidate
from defect_monitor.services.sample_data import (
    MAX_RECORDS_PER_DAY,
    MIN_RECORDS_PER_DAY,
    SAMPLE_RESPONDENTS,
    generate_sample_records,
)

TODAY = date(2025, 6, 30)


class TestGenerateSampleRecords:

    def test_same_seed_same_samples(self):
        first = generate_sample_records(days=10, seed=7, today=TODAY)
        second = generate_sample_records(days=10, seed=7, today=TODAY)

        assert [c.model_dump() for c in first] == [c.model_dump() for c in second]

    def test_records_per_day_within_bounds(self):
        candidates = generate_sample_records(days=60, seed=1, today=TODAY)

        per_day = Counter(c.date for c in candidates)
        assert len(per_day) == 60
        assert all(MIN_RECORDS_PER_DAY <= n <= MAX_RECORDS_PER_DAY for n in per_day.values())

    def test_covers_past_days_only(self):
        candidates = generate_sample_records(days=5, seed=3, today=TODAY)

        days = {c.date for c in candidates}
        assert max(days) == TODAY - timedelta(days=1)
        assert min(days) == TODAY - timedelta(days=5)
        assert candidates[0].date == min(days)

    def test_samples_pass_validation(self):
        for candidate in generate_sample_records(days=5, seed=11, today=TODAY):
            assert validate_candidate(candidate) is None
            assert candidate.respondent in SAMPLE_RESPONDENTS
            assert candidate.comment.startswith("サンプル_")


@pytest.fixture
def file_store(tmp_path, monkeypatch):
    """Point the settings at a throwaway SQLite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_seed_twice_only_reports_duplicates(file_store):
    first = await seed_module.seed(days=3, seed_value=5)
    second = await seed_module.seed(days=3, seed_value=5)

    generated = len(generate_sample_records(days=3, seed=5))
    assert first[AddOutcome.CREATED] + first[AddOutcome.DUPLICATE] == generated
    assert first[AddOutcome.CREATED] > 0
    assert second[AddOutcome.CREATED] == 0
    assert second[AddOutcome.DUPLICATE] == generated
    assert database.engine is None


@pytest.mark.asyncio
async def test_seed_command_reports_missing_endpoint(monkeypatch, capsys):
    monkeypatch.setenv("DATABASE_URL", "")
    get_settings.cache_clear()
    try:
        exit_code = await seed_module.main_async(["--days", "1"])
    finally:
        get_settings.cache_clear()

    assert exit_code == 2
    assert "Configuration error" in capsys.readouterr().err
