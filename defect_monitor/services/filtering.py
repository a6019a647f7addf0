"""
List view filtering and period scoping.

Filters are conjunctive: a record must pass every active filter.
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional

from defect_monitor.config.constants import CauseCategory, DEFAULT_PERIOD, Period, ProcessStep


def period_start(period: Period, today: Optional[date] = None) -> Optional[date]:
    """
    First date (inclusive) inside the period.

    A 7-day period covers today and the six days before it.

    Returns:
        ``today - (period.days - 1)``, or None for all time
    """
    if period.days is None:
        return None
    return (today or date.today()) - timedelta(days=period.days - 1)


def records_in_period(records: Iterable, period: Period, today: Optional[date] = None) -> list:
    """Records dated on or after the period start."""
    start = period_start(period, today)
    if start is None:
        return list(records)
    return [record for record in records if record.date >= start]


def sort_newest_first(records: Iterable) -> list:
    return sorted(records, key=lambda record: record.date, reverse=True)


def filter_records(
    records: Iterable,
    process_step: Optional[ProcessStep] = None,
    cause_category: Optional[CauseCategory] = None,
    period: Period = DEFAULT_PERIOD,
    today: Optional[date] = None,
) -> List:
    """
    Apply the list view filters.

    Args:
        records: Records to filter
        process_step: Keep only this step when set
        cause_category: Keep only this cause when set
        period: Date window; Period.ALL disables the date bound
        today: Reference date (defaults to the current date)

    Returns:
        Matching records, newest date first
    """
    selected = records_in_period(records, period, today)
    if process_step is not None:
        selected = [record for record in selected if record.process_step == process_step]
    if cause_category is not None:
        selected = [record for record in selected if record.cause_category == cause_category]
    return sort_newest_first(selected)
