"""
Grouped counts for the analytics charts.

All functions are pure: they read ``date``, ``process_step`` and
``cause_category`` from each record (ORM rows or ``DefectRecordRead``)
and return ``(label, count)`` pairs in chart order.
"""

from collections import Counter
from enum import Enum
from typing import Iterable, List, Tuple

from defect_monitor.schemas.analytics_schema import ChartDataset, ChartPayload

Series = List[Tuple[str, int]]

COUNT_LABEL = "件数"


def _label(value) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.value
    return str(value)


def _by_count_desc(counts: Counter) -> Series:
    # sorted() is stable, so equal counts keep first-seen order
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def count_by_date(records: Iterable) -> Series:
    """Records per ISO date string, ascending by date."""
    counts = Counter(record.date.isoformat() for record in records)
    return sorted(counts.items(), key=lambda item: item[0])


def count_by_process(records: Iterable) -> Series:
    """Records per process step, most frequent first. Records without a step are skipped."""
    counts = Counter(
        _label(record.process_step)
        for record in records
        if record.process_step
    )
    return _by_count_desc(counts)


def count_by_cause(records: Iterable) -> Series:
    """Records per cause category, most frequent first. No cause counts as ``""``."""
    counts = Counter(_label(record.cause_category) for record in records)
    return _by_count_desc(counts)


def _chart(chart_type: str, series: Series, dataset_label: str = COUNT_LABEL) -> ChartPayload:
    return ChartPayload(
        chart_type=chart_type,
        labels=[label for label, _ in series],
        datasets=[ChartDataset(label=dataset_label, data=[count for _, count in series])],
    )


def daily_chart(records: Iterable) -> ChartPayload:
    return _chart("bar", count_by_date(records))


def process_chart(records: Iterable) -> ChartPayload:
    return _chart("horizontal_bar", count_by_process(records))


def cause_chart(records: Iterable) -> ChartPayload:
    return _chart("pie", count_by_cause(records))
