"""
Service layer.

Record store access, filtering and aggregation for the API views.
"""

from defect_monitor.services.record_store import RecordStore, validate_candidate
from defect_monitor.services.filtering import filter_records, records_in_period
from .aggregation import (
    count_by_cause,
    count_by_date,
    count_by_process,
    cause_chart,
    daily_chart,
    process_chart,
)

__all__ = [
    'RecordStore',
    'validate_candidate',
    'filter_records',
    'records_in_period',
    'count_by_cause',
    'count_by_date',
    'count_by_process',
    'cause_chart',
    'daily_chart',
    'process_chart',
]
