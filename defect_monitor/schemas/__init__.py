"""Pydantic validation models."""

from .defect_record_schema import (
    AddOutcome,
    AddResult,
    DefectRecordCreate,
    DefectRecordRead,
    RecordListResponse,
    SubmitResponse,
)
from .analytics_schema import (
    AnalyticsResponse,
    AnalyticsSummary,
    ChartDataset,
    ChartPayload,
)

__all__ = [
    "AddOutcome",
    "AddResult",
    "DefectRecordCreate",
    "DefectRecordRead",
    "RecordListResponse",
    "SubmitResponse",
    "AnalyticsResponse",
    "AnalyticsSummary",
    "ChartDataset",
    "ChartPayload",
]
