"""Analytics view response models."""

from typing import List

from pydantic import BaseModel, Field

from defect_monitor.config.constants import Period


class ChartDataset(BaseModel):
    label: str
    data: List[int]


class ChartPayload(BaseModel):
    """Chart-ready series: one label per bar/slice, one dataset."""

    chart_type: str = Field(..., description="bar, horizontal_bar or pie")
    labels: List[str]
    datasets: List[ChartDataset]


class AnalyticsSummary(BaseModel):
    total_count: int = Field(..., description="All stored records")
    today_count: int = Field(..., description="Records dated today")
    period_count: int = Field(..., description="Records inside the selected period")


class AnalyticsResponse(BaseModel):
    period: Period
    summary: AnalyticsSummary
    daily: ChartPayload
    by_process: ChartPayload
    by_cause: ChartPayload
