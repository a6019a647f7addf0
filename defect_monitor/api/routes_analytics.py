"""
Analytics routes.

Summary counts plus the three chart series (daily, per process, per
cause), all scoped to the selected period.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from defect_monitor.api.deps import get_record_store
from defect_monitor.config.constants import DEFAULT_PERIOD, Period
from defect_monitor.core.logging import get_logger
from defect_monitor.schemas.analytics_schema import AnalyticsResponse, AnalyticsSummary
from defect_monitor.services.aggregation import cause_chart, daily_chart, process_chart
from defect_monitor.services.filtering import records_in_period
from defect_monitor.services.record_store import RecordStore

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=AnalyticsResponse, summary="Analytics view")
async def get_analytics(
    period: Period = Query(DEFAULT_PERIOD, description="Date window for the charts"),
    store: RecordStore = Depends(get_record_store),
) -> AnalyticsResponse:
    """
    Analytics view data.

    ``summary.total_count`` counts every stored record; ``period_count``
    and the three charts only use records inside ``period``.

    Example:
        GET /api/analytics?period=30d
    """
    today = date.today()
    records = await store.load()
    scoped = records_in_period(records, period, today)

    logger.info("Built analytics", period=period.value, total=len(records), scoped=len(scoped))

    return AnalyticsResponse(
        period=period,
        summary=AnalyticsSummary(
            total_count=len(records),
            today_count=sum(1 for record in records if record.date == today),
            period_count=len(scoped),
        ),
        daily=daily_chart(scoped),
        by_process=process_chart(scoped),
        by_cause=cause_chart(scoped),
    )
