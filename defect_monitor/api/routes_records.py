"""
Defect record routes.

Backs the data entry form (POST) and the data list view (GET).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from defect_monitor.api.deps import get_record_store
from defect_monitor.config.constants import CauseCategory, DEFAULT_PERIOD, Period, ProcessStep
from defect_monitor.core.logging import get_logger
from defect_monitor.schemas.defect_record_schema import (
    AddOutcome,
    DefectRecordCreate,
    DefectRecordRead,
    RecordListResponse,
    SubmitResponse,
)
from defect_monitor.services.filtering import filter_records
from defect_monitor.services.record_store import RecordStore

logger = get_logger(__name__)

router = APIRouter()

# HTTP status per submission outcome; the body is always a SubmitResponse
OUTCOME_STATUS = {
    AddOutcome.CREATED: 201,
    AddOutcome.VALIDATION_FAILED: 422,
    AddOutcome.DUPLICATE: 409,
    AddOutcome.CHECK_FAILED: 503,
    AddOutcome.INSERT_FAILED: 503,
}


@router.get(
    "",
    response_model=RecordListResponse,
    summary="List defect records",
    description="""
    Data list view.

    **Query parameters (all optional, combined with AND):**
    - process_step: exact process step
    - cause_category: exact cause category
    - period: 7d / 14d / 30d / all (default 7d)

    Records are returned newest date first. A store failure yields an
    empty list.
    """
)
async def list_records(
    process_step: Optional[ProcessStep] = Query(None, description="Process step filter"),
    cause_category: Optional[CauseCategory] = Query(None, description="Cause category filter"),
    period: Period = Query(DEFAULT_PERIOD, description="Date window"),
    store: RecordStore = Depends(get_record_store),
) -> RecordListResponse:
    records = await store.load()
    filtered = filter_records(
        records,
        process_step=process_step,
        cause_category=cause_category,
        period=period,
    )
    logger.info(
        "Listed defect records",
        loaded=len(records),
        returned=len(filtered),
        period=period.value,
    )
    return RecordListResponse(
        total_count=len(filtered),
        period=period,
        records=[DefectRecordRead.model_validate(record) for record in filtered],
    )


@router.post(
    "",
    response_model=SubmitResponse,
    status_code=201,
    summary="Add a defect record",
    responses={
        409: {"model": SubmitResponse, "description": "Identical record already exists"},
        422: {"model": SubmitResponse, "description": "Respondent or process step missing"},
        503: {"model": SubmitResponse, "description": "Record store unavailable"},
    },
)
async def create_record(
    candidate: DefectRecordCreate,
    store: RecordStore = Depends(get_record_store),
):
    """
    Data entry form submission.

    On success the response carries the refreshed record list so the
    client can replace its copy; on any failure ``records`` is null and
    the client keeps what it has.
    """
    result, records = await store.submit(candidate)
    body = SubmitResponse(
        **result.model_dump(),
        records=[DefectRecordRead.model_validate(record) for record in records] if records is not None else None,
    )
    return JSONResponse(
        status_code=OUTCOME_STATUS[result.outcome],
        content=body.model_dump(mode="json"),
    )
