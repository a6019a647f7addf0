"""
Constants routes.

Fixed enumerations for the form dropdowns and filters.
"""

from typing import Any, Dict, List

from fastapi import APIRouter

from defect_monitor.config.constants import (
    get_cause_category_list,
    get_periods_with_labels,
    get_process_step_list,
)

router = APIRouter(prefix="/api/constants", tags=["Constants"])


@router.get("/process-steps", response_model=List[str])
async def get_process_steps():
    """
    Process step labels in dropdown order.

    Example:
        GET /api/constants/process-steps

        Response:
        ["材料準備工程", "加熱工程", ...]
    """
    return get_process_step_list()


@router.get("/cause-categories", response_model=List[str])
async def get_cause_categories():
    """Cause category labels in dropdown order."""
    return get_cause_category_list()


@router.get("/periods", response_model=List[Dict[str, Any]])
async def get_periods():
    """
    Selectable date windows.

    Example:
        GET /api/constants/periods

        Response:
        [
            {"value": "7d", "label": "過去7日間", "days": 7},
            ...
            {"value": "all", "label": "全期間", "days": null}
        ]
    """
    return get_periods_with_labels()


@router.get("/all", response_model=Dict[str, Any])
async def get_all_constants():
    """All constants in one call."""
    return {
        "process_steps": get_process_step_list(),
        "cause_categories": get_cause_category_list(),
        "periods": get_periods_with_labels(),
    }
