"""
Defect record Pydantic models.

Used for API request/response validation and serialization.
"""

import uuid
import datetime
from enum import Enum
from typing import Optional, List, Any

from pydantic import BaseModel, Field, ConfigDict, field_validator

from defect_monitor.config.constants import (
    CauseCategory,
    Period,
    ProcessStep,
    RESPONDENT_MAX_LENGTH,
)


class DefectRecordCreate(BaseModel):
    """
    Candidate record submitted from the data entry form.

    Required-field checks (respondent, process step) are not enforced here:
    the record store reports them as a ``validation_failed`` outcome so the
    form can show the same kind of message as for duplicates.
    """

    date: datetime.date = Field(
        default_factory=datetime.date.today,
        description="Defect date, YYYY-MM-DD (defaults to today)",
        examples=["2025-11-08"]
    )

    respondent: str = Field(
        default="",
        max_length=RESPONDENT_MAX_LENGTH,
        description="Respondent name",
        examples=["田中太郎"]
    )

    process_step: Optional[ProcessStep] = Field(
        default=None,
        description="Process step",
        examples=[ProcessStep.EXTRUSION.value]
    )

    cause_category: Optional[CauseCategory] = Field(
        default=None,
        description="Cause category",
        examples=[CauseCategory.EQUIPMENT.value]
    )

    comment: str = Field(
        default="",
        description="Free-text comment, may be empty",
    )

    @field_validator("respondent", mode="before")
    @classmethod
    def strip_respondent(cls, v: Any) -> Any:
        """Strip before the length limit applies."""
        return v.strip() if isinstance(v, str) else v

    @field_validator("process_step", "cause_category", mode="before")
    @classmethod
    def blank_as_unset(cls, v: Any) -> Any:
        """Dropdowns post an empty string for "not selected"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("comment", mode="before")
    @classmethod
    def none_comment_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def content_key(self) -> tuple:
        """The five content fields that identify a duplicate."""
        return (self.date, self.respondent, self.process_step, self.cause_category, self.comment)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2025-11-08",
                "respondent": "田中太郎",
                "process_step": "押出成形工程",
                "cause_category": "設備不良",
                "comment": "ダイス温度の低下による表面荒れ"
            }
        }
    )


class DefectRecordRead(BaseModel):
    """Stored defect record."""

    id: uuid.UUID = Field(..., description="Record ID")
    date: datetime.date = Field(..., description="Defect date")
    respondent: str = Field(..., description="Respondent name")
    process_step: Optional[ProcessStep] = Field(None, description="Process step")
    cause_category: Optional[CauseCategory] = Field(None, description="Cause category")
    comment: str = Field("", description="Comment")
    created_at: Optional[datetime.datetime] = Field(None, description="Row creation time")

    model_config = ConfigDict(from_attributes=True)


class AddOutcome(str, Enum):
    """Outcome tags of a record submission."""
    CREATED = "created"
    VALIDATION_FAILED = "validation_failed"
    DUPLICATE = "duplicate"
    CHECK_FAILED = "check_failed"
    INSERT_FAILED = "insert_failed"


class AddResult(BaseModel):
    """Structured result of ``RecordStore.add``; never replaced by an exception."""

    success: bool
    message: str
    outcome: AddOutcome
    record_id: Optional[uuid.UUID] = None


class SubmitResponse(AddResult):
    """Submission result plus the refreshed record list (only on success)."""

    records: Optional[List[DefectRecordRead]] = None


class RecordListResponse(BaseModel):
    """Filtered list view."""

    total_count: int
    period: Period
    records: List[DefectRecordRead]
