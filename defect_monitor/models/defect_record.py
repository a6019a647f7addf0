"""
Defect record model.

One row per recorded defect event. Rows are only ever inserted; there is
no update or delete path.
"""

import uuid
import datetime
from typing import Optional

from sqlalchemy import String, Date, DateTime, Text, Uuid, func, Index, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from defect_monitor.config.constants import CauseCategory, ProcessStep, RESPONDENT_MAX_LENGTH
from defect_monitor.core.database import Base


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


class DefectRecord(Base):
    """
    Defect record.

    Enumerated columns are stored as their text labels (no native
    database enum type), so the table stays readable from other tools.
    """
    __tablename__ = "defect_records"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Record ID"
    )

    date: Mapped[datetime.date] = mapped_column(
        Date,
        nullable=False,
        comment="Defect date (YYYY-MM-DD)"
    )

    respondent: Mapped[str] = mapped_column(
        String(RESPONDENT_MAX_LENGTH),
        nullable=False,
        comment="Name of the person reporting the defect"
    )

    process_step: Mapped[Optional[ProcessStep]] = mapped_column(
        SQLEnum(
            ProcessStep,
            name="process_step",
            native_enum=False,
            length=50,
            values_callable=_enum_values,
        ),
        nullable=True,
        comment="Process step name"
    )

    cause_category: Mapped[Optional[CauseCategory]] = mapped_column(
        SQLEnum(
            CauseCategory,
            name="cause_category",
            native_enum=False,
            length=50,
            values_callable=_enum_values,
        ),
        nullable=True,
        comment="Cause category name"
    )

    comment: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default="",
        comment="Free-text comment"
    )

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="Row creation time"
    )

    def __repr__(self) -> str:
        return (
            f"<DefectRecord(id={self.id}, date={self.date}, "
            f"process_step={self.process_step}, cause_category={self.cause_category})>"
        )

    def content_key(self) -> tuple:
        """The five content fields that identify a duplicate."""
        return (self.date, self.respondent, self.process_step, self.cause_category, self.comment)


# Listing is always newest first
Index("ix_defect_records_date", DefectRecord.date)
