"""
Record store access.

Loads and appends defect records. Every public method returns a value:
backend failures are logged and folded into an empty list or an
``AddResult``, never raised to the caller.

The duplicate check is a plain check-then-insert. Two sessions can pass
the check at the same time and both insert; there is no database
uniqueness constraint behind it.
"""

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from defect_monitor.core.logging import get_logger
from defect_monitor.models.defect_record import DefectRecord
from defect_monitor.schemas.defect_record_schema import AddOutcome, AddResult, DefectRecordCreate

logger = get_logger(__name__)

# Errors that mean "the store could not be reached or refused the statement"
BACKEND_ERRORS = (SQLAlchemyError, OSError)

MESSAGES = {
    AddOutcome.CREATED: "データが正常に追加されました。",
    AddOutcome.VALIDATION_FAILED: "回答者と工程名は必須項目です。",
    AddOutcome.DUPLICATE: "同じ内容のレコードが既に存在します。内容を確認してください。",
    AddOutcome.CHECK_FAILED: "重複チェックに失敗しました。時間をおいて再度お試しください。",
    AddOutcome.INSERT_FAILED: "データの追加に失敗しました。時間をおいて再度お試しください。",
}


def validate_candidate(candidate: DefectRecordCreate) -> Optional[AddResult]:
    """
    Required-field check, done before any store access.

    Returns:
        A ``validation_failed`` result, or None when the candidate is complete
    """
    if not candidate.respondent.strip() or candidate.process_step is None:
        return _result(AddOutcome.VALIDATION_FAILED)
    return None


def _result(outcome: AddOutcome, record: Optional[DefectRecord] = None) -> AddResult:
    return AddResult(
        success=outcome is AddOutcome.CREATED,
        message=MESSAGES[outcome],
        outcome=outcome,
        record_id=record.id if record is not None else None,
    )


def _matches(column, value):
    # NULL never equals NULL in SQL
    if value is None:
        return column.is_(None)
    return column == value


class RecordStore:
    """Defect record access over one async session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def load(self) -> List[DefectRecord]:
        """
        Fetch all records, newest date first.

        Returns:
            All records, or an empty list if the store fails
        """
        stmt = select(DefectRecord).order_by(
            DefectRecord.date.desc(),
            DefectRecord.created_at.desc(),
        )
        try:
            result = await self.session.execute(stmt)
            records = list(result.scalars().all())
        except BACKEND_ERRORS as exc:
            logger.error("Failed to load defect records", error=str(exc), exc_info=True)
            await self._rollback()
            return []

        logger.debug("Loaded defect records", count=len(records))
        return records

    async def find_duplicate(self, candidate: DefectRecordCreate) -> Optional[DefectRecord]:
        """
        Look up a stored record with the same five content fields.

        Raises:
            SQLAlchemyError: If the lookup itself fails
        """
        stmt = (
            select(DefectRecord)
            .where(
                _matches(DefectRecord.date, candidate.date),
                _matches(DefectRecord.respondent, candidate.respondent),
                _matches(DefectRecord.process_step, candidate.process_step),
                _matches(DefectRecord.cause_category, candidate.cause_category),
                _matches(DefectRecord.comment, candidate.comment),
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def add(self, candidate: DefectRecordCreate) -> AddResult:
        """
        Validate, check for an identical record, then insert.

        Args:
            candidate: Record content without identifier

        Returns:
            AddResult tagged created, validation_failed, duplicate,
            check_failed or insert_failed
        """
        invalid = validate_candidate(candidate)
        if invalid is not None:
            logger.info("Defect record rejected: required field missing")
            return invalid

        try:
            existing = await self.find_duplicate(candidate)
        except BACKEND_ERRORS as exc:
            logger.error("Duplicate check failed", error=str(exc), exc_info=True)
            await self._rollback()
            return _result(AddOutcome.CHECK_FAILED)

        if existing is not None:
            logger.warning("Duplicate defect record rejected", existing_id=str(existing.id))
            return _result(AddOutcome.DUPLICATE)

        record = DefectRecord(
            date=candidate.date,
            respondent=candidate.respondent,
            process_step=candidate.process_step,
            cause_category=candidate.cause_category,
            comment=candidate.comment,
        )
        try:
            self.session.add(record)
            await self.session.commit()
        except BACKEND_ERRORS as exc:
            logger.error("Defect record insert failed", error=str(exc), exc_info=True)
            await self._rollback()
            return _result(AddOutcome.INSERT_FAILED)

        # The row is committed from here on; id is assigned client-side
        try:
            await self.session.refresh(record)
        except BACKEND_ERRORS as exc:
            logger.warning(
                "Defect record stored but refresh failed",
                record_id=str(record.id),
                error=str(exc),
            )
            await self._rollback()

        logger.info(
            "Defect record added",
            record_id=str(record.id),
            date=record.date.isoformat(),
            process_step=record.process_step.value if record.process_step else None,
        )
        return _result(AddOutcome.CREATED, record)

    async def submit(self, candidate: DefectRecordCreate) -> Tuple[AddResult, Optional[List[DefectRecord]]]:
        """
        Add a record and hand back the refreshed collection.

        The caller replaces its copy only when records are returned, i.e.
        after a successful insert.
        """
        result = await self.add(candidate)
        if not result.success:
            return result, None
        return result, await self.load()

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except BACKEND_ERRORS as exc:
            logger.warning("Rollback after store failure also failed", error=str(exc))
