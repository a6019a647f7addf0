from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from defect_monitor.core.database import get_db
from defect_monitor.services.record_store import RecordStore


async def get_record_store(db: AsyncSession = Depends(get_db)) -> RecordStore:
    """Record store bound to the request's session."""
    return RecordStore(db)
