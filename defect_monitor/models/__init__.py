"""Database model definitions."""

from .defect_record import DefectRecord

__all__ = ["DefectRecord"]
