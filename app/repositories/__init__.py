"""
app/repositories package marker.
"""

from app.repositories.record_store import (
    RecordInsertError,
    RecordStore,
    RecordStoreUnavailableError,
    SQLAlchemyRecordStore,
)

__all__ = [
    "RecordInsertError",
    "RecordStore",
    "RecordStoreUnavailableError",
    "SQLAlchemyRecordStore",
]
