"""
app/domain package marker.
"""

from app.domain.record_import import (
    EntityFieldMapping,
    FieldKind,
    FieldSpec,
    ImportResult,
    ImportStage,
    NormalizedRecord,
    RowError,
    RowSuccess,
)

__all__ = [
    "EntityFieldMapping",
    "FieldKind",
    "FieldSpec",
    "ImportResult",
    "ImportStage",
    "NormalizedRecord",
    "RowError",
    "RowSuccess",
]
