"""
app/schemas package marker.
"""

from app.schemas.record_import import (
    HealthResponse,
    ImportErrorDetailResponse,
    ImportFieldResponse,
    ImportFieldsResponse,
    ImportRequest,
    ImportSuccessDetailResponse,
    ImportSummaryResponse,
)

__all__ = [
    "HealthResponse",
    "ImportErrorDetailResponse",
    "ImportFieldResponse",
    "ImportFieldsResponse",
    "ImportRequest",
    "ImportSuccessDetailResponse",
    "ImportSummaryResponse",
]
