"""
app/services package marker.
"""

from app.services.import_result_reporter import ImportResultReporter
from app.services.record_import_service import (
    ImportInfrastructureError,
    ImportTransportError,
    RecordImportService,
    get_record_import_service,
)

__all__ = [
    "ImportInfrastructureError",
    "ImportResultReporter",
    "ImportTransportError",
    "RecordImportService",
    "get_record_import_service",
]
