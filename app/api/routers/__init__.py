"""
app/api/routers package marker.
"""

from app.api.routers.record_import import router as record_import_router

__all__ = [
    "record_import_router",
]
