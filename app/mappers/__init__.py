"""
app/mappers package marker.
"""

from app.mappers.entity_field_mappings import ENTITY_FIELD_MAPPINGS
from app.mappers.field_mapper import (
    FieldMapper,
    MissingRequiredFieldError,
    UnsupportedEntityTypeError,
    normalize_header,
)

__all__ = [
    "ENTITY_FIELD_MAPPINGS",
    "FieldMapper",
    "MissingRequiredFieldError",
    "UnsupportedEntityTypeError",
    "normalize_header",
]
