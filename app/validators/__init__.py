"""
app/validators package marker.

RowNormalizer is imported from app.validators.row_normalizer directly; it
depends on app.mappers, which in turn uses the coercers exported here.
"""

from app.validators.value_coercion import (
    coerce_boolean,
    coerce_date,
    coerce_datetime,
    coerce_integer,
    coerce_money,
    coerce_string,
    is_blank,
)

__all__ = [
    "coerce_boolean",
    "coerce_date",
    "coerce_datetime",
    "coerce_integer",
    "coerce_money",
    "coerce_string",
    "is_blank",
]
