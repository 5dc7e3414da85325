"""
app/validators/row_normalizer.py

Row-level mapping, coercion, defaulting and validation for record imports.

The normalizer is permissive for optional fields (defaults over failures)
and strict only for fields the store requires non-null.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from app.domain.record_import import (
    CoercionFailure,
    EntityFieldMapping,
    FieldKind,
    FieldSpec,
    ImportStage,
    NormalizedRecord,
    RawRow,
    RowError,
)
from app.mappers.field_mapper import FieldMapper, MissingRequiredFieldError
from app.validators.value_coercion import (
    MONEY_LIMIT,
    coerce_boolean,
    coerce_date,
    coerce_datetime,
    coerce_integer,
    coerce_money,
    coerce_string,
)

logger = logging.getLogger(__name__)

# Range of the INTEGER columns integer fields are stored in.
INTEGER_COLUMN_MIN = -(2**31)
INTEGER_COLUMN_MAX = 2**31 - 1


class RowRejectedError(ValueError):
    """
    Raised internally when a row cannot progress past a pipeline stage.
    """

    def __init__(self, *, stage: ImportStage, reason: str, field: str | None = None) -> None:
        super().__init__(reason)
        self.stage = stage
        self.reason = reason
        self.field = field


class RowNormalizer:
    """
    Turns one raw row into a NormalizedRecord or a stage-tagged RowError.
    """

    def __init__(
        self,
        *,
        mapper: FieldMapper | None = None,
        unassigned_reference_id: int | None = 0,
    ) -> None:
        self._mapper = mapper or FieldMapper()
        self._unassigned_reference_id = unassigned_reference_id

    @property
    def mapper(self) -> FieldMapper:
        return self._mapper

    def normalize(
        self,
        *,
        entity_type: str,
        raw_row: RawRow,
        row_number: int,
    ) -> NormalizedRecord | RowError:
        """
        Normalize one raw row.

        Raises:
            UnsupportedEntityTypeError: entity type has no mapping table.
        """

        mapping = self._mapper.mapping_for(entity_type)
        try:
            values = self._normalize_values(mapping=mapping, raw_row=raw_row)
        except RowRejectedError as exc:
            return RowError(
                row=raw_row,
                reason=exc.reason,
                stage=exc.stage,
                row_number=row_number,
                field=exc.field,
            )

        return NormalizedRecord(entity_type=entity_type, row_number=row_number, values=values)

    def _normalize_values(self, *, mapping: EntityFieldMapping, raw_row: RawRow) -> dict[str, Any]:
        try:
            mapped = self._mapper.map_row(mapping.entity_type, raw_row)
        except MissingRequiredFieldError as exc:
            raise RowRejectedError(
                stage=ImportStage.MAPPING,
                reason=str(exc),
                field=exc.field,
            ) from exc

        values: dict[str, Any] = {}
        for spec in mapping.fields:
            if not spec.stored:
                continue
            if spec.key in mapped:
                value = self._coerce(spec, mapped[spec.key])
            else:
                value = spec.resolve_default()
            values[spec.key] = self._validate(spec, value)
        return values

    def _coerce(self, spec: FieldSpec, raw: Any) -> Any:
        kind = spec.kind
        if kind is FieldKind.STRING:
            return coerce_string(raw)
        if kind is FieldKind.MONEY:
            return coerce_money(raw)
        if kind in (FieldKind.INTEGER, FieldKind.REFERENCE):
            return coerce_integer(raw)
        if kind is FieldKind.BOOLEAN:
            return coerce_boolean(raw)

        parsed = coerce_date(raw) if kind is FieldKind.DATE else coerce_datetime(raw)
        if not isinstance(parsed, CoercionFailure):
            return parsed
        if spec.required:
            raise RowRejectedError(
                stage=ImportStage.COERCION,
                reason=f"invalid date for {spec.key}: {parsed.value!r}",
                field=spec.key,
            )
        logger.debug(
            "Falling back to default for unparseable %s value=%r",
            spec.key,
            parsed.value,
        )
        return spec.resolve_default()

    def _validate(self, spec: FieldSpec, value: Any) -> Any:
        if spec.kind is FieldKind.MONEY and isinstance(value, Decimal) and abs(value) > MONEY_LIMIT:
            raise RowRejectedError(
                stage=ImportStage.VALIDATION,
                reason=f"{spec.key} out of range [-{MONEY_LIMIT}, {MONEY_LIMIT}]: {value}",
                field=spec.key,
            )

        if spec.kind in (FieldKind.INTEGER, FieldKind.REFERENCE) and isinstance(value, int):
            if not INTEGER_COLUMN_MIN <= value <= INTEGER_COLUMN_MAX:
                raise RowRejectedError(
                    stage=ImportStage.VALIDATION,
                    reason=(
                        f"{spec.key} out of range "
                        f"[{INTEGER_COLUMN_MIN}, {INTEGER_COLUMN_MAX}]: {value}"
                    ),
                    field=spec.key,
                )

        if spec.kind is FieldKind.REFERENCE:
            return self._resolve_reference(spec, value)

        if spec.kind is FieldKind.INTEGER and isinstance(value, int):
            below = spec.minimum is not None and value < spec.minimum
            above = spec.maximum is not None and value > spec.maximum
            if below or above:
                raise RowRejectedError(
                    stage=ImportStage.VALIDATION,
                    reason=(
                        f"{spec.key} out of range "
                        f"[{_bound(spec.minimum)}, {_bound(spec.maximum)}]: {value}"
                    ),
                    field=spec.key,
                )
        return value

    def _resolve_reference(self, spec: FieldSpec, value: Any) -> int:
        if isinstance(value, int) and value > 0:
            return value
        if self._unassigned_reference_id is None:
            raise RowRejectedError(
                stage=ImportStage.VALIDATION,
                reason=f"missing {spec.key} and no unassigned sentinel configured",
                field=spec.key,
            )
        return self._unassigned_reference_id


def _bound(value: int | None) -> str:
    return "-" if value is None else str(value)
