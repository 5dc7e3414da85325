"""
app/mappers/field_mapper.py

Alias-based field mapping from raw import rows to canonical field keys.
"""

from __future__ import annotations

from typing import Mapping

from app.domain.record_import import EntityFieldMapping, RawRow, RawValue
from app.mappers.entity_field_mappings import ENTITY_FIELD_MAPPINGS
from app.validators.value_coercion import is_blank


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return "".join(ch for ch in header.strip().lower() if ch.isalnum())


class UnsupportedEntityTypeError(ValueError):
    """
    Raised when an import targets an entity type with no mapping table.
    """

    def __init__(self, entity_type: str) -> None:
        super().__init__(f"Unsupported import type: {entity_type}")
        self.entity_type = entity_type


class MissingRequiredFieldError(ValueError):
    """
    Raised when a required canonical field has no non-blank source column in a row.
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"missing {field}")
        self.field = field


class FieldMapper:
    """
    Maps raw rows onto canonical field keys using per-entity alias tables.

    For each canonical key the aliases are tried in declared order and the
    first one with a non-blank value in the row wins.
    """

    def __init__(self, mappings: Mapping[str, EntityFieldMapping] | None = None) -> None:
        self._mappings = mappings if mappings is not None else ENTITY_FIELD_MAPPINGS
        self._candidates: dict[str, dict[str, tuple[str, ...]]] = {
            entity_type: {
                spec.key: self._normalized_candidates(spec.candidates)
                for spec in mapping.fields
            }
            for entity_type, mapping in self._mappings.items()
        }

    def entity_types(self) -> tuple[str, ...]:
        return tuple(self._mappings)

    def mapping_for(self, entity_type: str) -> EntityFieldMapping:
        mapping = self._mappings.get(entity_type)
        if mapping is None:
            raise UnsupportedEntityTypeError(entity_type)
        return mapping

    def map_row(self, entity_type: str, raw_row: RawRow) -> dict[str, RawValue]:
        """
        Map one raw row into canonical raw values.

        Raises:
            UnsupportedEntityTypeError: entity type has no mapping table.
            MissingRequiredFieldError: a required key has no non-blank column.
        """

        mapping = self.mapping_for(entity_type)
        columns = self._index_columns(raw_row)
        field_candidates = self._candidates[entity_type]

        mapped: dict[str, RawValue] = {}
        for spec in mapping.fields:
            for candidate in field_candidates[spec.key]:
                value = self._first_non_blank(columns.get(candidate, ()), raw_row)
                if value is not None:
                    mapped[spec.key] = value
                    break

        if mapping.derive is not None:
            mapped = mapping.derive(mapped)

        for required in mapping.required_keys:
            if required not in mapped:
                raise MissingRequiredFieldError(required)

        return mapped

    @staticmethod
    def _normalized_candidates(candidates: tuple[str, ...]) -> tuple[str, ...]:
        seen: list[str] = []
        for candidate in candidates:
            normalized = normalize_header(candidate)
            if normalized and normalized not in seen:
                seen.append(normalized)
        return tuple(seen)

    @staticmethod
    def _index_columns(raw_row: RawRow) -> dict[str, tuple[str, ...]]:
        columns: dict[str, list[str]] = {}
        for label in raw_row:
            normalized = normalize_header(str(label))
            if normalized:
                columns.setdefault(normalized, []).append(label)
        return {key: tuple(labels) for key, labels in columns.items()}

    @staticmethod
    def _first_non_blank(labels: tuple[str, ...], raw_row: RawRow) -> RawValue:
        for label in labels:
            value = raw_row[label]
            if not is_blank(value):
                return value
        return None
