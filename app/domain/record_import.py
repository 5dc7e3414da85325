"""
app/domain/record_import.py

Domain models used by the bulk record import flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Union

RawValue = Union[str, int, float, bool, None]
RawRow = Mapping[str, RawValue]


class FieldKind(str, Enum):
    """
    Declared value kind of one canonical field.
    """

    STRING = "string"
    MONEY = "money"
    INTEGER = "integer"
    DATE = "date"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    REFERENCE = "reference"


class ImportStage(str, Enum):
    """
    Pipeline stage that rejected a row.
    """

    MAPPING = "Mapping"
    COERCION = "Coercion"
    VALIDATION = "Validation"
    STORAGE = "Storage"


@dataclass(frozen=True)
class FieldSpec:
    """
    One canonical field: where to find it in a raw row and how to type it.

    ``default`` may be a plain value or a zero-argument callable evaluated per
    row (used for "today + N days" style fallbacks). Fields with
    ``stored=False`` only feed the entity ``derive`` hook.
    """

    key: str
    kind: FieldKind
    aliases: tuple[str, ...] = ()
    required: bool = False
    default: Any = None
    minimum: int | None = None
    maximum: int | None = None
    stored: bool = True

    @property
    def candidates(self) -> tuple[str, ...]:
        return (self.key, *self.aliases)

    def resolve_default(self) -> Any:
        if callable(self.default):
            return self.default()
        if self.default is not None:
            return self.default
        if self.kind is FieldKind.MONEY:
            return Decimal("0.00")
        if self.kind is FieldKind.INTEGER:
            return 0
        if self.kind is FieldKind.BOOLEAN:
            return False
        return None


DeriveHook = Callable[[dict[str, RawValue]], dict[str, RawValue]]


@dataclass(frozen=True)
class EntityFieldMapping:
    """
    Static mapping table for one importable entity type.
    """

    entity_type: str
    table_name: str
    fields: tuple[FieldSpec, ...]
    derive: DeriveHook | None = None

    @property
    def required_keys(self) -> tuple[str, ...]:
        return tuple(spec.key for spec in self.fields if spec.required)

    @property
    def stored_keys(self) -> tuple[str, ...]:
        return tuple(spec.key for spec in self.fields if spec.stored)

    def field(self, key: str) -> FieldSpec:
        for spec in self.fields:
            if spec.key == key:
                return spec
        raise KeyError(key)


@dataclass(frozen=True)
class CoercionFailure:
    """
    Signal that a raw value could not be converted to its declared kind.
    """

    value: str
    message: str


@dataclass(frozen=True)
class NormalizedRecord:
    """
    Typed, storage-ready values produced from exactly one raw row.
    """

    entity_type: str
    row_number: int
    values: Mapping[str, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))


@dataclass(frozen=True)
class RowError:
    """
    Why one raw row could not be stored.
    """

    row: RawRow
    reason: str
    stage: ImportStage
    row_number: int
    field: str | None = None


@dataclass(frozen=True)
class RowSuccess:
    """
    One raw row that was stored, with the identifier assigned by the store.
    """

    row: RawRow
    row_number: int
    id: int


@dataclass(frozen=True)
class ImportResult:
    """
    End-of-batch import summary returned across the pipeline boundary.
    """

    entity_type: str
    inserted_count: int
    error_count: int
    message: str
    errors: tuple[RowError, ...] = field(default_factory=tuple)
    successes: tuple[RowSuccess, ...] = field(default_factory=tuple)

    @property
    def inserted_ids(self) -> tuple[int, ...]:
        return tuple(success.id for success in self.successes)

    @property
    def total_rows(self) -> int:
        return self.inserted_count + self.error_count

