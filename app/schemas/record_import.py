"""
app/schemas/record_import.py

Request and response schemas for record import endpoints.

Response field names are camelCase on the wire to match what the import
screens consume.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, Field

from app.domain.record_import import ImportResult, RowError, RowSuccess

RawCell = Union[str, int, float, bool, None]


class ImportRequest(BaseModel):
    """
    JSON body accepted by the record import endpoint.
    """

    items: list[dict[str, RawCell]] = Field(..., min_length=1)


class ImportErrorDetailResponse(BaseModel):
    """
    One row that could not be stored.
    """

    model_config = {"populate_by_name": True}

    row: dict[str, RawCell]
    row_number: int = Field(..., ge=1, alias="rowNumber")
    reason: str
    stage: str
    field: str | None = None

    @classmethod
    def from_domain(cls, error: RowError) -> "ImportErrorDetailResponse":
        return cls(
            row=dict(error.row),
            row_number=error.row_number,
            reason=error.reason,
            stage=error.stage.value,
            field=error.field,
        )


class ImportSuccessDetailResponse(BaseModel):
    """
    One row that was stored, with its new id.
    """

    model_config = {"populate_by_name": True}

    row: dict[str, RawCell]
    row_number: int = Field(..., ge=1, alias="rowNumber")
    id: int

    @classmethod
    def from_domain(cls, success: RowSuccess) -> "ImportSuccessDetailResponse":
        return cls(row=dict(success.row), row_number=success.row_number, id=success.id)


class ImportSummaryResponse(BaseModel):
    """
    API response model for a completed import batch.
    """

    model_config = {"populate_by_name": True}

    success: bool = True
    inserted: int = Field(..., ge=0)
    errors: int = Field(..., ge=0)
    error_details: list[ImportErrorDetailResponse] = Field(default_factory=list, alias="errorDetails")
    success_details: list[ImportSuccessDetailResponse] = Field(
        default_factory=list,
        alias="successDetails",
    )
    message: str

    @classmethod
    def from_domain(cls, result: ImportResult) -> "ImportSummaryResponse":
        return cls(
            inserted=result.inserted_count,
            errors=result.error_count,
            error_details=[ImportErrorDetailResponse.from_domain(error) for error in result.errors],
            success_details=[
                ImportSuccessDetailResponse.from_domain(success) for success in result.successes
            ],
            message=result.message,
        )


class ImportFieldResponse(BaseModel):
    """
    One canonical field accepted for an entity type.
    """

    key: str
    kind: str
    required: bool
    aliases: list[str] = Field(default_factory=list)


class ImportFieldsResponse(BaseModel):
    """
    Canonical fields accepted for one entity type.
    """

    entity_type: str
    fields: list[ImportFieldResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """
    Liveness probe payload.
    """

    status: str
