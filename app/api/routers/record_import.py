"""
app/api/routers/record_import.py

Bulk record import HTTP endpoints.
"""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_actor_id, get_csv_upload, get_import_rows, read_csv_rows
from app.domain.record_import import RawRow
from app.mappers.field_mapper import UnsupportedEntityTypeError
from app.repositories.record_store import SQLAlchemyRecordStore
from app.schemas.record_import import (
    ImportFieldResponse,
    ImportFieldsResponse,
    ImportSummaryResponse,
)
from app.services.record_import_service import (
    ImportInfrastructureError,
    ImportTransportError,
    RecordImportService,
    get_record_import_service,
)
from db.session import get_db

router = APIRouter(prefix="/api/import", tags=["import"])


@router.get("/{entity_type}/fields", response_model=ImportFieldsResponse)
def list_import_fields(
    entity_type: str,
    import_service: RecordImportService = Depends(get_record_import_service),
) -> ImportFieldsResponse:
    """
    List the canonical fields and accepted column aliases for an entity type.
    """

    try:
        mapping = import_service.normalizer.mapper.mapping_for(entity_type)
    except UnsupportedEntityTypeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return ImportFieldsResponse(
        entity_type=mapping.entity_type,
        fields=[
            ImportFieldResponse(
                key=spec.key,
                kind=spec.kind.value,
                required=spec.required,
                aliases=list(spec.aliases),
            )
            for spec in mapping.fields
        ],
    )


@router.post("/{entity_type}", response_model=ImportSummaryResponse)
def import_records(
    entity_type: str,
    rows: list[RawRow] = Depends(get_import_rows),
    actor_id: int = Depends(get_actor_id),
    db: Session = Depends(get_db),
    import_service: RecordImportService = Depends(get_record_import_service),
) -> ImportSummaryResponse:
    """
    Import a JSON batch of records of one entity type.
    """

    return _run_import(
        entity_type=entity_type,
        rows=rows,
        actor_id=actor_id,
        db=db,
        import_service=import_service,
    )


@router.post("/{entity_type}/upload", response_model=ImportSummaryResponse)
def upload_records(
    entity_type: str,
    file: UploadFile = Depends(get_csv_upload),
    actor_id: int = Depends(get_actor_id),
    db: Session = Depends(get_db),
    import_service: RecordImportService = Depends(get_record_import_service),
) -> ImportSummaryResponse:
    """
    Import a CSV file of records of one entity type.
    """

    try:
        rows = read_csv_rows(file)
    except ImportTransportError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()

    return _run_import(
        entity_type=entity_type,
        rows=rows,
        actor_id=actor_id,
        db=db,
        import_service=import_service,
    )


def _run_import(
    *,
    entity_type: str,
    rows: Sequence[RawRow],
    actor_id: int,
    db: Session,
    import_service: RecordImportService,
) -> ImportSummaryResponse:
    try:
        result = import_service.commit(
            entity_type=entity_type,
            rows=rows,
            actor_id=actor_id,
            store=SQLAlchemyRecordStore(db),
        )
    except UnsupportedEntityTypeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except ImportInfrastructureError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc

    return ImportSummaryResponse.from_domain(result)
