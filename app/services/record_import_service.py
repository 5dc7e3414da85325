"""
app/services/record_import_service.py

Service layer for bulk record imports.

A batch is processed strictly in input order. Each row is normalized, then
stored in its own savepoint, so one bad row is reported and skipped while
the rest of the batch is still stored. Only infrastructure failures abort
the batch, and they abort it as a whole.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from functools import lru_cache

from app.config import get_record_import_settings
from app.domain.record_import import ImportResult, ImportStage, RawRow, RowError
from app.repositories.record_store import (
    RecordInsertError,
    RecordStore,
    RecordStoreUnavailableError,
)
from app.services.import_result_reporter import ImportResultReporter
from app.validators.row_normalizer import RowNormalizer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ImportTransportError(ValueError):
    """
    Raised when an import request body cannot be parsed into rows.
    """


class ImportInfrastructureError(RuntimeError):
    """
    Raised when the store fails as a whole; the batch was rolled back.
    """


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class RecordImportService:
    """
    Coordinates normalization, persistence and reporting for one import batch.
    """

    def __init__(
        self,
        *,
        log_row_errors: bool,
        normalizer: RowNormalizer | None = None,
    ) -> None:
        self._log_row_errors = log_row_errors
        self._normalizer = normalizer or RowNormalizer()

    @property
    def normalizer(self) -> RowNormalizer:
        return self._normalizer

    def commit(
        self,
        *,
        entity_type: str,
        rows: Sequence[RawRow],
        actor_id: int,
        store: RecordStore,
    ) -> ImportResult:
        """
        Normalize and store every row, returning the per-row outcome summary.

        Args:
            entity_type: Target entity type, e.g. "orders".
            rows:        Raw rows in input order; row numbers are 1-based.
            actor_id:    Owner stamped on every stored record.
            store:       Transactional record store; the caller owns its session.

        Raises:
            UnsupportedEntityTypeError: entity type has no mapping table.
            ImportInfrastructureError:  the store became unusable mid-batch, or an
                                        unexpected error left it in an unknown state.
        """

        self._normalizer.mapper.mapping_for(entity_type)
        reporter = ImportResultReporter(entity_type)

        logger.info(
            "Record import started entity_type=%s rows=%d actor_id=%s",
            entity_type,
            len(rows),
            actor_id,
        )

        try:
            store.begin()
            for row_number, raw_row in enumerate(rows, start=1):
                self._process_row(
                    entity_type=entity_type,
                    raw_row=raw_row,
                    row_number=row_number,
                    actor_id=actor_id,
                    store=store,
                    reporter=reporter,
                )
            store.commit()
        except RecordStoreUnavailableError as exc:
            store.rollback()
            logger.exception(
                "Record import aborted entity_type=%s actor_id=%s: %s",
                entity_type,
                actor_id,
                exc,
            )
            raise ImportInfrastructureError("Import failed.") from exc
        except Exception as exc:
            store.rollback()
            logger.exception(
                "Record import aborted by unexpected error entity_type=%s actor_id=%s",
                entity_type,
                actor_id,
            )
            raise ImportInfrastructureError("Import failed.") from exc

        result = reporter.build()
        logger.info(
            "Record import finished entity_type=%s inserted=%d failed=%d",
            entity_type,
            result.inserted_count,
            result.error_count,
        )
        return result

    def _process_row(
        self,
        *,
        entity_type: str,
        raw_row: RawRow,
        row_number: int,
        actor_id: int,
        store: RecordStore,
        reporter: ImportResultReporter,
    ) -> None:
        try:
            outcome = self._normalizer.normalize(
                entity_type=entity_type,
                raw_row=raw_row,
                row_number=row_number,
            )
        except Exception as exc:
            logger.exception(
                "Unexpected error normalizing row=%s entity_type=%s",
                row_number,
                entity_type,
            )
            outcome = RowError(
                row=raw_row,
                reason=str(exc) or type(exc).__name__,
                stage=ImportStage.COERCION,
                row_number=row_number,
            )
        if isinstance(outcome, RowError):
            self._record_error(reporter, outcome)
            return

        try:
            record_id = store.insert(entity_type, outcome, actor_id)
        except RecordInsertError as exc:
            self._record_error(
                reporter,
                RowError(
                    row=raw_row,
                    reason=str(exc),
                    stage=ImportStage.STORAGE,
                    row_number=row_number,
                ),
            )
            return

        reporter.record_success(row=raw_row, row_number=row_number, record_id=record_id)

    def _record_error(self, reporter: ImportResultReporter, error: RowError) -> None:
        reporter.record_failure(error)
        if self._log_row_errors:
            logger.warning(
                "Import row rejected row=%s stage=%s field=%s reason=%s",
                error.row_number,
                error.stage.value,
                error.field,
                error.reason,
            )


@lru_cache(maxsize=1)
def get_record_import_service() -> RecordImportService:
    """
    Return a cached record import service configured from settings.
    """

    settings = get_record_import_settings()
    return RecordImportService(
        log_row_errors=settings.log_row_errors,
        normalizer=RowNormalizer(unassigned_reference_id=settings.unassigned_contact_id),
    )
