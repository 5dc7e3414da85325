"""
app/services/import_result_reporter.py

Aggregates per-row outcomes of one import batch into an ImportResult.
"""

from __future__ import annotations

from app.domain.record_import import ImportResult, RawRow, RowError, RowSuccess


class ImportResultReporter:
    """
    Collects row outcomes in input order.

    The reporter has no side effects; logging happens in the service that
    drives it.
    """

    def __init__(self, entity_type: str) -> None:
        self._entity_type = entity_type
        self._successes: list[RowSuccess] = []
        self._errors: list[RowError] = []

    def record_success(self, *, row: RawRow, row_number: int, record_id: int) -> RowSuccess:
        success = RowSuccess(row=row, row_number=row_number, id=record_id)
        self._successes.append(success)
        return success

    def record_failure(self, error: RowError) -> RowError:
        self._errors.append(error)
        return error

    def build(self) -> ImportResult:
        inserted = len(self._successes)
        failed = len(self._errors)
        return ImportResult(
            entity_type=self._entity_type,
            inserted_count=inserted,
            error_count=failed,
            message=build_summary_message(inserted, failed),
            errors=tuple(self._errors),
            successes=tuple(self._successes),
        )


def build_summary_message(inserted: int, failed: int) -> str:
    message = f"Successfully imported {inserted} records"
    if failed:
        return f"{message}; {failed} failed."
    return f"{message}."
