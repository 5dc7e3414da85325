"""
tests/test_record_import_service.py

Pytest unit tests for RecordImportService.commit against an in-memory store.

Coverage
--------
- End-to-end orders example (one valid row, one missing key)
- Storage refusal of one row in ten (partial commit)
- inserted + errors == rows for mixed batches
- Re-running a batch inserts duplicates with new ids
- Oversized amounts and unexpected normalizer errors stay row-local
- Store outages and unexpected store errors abort and roll back the whole batch
- Unknown entity types fail before touching the store
- Actor id is stamped on every insert
- Row error logging toggle
"""

from __future__ import annotations

import itertools
import logging

import pytest

from app.domain.record_import import ImportStage, NormalizedRecord
from app.mappers.field_mapper import UnsupportedEntityTypeError
from app.repositories.record_store import RecordInsertError, RecordStoreUnavailableError
from app.services.record_import_service import ImportInfrastructureError, RecordImportService
from app.validators.row_normalizer import RowNormalizer


class FakeRecordStore:
    """
    In-memory RecordStore. Inserts are pending until commit; rollback drops them.
    """

    def __init__(
        self,
        *,
        refuse=None,
        unavailable_on_insert: int | None = None,
        unavailable_on_commit: bool = False,
    ) -> None:
        self._ids = itertools.count(1)
        self._refuse = refuse
        self._unavailable_on_insert = unavailable_on_insert
        self._unavailable_on_commit = unavailable_on_commit
        self.pending: list[tuple[int, str, NormalizedRecord, int]] = []
        self.committed: list[tuple[int, str, NormalizedRecord, int]] = []
        self.begin_calls = 0
        self.insert_calls = 0
        self.rolled_back = False

    def begin(self) -> None:
        self.begin_calls += 1

    def insert(self, entity_type: str, record: NormalizedRecord, actor_id: int) -> int:
        self.insert_calls += 1
        if self._unavailable_on_insert == self.insert_calls:
            raise RecordStoreUnavailableError("connection reset by peer")
        if self._refuse is not None and self._refuse(record):
            raise RecordInsertError("UNIQUE constraint failed: orders.order_number")
        record_id = next(self._ids)
        self.pending.append((record_id, entity_type, record, actor_id))
        return record_id

    def commit(self) -> None:
        if self._unavailable_on_commit:
            raise RecordStoreUnavailableError("server closed the connection unexpectedly")
        self.committed.extend(self.pending)
        self.pending.clear()

    def rollback(self) -> None:
        self.rolled_back = True
        self.pending.clear()


@pytest.fixture()
def service() -> RecordImportService:
    return RecordImportService(log_row_errors=True)


def _orders(count: int) -> list[dict]:
    return [{"order_number": f"Q-{index}", "total_amount": "$10.00"} for index in range(1, count + 1)]


class _ExplodingNormalizer(RowNormalizer):
    def __init__(self, *, fail_on_row: int) -> None:
        super().__init__()
        self._fail_on_row = fail_on_row

    def normalize(self, *, entity_type, raw_row, row_number):
        if row_number == self._fail_on_row:
            raise ArithmeticError("bad cell")
        return super().normalize(entity_type=entity_type, raw_row=raw_row, row_number=row_number)


def _raise_type_error(record: NormalizedRecord) -> bool:
    raise TypeError("unsupported value type")


class TestCommit:
    def test_end_to_end_orders_example(self, service) -> None:
        store = FakeRecordStore()
        rows = [
            {"order_number": "Q-100", "total_amount": "$50.00", "event_date": "12/01/2024"},
            {"order_number": "", "total_amount": "abc"},
        ]

        result = service.commit(entity_type="orders", rows=rows, actor_id=7, store=store)

        assert result.inserted_count == 1
        assert result.error_count == 1
        assert result.errors[0].reason == "missing order_number"
        assert result.errors[0].stage is ImportStage.MAPPING
        assert result.errors[0].row_number == 2
        assert result.successes[0].row == rows[0]
        assert len(store.committed) == 1

    def test_one_storage_refusal_in_ten_keeps_the_other_nine(self, service) -> None:
        store = FakeRecordStore(refuse=lambda record: record.values["order_number"] == "Q-5")

        result = service.commit(entity_type="orders", rows=_orders(10), actor_id=7, store=store)

        assert result.inserted_count == 9
        assert result.error_count == 1
        error = result.errors[0]
        assert error.stage is ImportStage.STORAGE
        assert error.row_number == 5
        assert "UNIQUE constraint failed" in error.reason
        assert len(store.committed) == 9
        assert not store.rolled_back

    def test_counts_always_cover_every_row(self, service) -> None:
        store = FakeRecordStore(refuse=lambda record: record.values["order_number"] == "Q-2")
        rows = [
            {"order_number": "Q-1"},
            {"order_number": "Q-2"},
            {"order_number": ""},
            {"order_number": "Q-4", "profit": "500"},
            {"order_number": "Q-5"},
        ]

        result = service.commit(entity_type="orders", rows=rows, actor_id=7, store=store)

        assert result.inserted_count + result.error_count == len(rows)
        assert [error.stage for error in result.errors] == [
            ImportStage.STORAGE,
            ImportStage.MAPPING,
            ImportStage.VALIDATION,
        ]
        assert [success.row_number for success in result.successes] == [1, 5]

    def test_rerunning_a_batch_is_not_idempotent(self, service) -> None:
        store = FakeRecordStore()
        rows = _orders(3)

        first = service.commit(entity_type="orders", rows=rows, actor_id=7, store=store)
        second = service.commit(entity_type="orders", rows=rows, actor_id=7, store=store)

        assert first.inserted_count == second.inserted_count == 3
        assert set(first.inserted_ids).isdisjoint(second.inserted_ids)
        assert len(store.committed) == 6

    def test_actor_id_is_stamped_on_every_insert(self, service) -> None:
        store = FakeRecordStore()

        service.commit(entity_type="orders", rows=_orders(3), actor_id=42, store=store)

        assert {actor for _, _, _, actor in store.committed} == {42}

    def test_store_is_begun_and_committed_once(self, service) -> None:
        store = FakeRecordStore()

        service.commit(entity_type="orders", rows=_orders(4), actor_id=7, store=store)

        assert store.begin_calls == 1
        assert store.insert_calls == 4


class TestRowLocalFailures:
    def test_oversized_amount_is_reported_and_siblings_are_stored(self, service) -> None:
        store = FakeRecordStore()
        rows = [
            {"order_number": "A-1", "total_amount": "$5"},
            {"order_number": "A-2", "total_amount": "9" * 30},
            {"order_number": "A-3", "total_amount": "$7.50"},
        ]

        result = service.commit(entity_type="orders", rows=rows, actor_id=7, store=store)

        assert result.inserted_count == 2
        assert result.error_count == 1
        assert result.total_rows == len(rows)
        assert result.errors[0].row_number == 2
        assert result.errors[0].stage is ImportStage.VALIDATION
        assert result.errors[0].field == "total_amount"
        assert [record.values["order_number"] for _, _, record, _ in store.committed] == ["A-1", "A-3"]

    def test_unexpected_normalizer_error_is_a_row_error(self, caplog) -> None:
        broken = _ExplodingNormalizer(fail_on_row=2)
        quiet = RecordImportService(log_row_errors=False, normalizer=broken)
        store = FakeRecordStore()

        with caplog.at_level(logging.ERROR, logger="app.services.record_import_service"):
            result = quiet.commit(entity_type="orders", rows=_orders(3), actor_id=7, store=store)

        assert result.inserted_count == 2
        assert result.error_count == 1
        assert result.errors[0].row_number == 2
        assert result.errors[0].stage is ImportStage.COERCION
        assert result.errors[0].reason == "bad cell"
        assert len(store.committed) == 2
        assert not store.rolled_back
        assert "Unexpected error normalizing row=2" in caplog.text


class TestInfrastructureFailures:
    def test_outage_mid_batch_rolls_back_everything(self, service) -> None:
        store = FakeRecordStore(unavailable_on_insert=3)

        with pytest.raises(ImportInfrastructureError, match="Import failed."):
            service.commit(entity_type="orders", rows=_orders(5), actor_id=7, store=store)

        assert store.rolled_back
        assert store.committed == []
        assert store.pending == []

    def test_outage_on_commit_rolls_back(self, service) -> None:
        store = FakeRecordStore(unavailable_on_commit=True)

        with pytest.raises(ImportInfrastructureError):
            service.commit(entity_type="orders", rows=_orders(2), actor_id=7, store=store)

        assert store.rolled_back
        assert store.committed == []

    def test_unexpected_store_error_rolls_back(self, service) -> None:
        store = FakeRecordStore(refuse=_raise_type_error)

        with pytest.raises(ImportInfrastructureError, match="Import failed."):
            service.commit(entity_type="orders", rows=_orders(2), actor_id=7, store=store)

        assert store.rolled_back
        assert store.committed == []

    def test_cause_is_logged(self, service, caplog) -> None:
        store = FakeRecordStore(unavailable_on_insert=1)

        with caplog.at_level(logging.ERROR, logger="app.services.record_import_service"):
            with pytest.raises(ImportInfrastructureError):
                service.commit(entity_type="orders", rows=_orders(1), actor_id=7, store=store)

        assert "connection reset by peer" in caplog.text

    def test_unknown_entity_type_fails_before_storage(self, service) -> None:
        store = FakeRecordStore()

        with pytest.raises(UnsupportedEntityTypeError):
            service.commit(entity_type="widgets", rows=[{"name": "x"}], actor_id=7, store=store)

        assert store.begin_calls == 0
        assert store.insert_calls == 0


class TestRowErrorLogging:
    def test_row_errors_logged_when_enabled(self, service, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="app.services.record_import_service"):
            service.commit(
                entity_type="orders",
                rows=[{"order_number": ""}],
                actor_id=7,
                store=FakeRecordStore(),
            )

        assert "missing order_number" in caplog.text

    def test_row_errors_silent_when_disabled(self, caplog) -> None:
        quiet = RecordImportService(log_row_errors=False)

        with caplog.at_level(logging.WARNING, logger="app.services.record_import_service"):
            result = quiet.commit(
                entity_type="orders",
                rows=[{"order_number": ""}],
                actor_id=7,
                store=FakeRecordStore(),
            )

        assert result.error_count == 1
        assert "missing order_number" not in caplog.text
