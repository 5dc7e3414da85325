"""
tests/test_row_normalizer.py

Pytest unit tests for RowNormalizer stage tagging, defaults and validation.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.domain.record_import import ImportStage, NormalizedRecord, RowError
from app.mappers.field_mapper import UnsupportedEntityTypeError
from app.validators.row_normalizer import RowNormalizer


@pytest.fixture()
def normalizer() -> RowNormalizer:
    return RowNormalizer()


def _normalize(normalizer: RowNormalizer, entity_type: str, row: dict, row_number: int = 1):
    return normalizer.normalize(entity_type=entity_type, raw_row=row, row_number=row_number)


class TestOrders:
    def test_valid_row_is_typed_and_defaulted(self, normalizer) -> None:
        record = _normalize(
            normalizer,
            "orders",
            {"order_number": "Q-100", "total_amount": "$50.00", "event_date": "12/01/2024"},
        )

        assert isinstance(record, NormalizedRecord)
        assert record.row_number == 1
        assert record.values["order_number"] == "Q-100"
        assert record.values["total_amount"] == Decimal("50.00")
        assert record.values["event_date"] == date(2024, 12, 1)
        assert record.values["event_type"] == "Other"
        assert record.values["status"] == "Quote"
        assert record.values["delivery_type"] == "Pickup"
        assert record.values["delivery_fee"] == Decimal("0.00")
        assert record.values["profit"] == 0
        assert record.values["deposit_paid"] is False
        assert record.values["notes"] is None

    def test_missing_required_key_is_mapping_error(self, normalizer) -> None:
        error = _normalize(normalizer, "orders", {"order_number": "", "total_amount": "abc"}, 2)

        assert isinstance(error, RowError)
        assert error.stage is ImportStage.MAPPING
        assert error.reason == "missing order_number"
        assert error.field == "order_number"
        assert error.row_number == 2
        assert error.row == {"order_number": "", "total_amount": "abc"}

    def test_unparseable_optional_date_uses_default(self, normalizer) -> None:
        record = _normalize(normalizer, "orders", {"order_number": "Q-1", "event_date": "soon"})

        assert isinstance(record, NormalizedRecord)
        assert record.values["event_date"] == date.today() + timedelta(days=7)

    def test_absent_event_date_uses_default(self, normalizer) -> None:
        record = _normalize(normalizer, "orders", {"order_number": "Q-1"})

        assert record.values["event_date"] == date.today() + timedelta(days=7)

    def test_out_of_range_bounded_integer_is_validation_error(self, normalizer) -> None:
        error = _normalize(normalizer, "orders", {"order_number": "Q-1", "profit": "150"})

        assert isinstance(error, RowError)
        assert error.stage is ImportStage.VALIDATION
        assert error.field == "profit"
        assert error.reason == "profit out of range [0, 99]: 150"

    def test_amount_wider_than_money_column_is_validation_error(self, normalizer) -> None:
        error = _normalize(normalizer, "orders", {"order_number": "Q-1", "total_amount": "$100,000,000"})

        assert isinstance(error, RowError)
        assert error.stage is ImportStage.VALIDATION
        assert error.field == "total_amount"
        assert error.reason == (
            "total_amount out of range [-99999999.99, 99999999.99]: 100000000.00"
        )

    def test_largest_money_value_is_accepted(self, normalizer) -> None:
        record = _normalize(normalizer, "orders", {"order_number": "Q-1", "total_amount": "99999999.99"})

        assert record.values["total_amount"] == Decimal("99999999.99")

    def test_integer_wider_than_column_is_validation_error(self, normalizer) -> None:
        error = _normalize(normalizer, "order_items", {"order_id": "1", "quantity": "3000000000"})

        assert isinstance(error, RowError)
        assert error.stage is ImportStage.VALIDATION
        assert error.field == "quantity"

    def test_bound_edges_are_accepted(self, normalizer) -> None:
        record = _normalize(
            normalizer,
            "orders",
            {"order_number": "Q-1", "profit": "99", "discount_amount": "0"},
        )

        assert record.values["profit"] == 99
        assert record.values["discount_amount"] == 0

    def test_missing_contact_uses_unassigned_sentinel(self, normalizer) -> None:
        record = _normalize(normalizer, "orders", {"order_number": "Q-1"})

        assert record.values["contact_id"] == 0

    def test_explicit_contact_is_kept(self, normalizer) -> None:
        record = _normalize(normalizer, "orders", {"order_number": "Q-1", "contact_id": "42"})

        assert record.values["contact_id"] == 42

    def test_missing_contact_without_sentinel_is_validation_error(self) -> None:
        strict = RowNormalizer(unassigned_reference_id=None)

        error = _normalize(strict, "orders", {"order_number": "Q-1", "contact_id": "0"})

        assert isinstance(error, RowError)
        assert error.stage is ImportStage.VALIDATION
        assert error.reason == "missing contact_id and no unassigned sentinel configured"

    def test_custom_sentinel(self) -> None:
        record = _normalize(RowNormalizer(unassigned_reference_id=-1), "orders", {"order_number": "Q-1"})

        assert record.values["contact_id"] == -1


class TestOtherEntities:
    def test_required_unparseable_date_is_coercion_error(self, normalizer) -> None:
        error = _normalize(
            normalizer,
            "expenses",
            {"date": "someday", "category": "Ingredients", "amount": "12.00"},
        )

        assert isinstance(error, RowError)
        assert error.stage is ImportStage.COERCION
        assert error.field == "date"
        assert error.reason == "invalid date for date: 'someday'"

    def test_expense_row(self, normalizer) -> None:
        record = _normalize(
            normalizer,
            "expenses",
            {"Date": "25/12/2024", "Category": "Packaging", "Amount (Incl VAT)": "£8.40", "Tax Deductible": "yes"},
        )

        assert record.values["date"] == date(2024, 12, 25)
        assert record.values["amount"] == Decimal("8.40")
        assert record.values["tax_deductible"] is True
        assert record.values["is_recurring"] is False

    def test_negative_stock_level_is_validation_error(self, normalizer) -> None:
        error = _normalize(normalizer, "supplies", {"name": "Flour", "stock_level": "-3"})

        assert isinstance(error, RowError)
        assert error.reason == "stock_level out of range [0, -]: -3"

    def test_order_item_quantity_defaults_to_one(self, normalizer) -> None:
        record = _normalize(normalizer, "order_items", {"order_id": "Q-1", "Item": "Cupcakes"})

        assert record.values["quantity"] == 1
        assert record.values["name"] == "Cupcakes"
        assert record.values["created_at"] is not None

    def test_quote_expiry_defaults_to_thirty_days(self, normalizer) -> None:
        record = _normalize(normalizer, "quotes", {"quote_number": "QT-1"})

        assert record.values["expiry_date"] == date.today() + timedelta(days=30)
        assert record.values["event_date"] == date.today()
        assert record.values["status"] == "Draft"

    def test_contact_derived_name_is_not_stored(self, normalizer) -> None:
        record = _normalize(normalizer, "contacts", {"name": "Ada Lovelace", "email": "ada@example.com"})

        assert record.values["first_name"] == "Ada"
        assert record.values["last_name"] == "Lovelace"
        assert "full_name" not in record.values
        assert record.values["type"] == "customer"

    def test_contact_last_name_defaults_to_empty(self, normalizer) -> None:
        record = _normalize(normalizer, "contacts", {"first_name": "Cher"})

        assert record.values["last_name"] == ""


class TestContract:
    def test_unknown_entity_type_raises(self, normalizer) -> None:
        with pytest.raises(UnsupportedEntityTypeError):
            _normalize(normalizer, "widgets", {"name": "x"})

    def test_record_values_are_read_only(self, normalizer) -> None:
        record = _normalize(normalizer, "recipes", {"name": "Victoria Sponge"})

        with pytest.raises(TypeError):
            record.values["name"] = "Changed"  # type: ignore[index]

    def test_only_stored_fields_are_emitted(self, normalizer) -> None:
        record = _normalize(normalizer, "contacts", {"first_name": "Grace"})

        assert set(record.values) == set(normalizer.mapper.mapping_for("contacts").stored_keys)
