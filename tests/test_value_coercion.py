"""
tests/test_value_coercion.py

Pytest unit tests for raw cell coercion. Pure functions, no I/O.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from app.domain.record_import import CoercionFailure
from app.validators.value_coercion import (
    clean_transport_artifacts,
    coerce_boolean,
    coerce_date,
    coerce_datetime,
    coerce_integer,
    coerce_money,
    coerce_string,
    is_blank,
)


class TestMoney:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("$50.00", Decimal("50.00")),
            ("$1,234.56", Decimal("1234.56")),
            ("£ 12.5", Decimal("12.50")),
            ("-7.25", Decimal("-7.25")),
            (19.999, Decimal("20.00")),
            (3, Decimal("3.00")),
        ],
    )
    def test_parses_currency_text(self, raw, expected) -> None:
        assert coerce_money(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", None, "$"])
    def test_non_numeric_becomes_zero(self, raw) -> None:
        assert coerce_money(raw) == Decimal("0.00")

    def test_rounds_half_up_to_cents(self) -> None:
        assert coerce_money("1.005") == Decimal("1.01")

    def test_very_long_amounts_still_parse(self) -> None:
        assert coerce_money("$" + "9" * 30) == Decimal("9" * 30 + ".00")
        assert coerce_money("9" * 28 + ".999") == Decimal("1" + "0" * 28 + ".00")


class TestInteger:
    def test_floors_fractional_values(self) -> None:
        assert coerce_integer("3.9") == 3
        assert coerce_integer("-2.5") == -3

    def test_reads_leading_number_only(self) -> None:
        assert coerce_integer("12 cakes") == 12

    def test_empty_becomes_zero(self) -> None:
        assert coerce_integer("") == 0
        assert coerce_integer(None) == 0

    def test_does_not_clamp(self) -> None:
        assert coerce_integer("150") == 150

    def test_bool_input(self) -> None:
        assert coerce_integer(True) == 1


class TestBoolean:
    @pytest.mark.parametrize("raw", ["true", " TRUE ", "Yes", "1", 1])
    def test_truthy_values(self, raw) -> None:
        assert coerce_boolean(raw) is True

    @pytest.mark.parametrize("raw", ["false", "no", "0", "", None, "y"])
    def test_everything_else_is_false(self, raw) -> None:
        assert coerce_boolean(raw) is False


class TestString:
    def test_trims(self) -> None:
        assert coerce_string("  Birthday  ") == "Birthday"

    def test_blank_is_none(self) -> None:
        assert coerce_string("   ") is None
        assert coerce_string(None) is None

    def test_numbers_become_text(self) -> None:
        assert coerce_string(42) == "42"


class TestTransportArtifacts:
    def test_strips_escaped_quotes(self) -> None:
        assert clean_transport_artifacts('\\"2024-03-05\\"') == "2024-03-05"

    def test_blank_detection_ignores_artifacts(self) -> None:
        assert is_blank('""')
        assert is_blank("  ")
        assert is_blank(None)
        assert not is_blank(0)


class TestDates:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2024-03-05", date(2024, 3, 5)),
            ("2024-3-5", date(2024, 3, 5)),
            ('"2024-03-05"', date(2024, 3, 5)),
            ("2024", date(2024, 1, 1)),
            ("5 March 2024", date(2024, 3, 5)),
            ("05-Mar-2024", date(2024, 3, 5)),
            ("March 5, 2024", date(2024, 3, 5)),
            ("Mar 5 2024", date(2024, 3, 5)),
        ],
    )
    def test_supported_formats(self, raw, expected) -> None:
        assert coerce_date(raw) == expected

    def test_slash_dates_are_month_first_when_ambiguous(self) -> None:
        assert coerce_date("05/03/2024") == date(2024, 5, 3)
        assert coerce_date("12/01/2024") == date(2024, 12, 1)

    def test_slash_dates_fall_back_to_day_first(self) -> None:
        assert coerce_date("25/12/2024") == date(2024, 12, 25)

    @pytest.mark.parametrize("raw", ["02/30/2024", "13/13/2024", "not a date", "2024-13-01"])
    def test_invalid_dates_report_failure(self, raw) -> None:
        result = coerce_date(raw)
        assert isinstance(result, CoercionFailure)
        assert result.value == raw

    def test_empty_is_failure(self) -> None:
        assert isinstance(coerce_date(""), CoercionFailure)
        assert isinstance(coerce_date(None), CoercionFailure)


class TestDatetimes:
    def test_spaced_timestamp(self) -> None:
        assert coerce_datetime("2024-03-05 14:30") == datetime(2024, 3, 5, 14, 30)

    def test_iso_with_seconds(self) -> None:
        assert coerce_datetime("2024-03-05T14:30:15") == datetime(2024, 3, 5, 14, 30, 15)

    def test_zulu_is_converted_to_naive_utc(self) -> None:
        assert coerce_datetime("2024-03-05T10:00:00Z") == datetime(2024, 3, 5, 10, 0)

    def test_offset_is_converted_to_naive_utc(self) -> None:
        assert coerce_datetime("2024-03-05T10:00:00+02:00") == datetime(2024, 3, 5, 8, 0)
        assert coerce_datetime("2024-03-05T10:00:00-0130") == datetime(2024, 3, 5, 11, 30)

    def test_date_only_is_midnight(self) -> None:
        assert coerce_datetime("2024-03-05") == datetime(2024, 3, 5)

    @pytest.mark.parametrize("raw", ["0001-01-01T00:00+01:00", "9999-12-31T23:30-01:00"])
    def test_offset_past_calendar_edge_reports_failure(self, raw) -> None:
        assert isinstance(coerce_datetime(raw), CoercionFailure)
        assert isinstance(coerce_date(raw), CoercionFailure)
