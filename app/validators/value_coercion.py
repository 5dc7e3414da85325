"""
app/validators/value_coercion.py

Raw cell value coercion for record imports.

Every coercer accepts whatever the upstream row delivered (string, number,
bool or None) and never raises on malformed input. Date coercers return a
``CoercionFailure`` instead of raising so the caller decides whether the
failure is fatal to the row or falls back to a default.

Slash dates (``A/B/YYYY``) follow a month-first convention: when ``A <= 12``
it is the month and ``B`` the day, otherwise ``A`` is the day and ``B`` the
month. ``05/03/2024`` is therefore May 3 2024.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from app.domain.record_import import CoercionFailure

_TRANSPORT_ARTIFACTS = re.compile(r'[\\"]')
_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")

_ISO_DATE = re.compile(
    r"^(\d{4})-(\d{1,2})-(\d{1,2})"
    r"(?:T(\d{1,2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?)?$"
)
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_BARE_YEAR = re.compile(r"^(\d{4})$")
_SPACED_TIMESTAMP = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2}) (\d{1,2}):(\d{2})(?::(\d{2}))?$")
_DAY_MONTH_NAME = re.compile(r"^(\d{1,2})[\s\-]+([A-Za-z]+)[\s\-,]+(\d{4})$")
_MONTH_NAME_DAY = re.compile(r"^([A-Za-z]+)\s+(\d{1,2}),?\s+(\d{4})$")

_MONTH_NAMES: dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

TRUE_VALUES = frozenset({"true", "yes", "1"})
MONEY_QUANTUM = Decimal("0.01")
# Largest magnitude a NUMERIC(10, 2) money column holds.
MONEY_LIMIT = Decimal("99999999.99")


def clean_transport_artifacts(raw: Any) -> str:
    """
    Drop escaped quotes and backslashes left by JSON re-serialization of CSV cells.
    """

    if raw is None:
        return ""
    return _TRANSPORT_ARTIFACTS.sub("", str(raw)).strip()


def is_blank(raw: Any) -> bool:
    return clean_transport_artifacts(raw) == ""


def coerce_string(raw: Any) -> str | None:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def coerce_money(raw: Any) -> Decimal:
    """
    Parse a currency amount such as ``"$1,234.56"``; returns 0 when nothing numeric remains.

    Magnitude is not checked here; see MONEY_LIMIT.
    """

    number = _leading_number(raw)
    if number is None:
        return Decimal("0.00")
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + 4)
        return number.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def coerce_integer(raw: Any) -> int:
    """
    Parse the leading numeric run of a value and floor it; returns 0 when empty.

    Range checks are the caller's job. This function never clamps.
    """

    if isinstance(raw, bool):
        return int(raw)
    number = _leading_number(raw)
    if number is None:
        return 0
    return int(number.to_integral_value(rounding=ROUND_FLOOR))


def coerce_boolean(raw: Any) -> bool:
    if raw is None:
        return False
    return str(raw).strip().lower() in TRUE_VALUES


def coerce_datetime(raw: Any) -> datetime | CoercionFailure:
    """
    Parse a date or timestamp using the supported import formats.

    Naive results are returned for local-calendar inputs; ISO inputs carrying
    ``Z`` or an offset are normalized to UTC.
    """

    text = clean_transport_artifacts(raw)
    if not text:
        return CoercionFailure(value=text, message="Date value is empty.")

    for parser in _DATE_PARSERS:
        parsed = parser(text)
        if parsed is not None:
            return parsed

    return CoercionFailure(value=text, message=f"Unrecognized date format: {text!r}.")


def coerce_date(raw: Any) -> date | CoercionFailure:
    parsed = coerce_datetime(raw)
    if isinstance(parsed, CoercionFailure):
        return parsed
    return parsed.date()


def _leading_number(raw: Any) -> Decimal | None:
    if raw is None:
        return None
    stripped = _NON_NUMERIC.sub("", str(raw))
    match = _LEADING_NUMBER.match(stripped)
    if match is None:
        return None
    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return None


def _build(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime | None:
    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None


def _parse_iso(text: str) -> datetime | None:
    match = _ISO_DATE.match(text)
    if match is None:
        return None
    year, month, day, hour, minute, second, zone = match.groups()
    parsed = _build(
        int(year),
        int(month),
        int(day),
        int(hour or 0),
        int(minute or 0),
        int(second or 0),
    )
    if parsed is None or not zone:
        return parsed

    offset_text = "+00:00" if zone == "Z" else zone
    try:
        aware = datetime.fromisoformat(parsed.isoformat() + _colon_offset(offset_text))
        return aware.astimezone(timezone.utc).replace(tzinfo=None)
    except (ValueError, OverflowError):
        return None


def _colon_offset(offset: str) -> str:
    if ":" in offset:
        return offset
    return f"{offset[:3]}:{offset[3:]}"


def _parse_slash(text: str) -> datetime | None:
    match = _SLASH_DATE.match(text)
    if match is None:
        return None
    first, second, year = (int(part) for part in match.groups())
    if first <= 12:
        month, day = first, second
    else:
        day, month = first, second
    return _build(year, month, day)


def _parse_bare_year(text: str) -> datetime | None:
    match = _BARE_YEAR.match(text)
    if match is None:
        return None
    return _build(int(match.group(1)), 1, 1)


def _parse_spaced_timestamp(text: str) -> datetime | None:
    match = _SPACED_TIMESTAMP.match(text)
    if match is None:
        return None
    year, month, day, hour, minute, second = match.groups()
    return _build(int(year), int(month), int(day), int(hour), int(minute), int(second or 0))


def _parse_month_name(text: str) -> datetime | None:
    match = _DAY_MONTH_NAME.match(text)
    if match is not None:
        day, month_name, year = match.groups()
    else:
        match = _MONTH_NAME_DAY.match(text)
        if match is None:
            return None
        month_name, day, year = match.groups()

    month = _MONTH_NAMES.get(month_name[:3].lower())
    if month is None:
        return None
    return _build(int(year), month, int(day))


_DATE_PARSERS = (
    _parse_iso,
    _parse_slash,
    _parse_bare_year,
    _parse_spaced_timestamp,
    _parse_month_name,
)
