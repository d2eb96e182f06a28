"""
Money and date formatting for the pt-BR back office.

All functions are pure. Amounts are handled as ``Decimal`` so that a value
typed as cents survives formatting and parsing without float drift.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from backoffice.domain.models.base import ValidationError


MAX_AMOUNT = Decimal("9999999.99")
CENTS = Decimal("0.01")
CURRENCY_PREFIX = "R$ "

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_BR_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_NON_DIGITS = re.compile(r"\D")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Optional[Number]) -> Decimal:
    """Coerce a wire or user value to a two-place Decimal; None reads as zero."""
    if value is None or value == "":
        return Decimal("0.00")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid amount: {value}", "amount")
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_decimal_br(value: Optional[Number]) -> str:
    """Render ``1234.56`` as ``"1.234,56"``."""
    amount = to_decimal(value)
    sign = "-" if amount < 0 else ""
    integer, fraction = f"{abs(amount):.2f}".split(".")
    grouped = f"{int(integer):,}".replace(",", ".")
    return f"{sign}{grouped},{fraction}"


def format_currency_br(value: Optional[Number]) -> str:
    """Render an amount as ``"R$ 1.234,56"``."""
    return f"{CURRENCY_PREFIX}{format_decimal_br(value)}"


def parse_decimal_br(text: Optional[str]) -> Decimal:
    """
    Parse a pt-BR amount (``"1.234,56"``, ``"R$ 1.234,56"``) back to Decimal.

    Thousands separators are dots and the decimal separator is a comma;
    a bare ``"1234.56"`` is accepted too since the backend sends that shape.
    """
    if text is None:
        return Decimal("0.00")
    cleaned = text.replace("R$", "").replace("\xa0", "").strip()
    if not cleaned:
        return Decimal("0.00")
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    return to_decimal(cleaned)


def reformat_currency_text(text: str) -> str:
    """Canonical re-render of already formatted text; applying it twice is a no-op."""
    prefixed = text.strip().startswith("R$")
    amount = parse_decimal_br(text)
    return format_currency_br(amount) if prefixed else format_decimal_br(amount)


def amount_from_keystrokes(raw: Optional[str]) -> Decimal:
    """
    Interpret raw keystrokes as integer cents.

    Non-digits are dropped and the result is clamped to ``[0, MAX_AMOUNT]``
    so every intermediate keystroke yields a valid amount.
    """
    digits = _NON_DIGITS.sub("", raw or "")
    if not digits:
        return Decimal("0.00")
    amount = (Decimal(int(digits)) / 100).quantize(CENTS)
    return min(amount, MAX_AMOUNT)


def normalize_date(value: Optional[Union[str, date, datetime]]) -> Optional[str]:
    """
    Normalize a calendar date to ``YYYY-MM-DD``.

    Strings already in that shape pass through untouched; timestamps keep
    only their date part so no timezone shift is applied. Empty input
    returns None. Impossible calendar dates raise ``ValidationError``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = value.strip()
    if not text:
        return None
    match = _BR_DATE.match(text)
    if match:
        day, month, year = match.groups()
        text = f"{year}-{month}-{day}"
    candidate = text[:10]
    if not _ISO_DATE.match(candidate):
        raise ValidationError(f"Invalid date: {value}", "date")
    try:
        return date.fromisoformat(candidate).isoformat()
    except ValueError:
        raise ValidationError(f"Invalid date: {value}", "date") from None


def parse_date(value: Optional[Union[str, date, datetime]]) -> Optional[date]:
    normalized = normalize_date(value)
    return date.fromisoformat(normalized) if normalized else None


def format_date_br(value: Optional[Union[str, date, datetime]]) -> str:
    """Render a calendar date as ``DD/MM/YYYY``; missing dates render as ``"-"``."""
    normalized = normalize_date(value)
    if not normalized:
        return "-"
    year, month, day = normalized.split("-")
    return f"{day}/{month}/{year}"
