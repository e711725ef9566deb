"""
Text forms required by the pain schemas for amounts, dates and flags.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

_CENTS = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    """Render with exactly two decimals, rounding half up (10.005 -> "10.01")."""
    return format(Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP), "f")


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    return sum((Decimal(a) for a in amounts), Decimal("0"))


def _as_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def format_date(value: date) -> str:
    """YYYY-MM-DD; any time of day is dropped (aware datetimes are taken in UTC)."""
    if isinstance(value, datetime):
        value = _as_utc_naive(value).date()
    return value.isoformat()


def format_datetime(value: datetime) -> str:
    """YYYY-MM-DDTHH:MM:SS in UTC, no fraction and no offset."""
    return _as_utc_naive(value).replace(microsecond=0).isoformat()


def format_bool(value: bool) -> str:
    return "true" if value else "false"
