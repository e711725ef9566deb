"""
Tests for amount/date formatting and length validation.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from egress import LengthError, SepaXmlError
from egress.formatting import format_amount, format_bool, format_date, format_datetime, sum_amounts
from egress.validation import check_length


class TestFormatAmount:
    """Two-decimal rendering with half-up rounding."""

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (Decimal("100"), "100.00"),
            (Decimal("100.5"), "100.50"),
            (Decimal("10.005"), "10.01"),
            (Decimal("2.675"), "2.68"),
            (Decimal("0.004"), "0.00"),
            (Decimal("0"), "0.00"),
            (Decimal("1234567.891"), "1234567.89"),
        ],
    )
    def test_format_amount(self, amount: Decimal, expected: str) -> None:
        assert format_amount(amount) == expected

    def test_sum_of_half_cents(self) -> None:
        """10.005 + 0.005 + 0.00 sums exactly and renders as 10.01."""
        total = sum_amounts([Decimal("10.005"), Decimal("0.005"), Decimal("0.00")])
        assert total == Decimal("10.010")
        assert format_amount(total) == "10.01"

    def test_sum_of_nothing_is_zero(self) -> None:
        assert format_amount(sum_amounts([])) == "0.00"


class TestFormatDates:
    """Calendar dates and header timestamps."""

    def test_date(self) -> None:
        assert format_date(date(2024, 3, 1)) == "2024-03-01"

    def test_datetime_truncated_to_date(self) -> None:
        assert format_date(datetime(2024, 3, 1, 23, 59, 59)) == "2024-03-01"

    def test_aware_datetime_taken_in_utc(self) -> None:
        """An aware datetime shortly after midnight CET is still the previous UTC day."""
        cet = timezone(timedelta(hours=1))
        assert format_date(datetime(2024, 3, 2, 0, 30, tzinfo=cet)) == "2024-03-01"

    def test_timestamp_whole_seconds_no_offset(self) -> None:
        assert format_datetime(datetime(2024, 5, 17, 13, 45, 12, 999999)) == "2024-05-17T13:45:12"

    def test_timestamp_aware_converted_to_utc(self) -> None:
        cest = timezone(timedelta(hours=2))
        value = datetime(2024, 5, 17, 1, 0, 0, tzinfo=cest)
        assert format_datetime(value) == "2024-05-16T23:00:00"


class TestFormatBool:
    def test_bool(self) -> None:
        assert format_bool(True) == "true"
        assert format_bool(False) == "false"


class TestCheckLength:
    """Length validation contract."""

    def test_at_limit_passes(self) -> None:
        assert check_length("x" * 35, "document.id", 35) is None

    def test_empty_passes(self) -> None:
        assert check_length("", "document.id", 35) is None

    def test_over_limit_raises(self) -> None:
        with pytest.raises(LengthError) as exc_info:
            check_length("x" * 36, "document.batches[0].payments[1].id", 35)

        err = exc_info.value
        assert err.field == "document.batches[0].payments[1].id"
        assert err.max_length == 35
        assert err.actual_length == 36
        assert "Max length for document.batches[0].payments[1].id is 35" in str(err)

    def test_length_error_is_sepa_error(self) -> None:
        """LengthError is catchable as the common SepaXmlError / ValueError."""
        with pytest.raises(SepaXmlError):
            check_length("abc", "field", 2)
        with pytest.raises(ValueError):
            check_length("abc", "field", 2)
