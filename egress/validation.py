from __future__ import annotations

from egress.errors import LengthError


MAX_ID_LENGTH = 35
MAX_INITIATOR_NAME_LENGTH = 70
MAX_COUNTERPARTY_NAME_LENGTH = 70
# Payment-level names are bounded tighter than batch-level names.
MAX_PAYMENT_NAME_LENGTH = 35


def check_length(value: str, field: str, max_length: int) -> None:
    """Raise LengthError if `value` is longer than `max_length` characters."""
    actual = len(value)
    if actual > max_length:
        raise LengthError(field, max_length, actual)
