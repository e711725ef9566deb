from __future__ import annotations


class SepaXmlError(ValueError):
    """Base class for failures while generating a SEPA pain document."""


class LengthError(SepaXmlError):
    """Raised when a length-constrained field exceeds its maximum."""

    def __init__(self, field: str, max_length: int, actual_length: int) -> None:
        super().__init__(f"Max length for {field} is {max_length} (got {actual_length})")
        self.field = field
        self.max_length = max_length
        self.actual_length = actual_length


class ConfigurationError(SepaXmlError):
    """Raised when the schema selector is not one of the supported pain versions."""
