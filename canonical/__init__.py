from .models import (
    Counterparty,
    LocalInstrument,
    PainVersion,
    Payment,
    PaymentBatch,
    SepaDocument,
    SequenceType,
    XmlOptions,
)

__all__ = [
    "Counterparty",
    "LocalInstrument",
    "PainVersion",
    "Payment",
    "PaymentBatch",
    "SepaDocument",
    "SequenceType",
    "XmlOptions",
]
