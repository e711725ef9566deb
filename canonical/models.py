from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union


class PainVersion(str, Enum):
    """
    Supported ISO 20022 pain schema identifiers.

    pain.001 is the customer credit transfer initiation family, pain.008 the
    customer direct debit initiation family. The .003. variants are the German
    (DK) flavours of the same messages.
    """

    PAIN_001_001_02 = "pain.001.001.02"
    PAIN_001_003_02 = "pain.001.003.02"
    PAIN_001_001_03 = "pain.001.001.03"
    PAIN_001_003_03 = "pain.001.003.03"
    PAIN_008_001_01 = "pain.008.001.01"
    PAIN_008_003_01 = "pain.008.003.01"
    PAIN_008_001_02 = "pain.008.001.02"
    PAIN_008_003_02 = "pain.008.003.02"


class LocalInstrument(str, Enum):
    """
    SEPA direct debit scheme (PmtTpInf/LclInstrm/Cd).
    """

    CORE = "CORE"
    COR1 = "COR1"
    B2B = "B2B"


class SequenceType(str, Enum):
    """
    Position of a collection within its mandate (PmtTpInf/SeqTp).
    """

    FRST = "FRST"
    RCUR = "RCUR"
    OOFF = "OOFF"
    FNAL = "FNAL"


AmountLike = Union[Decimal, int, float, str]


def _to_decimal(value: AmountLike) -> Decimal:
    if isinstance(value, bool):
        raise TypeError("amount must be a number, not bool.")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        # str() keeps the shortest float repr, so 10.005 stays 10.005.
        try:
            amount = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"amount is not numeric: {value!r}") from e
    else:
        raise TypeError("amount must be Decimal, int, float or numeric str.")
    if amount.is_nan() or amount.is_infinite():
        raise ValueError("amount must be a finite number.")
    return amount


@dataclass(frozen=True, slots=True)
class Counterparty:
    """
    The party a batch is booked against: the debtor of a credit transfer batch
    or the creditor collecting a direct debit batch.

    `id` is the SEPA creditor identifier and is only used for direct debit.
    """

    name: str
    iban: str
    bic: str
    id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Payment:
    """
    One transaction inside a batch.

    For credit transfer the name/iban/bic describe the creditor, for direct
    debit they describe the debtor.
    """

    id: str
    name: str
    iban: str
    bic: str
    amount: Decimal
    remittance_information: str
    end_to_end_reference: Optional[str] = None
    mandate_id: Optional[str] = None
    mandate_signature_date: Optional[date] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _to_decimal(self.amount))


@dataclass(frozen=True, slots=True)
class PaymentBatch:
    """
    One payment information block (PmtInf): a single counterparty and its payments.
    """

    id: str
    counterparty: Counterparty
    requested_execution_date: date
    payments: tuple[Payment, ...] = ()
    collection_date: Optional[date] = None
    batch_booking: Optional[bool] = None

    def __post_init__(self) -> None:
        if not isinstance(self.counterparty, Counterparty):
            raise TypeError("counterparty must be a Counterparty.")
        payments = tuple(self.payments)
        for payment in payments:
            if not isinstance(payment, Payment):
                raise TypeError("payments must contain only Payment instances.")
        object.__setattr__(self, "payments", payments)


@dataclass(frozen=True, slots=True)
class XmlOptions:
    """
    Per-document overrides for the schema selector, XML prolog and namespaces.

    `pain_version` is resolved lazily so an unknown selector surfaces as a
    ConfigurationError when the document is generated.
    """

    pain_version: Optional[Union[PainVersion, str]] = None
    xml_version: Optional[str] = None
    xml_encoding: Optional[str] = None
    xsi_namespace: Optional[str] = None
    schema_prefix: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SepaDocument:
    """
    A complete SEPA initiation message: header data plus its batches.

    `local_instrument` and `sequence_type` only apply to direct debit documents.
    """

    id: str
    creation_date: datetime
    initiator_name: str
    batches: tuple[PaymentBatch, ...] = ()
    xml_options: XmlOptions = field(default_factory=XmlOptions)
    batch_booking: Optional[bool] = None
    local_instrument: Optional[LocalInstrument] = None
    sequence_type: Optional[SequenceType] = None

    def __post_init__(self) -> None:
        if not isinstance(self.creation_date, datetime):
            raise TypeError("creation_date must be a datetime.")

        batches = tuple(self.batches)
        for batch in batches:
            if not isinstance(batch, PaymentBatch):
                raise TypeError("batches must contain only PaymentBatch instances.")
        object.__setattr__(self, "batches", batches)

        if self.xml_options is None:
            object.__setattr__(self, "xml_options", XmlOptions())
        elif not isinstance(self.xml_options, XmlOptions):
            raise TypeError("xml_options must be an XmlOptions or None.")

        if self.local_instrument is not None:
            object.__setattr__(self, "local_instrument", LocalInstrument(self.local_instrument))
        if self.sequence_type is not None:
            object.__setattr__(self, "sequence_type", SequenceType(self.sequence_type))

    @property
    def transaction_count(self) -> int:
        return sum(len(batch.payments) for batch in self.batches)
