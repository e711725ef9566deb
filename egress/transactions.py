"""
Build one transaction record (CdtTrfTxInf / DrctDbtTxInf) per Payment.
"""

from __future__ import annotations

from canonical import Payment
from egress.errors import ConfigurationError
from egress.formatting import format_amount, format_date
from egress.tree import Branch, Child, branch, leaf
from egress.validation import MAX_ID_LENGTH, MAX_PAYMENT_NAME_LENGTH, check_length
from egress.version import MessageFamily

CURRENCY = "EUR"


def _payment_id(payment: Payment) -> Branch:
    children: list[tuple[str, Child]] = [("InstrId", leaf(payment.id))]
    # An empty reference counts as absent.
    if payment.end_to_end_reference:
        children.append(("EndToEndId", leaf(payment.end_to_end_reference)))
    return branch(*children)


def _remittance(payment: Payment) -> Branch:
    return branch(("Ustrd", leaf(payment.remittance_information)))


def agent_element(bic: str) -> Branch:
    return branch(("FinInstnId", branch(("BIC", leaf(bic)))))


def account_element(iban: str) -> Branch:
    return branch(("Id", branch(("IBAN", leaf(iban)))))


def _credit_transfer_transaction(payment: Payment) -> Branch:
    return branch(
        ("PmtId", _payment_id(payment)),
        ("Amt", branch(("InstdAmt", leaf(format_amount(payment.amount), Ccy=CURRENCY)))),
        ("CdtrAgt", agent_element(payment.bic)),
        ("Cdtr", branch(("Nm", leaf(payment.name)))),
        ("CdtrAcct", account_element(payment.iban)),
        ("RmtInf", _remittance(payment)),
    )


def _direct_debit_transaction(payment: Payment) -> Branch:
    # MndtRltdInf is mandatory in the schema; empty content is tolerated.
    signature_date = payment.mandate_signature_date
    mandate = branch(
        ("MndtId", leaf(payment.mandate_id or "")),
        ("DtOfSgntr", leaf(format_date(signature_date) if signature_date is not None else "")),
    )
    return branch(
        ("PmtId", _payment_id(payment)),
        ("InstdAmt", leaf(format_amount(payment.amount), Ccy=CURRENCY)),
        ("DrctDbtTx", branch(("MndtRltdInf", mandate))),
        ("DbtrAgt", agent_element(payment.bic)),
        ("Dbtr", branch(("Nm", leaf(payment.name)))),
        ("DbtrAcct", account_element(payment.iban)),
        ("RmtInf", _remittance(payment)),
    )


def build_transaction(
    payment: Payment,
    *,
    family: MessageFamily,
    batch_index: int,
    payment_index: int,
) -> Branch:
    """
    Validate and map a single Payment to its transaction element.

    Raises LengthError (naming the batch and payment index) before anything is built.
    """

    path = f"document.batches[{batch_index}].payments[{payment_index}]"
    check_length(payment.id, f"{path}.id", MAX_ID_LENGTH)
    check_length(payment.name, f"{path}.name", MAX_PAYMENT_NAME_LENGTH)

    if family is MessageFamily.CREDIT_TRANSFER:
        return _credit_transfer_transaction(payment)
    if family is MessageFamily.DIRECT_DEBIT:
        return _direct_debit_transaction(payment)
    raise ConfigurationError(f"Unsupported message family: {family!r}")
