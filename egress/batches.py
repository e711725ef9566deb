"""
Build one payment information block (PmtInf) per PaymentBatch.

Which optional elements appear is a function of (message family, revision):

- revision 3 adds BtchBookg, NbOfTxs and CtrlSum after PmtMtd
- direct debit adds the local instrument, sequence type, collection date,
  creditor blocks and the creditor scheme identification
- credit transfer adds the execution date and debtor blocks
"""

from __future__ import annotations

import logging

from canonical import PaymentBatch, SepaDocument
from egress.errors import ConfigurationError
from egress.formatting import format_amount, format_bool, format_date, sum_amounts
from egress.transactions import account_element, agent_element, build_transaction
from egress.tree import Branch, Child, Repeated, branch, leaf
from egress.validation import MAX_COUNTERPARTY_NAME_LENGTH, MAX_ID_LENGTH, check_length
from egress.version import TOTALS_REVISION, MessageFamily, ResolvedVersion


logger = logging.getLogger(__name__)

SERVICE_LEVEL = "SEPA"
CHARGE_BEARER = "SLEV"
CREDITOR_SCHEME = "SEPA"


def _batch_totals(batch: PaymentBatch, revision: int) -> list[tuple[str, Child]]:
    if revision != TOTALS_REVISION:
        return []
    return [
        ("BtchBookg", leaf(format_bool(batch.batch_booking or False))),
        ("NbOfTxs", leaf(str(len(batch.payments)))),
        ("CtrlSum", leaf(format_amount(sum_amounts(p.amount for p in batch.payments)))),
    ]


def _direct_debit_fields(batch: PaymentBatch, document: SepaDocument) -> list[tuple[str, Child]]:
    local_instrument = document.local_instrument.value if document.local_instrument is not None else ""
    payment_type: list[tuple[str, Child]] = [
        ("SvcLvl", branch(("Cd", leaf(SERVICE_LEVEL)))),
        ("LclInstrm", branch(("Cd", leaf(local_instrument)))),
    ]
    if document.sequence_type is not None:
        payment_type.append(("SeqTp", leaf(document.sequence_type.value)))

    fields: list[tuple[str, Child]] = [("PmtTpInf", branch(*payment_type))]
    if batch.collection_date is not None:
        fields.append(("ReqdColltnDt", leaf(format_date(batch.collection_date))))

    creditor = batch.counterparty
    scheme_id = branch(
        ("Id", branch(
            ("PrvtId", branch(
                ("Othr", branch(
                    ("Id", leaf(creditor.id or "")),
                    ("SchmeNm", branch(("Prtry", leaf(CREDITOR_SCHEME)))),
                )),
            )),
        )),
    )
    fields.extend([
        ("Cdtr", branch(("Nm", leaf(creditor.name)))),
        ("CdtrAcct", account_element(creditor.iban)),
        ("CdtrAgt", agent_element(creditor.bic)),
        ("ChrgBr", leaf(CHARGE_BEARER)),
        ("CdtrSchmeId", scheme_id),
    ])
    return fields


def _credit_transfer_fields(batch: PaymentBatch) -> list[tuple[str, Child]]:
    debtor = batch.counterparty
    return [
        ("PmtTpInf", branch(("SvcLvl", branch(("Cd", leaf(SERVICE_LEVEL)))))),
        ("ReqdExctnDt", leaf(format_date(batch.requested_execution_date))),
        ("Dbtr", branch(("Nm", leaf(debtor.name)))),
        ("DbtrAcct", account_element(debtor.iban)),
        ("DbtrAgt", agent_element(debtor.bic)),
        ("ChrgBr", leaf(CHARGE_BEARER)),
    ]


def build_payment_information(
    batch: PaymentBatch,
    *,
    document: SepaDocument,
    version: ResolvedVersion,
    batch_index: int,
) -> Branch:
    """
    Validate and map one batch, including its transactions in input order.

    Batch id and counterparty name are checked before any payment is looked at.
    """

    path = f"document.batches[{batch_index}]"
    check_length(batch.id, f"{path}.id", MAX_ID_LENGTH)
    check_length(batch.counterparty.name, f"{path}.counterparty.name", MAX_COUNTERPARTY_NAME_LENGTH)

    family = version.family
    fields: list[tuple[str, Child]] = [
        ("PmtInfId", leaf(batch.id)),
        ("PmtMtd", leaf(family.payment_method)),
    ]
    fields.extend(_batch_totals(batch, version.revision))

    if family is MessageFamily.DIRECT_DEBIT:
        fields.extend(_direct_debit_fields(batch, document))
    elif family is MessageFamily.CREDIT_TRANSFER:
        fields.extend(_credit_transfer_fields(batch))
    else:
        raise ConfigurationError(f"Unsupported message family: {family!r}")

    transactions = tuple(
        build_transaction(payment, family=family, batch_index=batch_index, payment_index=payment_index)
        for payment_index, payment in enumerate(batch.payments)
    )
    fields.append((family.transaction_tag, Repeated(transactions)))

    logger.debug("Built PmtInf %s with %d transaction(s)", batch.id, len(transactions))
    return branch(*fields)
