"""
Generate an ISO 20022 pain.001 / pain.008 document from a canonical SepaDocument.

The group header carries the document-wide totals; revision 2 schemas
additionally require BtchBookg and Grpg there. Everything below GrpHdr is
delegated to the batch and transaction builders.
"""

from __future__ import annotations

import logging

from canonical import SepaDocument
from egress.batches import build_payment_information
from egress.formatting import format_amount, format_bool, format_datetime, sum_amounts
from egress.tree import Attributes, Branch, Child, Repeated, XmlDocument, branch, leaf
from egress.validation import MAX_ID_LENGTH, MAX_INITIATOR_NAME_LENGTH, check_length
from egress.version import GROUPING_REVISION, ResolvedVersion, resolve_version
from egress.xml_writer import write_xml


logger = logging.getLogger(__name__)

XML_VERSION = "1.0"
XML_ENCODING = "UTF-8"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_PREFIX = "urn:iso:std:iso:20022:tech:xsd:"
GROUPING = "MIXD"
PRETTY_PRINT_INDENT = 2


def _namespace_attributes(document: SepaDocument, version: ResolvedVersion) -> Attributes:
    options = document.xml_options
    prefix = options.schema_prefix if options.schema_prefix is not None else SCHEMA_PREFIX
    xsi = options.xsi_namespace if options.xsi_namespace is not None else XSI_NAMESPACE
    pain_format = version.selector.value
    return (
        ("xmlns", f"{prefix}{pain_format}"),
        ("xmlns:xsi", xsi),
        ("xsi:schemaLocation", f"{prefix}{pain_format} {pain_format}.xsd"),
    )


def _group_header(document: SepaDocument, version: ResolvedVersion) -> Branch:
    control_sum = sum_amounts(p.amount for batch in document.batches for p in batch.payments)
    grouping = version.revision == GROUPING_REVISION

    fields: list[tuple[str, Child]] = [
        ("MsgId", leaf(document.id)),
        ("CreDtTm", leaf(format_datetime(document.creation_date))),
    ]
    if grouping:
        fields.append(("BtchBookg", leaf(format_bool(document.batch_booking or False))))
    fields.extend([
        ("NbOfTxs", leaf(str(document.transaction_count))),
        ("CtrlSum", leaf(format_amount(control_sum))),
    ])
    if grouping:
        fields.append(("Grpg", leaf(GROUPING)))
    fields.append(("InitgPty", branch(("Nm", leaf(document.initiator_name)))))
    return branch(*fields)


def build_document_tree(document: SepaDocument) -> XmlDocument:
    """
    Build the complete declarative tree for `document`.

    Raises:
        ConfigurationError: the selected pain version is not supported.
        LengthError: the first over-long id or name, in document order.
    """

    version = resolve_version(document.xml_options.pain_version)

    check_length(document.id, "document.id", MAX_ID_LENGTH)
    check_length(document.initiator_name, "document.initiator_name", MAX_INITIATOR_NAME_LENGTH)

    header = _group_header(document, version)
    payment_information = tuple(
        build_payment_information(batch, document=document, version=version, batch_index=index)
        for index, batch in enumerate(document.batches)
    )

    initiation = branch(
        ("GrpHdr", header),
        ("PmtInf", Repeated(payment_information)),
    )
    root = branch(
        (version.family.initiation_tag, initiation),
        attributes=_namespace_attributes(document, version),
    )

    logger.debug(
        "Assembled %s document %s (revision %d, CtrlSum=%s)",
        version.selector.value,
        document.id,
        version.revision,
        header.text("CtrlSum"),
    )

    options = document.xml_options
    return XmlDocument(
        root_tag="Document",
        root=root,
        xml_version=options.xml_version if options.xml_version is not None else XML_VERSION,
        xml_encoding=options.xml_encoding if options.xml_encoding is not None else XML_ENCODING,
    )


def create_sepa_xml(document: SepaDocument, pretty_print: bool = False) -> str:
    """
    Serialize `document` to pain XML text.

    Nothing is returned on failure: any LengthError or ConfigurationError
    aborts the whole document.
    """

    tree = build_document_tree(document)
    xml = write_xml(tree, indent=PRETTY_PRINT_INDENT if pretty_print else None)

    logger.info(
        "Generated pain XML MsgId=%s: batches=%d, transactions=%d, chars=%d",
        document.id,
        len(document.batches),
        document.transaction_count,
        len(xml),
    )
    return xml
