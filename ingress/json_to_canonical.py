from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from canonical import Counterparty, Payment, PaymentBatch, SepaDocument, XmlOptions


class SepaDocumentDeserializeError(ValueError):
    """Raised when a JSON payload cannot be turned into a SepaDocument."""


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    try:
        return data[key]
    except KeyError as e:
        raise SepaDocumentDeserializeError(f"Missing required field {where}.{key}") from e


def _object(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SepaDocumentDeserializeError(f"{where} must be an object/dict.")
    return value


def _list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise SepaDocumentDeserializeError(f"{where} must be a list.")
    return value


def _date(value: Any, where: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise SepaDocumentDeserializeError(f"Invalid date for {where}: {value!r}") from e


def _datetime(value: Any, where: str) -> datetime:
    try:
        # fromisoformat() only learned the "Z" suffix in 3.11.
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as e:
        raise SepaDocumentDeserializeError(f"Invalid datetime for {where}: {value!r}") from e


def _amount(value: Any, where: str) -> Decimal:
    if isinstance(value, bool):
        raise SepaDocumentDeserializeError(f"Invalid amount for {where}: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError) as e:
        raise SepaDocumentDeserializeError(f"Invalid amount for {where}: {value!r}") from e


def _payment_from(data: Any, where: str) -> Payment:
    d = _object(data, where)
    return Payment(
        id=_require(d, "id", where),
        name=_require(d, "name", where),
        iban=_require(d, "iban", where),
        bic=_require(d, "bic", where),
        amount=_amount(_require(d, "amount", where), f"{where}.amount"),
        remittance_information=_require(d, "remittance_information", where),
        end_to_end_reference=d.get("end_to_end_reference"),
        mandate_id=d.get("mandate_id"),
        mandate_signature_date=_date(d.get("mandate_signature_date"), f"{where}.mandate_signature_date"),
    )


def _batch_from(data: Any, where: str) -> PaymentBatch:
    d = _object(data, where)
    cp = _object(_require(d, "counterparty", where), f"{where}.counterparty")
    counterparty = Counterparty(
        name=_require(cp, "name", f"{where}.counterparty"),
        iban=_require(cp, "iban", f"{where}.counterparty"),
        bic=_require(cp, "bic", f"{where}.counterparty"),
        id=cp.get("id"),
    )
    payments = _list(d.get("payments", []), f"{where}.payments")
    return PaymentBatch(
        id=_require(d, "id", where),
        counterparty=counterparty,
        requested_execution_date=_date(
            _require(d, "requested_execution_date", where), f"{where}.requested_execution_date"
        ),
        payments=tuple(_payment_from(p, f"{where}.payments[{i}]") for i, p in enumerate(payments)),
        collection_date=_date(d.get("collection_date"), f"{where}.collection_date"),
        batch_booking=d.get("batch_booking"),
    )


def _xml_options_from(data: Any) -> XmlOptions:
    if data is None:
        return XmlOptions()
    d = _object(data, "document.xml_options")
    return XmlOptions(
        pain_version=d.get("pain_version"),
        xml_version=d.get("xml_version"),
        xml_encoding=d.get("xml_encoding"),
        xsi_namespace=d.get("xsi_namespace"),
        schema_prefix=d.get("schema_prefix"),
    )


def sepa_document_from_dict(data: Any) -> SepaDocument:
    """
    Build a SepaDocument from decoded JSON using the canonical field names.

    Only structure and types are checked here; length limits are enforced when
    the document is generated.
    """

    d = _object(data, "document")
    batches = _list(d.get("batches", []), "document.batches")

    try:
        return SepaDocument(
            id=_require(d, "id", "document"),
            creation_date=_datetime(_require(d, "creation_date", "document"), "document.creation_date"),
            initiator_name=_require(d, "initiator_name", "document"),
            batches=tuple(_batch_from(b, f"document.batches[{i}]") for i, b in enumerate(batches)),
            xml_options=_xml_options_from(d.get("xml_options")),
            batch_booking=d.get("batch_booking"),
            local_instrument=d.get("local_instrument"),
            sequence_type=d.get("sequence_type"),
        )
    except SepaDocumentDeserializeError:
        raise
    except (TypeError, ValueError) as e:
        raise SepaDocumentDeserializeError(f"Invalid document: {e}") from e


def sepa_document_from_json(value: Union[bytes, str]) -> SepaDocument:
    if isinstance(value, bytes):
        text = value.decode("utf-8")
    else:
        text = value

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SepaDocumentDeserializeError(f"Invalid JSON: {e}") from e

    return sepa_document_from_dict(data)
