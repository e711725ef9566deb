from .json_to_canonical import (
    SepaDocumentDeserializeError,
    sepa_document_from_dict,
    sepa_document_from_json,
)

__all__ = [
    "SepaDocumentDeserializeError",
    "sepa_document_from_dict",
    "sepa_document_from_json",
]
