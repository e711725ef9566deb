"""
Egress module for turning canonical SEPA documents into pain XML.
"""

from egress.canonical_to_pain import build_document_tree, create_sepa_xml
from egress.errors import ConfigurationError, LengthError, SepaXmlError
from egress.version import MessageFamily, ResolvedVersion, resolve_version
from egress.xml_writer import write_xml

__all__ = [
    "ConfigurationError",
    "LengthError",
    "MessageFamily",
    "ResolvedVersion",
    "SepaXmlError",
    "build_document_tree",
    "create_sepa_xml",
    "resolve_version",
    "write_xml",
]
