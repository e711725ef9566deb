"""
Generate a SEPA pain XML file from a JSON description of the document.

Usage:
    python scripts/generate_sepa_xml.py document.json
    python scripts/generate_sepa_xml.py document.json --pretty --output out.xml
    python scripts/generate_sepa_xml.py document.json --pain-version pain.008.001.02
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from canonical import PainVersion
from egress import SepaXmlError, create_sepa_xml
from ingress import SepaDocumentDeserializeError, sepa_document_from_json


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate SEPA pain XML from a JSON document description.")
    parser.add_argument("input", type=Path, help="JSON file describing the SepaDocument.")
    parser.add_argument("--output", type=Path, default=None, help="Write XML here instead of stdout.")
    parser.add_argument("--pretty", action="store_true", help="Indent the XML output.")
    parser.add_argument(
        "--pain-version",
        choices=[v.value for v in PainVersion],
        default=None,
        help="Override xml_options.pain_version from the input.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        document = sepa_document_from_json(args.input.read_bytes())
        if args.pain_version:
            options = dataclasses.replace(document.xml_options, pain_version=args.pain_version)
            document = dataclasses.replace(document, xml_options=options)
        xml = create_sepa_xml(document, pretty_print=args.pretty)
    except (SepaXmlError, SepaDocumentDeserializeError) as e:
        print(f"[generate_sepa_xml] Error: {e}", file=sys.stderr)
        return 1

    if args.output is None:
        sys.stdout.write(xml)
        sys.stdout.write("\n")
    else:
        encoding = document.xml_options.xml_encoding or "UTF-8"
        args.output.write_text(xml, encoding=encoding)
        print(f"[generate_sepa_xml] Wrote {document.transaction_count} transaction(s) to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
