"""
Tests for the declarative node tree and its lxml serialization.
"""

from __future__ import annotations

import lxml.etree
import pytest

from egress import write_xml
from egress.tree import Branch, Leaf, Repeated, XmlDocument, branch, leaf

NS = "urn:example:test"
XSI = "http://www.w3.org/2001/XMLSchema-instance"


def _parse(xml: str) -> lxml.etree._Element:
    return lxml.etree.fromstring(xml.encode("utf-8"))


class TestTree:
    """Node construction and navigation."""

    def test_duplicate_tags_rejected(self) -> None:
        with pytest.raises(ValueError):
            branch(("A", leaf("1")), ("A", leaf("2")))

    def test_non_node_child_rejected(self) -> None:
        with pytest.raises(TypeError):
            Branch(children=(("A", "text"),))  # type: ignore[arg-type]

    def test_leaf_text_must_be_str(self) -> None:
        with pytest.raises(TypeError):
            Leaf(text=12)  # type: ignore[arg-type]

    def test_find_descends_through_repeated(self) -> None:
        tree = branch(
            ("Items", branch(
                ("Item", Repeated((
                    branch(("Id", leaf("a"))),
                    branch(("Id", leaf("b"))),
                ))),
            )),
        )
        assert [n.text for n in tree.find_all("Items/Item/Id")] == ["a", "b"]
        assert tree.text("Items/Item/Id") == "a"
        assert tree.find("Items/Missing") is None
        assert tree.text("Items") is None

    def test_leaf_attributes_keep_order(self) -> None:
        node = leaf("5", Ccy="EUR", Extra="x")
        assert node.attributes == (("Ccy", "EUR"), ("Extra", "x"))


class TestWriteXml:
    """Serialization through lxml."""

    def _document(self, **kwargs: str) -> XmlDocument:
        root = branch(
            ("Header", branch(
                ("Id", leaf("MSG-1")),
                ("Amount", leaf("10.00", Ccy="EUR")),
                ("Empty", leaf("")),
            )),
            ("Entry", Repeated((leaf("first"), leaf("second"), leaf("third")))),
            ("Nothing", Repeated(())),
            attributes=(
                ("xmlns", NS),
                ("xmlns:xsi", XSI),
                ("xsi:schemaLocation", f"{NS} test.xsd"),
            ),
        )
        return XmlDocument(root_tag="Document", root=root, **kwargs)

    def test_prolog_defaults(self) -> None:
        xml = write_xml(self._document())
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?><Document')

    def test_prolog_overrides(self) -> None:
        xml = write_xml(self._document(xml_version="1.1", xml_encoding="ISO-8859-15"))
        assert xml.startswith('<?xml version="1.1" encoding="ISO-8859-15"?>')

    def test_namespaces_and_schema_location(self) -> None:
        root = _parse(write_xml(self._document()))
        assert root.tag == f"{{{NS}}}Document"
        assert root.nsmap == {None: NS, "xsi": XSI}
        assert root.get(f"{{{XSI}}}schemaLocation") == f"{NS} test.xsd"
        # Children inherit the default namespace.
        assert root[0].tag == f"{{{NS}}}Header"

    def test_leaves_attributes_and_empty_text(self) -> None:
        root = _parse(write_xml(self._document()))
        ns = {"t": NS}
        assert root.findtext("t:Header/t:Id", namespaces=ns) == "MSG-1"
        amount = root.find("t:Header/t:Amount", namespaces=ns)
        assert amount.text == "10.00"
        assert amount.get("Ccy") == "EUR"
        empty = root.find("t:Header/t:Empty", namespaces=ns)
        assert empty is not None
        assert (empty.text or "") == ""

    def test_repeated_emitted_once_per_item(self) -> None:
        root = _parse(write_xml(self._document()))
        entries = root.findall(f"{{{NS}}}Entry")
        assert [e.text for e in entries] == ["first", "second", "third"]
        assert root.find(f"{{{NS}}}Nothing") is None

    def test_text_is_escaped(self) -> None:
        doc = XmlDocument(root_tag="Document", root=branch(("Nm", leaf("Smith & Sons <GmbH>"))))
        xml = write_xml(doc)
        assert "Smith &amp; Sons &lt;GmbH&gt;" in xml
        assert _parse(xml).findtext("Nm") == "Smith & Sons <GmbH>"

    def test_compact_output_is_single_line(self) -> None:
        assert "\n" not in write_xml(self._document())

    def test_indent(self) -> None:
        xml = write_xml(self._document(), indent=2)
        lines = xml.splitlines()
        assert lines[0] == '<?xml version="1.0" encoding="UTF-8"?>'
        assert "  <Header>" in lines
        assert "    <Id>MSG-1</Id>" in lines

    def test_undeclared_attribute_prefix_rejected(self) -> None:
        doc = XmlDocument(root_tag="Document", root=branch(attributes=(("xsi:type", "x"),)))
        with pytest.raises(ValueError):
            write_xml(doc)
