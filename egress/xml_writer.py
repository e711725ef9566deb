"""
Serialize an egress.tree.XmlDocument to XML text with lxml.

Domain-free: the writer only knows the node shapes. Attributes named `xmlns`
or `xmlns:<prefix>` become namespace declarations of their element, prefixed
attributes (`xsi:schemaLocation`) are resolved against the declarations in
scope, and element tags take the default namespace in scope.
"""

from __future__ import annotations

import importlib
from typing import Any, Optional

from egress.tree import Attributes, Branch, Child, Leaf, Repeated, XmlDocument

NsMap = dict[Optional[str], str]


def _lxml_etree() -> Any:
    try:
        return importlib.import_module("lxml.etree")
    except ModuleNotFoundError as e:
        raise RuntimeError("lxml is required. Install it (e.g., `pip install lxml`).") from e


def _clark(namespace: Optional[str], local: str) -> str:
    return f"{{{namespace}}}{local}" if namespace else local


def _split_namespaces(attributes: Attributes) -> tuple[NsMap, Attributes]:
    nsmap: NsMap = {}
    plain: list[tuple[str, str]] = []
    for name, value in attributes:
        if name == "xmlns":
            nsmap[None] = value
        elif name.startswith("xmlns:"):
            nsmap[name[len("xmlns:"):]] = value
        else:
            plain.append((name, value))
    return nsmap, tuple(plain)


def _attribute_name(name: str, scope: NsMap) -> str:
    if ":" not in name:
        return name
    prefix, local = name.split(":", 1)
    namespace = scope.get(prefix)
    if namespace is None:
        raise ValueError(f"Attribute {name!r} uses undeclared namespace prefix {prefix!r}.")
    return _clark(namespace, local)


def _new_element(etree: Any, parent: Any, tag: str, attributes: Attributes, scope: NsMap) -> tuple[Any, NsMap]:
    nsmap, plain = _split_namespaces(attributes)
    scope = {**scope, **nsmap}
    name = _clark(scope.get(None), tag)
    if parent is None:
        element = etree.Element(name, nsmap=nsmap or None)
    else:
        element = etree.SubElement(parent, name, nsmap=nsmap or None)
    for attr, value in plain:
        element.set(_attribute_name(attr, scope), value)
    return element, scope


def _append(etree: Any, parent: Any, tag: str, node: Child, scope: NsMap) -> None:
    if isinstance(node, Repeated):
        for item in node.items:
            _append(etree, parent, tag, item, scope)
    elif isinstance(node, Leaf):
        element, _ = _new_element(etree, parent, tag, node.attributes, scope)
        element.text = node.text
    elif isinstance(node, Branch):
        element, child_scope = _new_element(etree, parent, tag, node.attributes, scope)
        for child_tag, child in node.children:
            _append(etree, element, child_tag, child, child_scope)
    else:
        raise TypeError(f"Unsupported node type for <{tag}>: {type(node).__name__}")


def write_xml(document: XmlDocument, *, indent: Optional[int] = None) -> str:
    """
    Render `document` as text, prolog first.

    The prolog declares `document.xml_encoding` but the result is a str; encode
    it with that encoding when writing it out. `indent` is the number of spaces
    per nesting level, None for single-line output.
    """

    etree = _lxml_etree()

    root, scope = _new_element(etree, None, document.root_tag, document.root.attributes, {})
    for tag, child in document.root.children:
        _append(etree, root, tag, child, scope)

    if indent:
        etree.indent(root, space=" " * indent)

    body: str = etree.tostring(root, encoding="unicode")
    prolog = f'<?xml version="{document.xml_version}" encoding="{document.xml_encoding}"?>'
    separator = "\n" if indent else ""
    return f"{prolog}{separator}{body}"
