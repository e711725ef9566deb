"""
Declarative XML node tree produced by the pain builders and consumed by the writer.

A node is one of:
- Leaf: text content (possibly empty) plus attributes
- Branch: ordered (tag, node) children with unique tags plus attributes
- Repeated: the same tag emitted once per item, in order

Repeated only appears as a Branch child. The tree holds no namespace or SEPA
knowledge; namespace declarations travel as ordinary `xmlns*` attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

Attributes = tuple[tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class Leaf:
    text: str
    attributes: Attributes = ()

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError("Leaf.text must be a string.")


@dataclass(frozen=True, slots=True)
class Repeated:
    items: tuple[Union[Leaf, "Branch"], ...]

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, (Leaf, Branch)):
                raise TypeError("Repeated.items must contain only Leaf or Branch nodes.")
        object.__setattr__(self, "items", items)


Node = Union[Leaf, "Branch"]
Child = Union[Leaf, "Branch", Repeated]


@dataclass(frozen=True, slots=True)
class Branch:
    children: tuple[tuple[str, Child], ...]
    attributes: Attributes = ()

    def __post_init__(self) -> None:
        children = tuple(self.children)
        seen: set[str] = set()
        for tag, child in children:
            if tag in seen:
                raise ValueError(f"Duplicate child tag {tag!r}; use Repeated for repeated elements.")
            if not isinstance(child, (Leaf, Branch, Repeated)):
                raise TypeError(f"Child {tag!r} must be a Leaf, Branch or Repeated node.")
            seen.add(tag)
        object.__setattr__(self, "children", children)

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(tag for tag, _ in self.children)

    def child(self, tag: str) -> Optional[Child]:
        for name, node in self.children:
            if name == tag:
                return node
        return None

    def find_all(self, path: str) -> list[Node]:
        """
        All nodes matching a slash-separated tag path, descending through
        Repeated entries (e.g. "PmtInf/CdtTrfTxInf/PmtId/InstrId").
        """

        current: list[Node] = [self]
        for tag in path.strip("/").split("/"):
            matches: list[Node] = []
            for node in current:
                if not isinstance(node, Branch):
                    continue
                found = node.child(tag)
                if found is None:
                    continue
                matches.extend(_expand(found))
            current = matches
        return current

    def find(self, path: str) -> Optional[Node]:
        matches = self.find_all(path)
        return matches[0] if matches else None

    def text(self, path: str) -> Optional[str]:
        node = self.find(path)
        return node.text if isinstance(node, Leaf) else None


def _expand(child: Child) -> Iterator[Node]:
    if isinstance(child, Repeated):
        yield from child.items
    else:
        yield child


def leaf(text: str, **attributes: str) -> Leaf:
    return Leaf(text=text, attributes=tuple(attributes.items()))


def branch(*children: tuple[str, Child], attributes: Attributes = ()) -> Branch:
    return Branch(children=children, attributes=attributes)


@dataclass(frozen=True, slots=True)
class XmlDocument:
    """
    A finished tree plus the values for the XML prolog.
    """

    root_tag: str
    root: Branch
    xml_version: str = "1.0"
    xml_encoding: str = "UTF-8"
