from __future__ import annotations

import copy
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Optional

from svdenc.encoder.errors import EncodeError


@dataclass
class Node:
    """A named markup element.

    A node carries either a text value or child nodes, never both, plus
    a mapping of unique attribute names to values.
    """
    name: str
    text: Optional[str] = None
    children: list[Node] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        _check_content(self)

    def merge(self, other: Node) -> Node:
        """Fold `other` into this node: other's attributes win, its children go last."""
        self.attributes.update(other.attributes)
        self.children.extend(other.children)
        _check_content(self)
        return self

    def child(self, name: str) -> Optional[Node]:
        for c in self.children:
            if c.name == name:
                return c
        return None

    def child_names(self) -> list[str]:
        return [c.name for c in self.children]


def _check_content(node: Node) -> None:
    if node.text is not None and node.children:
        raise EncodeError(f"<{node.name}> cannot carry both text and child nodes")


def new_node(name: str, text: str) -> Node:
    return Node(name=name, text=text)


def merge(base: Node, overlay: Node) -> Node:
    return copy.deepcopy(base).merge(copy.deepcopy(overlay))


def to_element(node: Node) -> ET.Element:
    # children may have been attached after construction
    _check_content(node)
    elem = ET.Element(node.name, dict(node.attributes))
    if node.text is not None:
        elem.text = node.text
    for c in node.children:
        elem.append(to_element(c))
    return elem


def to_string(node: Node, indent: str = "  ") -> str:
    elem = to_element(node)
    ET.indent(elem, space=indent)
    body = ET.tostring(elem, encoding="unicode")
    return '<?xml version="1.0" encoding="utf-8"?>\n' + body + "\n"
