"""
Writes the document model's markup tree as a Bloom .htm file.
"""

import logging
from pathlib import Path

from lxml import etree

from .model.markup import MarkupNode

logger = logging.getLogger(__name__)

DOCTYPE = "<!DOCTYPE html>"


class BloomSerializer:
    """Serializes MarkupNode trees with lxml."""

    def to_element(self, node: MarkupNode) -> etree._Element:
        element = etree.Element(node.tag)
        for name, value in node.attributes.items():
            element.set(name, value)
        if node.text is not None:
            element.text = node.text
        for child in node.children:
            element.append(self.to_element(child))
        return element

    def to_bytes(self, node: MarkupNode) -> bytes:
        return etree.tostring(
            self.to_element(node),
            pretty_print=True,
            xml_declaration=False,
            encoding="utf-8",
            doctype=DOCTYPE,
        )

    def serialize(self, node: MarkupNode, path: Path) -> Path:
        path = Path(path)
        path.write_bytes(self.to_bytes(node))
        logger.info(f"Wrote {path}")
        return path
