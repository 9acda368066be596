"""
Markup-agnostic element tree produced by the document model.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass
class MarkupNode:
    """An element with ordered attributes, optional text and child elements."""
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List["MarkupNode"] = field(default_factory=list)

    def append(self, child: "MarkupNode") -> "MarkupNode":
        self.children.append(child)
        return child

    def find_all(self, tag: str) -> List["MarkupNode"]:
        """Return every descendant (depth first, document order) with ``tag``."""
        return [node for node in self.iter() if node.tag == tag]

    def iter(self) -> Iterator["MarkupNode"]:
        yield self
        for child in self.children:
            yield from child.iter()
