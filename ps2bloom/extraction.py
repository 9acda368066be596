"""
Text extraction from the per-language script documents.

A script document is a .docx whose first table holds one row per slide::

    | Slide          | Text                  | Reference |
    | Title          | My Book               |           |
    | 1              | Once upon a time...   | Gen 1:1   |
    | References     | Genesis 1-2           |           |
    | Alternate titles | Another Title       |           |

The header row is skipped. Rows whose label and text are both empty are ignored.
"""

import logging
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from lxml import etree

from .errors import ExtractionError
from .model.text import TextKind, TextUnit

logger = logging.getLogger(__name__)

WORD_NS = {"w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main"}
DOCUMENT_PART = "word/document.xml"


class TextExtractor(ABC):
    """Reads the ordered text units of one language document."""

    @abstractmethod
    def extract(self, document_path: Path) -> List[TextUnit]:
        """
        Raises:
            ExtractionError: If the document cannot be read
        """


def kind_for_label(label: str) -> TextKind:
    """Classify a script row by its first-column label."""
    normalized = " ".join(label.lower().split())
    if normalized == "title":
        return TextKind.TITLE
    if normalized.startswith(("alternate title", "title ideas")):
        return TextKind.ALTERNATE_TITLES
    if normalized in ("reference", "references"):
        return TextKind.REFERENCE
    return TextKind.BODY


def _paragraph_text(paragraph: etree._Element) -> str:
    parts = []
    for node in paragraph.iter("{%s}t" % WORD_NS["w"], "{%s}tab" % WORD_NS["w"], "{%s}br" % WORD_NS["w"]):
        local = etree.QName(node).localname
        if local == "t":
            parts.append(node.text or "")
        elif local == "tab":
            parts.append("\t")
        else:
            parts.append("\n")
    return "".join(parts)


def _cell_text(cell: etree._Element) -> str:
    paragraphs = [_paragraph_text(p) for p in cell.findall("w:p", WORD_NS)]
    return "\n".join(paragraphs).strip()


class DocxTextExtractor(TextExtractor):
    """Extracts script rows from the first table of a .docx file."""

    def extract(self, document_path: Path) -> List[TextUnit]:
        document_path = Path(document_path)
        try:
            with zipfile.ZipFile(document_path) as archive:
                data = archive.read(DOCUMENT_PART)
        except (OSError, zipfile.BadZipFile, KeyError) as e:
            raise ExtractionError(f"Could not open {document_path.name}: {e}") from e

        try:
            root = etree.fromstring(data)
        except etree.XMLSyntaxError as e:
            raise ExtractionError(f"Malformed document XML in {document_path.name}: {e}") from e

        table = root.find(".//w:body//w:tbl", WORD_NS)
        if table is None:
            raise ExtractionError(f"No script table found in {document_path.name}")

        units = []
        for row in table.findall("w:tr", WORD_NS)[1:]:
            cells = [_cell_text(cell) for cell in row.findall("w:tc", WORD_NS)]
            cells += [""] * (3 - len(cells))
            label, text, reference = cells[:3]
            if not label and not text:
                continue

            kind = kind_for_label(label)
            units.append(TextUnit(
                kind=kind,
                text=text,
                reference=(reference or None) if kind == TextKind.BODY else None,
            ))

        logger.debug(f"Extracted {len(units)} text units from {document_path.name}")
        return units
