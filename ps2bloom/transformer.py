"""
Per-unit rewrites applied to aligned pages before assembly.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .languages import Language
from .model.text import PageEntry, TextKind, TextUnit

logger = logging.getLogger(__name__)


def prefix_title(text: str, code: Optional[str]) -> str:
    """Prefix ``text`` with ``code`` unless it already starts with it."""
    if not code or not code.strip():
        return text
    if text.startswith(code):
        return text
    return f"{code} {text}"


def prepend_reference(unit: TextUnit) -> TextUnit:
    """Put the unit's reference on its own line above the text."""
    return unit.with_text(f"{unit.reference or ''}\n{unit.text}")


@dataclass
class TransformResult:
    pages: List[PageEntry] = field(default_factory=list)
    title: str = ""
    alternate_titles: Optional[str] = None


class PageTransformer:
    """
    Applies title codes and references to every page.

    The reference language's title (after prefixing) becomes the book title,
    taking precedence over the title stored in the PhotoStory project.
    """

    def __init__(
        self,
        project_code: Optional[str] = None,
        include_references: bool = False,
        reference: Language = Language.ENGLISH,
    ):
        self.project_code = project_code
        self.include_references = include_references
        self.reference = reference

    def transform(self, pages: Sequence[PageEntry], title: str) -> TransformResult:
        result = TransformResult(title=title)

        for entry in pages:
            transformed: Optional[PageEntry] = {}
            for language, unit in entry.items():
                if unit.kind == TextKind.ALTERNATE_TITLES:
                    # Book metadata only; the page itself is not rendered.
                    if language == self.reference:
                        result.alternate_titles = unit.text
                    transformed = None
                    continue

                if unit.kind == TextKind.TITLE:
                    unit = unit.with_text(prefix_title(unit.text, self.project_code))
                    if language == self.reference:
                        result.title = unit.text
                elif unit.kind == TextKind.BODY and self.include_references:
                    unit = prepend_reference(unit)

                if transformed is not None:
                    transformed[language] = unit

            if transformed is not None:
                result.pages.append(transformed)

        if result.title != title:
            logger.info(f"Using document title '{result.title}' instead of '{title}'")
        return result
