"""
Per-language text extracted from the source documents.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence

from ..languages import Language


class TextKind(Enum):
    """Role of a text unit within a book."""
    TITLE = "title"
    BODY = "body"
    REFERENCE = "reference"
    ALTERNATE_TITLES = "alternate_titles"


@dataclass(frozen=True)
class TextUnit:
    """One page's worth of text in one language."""
    kind: TextKind
    text: str
    reference: Optional[str] = None  # scripture/source citation, Body units only

    def with_text(self, text: str) -> "TextUnit":
        """Return a copy of this unit carrying ``text``."""
        return replace(self, text=text)


# A single page after alignment: every surviving language mapped to its unit.
PageEntry = Dict[Language, TextUnit]


class LanguageTextStore:
    """
    Ordered text units per language, one unit per page in document order.

    Languages keep the order in which they were added.
    """

    def __init__(self):
        self._units: Dict[Language, List[TextUnit]] = {}

    def add(self, language: Language, units: Sequence[TextUnit]) -> None:
        """Register the units for ``language``; the first document wins."""
        self._units.setdefault(language, list(units))

    def get(self, language: Language) -> List[TextUnit]:
        return list(self._units[language])

    def languages(self) -> List[Language]:
        return list(self._units)

    def __contains__(self, language: object) -> bool:
        return language in self._units

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[Language]:
        return iter(self._units)
