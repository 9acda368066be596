"""
Alignment of per-language text against the reference language.

A language whose unit count differs from the reference language is assumed
to be out of date and is dropped for the whole book; every surviving
language contributes exactly one unit per page.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .errors import LanguageDesyncWarning, MissingReferenceLanguageError
from .languages import Language
from .model.text import LanguageTextStore, PageEntry

logger = logging.getLogger(__name__)


@dataclass
class AlignmentResult:
    pages: List[PageEntry] = field(default_factory=list)
    languages: List[Language] = field(default_factory=list)
    excluded: List[LanguageDesyncWarning] = field(default_factory=list)

    @property
    def excluded_languages(self) -> List[Language]:
        return [warning.language for warning in self.excluded]


class AlignmentEngine:
    """Builds the page-major language matrix for one project."""

    def __init__(self, reference: Language = Language.ENGLISH):
        self.reference = reference

    def align(self, store: LanguageTextStore, project_name: str = "") -> AlignmentResult:
        """
        Align every language in ``store`` with the reference language.

        Args:
            store: Extracted units per language (not modified)
            project_name: Used in log and error messages only

        Returns:
            AlignmentResult with one PageEntry per reference unit

        Raises:
            MissingReferenceLanguageError: If the reference language has no text
        """
        if self.reference not in store:
            raise MissingReferenceLanguageError(
                f"Could not find document with corresponding {self.reference.display_name} "
                f"text for {project_name or 'project'}"
            )

        expected = len(store.get(self.reference))
        result = AlignmentResult()
        columns = {}

        for language in store:
            units = store.get(language)
            if language != self.reference and len(units) != expected:
                warning = LanguageDesyncWarning(language, len(units), expected)
                logger.warning(f"{project_name}: {warning}" if project_name else str(warning))
                result.excluded.append(warning)
                continue
            columns[language] = units
            result.languages.append(language)

        for index in range(expected):
            result.pages.append({language: units[index] for language, units in columns.items()})

        logger.debug(f"Aligned {expected} pages in {len(result.languages)} languages")
        return result
