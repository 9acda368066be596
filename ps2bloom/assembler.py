"""
Joins transformed page text with the project's slide media.
"""

import logging
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence

from .errors import AlignmentError
from .languages import Language
from .model.document import AudioRef, BookPage, DocumentModel
from .model.metadata import BloomMetadata, default_metadata
from .model.project import Project
from .model.text import PageEntry, TextKind

logger = logging.getLogger(__name__)


class DocumentAssembler:
    """
    Builds the DocumentModel for one book.

    Pages are joined purely by position: text page ``i`` belongs to the
    ``i``-th convertible slide of the project.
    """

    def __init__(
        self,
        metadata_factory: Callable[[str], BloomMetadata] = default_metadata,
        reference: Language = Language.ENGLISH,
    ):
        self.metadata_factory = metadata_factory
        self.reference = reference

    def assemble(
        self,
        pages: Sequence[PageEntry],
        project: Project,
        book_name: str,
        destination: Path,
        duplicates: Optional[Mapping[str, str]] = None,
        alternate_titles: Optional[str] = None,
    ) -> DocumentModel:
        """
        Raises:
            AlignmentError: If the page count differs from the project's slide count
        """
        slides = project.convertible_pages
        if len(pages) != len(slides):
            raise AlignmentError(
                f"{project.name}: {len(pages)} text pages cannot be matched to "
                f"{len(slides)} slides"
            )

        duplicates = duplicates or {}
        book_pages = []
        for index, (entry, slide) in enumerate(zip(pages, slides)):
            book_pages.append(BookPage(
                index=index,
                image=slide.image,
                texts=dict(entry),
                kind=self._page_kind(entry),
                narration=_audio_ref(slide.narration, duplicates),
                background_audio=_audio_ref(slide.background_audio, duplicates),
                duration_ms=slide.duration_ms,
            ))

        logger.debug(f"Assembled {len(book_pages)} pages for {book_name}")
        return DocumentModel(
            title=book_name,
            book_name=book_name,
            destination=Path(destination),
            metadata=self.metadata_factory(book_name),
            pages=tuple(book_pages),
            alternate_titles=alternate_titles,
            reference_language=self.reference,
        )

    def _page_kind(self, entry: PageEntry) -> TextKind:
        unit = entry.get(self.reference)
        if unit is None and entry:
            unit = next(iter(entry.values()))
        return unit.kind if unit is not None else TextKind.BODY


def _audio_ref(filename: Optional[str], duplicates: Mapping[str, str]) -> Optional[AudioRef]:
    if not filename:
        return None
    return AudioRef(filename=filename, duplicate_of=duplicates.get(filename))
