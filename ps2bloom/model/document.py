"""
The assembled Bloom book: metadata plus ordered pages joining slide media
with the aligned per-language text.
"""

import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from ..languages import Language
from .markup import MarkupNode
from .metadata import BloomMetadata, project_head
from .text import TextKind, TextUnit

_PAGE_CLASSES = {
    TextKind.TITLE: "bloom-page cover coverColor bloom-frontMatter A5Portrait",
    TextKind.BODY: "bloom-page numberedPage customPage A5Portrait",
    TextKind.REFERENCE: "bloom-page credits bloom-backMatter A5Portrait",
}


@dataclass(frozen=True)
class AudioRef:
    """An audio file referenced by a page, possibly a copy of another file."""
    filename: str
    duplicate_of: Optional[str] = None

    @property
    def effective_name(self) -> str:
        return self.duplicate_of or self.filename


@dataclass(frozen=True)
class BookPage:
    index: int
    image: str
    texts: Dict[Language, TextUnit]
    kind: TextKind = TextKind.BODY
    narration: Optional[AudioRef] = None
    background_audio: Optional[AudioRef] = None
    duration_ms: Optional[int] = None


@dataclass(frozen=True)
class DocumentModel:
    title: str
    book_name: str
    destination: Path
    metadata: BloomMetadata
    pages: Tuple[BookPage, ...] = field(default_factory=tuple)
    alternate_titles: Optional[str] = None
    reference_language: Language = Language.ENGLISH

    @property
    def languages(self) -> Tuple[Language, ...]:
        seen = []
        for page in self.pages:
            for language in page.texts:
                if language not in seen:
                    seen.append(language)
        return tuple(seen)

    def to_markup(self) -> MarkupNode:
        """Build the html tree handed to the serializer."""
        html = MarkupNode("html")
        html.append(project_head(self.metadata).to_markup())
        body = html.append(MarkupNode("body"))
        body.append(self._data_div())
        for page in self.pages:
            body.append(self._page_node(page))
        return html

    def _data_div(self) -> MarkupNode:
        data_div = MarkupNode("div", {"id": "bloomDataDiv"})
        title_page = next((page for page in self.pages if page.kind == TextKind.TITLE), None)
        if title_page is not None:
            for language, unit in title_page.texts.items():
                data_div.append(MarkupNode(
                    "div", {"data-book": "bookTitle", "lang": language.iso_code}, text=unit.text
                ))
        else:
            data_div.append(MarkupNode(
                "div", {"data-book": "bookTitle", "lang": self.reference_language.iso_code}, text=self.title
            ))
        if self.alternate_titles:
            data_div.append(MarkupNode(
                "div",
                {"data-book": "alternateTitles", "lang": self.reference_language.iso_code},
                text=self.alternate_titles,
            ))
        return data_div

    def _page_node(self, page: BookPage) -> MarkupNode:
        page_id = uuid.uuid5(uuid.NAMESPACE_URL, f"{self.book_name}/{page.index}")
        attributes = {
            "class": _PAGE_CLASSES.get(page.kind, _PAGE_CLASSES[TextKind.BODY]),
            "id": str(page_id),
            "data-page-number": str(page.index + 1),
        }
        if page.background_audio is not None:
            attributes["data-backgroundaudio"] = page.background_audio.effective_name
        if page.narration is not None:
            attributes["data-narration"] = page.narration.effective_name
        if page.duration_ms is not None:
            attributes["data-duration"] = str(page.duration_ms)

        node = MarkupNode("div", attributes)
        margin_box = node.append(MarkupNode("div", {"class": "marginBox"}))
        image_container = margin_box.append(MarkupNode("div", {"class": "bloom-imageContainer"}))
        image_container.append(MarkupNode("img", {"src": page.image, "alt": ""}))

        group = margin_box.append(MarkupNode("div", {"class": "bloom-translationGroup"}))
        for language, unit in page.texts.items():
            editable = group.append(MarkupNode(
                "div", {"class": "bloom-editable", "lang": language.iso_code, "contenteditable": "true"}
            ))
            for line in unit.text.split("\n"):
                editable.append(MarkupNode("p", text=line))
        return node
