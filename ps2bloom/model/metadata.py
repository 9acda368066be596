"""
Book-level metadata and its projection onto the Bloom <head>.

Comparable to an html head: stylesheet links, inline styles and the
Bloom meta entries. ``default_metadata`` returns a fresh instance each call
so callers can change any field before projecting it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .markup import MarkupNode

STANDARD_BLOOM_LINKS = (
    "basePage.css",
    "languageDisplay.css",
    "previewMode.css",
    "origami.css",
    "Basic Book.css",
    "Traditional-XMatter.css",
    "../settingsCollectionStyles.css",
    "../customCollectionStyles.css",
)

DEFAULT_COVER_STYLES = (
    "DIV.coverColor TEXTAREA { background-color: #C2A6BF !important; }\r\n"
    "DIV.bloom-page.coverColor { background-color: #C2A6BF !important }",
)

DEFAULT_USER_MODIFIED_STYLES = (
    ".BigWords-style { font-size: 45pt ! important; text-align: center ! important; }\r\n"
    ".Credits-Page-style[lang=\"en\"] { font-size: 8pt ! important; }\r\n"
    ".Credits-Page-style { font-size: 8pt ! important; }",
)

GENERATOR = "PhotoStoryToBloomConverter 1.0"
BLOOM_FORMAT_VERSION = "2.0"
USER_MODIFIED_STYLES_TITLE = "userModifiedStyles"


@dataclass
class BloomMetadata:
    title: str = ""
    links: List[str] = field(default_factory=list)
    script: Optional[str] = None
    bloom_version: str = ""
    charset: str = ""
    template_source: str = ""
    generator: str = ""
    cover_styles: List[str] = field(default_factory=list)
    user_modified_styles: List[str] = field(default_factory=list)
    locked_down_as_shell: str = ""


def default_metadata(title: str) -> BloomMetadata:
    """Metadata for a shell book built from the Basic Book template."""
    return BloomMetadata(
        title=title,
        links=list(STANDARD_BLOOM_LINKS),
        bloom_version=BLOOM_FORMAT_VERSION,
        charset="UTF-8",
        template_source="Basic Book",
        generator=GENERATOR,
        cover_styles=list(DEFAULT_COVER_STYLES),
        user_modified_styles=list(DEFAULT_USER_MODIFIED_STYLES),
        locked_down_as_shell="true",
    )


@dataclass(frozen=True)
class TitleElement:
    text: str


@dataclass(frozen=True)
class ScriptElement:
    src: str
    type: str = "text/javascript"


@dataclass(frozen=True)
class LinkElement:
    href: str
    rel: str = "stylesheet"
    type: str = "text/css"


@dataclass(frozen=True)
class StyleElement:
    css: str
    type: str = "text/css"
    title: Optional[str] = None


@dataclass(frozen=True)
class MetaElement:
    """Either a ``charset`` meta or a ``name``/``content`` pair."""
    charset: Optional[str] = None
    name: Optional[str] = None
    content: Optional[str] = None


@dataclass(frozen=True)
class Head:
    title: TitleElement
    script: Optional[ScriptElement]
    links: List[LinkElement]
    styles: List[StyleElement]
    metas: List[MetaElement]

    def to_markup(self) -> MarkupNode:
        head = MarkupNode("head")
        for meta in self.metas:
            if meta.charset is not None:
                head.append(MarkupNode("meta", {"charset": meta.charset}))
            else:
                head.append(MarkupNode("meta", {"name": meta.name or "", "content": meta.content or ""}))
        head.append(MarkupNode("title", text=self.title.text))
        if self.script is not None:
            head.append(MarkupNode("script", {"src": self.script.src, "type": self.script.type}, text=""))
        for link in self.links:
            head.append(MarkupNode("link", {"rel": link.rel, "href": link.href, "type": link.type}))
        for style in self.styles:
            attributes = {"type": style.type}
            if style.title:
                attributes["title"] = style.title
            head.append(MarkupNode("style", attributes, text=style.css))
        return head


def project_head(metadata: BloomMetadata) -> Head:
    """Project metadata onto the head structure. Deterministic; never fails."""
    script = ScriptElement(src=metadata.script) if metadata.script else None
    styles = [StyleElement(css=css) for css in metadata.cover_styles]
    styles.extend(
        StyleElement(css=css, title=USER_MODIFIED_STYLES_TITLE)
        for css in metadata.user_modified_styles
    )
    return Head(
        title=TitleElement(text=metadata.title),
        script=script,
        links=[LinkElement(href=href) for href in metadata.links],
        styles=styles,
        metas=[
            MetaElement(charset=metadata.charset),
            MetaElement(name="Generator", content=metadata.generator),
            MetaElement(name="BloomFormatVersion", content=metadata.bloom_version),
            MetaElement(name="pageTemplateSource", content=metadata.template_source),
            MetaElement(name="lockedDownAsShell", content=metadata.locked_down_as_shell),
        ],
    )
