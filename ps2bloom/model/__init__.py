"""
Data model shared by the alignment, assembly and serialization stages.
"""

from .document import AudioRef, BookPage, DocumentModel
from .markup import MarkupNode
from .metadata import BloomMetadata, Head, default_metadata, project_head
from .project import Project, ProjectPage
from .text import LanguageTextStore, PageEntry, TextKind, TextUnit

__all__ = [
    "AudioRef",
    "BookPage",
    "DocumentModel",
    "MarkupNode",
    "BloomMetadata",
    "Head",
    "default_metadata",
    "project_head",
    "Project",
    "ProjectPage",
    "LanguageTextStore",
    "PageEntry",
    "TextKind",
    "TextUnit",
]
