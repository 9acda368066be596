"""
ps2bloom - convert PhotoStory 3 projects into multilingual Bloom books.

The conversion runs in one pass: per-language text is aligned against the
reference language, page text is rewritten (title codes, references), and the
result is joined with the project's slide media into a document model that the
serializer writes as a Bloom .htm file.
"""

from .converter import ConversionResult, ProjectConverter
from .languages import Language, language_from_filename

__all__ = ["ConversionResult", "ProjectConverter", "Language", "language_from_filename"]
