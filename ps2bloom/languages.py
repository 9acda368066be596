"""
Languages a converted book can carry, and the mapping from document
file names to languages.
"""

import re
from enum import Enum


class Language(Enum):
    """Supported book languages, valued by ISO 639 code."""
    ENGLISH = "en"
    FRENCH = "fr"
    SPANISH = "es"
    PORTUGUESE = "pt"
    INDONESIAN = "id"
    SWAHILI = "sw"
    HINDI = "hi"
    TOK_PISIN = "tpi"
    ARABIC = "ar"
    CHINESE = "zh"
    RUSSIAN = "ru"
    UNKNOWN = "und"

    @property
    def iso_code(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()


# Words (lower case, spaces removed) that identify a language in a file name.
_ALIASES = {
    Language.ENGLISH: ("english", "eng", "en"),
    Language.FRENCH: ("french", "francais", "français", "fra", "fr"),
    Language.SPANISH: ("spanish", "espanol", "español", "spa", "es"),
    Language.PORTUGUESE: ("portuguese", "portugues", "português", "por", "pt"),
    Language.INDONESIAN: ("indonesian", "indonesia", "ind", "id"),
    Language.SWAHILI: ("swahili", "kiswahili", "swa", "sw"),
    Language.HINDI: ("hindi", "hin", "hi"),
    Language.TOK_PISIN: ("tokpisin", "tpi"),
    Language.ARABIC: ("arabic", "ara", "ar"),
    Language.CHINESE: ("chinese", "mandarin", "zho", "zh"),
    Language.RUSSIAN: ("russian", "rus", "ru"),
}

_LOOKUP = {alias: language for language, aliases in _ALIASES.items() for alias in aliases}


def language_from_filename(stem: str) -> Language:
    """
    Derive the language of a text document from its file name (without extension).

    The language name is expected at the end of the name, e.g.
    ``"ABC123 Tok Pisin"`` or ``"my_story-fr"``. Names that do not end in a
    known language return ``Language.UNKNOWN``; this function never raises.
    """
    words = re.findall(r"[^\W\d_]+", (stem or "").lower())
    if not words:
        return Language.UNKNOWN

    # Two-word names ("tok pisin") take precedence over their last word.
    if len(words) >= 2:
        language = _LOOKUP.get(words[-2] + words[-1])
        if language is not None:
            return language

    return _LOOKUP.get(words[-1], Language.UNKNOWN)


def language_from_name(name: str) -> Language:
    """Resolve a configured language name or ISO code; unknown names map to UNKNOWN."""
    return _LOOKUP.get(re.sub(r"[\s_-]+", "", (name or "").lower()), Language.UNKNOWN)
