"""
Exceptions and warnings raised while converting a project.
"""


class ConversionError(Exception):
    """Base class for failures that abort the conversion of one project."""


class ConfigError(ConversionError):
    """Invalid configuration value."""


class ProjectReadError(ConversionError):
    """The PhotoStory project.xml is missing or cannot be parsed."""


class MissingReferenceLanguageError(ConversionError):
    """No extracted text exists for the reference language."""


class AlignmentError(ConversionError):
    """Aligned page count does not match the project's page count."""


class DestinationConflictError(ConversionError):
    """The book directory already exists and overwriting is disabled."""


class ExtractionError(Exception):
    """A single language document could not be read. The language is skipped."""


class LanguageDesyncWarning(UserWarning):
    """A language has a different number of text units than the reference."""

    def __init__(self, language, count: int, expected: int):
        self.language = language
        self.count = count
        self.expected = expected
        super().__init__(
            f"Excluding {language.display_name} because it is out of sync with "
            f"{expected} reference units (found {count})"
        )


class HydrationWarning(UserWarning):
    """The external Bloom hydrate step failed or could not be launched."""
