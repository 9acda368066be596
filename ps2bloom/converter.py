"""
Converts one PhotoStory project into a Bloom book folder.

Every step that can reject the project (reading, alignment, assembly,
destination checks) runs before anything is written, so a failed conversion
leaves no partial book behind.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .alignment import AlignmentEngine
from .assembler import DocumentAssembler
from .audio import AudioProcessor, is_audio_file
from .config.settings import AppConfig
from .errors import ConversionError, DestinationConflictError, ExtractionError
from .extraction import DocxTextExtractor, TextExtractor
from .hydration import BloomHydrator
from .languages import Language, language_from_filename
from .model.document import DocumentModel
from .model.project import Project
from .model.text import LanguageTextStore
from .project_reader import PROJECT_XML, read_project
from .serializer import BloomSerializer
from .transformer import PageTransformer
from .utils.paths import sanitize_file_name

logger = logging.getLogger(__name__)

META_JSON = "meta.json"
_SKIPPED_ASSET_SUFFIXES = {".docx", ".doc", ".xml"}


@dataclass
class ConversionResult:
    project_name: str
    success: bool
    title: Optional[str] = None
    book_dir: Optional[Path] = None
    languages: List[Language] = field(default_factory=list)
    excluded_languages: List[Language] = field(default_factory=list)
    page_count: int = 0
    hydrated: bool = False
    error: Optional[str] = None


class ProjectConverter:
    """
    Runs the conversion pipeline for a single project.

    Collaborators (text extraction, audio handling, hydration) can be
    replaced, which the tests use to avoid real documents and Bloom.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        extractor: Optional[TextExtractor] = None,
        audio: Optional[AudioProcessor] = None,
        hydrator: Optional[BloomHydrator] = None,
        serializer: Optional[BloomSerializer] = None,
    ):
        self.config = config or AppConfig()
        self.reference = self.config.conversion.reference
        self.extractor = extractor or DocxTextExtractor()
        self.audio = audio or AudioProcessor()
        self.serializer = serializer or BloomSerializer()
        if hydrator is None and self.config.hydration.enabled:
            hydration = self.config.hydration
            hydrator = BloomHydrator(
                hydration.bloom_path,
                preset=hydration.preset,
                vernacular_iso_code=hydration.vernacular_iso_code,
                timeout_seconds=hydration.timeout_seconds,
            )
        self.hydrator = hydrator

    def convert(
        self,
        project_xml: Path,
        destination_root: Path,
        docx_paths: Optional[Iterable[Path]] = None,
        project_name: Optional[str] = None,
        project_code: Optional[str] = None,
        overwrite: Optional[bool] = None,
        include_references: Optional[bool] = None,
    ) -> ConversionResult:
        """
        Convert the project at ``project_xml`` into ``destination_root/<title>``.

        Raises:
            ConversionError: For any failure that aborts this project
        """
        if overwrite is None:
            overwrite = self.config.conversion.overwrite
        if include_references is None:
            include_references = self.config.conversion.include_references

        project = read_project(Path(project_xml))
        name = project_name or project.name

        store = self.extract_text(docx_paths or [], name)
        alignment = AlignmentEngine(self.reference).align(store, name)
        transformed = PageTransformer(project_code, include_references, self.reference).transform(
            alignment.pages, name
        )

        title = transformed.title
        book_dir = Path(destination_root) / sanitize_file_name(title)
        audio_files = [f for f in project.media_files() if is_audio_file(f)]
        duplicates = self.audio.find_duplicates(project.source_dir, audio_files)

        document = DocumentAssembler(reference=self.reference).assemble(
            transformed.pages,
            project,
            title,
            book_dir,
            duplicates,
            alternate_titles=transformed.alternate_titles,
        )

        self.write_book(project, document, duplicates, overwrite)

        hydrated = False
        if self.hydrator is not None:
            hydrated = self.hydrator.hydrate(book_dir)

        logger.info(f"Successfully converted {title}")
        logger.info(f"   Languages: {', '.join(language.display_name for language in alignment.languages)}")
        return ConversionResult(
            project_name=name,
            success=True,
            title=title,
            book_dir=book_dir,
            languages=list(alignment.languages),
            excluded_languages=alignment.excluded_languages,
            page_count=len(document.pages),
            hydrated=hydrated,
        )

    def convert_safely(self, project_xml: Path, destination_root: Path, **kwargs) -> ConversionResult:
        """Like ``convert`` but reports failures in the result instead of raising."""
        name = kwargs.get("project_name") or Path(project_xml).parent.name
        try:
            return self.convert(project_xml, destination_root, **kwargs)
        except (ConversionError, OSError) as e:
            logger.error(f"Error: could not convert {name}: {e}")
            return ConversionResult(project_name=name, success=False, error=str(e))

    def extract_text(self, docx_paths: Iterable[Path], project_name: str) -> LanguageTextStore:
        """Extract each language document; unreadable documents are skipped."""
        store = LanguageTextStore()
        for path in docx_paths:
            path = Path(path)
            language = language_from_filename(path.stem)
            if language == Language.UNKNOWN:
                logger.warning(f"Skipping {path.name}: language not recognised from file name")
                continue
            if language in store:
                logger.info(f"Skipping {path.name}: {language.display_name} text already loaded")
                continue
            try:
                units = self.extractor.extract(path)
            except ExtractionError as e:
                logger.error(
                    f"Error: Could not process {language.display_name} Word document for {project_name}: {e}"
                )
                continue
            store.add(language, units)
            logger.debug(f"Loaded {len(units)} {language.display_name} text units from {path.name}")
        return store

    def write_book(self, project: Project, document: DocumentModel, duplicates, overwrite: bool) -> None:
        """Create the book folder and write assets, the .htm file and meta.json."""
        book_dir = document.destination
        _check_not_source(book_dir, project.source_dir)
        created = False
        if book_dir.exists():
            if not overwrite:
                raise DestinationConflictError(f"A book already exists with the name {document.title}")
            _clear_directory(book_dir)
        else:
            book_dir.mkdir(parents=True)
            created = True

        try:
            audio_files = self._copy_assets(project.source_dir, book_dir)
            self.audio.copy_audio(project.source_dir, book_dir, audio_files, duplicates)
            html_path = book_dir / f"{sanitize_file_name(document.title)}.htm"
            self.serializer.serialize(document.to_markup(), html_path)
            (book_dir / META_JSON).touch()
        except Exception:
            if created:
                shutil.rmtree(book_dir, ignore_errors=True)
            raise

    def _copy_assets(self, source_dir: Path, book_dir: Path) -> List[str]:
        """Copy image assets; returns the audio file names for the audio processor."""
        audio_files = []
        for path in sorted(Path(source_dir).iterdir()):
            if not path.is_file() or path.name == PROJECT_XML:
                continue
            if is_audio_file(path.name):
                audio_files.append(path.name)
            elif path.suffix.lower() not in _SKIPPED_ASSET_SUFFIXES:
                shutil.copy2(path, book_dir / path.name)
        return audio_files


def _check_not_source(book_dir: Path, source_dir: Path) -> None:
    """The book folder may not be the project folder or contain it."""
    book_dir = Path(book_dir).resolve()
    source_dir = Path(source_dir).resolve()
    if book_dir == source_dir or book_dir in source_dir.parents:
        raise DestinationConflictError(
            f"Book folder {book_dir} would overwrite the project folder {source_dir}"
        )


def _clear_directory(directory: Path) -> None:
    for child in directory.iterdir():
        if child.is_dir():
            shutil.rmtree(child)
        else:
            child.unlink()
