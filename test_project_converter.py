#!/usr/bin/env python3
"""
End-to-end tests for converting a PhotoStory project into a Bloom book folder.
"""

from pathlib import Path
from unittest.mock import Mock

import pytest
from lxml import etree

from ps2bloom.config import AppConfig
from ps2bloom.converter import ProjectConverter
from ps2bloom.errors import (
    AlignmentError,
    DestinationConflictError,
    ExtractionError,
    MissingReferenceLanguageError,
)
from ps2bloom.extraction import TextExtractor
from ps2bloom.languages import Language
from ps2bloom.model.text import TextKind, TextUnit

PROJECT = """<MSPhotoStoryProject title="Photo Story Creation">
  <VisualUnit><Narration path="n0.wav"/><Image path="0.jpg"/></VisualUnit>
  <VisualUnit><Narration path="n1.wav"/><Image path="1.jpg"/></VisualUnit>
</MSPhotoStoryProject>
"""

TEXT = {
    "English": [
        TextUnit(TextKind.TITLE, "My Book"),
        TextUnit(TextKind.BODY, "Once...", "Gen 1:1"),
        TextUnit(TextKind.ALTERNATE_TITLES, "Beginnings"),
    ],
    "Spanish": [
        TextUnit(TextKind.TITLE, "Mi Libro"),
        TextUnit(TextKind.BODY, "Una vez...", "Gen 1:1"),
        TextUnit(TextKind.ALTERNATE_TITLES, "Comienzos"),
    ],
    "French": [
        TextUnit(TextKind.TITLE, "Mon Livre"),
    ],
}


class FakeExtractor(TextExtractor):
    """Returns canned text keyed by document stem."""

    def __init__(self, text=None, failing=()):
        self.text = TEXT if text is None else text
        self.failing = set(failing)
        self.calls = []

    def extract(self, document_path):
        stem = Path(document_path).stem
        self.calls.append(stem)
        if stem in self.failing:
            raise ExtractionError(f"cannot read {stem}")
        return list(self.text[stem])


def no_hydration_config():
    config = AppConfig()
    config.hydration.enabled = False
    return config


@pytest.fixture
def project_dir(tmp_path):
    directory = tmp_path / "Creation"
    directory.mkdir()
    (directory / "project.xml").write_text(PROJECT, encoding="utf-8")
    (directory / "0.jpg").write_bytes(b"jpeg0")
    (directory / "1.jpg").write_bytes(b"jpeg1")
    (directory / "n0.wav").write_bytes(b"voice")
    (directory / "n1.wav").write_bytes(b"voice")
    for stem in ("English", "Spanish", "French"):
        (directory / f"{stem}.docx").write_bytes(b"")
    return directory


def docx_paths(project_dir, *stems):
    return [project_dir / f"{stem}.docx" for stem in stems]


def test_full_conversion(project_dir, tmp_path):
    output = tmp_path / "Output"
    converter = ProjectConverter(no_hydration_config(), extractor=FakeExtractor())

    result = converter.convert(
        project_dir / "project.xml",
        output,
        docx_paths=docx_paths(project_dir, "English", "Spanish", "French"),
        project_code="ABC123",
        include_references=True,
    )

    assert result.success
    assert result.title == "ABC123 My Book"
    assert result.languages == [Language.ENGLISH, Language.SPANISH]
    assert result.excluded_languages == [Language.FRENCH]
    assert result.page_count == 2
    assert result.hydrated is False

    book_dir = output / "ABC123 My Book"
    assert result.book_dir == book_dir
    assert (book_dir / "0.jpg").read_bytes() == b"jpeg0"
    assert (book_dir / "meta.json").read_text() == ""
    assert (book_dir / "audio" / "n0.wav").exists()
    assert not (book_dir / "audio" / "n1.wav").exists()
    assert not (book_dir / "English.docx").exists()
    assert not (book_dir / "project.xml").exists()

    html = (book_dir / "ABC123 My Book.htm").read_bytes()
    assert html.startswith(b"<!DOCTYPE html>")
    root = etree.fromstring(html.split(b"\n", 1)[1])
    assert root.findtext("head/title") == "ABC123 My Book"
    assert len(root.findall("head/link")) == 8
    pages = root.findall("body/div[@data-page-number]")
    assert len(pages) == 2
    assert pages[1].get("data-narration") == "n0.wav"
    english = pages[1].find(".//div[@lang='en']")
    assert [p.text for p in english.findall("p")] == ["Gen 1:1", "Once..."]
    alternate = root.find("body/div[@id='bloomDataDiv']/div[@data-book='alternateTitles']")
    assert alternate.text == "Beginnings"


def test_unreadable_language_is_skipped(project_dir, tmp_path):
    extractor = FakeExtractor(failing={"Spanish"})
    converter = ProjectConverter(no_hydration_config(), extractor=extractor)

    result = converter.convert(
        project_dir / "project.xml", tmp_path / "Output",
        docx_paths=docx_paths(project_dir, "English", "Spanish"),
    )

    assert result.success
    assert result.languages == [Language.ENGLISH]
    assert result.title == "My Book"


def test_unknown_and_duplicate_documents_are_skipped(project_dir, tmp_path):
    (project_dir / "notes.docx").write_bytes(b"")
    (project_dir / "Story English.docx").write_bytes(b"")
    extractor = FakeExtractor()
    converter = ProjectConverter(no_hydration_config(), extractor=extractor)

    store = converter.extract_text(
        [project_dir / "English.docx", project_dir / "notes.docx", project_dir / "Story English.docx"],
        "Creation",
    )

    assert store.languages() == [Language.ENGLISH]
    assert extractor.calls == ["English"]


def test_missing_english_fails_without_output(project_dir, tmp_path):
    output = tmp_path / "Output"
    converter = ProjectConverter(no_hydration_config(), extractor=FakeExtractor())

    with pytest.raises(MissingReferenceLanguageError):
        converter.convert(project_dir / "project.xml", output, docx_paths=docx_paths(project_dir, "Spanish"))

    assert not output.exists()


def test_page_count_mismatch_fails_without_output(project_dir, tmp_path):
    output = tmp_path / "Output"
    text = {"English": [TextUnit(TextKind.TITLE, "My Book")]}
    converter = ProjectConverter(no_hydration_config(), extractor=FakeExtractor(text))

    with pytest.raises(AlignmentError):
        converter.convert(project_dir / "project.xml", output, docx_paths=docx_paths(project_dir, "English"))

    assert not output.exists()


def test_existing_book_conflict_and_overwrite(project_dir, tmp_path):
    output = tmp_path / "Output"
    book_dir = output / "My Book"
    book_dir.mkdir(parents=True)
    (book_dir / "stale.txt").write_text("old")
    converter = ProjectConverter(no_hydration_config(), extractor=FakeExtractor())
    paths = docx_paths(project_dir, "English")

    with pytest.raises(DestinationConflictError, match="My Book"):
        converter.convert(project_dir / "project.xml", output, docx_paths=paths)
    assert (book_dir / "stale.txt").exists()

    result = converter.convert(project_dir / "project.xml", output, docx_paths=paths, overwrite=True)

    assert result.success
    assert not (book_dir / "stale.txt").exists()
    assert (book_dir / "My Book.htm").exists()


def test_failed_write_removes_new_book_dir(project_dir, tmp_path):
    output = tmp_path / "Output"
    serializer = Mock()
    serializer.serialize.side_effect = OSError("disk full")
    converter = ProjectConverter(no_hydration_config(), extractor=FakeExtractor(), serializer=serializer)

    with pytest.raises(OSError):
        converter.convert(project_dir / "project.xml", output, docx_paths=docx_paths(project_dir, "English"))

    assert not (output / "My Book").exists()


def test_hydration_failure_is_not_fatal(project_dir, tmp_path):
    hydrator = Mock()
    hydrator.hydrate.return_value = False
    converter = ProjectConverter(AppConfig(), extractor=FakeExtractor(), hydrator=hydrator)

    result = converter.convert(
        project_dir / "project.xml", tmp_path / "Output", docx_paths=docx_paths(project_dir, "English")
    )

    assert result.success
    assert result.hydrated is False
    hydrator.hydrate.assert_called_once_with(tmp_path / "Output" / "My Book")


def test_convert_safely_reports_errors(project_dir, tmp_path):
    converter = ProjectConverter(no_hydration_config(), extractor=FakeExtractor())

    result = converter.convert_safely(project_dir / "project.xml", tmp_path / "Output", docx_paths=[])

    assert not result.success
    assert result.project_name == "Creation"
    assert "English" in result.error


def test_book_folder_may_not_replace_the_project_folder(project_dir, tmp_path):
    text = {"English": [TextUnit(TextKind.TITLE, "Creation"), TextUnit(TextKind.BODY, "Once...")]}
    converter = ProjectConverter(no_hydration_config(), extractor=FakeExtractor(text))

    with pytest.raises(DestinationConflictError, match="project folder"):
        converter.convert(
            project_dir / "project.xml",
            tmp_path,
            docx_paths=docx_paths(project_dir, "English"),
            overwrite=True,
        )

    assert (project_dir / "project.xml").exists()
    assert (project_dir / "0.jpg").read_bytes() == b"jpeg0"
    assert (project_dir / "English.docx").exists()


def test_book_folder_may_not_contain_the_project_folder(tmp_path):
    source = tmp_path / "My Book" / "Creation"
    source.mkdir(parents=True)
    (source / "project.xml").write_text(PROJECT, encoding="utf-8")
    (source / "English.docx").write_bytes(b"")
    converter = ProjectConverter(no_hydration_config(), extractor=FakeExtractor())

    with pytest.raises(DestinationConflictError):
        converter.convert(source / "project.xml", tmp_path, docx_paths=[source / "English.docx"], overwrite=True)

    assert (source / "project.xml").exists()
