#!/usr/bin/env python3
"""
Tests for aligning per-language text against the reference language.
"""

import pytest

from ps2bloom.alignment import AlignmentEngine
from ps2bloom.errors import LanguageDesyncWarning, MissingReferenceLanguageError
from ps2bloom.languages import Language
from ps2bloom.model.text import LanguageTextStore, TextKind, TextUnit


def body(text, reference=None):
    return TextUnit(TextKind.BODY, text, reference)


def make_store(**columns):
    store = LanguageTextStore()
    for name, units in columns.items():
        store.add(Language[name.upper()], units)
    return store


def test_equal_lengths_exclude_nothing():
    """Every language survives when all documents have the reference length"""
    store = make_store(
        english=[TextUnit(TextKind.TITLE, "My Book"), body("Once...")],
        spanish=[TextUnit(TextKind.TITLE, "Mi Libro"), body("Una vez...")],
        french=[TextUnit(TextKind.TITLE, "Mon Livre"), body("Il était...")],
    )

    result = AlignmentEngine().align(store)

    assert len(result.pages) == 2
    assert result.excluded == []
    assert result.languages == [Language.ENGLISH, Language.SPANISH, Language.FRENCH]
    assert result.pages[1][Language.SPANISH].text == "Una vez..."


def test_desynchronized_language_is_excluded():
    """French with 2 units against 3 English units is dropped with a warning"""
    store = make_store(
        english=[TextUnit(TextKind.TITLE, "T"), body("a"), body("b")],
        french=[TextUnit(TextKind.TITLE, "T"), body("a")],
        spanish=[TextUnit(TextKind.TITLE, "T"), body("a"), body("b")],
    )

    result = AlignmentEngine().align(store, project_name="Creation")

    assert len(result.pages) == 3
    assert result.excluded_languages == [Language.FRENCH]
    warning = result.excluded[0]
    assert isinstance(warning, LanguageDesyncWarning)
    assert warning.count == 2 and warning.expected == 3
    assert "French" in str(warning)
    for page in result.pages:
        assert Language.FRENCH not in page
        assert set(page) == {Language.ENGLISH, Language.SPANISH}


def test_longer_language_is_excluded_too():
    store = make_store(english=[body("a")], hindi=[body("a"), body("b")])

    result = AlignmentEngine().align(store)

    assert result.excluded_languages == [Language.HINDI]
    assert result.pages == [{Language.ENGLISH: body("a")}]


def test_missing_reference_language_is_fatal():
    store = make_store(spanish=[body("a")])

    with pytest.raises(MissingReferenceLanguageError, match="English"):
        AlignmentEngine().align(store, project_name="Creation")


def test_other_reference_language():
    """A configured reference language decides which lengths are correct"""
    store = make_store(english=[body("a")], french=[body("a"), body("b")])

    result = AlignmentEngine(reference=Language.FRENCH).align(store)

    assert result.excluded_languages == [Language.ENGLISH]
    assert len(result.pages) == 2


def test_empty_reference_produces_no_pages():
    store = make_store(english=[], spanish=[])

    result = AlignmentEngine().align(store)

    assert result.pages == []
    assert result.languages == [Language.ENGLISH, Language.SPANISH]


def test_store_is_not_modified():
    store = make_store(english=[body("a")], french=[])

    AlignmentEngine().align(store)

    assert Language.FRENCH in store
    assert len(store) == 2


def test_first_document_for_a_language_wins():
    store = LanguageTextStore()
    store.add(Language.ENGLISH, [body("First")])
    store.add(Language.ENGLISH, [body("Second"), body("Extra")])

    assert store.languages() == [Language.ENGLISH]
    assert [unit.text for unit in store.get(Language.ENGLISH)] == ["First"]
