#!/usr/bin/env python3
"""
Tests for the batch command line.
"""

import logging
from unittest.mock import patch

import pytest

import batch_converter
from ps2bloom.converter import ConversionResult


@pytest.fixture(autouse=True)
def reset_logging():
    """main() installs handlers on the package logger; remove them after each test"""
    yield
    logger = logging.getLogger("ps2bloom")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def make_project(root, name):
    directory = root / name
    directory.mkdir()
    (directory / "project.xml").write_text("<MSPhotoStoryProject/>", encoding="utf-8")
    (directory / f"{name} English.docx").write_bytes(b"")
    return directory


def test_projects_root_converts_each_project(tmp_path):
    projects = tmp_path / "projects"
    projects.mkdir()
    make_project(projects, "Creation")
    make_project(projects, "Noah")
    (projects / "not-a-project").mkdir()
    config = tmp_path / "config.yaml"
    config.write_text(
        "conversion:\n  project_codes:\n    Noah: XYZ9\n"
        "hydration:\n  enabled: false\n",
        encoding="utf-8",
    )
    calls = []

    def fake_convert(self, project_xml, destination_root, **kwargs):
        calls.append((project_xml.parent.name, kwargs["project_code"], [p.name for p in kwargs["docx_paths"]]))
        return ConversionResult(project_name=project_xml.parent.name, success=True)

    with patch("ps2bloom.converter.ProjectConverter.convert_safely", fake_convert):
        status = batch_converter.main([
            "--config", str(config),
            "--projects-root", str(projects),
            "--output", str(tmp_path / "Books"),
        ])

    assert status == 0
    assert calls == [
        ("Creation", None, ["Creation English.docx"]),
        ("Noah", "XYZ9", ["Noah English.docx"]),
    ]
    assert (tmp_path / "Books").is_dir()


def test_failures_set_exit_status(tmp_path, capsys):
    project = make_project(tmp_path, "Creation")

    def fake_convert(self, project_xml, destination_root, **kwargs):
        return ConversionResult(project_name="Creation", success=False, error="no English text")

    with patch("ps2bloom.converter.ProjectConverter.convert_safely", fake_convert):
        status = batch_converter.main([
            "--config", str(tmp_path / "missing.yaml"),
            "--project", str(project),
            "--output", str(tmp_path / "Books"),
            "--code", "ABC123",
            "--no-hydrate",
        ])

    assert status == 1
    assert "Creation: no English text" in capsys.readouterr().out


def test_invalid_config(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text("conversion:\n  reference_language: klingon\n", encoding="utf-8")

    assert batch_converter.main(["--config", str(config), "--project", str(tmp_path)]) == 1


def test_missing_projects_root_is_a_usage_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        batch_converter.main(["--projects-root", str(tmp_path / "nowhere")])

    assert excinfo.value.code == 2
    assert "Projects folder not found" in capsys.readouterr().err
