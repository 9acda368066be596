"""
PhotoStory 3 project.xml reader.

Only the parts the converter uses are read: slide images, narration,
background music tracks, durations and text overlays.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from lxml import etree

from .errors import ProjectReadError
from .model.project import Project, ProjectPage

logger = logging.getLogger(__name__)

PROJECT_XML = "project.xml"


def _local_name(element: etree._Element) -> str:
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return tag.split("}", 1)[-1] if tag.startswith("{") else tag


def _child(element: etree._Element, name: str) -> Optional[etree._Element]:
    for child in element:
        if _local_name(child) == name:
            return child
    return None


def _int_attr(element: Optional[etree._Element], name: str) -> Optional[int]:
    if element is None:
        return None
    value = element.get(name)
    try:
        return int(value) if value is not None else None
    except ValueError:
        logger.debug(f"Ignoring non-numeric {name}={value!r}")
        return None


def _file_name(path: Optional[str]) -> Optional[str]:
    """PhotoStory stores paths relative to the project; keep the bare name."""
    if not path:
        return None
    return path.replace("\\", "/").rsplit("/", 1)[-1] or None


def _music_by_unit(root: etree._Element, units: List[etree._Element]) -> Dict[int, str]:
    """
    Map visual unit index to its background track.

    A track starts at ``startVisualUnit`` when given, otherwise at the
    VisualUnit it is nested in, otherwise at the first unit.
    """
    positions = {unit: index for index, unit in enumerate(units)}
    tracks = {}
    for track in root.iter("{*}MusicTrack"):
        sound = _child(track, "SoundTrack")
        name = _file_name(sound.get("path")) if sound is not None else None
        if not name:
            continue
        start = _int_attr(track, "startVisualUnit")
        if start is None:
            start = next(
                (positions[unit] for unit in track.iterancestors("{*}VisualUnit") if unit in positions),
                0,
            )
        if start in tracks:
            logger.warning(f"Ignoring music track {name}: unit {start} already plays {tracks[start]}")
            continue
        tracks[start] = name
    return tracks


def read_project(project_xml: Path) -> Project:
    """
    Parse a PhotoStory project.xml.

    Args:
        project_xml: Path to project.xml inside an extracted .wp3 project

    Returns:
        Project with one page per VisualUnit, in document order

    Raises:
        ProjectReadError: If the file is missing or not well-formed XML
    """
    project_xml = Path(project_xml)
    if not project_xml.exists():
        raise ProjectReadError(f"Project file not found: {project_xml}")

    try:
        root = etree.parse(str(project_xml)).getroot()
    except etree.XMLSyntaxError as e:
        raise ProjectReadError(f"Could not parse {project_xml}: {e}") from e

    units = list(root.iter("{*}VisualUnit"))
    music = _music_by_unit(root, units)
    pages = []
    for index, unit in enumerate(units):
        image = _child(unit, "Image")
        narration = _child(unit, "Narration")
        overlay = None
        if image is not None:
            edit = _child(image, "Edit")
            text_overlay = _child(edit, "TextOverlay") if edit is not None else None
            if text_overlay is not None:
                overlay = text_overlay.get("text")

        duration = _int_attr(unit, "duration")
        if duration is None:
            duration = _int_attr(image, "duration")

        pages.append(ProjectPage(
            image=_file_name(image.get("path")) if image is not None else None,
            narration=_file_name(narration.get("path")) if narration is not None else None,
            background_audio=music.get(index),
            duration_ms=duration,
            overlay_text=overlay,
        ))

    name = (root.get("title") or "").strip() or project_xml.parent.name
    logger.info(f"Read project '{name}' with {len(pages)} visual units")
    return Project(name=name, source_dir=project_xml.parent, pages=tuple(pages))
