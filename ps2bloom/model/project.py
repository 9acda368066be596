"""
Read-only view of a PhotoStory 3 project.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


@dataclass(frozen=True)
class ProjectPage:
    """A PhotoStory visual unit: one slide and its audio."""
    image: Optional[str]
    narration: Optional[str] = None
    background_audio: Optional[str] = None
    duration_ms: Optional[int] = None
    overlay_text: Optional[str] = None

    @property
    def has_visual(self) -> bool:
        return bool(self.image)


@dataclass(frozen=True)
class Project:
    """A parsed PhotoStory project. Never mutated after reading."""
    name: str
    source_dir: Path
    pages: Tuple[ProjectPage, ...] = field(default_factory=tuple)

    @property
    def convertible_pages(self) -> Tuple[ProjectPage, ...]:
        """Pages that become book pages; units without an image are dropped."""
        return tuple(page for page in self.pages if page.has_visual)

    def media_files(self) -> Tuple[str, ...]:
        """File names of every image and audio file the project references."""
        names = []
        for page in self.pages:
            for name in (page.image, page.narration, page.background_audio):
                if name and name not in names:
                    names.append(name)
        return tuple(names)
