"""
Audio handling for converted books: duplicate detection and copying.

PhotoStory stores a separate narration file per slide even when slides reuse
the same recording. Files with identical content are mapped to the first
copy so the book references one file instead of several.
"""

import hashlib
import logging
import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)

AUDIO_EXTENSIONS = {".mp3", ".wav", ".wma", ".ogg", ".m4a"}
CONVERSION_EXTENSIONS = {".wav", ".wma"}
AUDIO_SUBDIR = "audio"


def is_audio_file(filename: str) -> bool:
    return Path(filename).suffix.lower() in AUDIO_EXTENSIONS


def needs_conversion(filename: str) -> bool:
    """True for formats Bloom cannot play directly."""
    return Path(filename).suffix.lower() in CONVERSION_EXTENSIONS


def _file_hash(path: Path) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


class AudioProcessor:
    """Finds duplicate audio files and copies the distinct ones into a book."""

    def find_duplicates(self, source_dir: Path, files: Iterable[str]) -> Dict[str, str]:
        """
        Map every duplicate audio file to the first file with the same content.

        Args:
            source_dir: Directory holding the files
            files: File names to compare; missing files are ignored

        Returns:
            Dictionary of duplicate file name -> canonical file name
        """
        source_dir = Path(source_dir)
        first_by_hash: Dict[str, str] = {}
        duplicates: Dict[str, str] = {}

        for name in sorted(set(files)):
            path = source_dir / name
            if not path.is_file():
                logger.warning(f"Audio file not found: {path}")
                continue
            file_hash = _file_hash(path)
            if file_hash in first_by_hash:
                duplicates[name] = first_by_hash[file_hash]
            else:
                first_by_hash[file_hash] = name

        if duplicates:
            logger.info(f"Found {len(duplicates)} duplicate audio files")
        return duplicates

    def copy_audio(
        self,
        source_dir: Path,
        dest_dir: Path,
        files: Iterable[str],
        duplicates: Optional[Mapping[str, str]] = None,
    ) -> List[Path]:
        """Copy each distinct audio file into ``dest_dir/audio``."""
        duplicates = duplicates or {}
        audio_dir = Path(dest_dir) / AUDIO_SUBDIR
        copied = []

        for name in sorted(set(files)):
            if name in duplicates:
                continue
            source = Path(source_dir) / name
            if not source.is_file():
                continue
            if needs_conversion(name):
                logger.debug(f"{name} is copied without conversion")
            audio_dir.mkdir(parents=True, exist_ok=True)
            target = audio_dir / name
            shutil.copy2(source, target)
            copied.append(target)

        return copied
