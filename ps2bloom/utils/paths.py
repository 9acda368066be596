"""
File and directory naming helpers.
"""

import re

# Characters Windows does not allow in file names, plus control characters.
_INVALID = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def sanitize_file_name(name: str) -> str:
    """Make ``name`` safe to use as a file or directory name."""
    cleaned = _INVALID.sub(" ", name or "")
    cleaned = re.sub(r"\s+", " ", cleaned).strip().rstrip(".")
    return cleaned or "book"
