"""
Utility modules for ps2bloom.
"""

from .logger import setup_logger
from .paths import sanitize_file_name

__all__ = ["setup_logger", "sanitize_file_name"]
