"""
Post-conversion hydration with the Bloom command line.

Bloom's ``hydrate`` command fills in the front/back matter and validates the
book folder. A failed hydration leaves a usable book, so it is reported as a
warning rather than a conversion failure.
"""

import logging
import subprocess
import warnings
from pathlib import Path
from typing import List, Optional

from .errors import HydrationWarning

logger = logging.getLogger(__name__)


class BloomHydrator:
    def __init__(
        self,
        bloom_path: Optional[str],
        preset: str = "shellbook",
        vernacular_iso_code: str = "en",
        timeout_seconds: int = 300,
    ):
        self.bloom_path = bloom_path
        self.preset = preset
        self.vernacular_iso_code = vernacular_iso_code
        self.timeout_seconds = timeout_seconds

    def command(self, book_path: Path) -> List[str]:
        return [
            str(self.bloom_path),
            "hydrate",
            "--preset", self.preset,
            "--bookpath", str(book_path),
            "--vernacularisocode", self.vernacular_iso_code,
        ]

    def hydrate(self, book_path: Path) -> bool:
        """
        Run Bloom against ``book_path``.

        Returns:
            True if Bloom exited with status 0
        """
        if not self.bloom_path:
            logger.info("No Bloom executable configured; skipping hydration")
            return False

        cmd = self.command(book_path)
        logger.info(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            self._warn(f"Bloom timed out after {self.timeout_seconds}s hydrating {book_path}")
            return False
        except OSError as e:
            self._warn(f"Unable to launch Bloom to hydrate {book_path}: {e}")
            return False

        if result.returncode != 0:
            self._warn(f"Unable to hydrate {book_path} (exit code {result.returncode})")
            if result.stderr:
                logger.debug(f"STDERR: {result.stderr}")
            return False

        return True

    @staticmethod
    def _warn(message: str) -> None:
        logger.warning(message)
        warnings.warn(message, HydrationWarning, stacklevel=3)
