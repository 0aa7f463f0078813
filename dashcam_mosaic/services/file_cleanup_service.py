"""
File Cleanup Service

Retires temporary artifacts (per-camera concatenations, playlists, partial
backend outputs). Each deletion is an independent attempt: a failure is
recorded and the remaining files are still deleted, and the caller gets the
complete outcome instead of only the first error.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Union

from ..exceptions import CleanupError

logger = logging.getLogger(__name__)


@dataclass
class CleanupReport:
    """Outcome of one batch of deletions."""

    deleted: List[Path] = field(default_factory=list)
    failed: Dict[Path, OSError] = field(default_factory=dict)

    @property
    def attempted(self) -> int:
        return len(self.deleted) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        """
        Human-readable summary.

        Returns:
            String like "Deleted 3 of 4 file(s); failed: /a/b.mp4"
        """
        message = f"Deleted {len(self.deleted)} of {self.attempted} file(s)"
        if self.failed:
            message += "; failed: " + ", ".join(str(path) for path in self.failed)
        return message

    def raise_for_failures(self) -> "CleanupReport":
        """Raise CleanupError if any deletion failed, otherwise return self."""
        if self.failed:
            raise CleanupError(self)
        return self


class FileCleanupService:
    """Service for temporary file cleanup operations."""

    @staticmethod
    def delete_files(paths: Iterable[Union[Path, str]]) -> CleanupReport:
        """
        Delete every path, collecting successes and failures.

        A missing file counts as a failure.

        Args:
            paths: Files to delete

        Returns:
            CleanupReport with deleted paths and per-path errors
        """
        report = CleanupReport()

        for path in paths:
            path = Path(path)
            try:
                path.unlink()
                report.deleted.append(path)
                logger.debug(f"Deleted {path}")
            except OSError as e:
                report.failed[path] = e
                logger.error(f"Failed to delete {path}: {e}")

        if report.failed:
            logger.warning(report.summary())
        else:
            logger.info(report.summary())
        return report

    @staticmethod
    def discard(path: Union[Path, str]) -> bool:
        """
        Best-effort removal of a scratch file that may not exist.

        Args:
            path: File to remove

        Returns:
            True if the file is gone afterwards
        """
        path = Path(path)
        try:
            path.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.warning(f"Could not remove scratch file {path}: {e}")
            return False
