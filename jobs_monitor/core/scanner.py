"""Directory scanning functionality for job status monitoring."""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .filesystem import DirectoryAccessError, LocalFilesystem
from .models import DirectoryEntry


@dataclass(frozen=True)
class DirectoryScan:
    """Candidates resolved for one configured directory."""
    directory: str
    candidates: Tuple[DirectoryEntry, ...] = ()
    skipped_count: int = 0
    failures: Tuple[str, ...] = ()
    error: Optional[str] = None


class DirectoryScanner:
    """Resolves the files to evaluate in each configured directory."""

    def __init__(self, filesystem: Optional[LocalFilesystem] = None):
        """Initialize directory scanner.

        Args:
            filesystem: Filesystem access layer, a LocalFilesystem by default.
        """
        self.filesystem = filesystem or LocalFilesystem()
        self.logger = logging.getLogger(__name__)

    def scan(self, directory: str, excluded_names: Iterable[str] = ()) -> DirectoryScan:
        """Scan a directory and return its evaluation candidates.

        Candidates are ordered most recently modified first. An empty
        directory yields itself as the only candidate.

        Args:
            directory: Directory to scan.
            excluded_names: Basenames that are skipped without evaluation.

        Returns:
            DirectoryScan describing candidates, skips and failures.
        """
        excluded_names = frozenset(excluded_names)
        self.logger.info(f"Starting scan of {directory}")

        try:
            entries = self.filesystem.list_entries(directory)
        except DirectoryAccessError as e:
            self.logger.warning(f"Directory {directory} is not accessible: {e}")
            # Return empty result with error
            return DirectoryScan(
                directory=directory,
                error=f"{directory}: Does not exist or is not accessible"
            )

        # Empty directory stands in for its own files
        if not entries:
            entries = [self._directory_as_candidate(directory)]

        candidates = []
        failures = []
        skipped = 0
        for entry in entries:
            if entry.name in excluded_names:
                self.logger.debug(f"Excluding {entry.path}")
                skipped += 1
                continue

            # Metadata could not be read
            if entry.error is not None:
                failures.append(f"{entry.path}: Unable to read modification time")
                skipped += 1
                continue

            candidates.append(entry)

        # Most recently modified first
        candidates.sort(key=lambda entry: (-entry.mtime, entry.name))

        self.logger.info(f"Completed scan of {directory}, found {len(candidates)} candidates")
        return DirectoryScan(
            directory=directory,
            candidates=tuple(candidates),
            skipped_count=skipped,
            failures=tuple(failures)
        )

    def _directory_as_candidate(self, directory: str) -> DirectoryEntry:
        """Stand the directory in for its missing files."""
        name = os.path.basename(os.path.normpath(directory))
        try:
            mtime = self.filesystem.stat_mtime(directory)
        except OSError as e:
            self.logger.warning(f"Cannot stat {directory}: {e}")
            return DirectoryEntry(path=directory, name=name, mtime=None,
                                  is_file=False, error=str(e))

        return DirectoryEntry(path=directory, name=name, mtime=mtime, is_file=False)
