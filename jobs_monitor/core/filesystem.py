"""Filesystem access used by the directory checks.

Only the last modification time is ever read. Creation time is not
available on every platform, so mtime stands in for it.
"""

import logging
import os
import time
from typing import List, Optional

from .models import DirectoryEntry

BLOCK_SIZE = 4096


class DirectoryAccessError(OSError):
    """Raised when a directory cannot be listed."""


class LocalFilesystem:
    """Reads directory listings, modification times and file tails."""

    def __init__(self, clock=time.time):
        self.clock = clock
        self.logger = logging.getLogger(__name__)

    def now(self) -> int:
        """Current wall-clock time in whole epoch seconds."""
        return int(self.clock())

    def list_entries(self, path: str) -> List[DirectoryEntry]:
        """List the immediate entries of a directory.

        Entries whose metadata cannot be read are still returned, with
        ``mtime`` set to None and ``error`` describing the failure.

        Raises:
            DirectoryAccessError: If the directory is missing, unreadable or
                not a directory.
        """
        entries = []
        try:
            with os.scandir(path) as iterator:
                for entry in iterator:
                    try:
                        entry_stat = entry.stat()
                        entries.append(DirectoryEntry(
                            path=entry.path,
                            name=entry.name,
                            mtime=int(entry_stat.st_mtime),
                            is_file=entry.is_file()
                        ))
                    except OSError as e:
                        self.logger.warning(f"Cannot stat {entry.path}: {e}")
                        entries.append(DirectoryEntry(
                            path=entry.path,
                            name=entry.name,
                            mtime=None,
                            is_file=False,
                            error=str(e)
                        ))
        except OSError as e:
            raise DirectoryAccessError(e.errno, f"Cannot list {path}: {e.strerror}") from e

        return entries

    def stat_mtime(self, path: str) -> int:
        """Last modification time of a path in whole epoch seconds."""
        return int(os.stat(path).st_mtime)

    def read_last_line(self, path: str) -> Optional[str]:
        """Read the final line of a text file.

        A trailing newline ends the last line rather than starting an empty
        one. Returns None for an empty file.
        """
        with open(path, 'rb') as handle:
            handle.seek(0, os.SEEK_END)
            position = handle.tell()
            if position == 0:
                return None

            # Walk backwards block by block until a line break is found
            buffer = b''
            trailing_newline = None
            while position > 0:
                step = min(BLOCK_SIZE, position)
                position -= step
                handle.seek(position)
                buffer = handle.read(step) + buffer

                # The final newline terminates the last line
                if trailing_newline is None:
                    trailing_newline = buffer.endswith(b'\n')
                body = buffer[:-1] if trailing_newline else buffer

                index = body.rfind(b'\n')
                if index != -1:
                    return body[index + 1:].decode('utf-8', errors='replace')

        # No line break, the whole file is one line
        return body.decode('utf-8', errors='replace')
