"""Filesystem scanning for executables on a search path."""

import os
import stat
import threading

from loguru import logger


class DirectoryScanner:
    """Scans search-path directories for executables.

    A candidate executable is a regular file (or symlink) that the current
    user may execute. Directories that cannot be listed are expected on most
    systems and are skipped quietly; entries that cannot be stat'ed are
    skipped with a warning.

    Output order follows filesystem enumeration order. Callers should only
    rely on membership.
    """

    def __init__(self, timeout_s: float | None = None):
        """Initialize the scanner.

        Args:
            timeout_s: Optional limit in seconds for scanning one directory.
                       A directory that takes longer is skipped. None
                       disables the limit.
        """
        self.timeout_s = timeout_s

    def scan(self, path: str) -> list[str]:
        """Find executables in every directory of a colon-joined path.

        Args:
            path: One directory, or several joined with ':'

        Returns:
            Base names of the executables found, in enumeration order

        Example:
            >>> scanner = DirectoryScanner()
            >>> bins = scanner.scan("/usr/local/bin:/opt/tool/bin")
            >>> print(f"Found {len(bins)} executables")
        """
        executables = []

        for directory in path.split(":"):
            if not directory:
                continue

            logger.debug(f"Scanning PATH entry {directory}")

            if self.timeout_s is None:
                executables.extend(self._scan_directory(directory))
            else:
                executables.extend(self._scan_with_timeout(directory))

        return executables

    def _scan_with_timeout(self, directory: str) -> list[str]:
        # One daemon thread per directory; a worker that overruns is abandoned.
        found: list[str] = []
        worker = threading.Thread(
            target=lambda: found.extend(self._scan_directory(directory)),
            name=f"dirscan:{directory}",
            daemon=True,
        )
        worker.start()
        worker.join(self.timeout_s)

        if worker.is_alive():
            logger.warning(f"Scanning {directory} exceeded {self.timeout_s}s timeout, ignoring")
            return []
        return found

    def _scan_directory(self, directory: str) -> list[str]:
        try:
            entries = os.listdir(directory)
        except OSError as e:
            logger.debug(f"Failed to open {directory}, ignoring: {e}")
            return []

        found = []
        for name in entries:
            abs_path = os.path.join(directory, name)

            try:
                st = os.stat(abs_path)
            except OSError as e:
                logger.warning(f"Couldn't stat {abs_path}: {e}")
                continue

            if not (stat.S_ISREG(st.st_mode) or stat.S_ISLNK(st.st_mode)):
                continue
            if not os.access(abs_path, os.X_OK):
                continue

            found.append(name)

        return found
