"""Filesystem scanning for module files."""

import os
from pathlib import Path

from loguru import logger

from module_index.models import ModuleDialect, ModuleFile

TCL_MAGIC = "#%Module"


def roots_from_modulepath(modulepath: str | None = None) -> list[Path]:
    """Split a MODULEPATH-style string into root directories.

    Args:
        modulepath: Colon-joined directories. Defaults to $MODULEPATH.
    """
    if modulepath is None:
        modulepath = os.environ.get("MODULEPATH", "")
    return [Path(entry) for entry in modulepath.split(":") if entry]


class ModuleFileScanner:
    """Scans module roots for module files and tags their dialect.

    Files ending in ``.lua`` are Lua-dialect module files. Other files are
    Tcl-dialect module files when their first line starts with ``#%Module``.
    Everything else (version files, READMEs, hidden files) is ignored.
    """

    def scan(self, roots: list[Path]) -> list[ModuleFile]:
        """Find all module files below the given roots.

        Args:
            roots: List of root directories to scan recursively

        Returns:
            ModuleFile objects sorted by path within each root

        Example:
            >>> scanner = ModuleFileScanner()
            >>> modules = scanner.scan(roots_from_modulepath())
            >>> print(f"Found {len(modules)} module files")
        """
        module_files = []

        for root in roots:
            root = Path(root).expanduser()

            if not root.is_dir():
                logger.debug(f"Module root {root} is not a directory, ignoring")
                continue

            for path in sorted(root.rglob("*")):
                if path.name.startswith(".") or not path.is_file():
                    continue

                dialect = self.detect_dialect(path)
                if dialect is not None:
                    module_files.append(ModuleFile(path, dialect))

        return module_files

    def detect_dialect(self, path: Path) -> ModuleDialect | None:
        """Return the dialect of a module file, or None if it is not one."""
        if path.suffix == ".lua":
            return ModuleDialect.LUA

        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                first_line = f.readline(len(TCL_MAGIC) + 1)
        except OSError as e:
            logger.debug(f"Couldn't read {path}: {e}")
            return None

        if first_line.startswith(TCL_MAGIC):
            return ModuleDialect.TCL
        return None
