"""Extraction of PATH directories from Tcl-dialect module files.

This is a line-oriented recognizer, not a Tcl interpreter. It understands
three statements:

    set NAME VALUE
    prepend-path PATH VALUE
    append-path PATH VALUE

Everything else is ignored, so module files that build PATH through other
Tcl constructs will under-report.
"""

from collections.abc import Mapping
from pathlib import Path

from loguru import logger

from module_index.discovery.scanner import DirectoryScanner
from module_index.exceptions import ExpansionError, FileUnreadableError
from module_index.expansion.expander import WordExpander
from module_index.models import ModuleFile
from module_index.parsing.common import scan_expression

PATH_COMMANDS = {"prepend-path", "append-path"}


class TclModuleExtractor:
    """Finds executables provided by a Tcl-dialect module file."""

    def __init__(
        self,
        scanner: DirectoryScanner,
        max_line_length: int = 4096,
        environ: Mapping[str, str] | None = None,
    ):
        self.scanner = scanner
        self.max_line_length = max_line_length
        self.environ = environ

    def extract(self, module_file: ModuleFile) -> list[str]:
        """Interpret a module file line by line and scan the PATH entries it adds.

        Values bound by ``set`` live in a table local to this call; the
        process environment is never modified.

        Args:
            module_file: Tcl-dialect module file to analyze

        Returns:
            Base names of the executables found, duplicates included

        Raises:
            FileUnreadableError: If the module file cannot be read
        """
        path = Path(module_file.path)
        bindings: dict[str, str] = {}
        expander = WordExpander(bindings, self.environ)
        executables = []

        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                for lineno, line in enumerate(f, start=1):
                    if len(line.rstrip("\n")) > self.max_line_length:
                        logger.warning(
                            f"{path}:{lineno}: line exceeds {self.max_line_length} "
                            f"characters, ignoring"
                        )
                        continue
                    executables.extend(self._statement(line, bindings, expander))
        except OSError as e:
            raise FileUnreadableError(f"Couldn't open {path} for reading: {e}") from e

        return executables

    def _statement(self, line: str, bindings: dict[str, str], expander: WordExpander) -> list[str]:
        if line.endswith("\n"):
            line = line[:-1]

        tokens = line.split()
        if not tokens or tokens[0].startswith("#"):
            return []

        cmd = tokens[0]

        if cmd == "set":
            if len(tokens) < 3:
                return []
            name, value = tokens[1], tokens[2]
            try:
                bindings[name] = expander.expand(value)
            except ExpansionError as e:
                logger.debug(f"Expansion failed on string \"{value}\": {e}")
            return []

        if cmd in PATH_COMMANDS:
            if len(tokens) < 3 or tokens[1] != "PATH":
                return []
            return scan_expression(tokens[2], expander, self.scanner)

        return []
