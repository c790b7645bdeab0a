"""Helpers shared by the module file extractors."""

from pathlib import Path

from loguru import logger

from module_index.discovery.scanner import DirectoryScanner
from module_index.exceptions import ExpansionError, FileUnreadableError
from module_index.expansion.expander import WordExpander


def scan_expression(expr: str, expander: WordExpander, scanner: DirectoryScanner) -> list[str]:
    """Expand a raw path expression and scan the directories it names.

    A failed expansion contributes no directories; it is logged and an empty
    list is returned.
    """
    try:
        expanded = expander.expand(expr)
    except ExpansionError as e:
        logger.debug(f"Expansion failed on string \"{expr}\": {e}")
        return []

    return scanner.scan(expanded)


def read_module_text(path: Path) -> str:
    """Read a whole module file.

    Raises:
        FileUnreadableError: If the file cannot be opened or read
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise FileUnreadableError(f"Couldn't open {path} for reading: {e}") from e
