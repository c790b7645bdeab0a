"""Executable indexing for analyzed module files."""

from loguru import logger

from module_index.exceptions import ModuleIndexError
from module_index.models import ModuleFile
from module_index.runtime.analyzer import ModuleAnalyzer


class ModuleIndexer:
    """Builds an executable-to-modules index from module files.

    The indexer analyzes each module file and records which modules provide
    each executable name. A module file that fails to analyze is logged and
    skipped, so one bad file never stops the batch.
    """

    def __init__(self, analyzer: ModuleAnalyzer):
        """Initialize the indexer.

        Args:
            analyzer: Analyzer to run on each module file. Its sandbox must be
                      initialized if any Lua-dialect files are indexed.
        """
        self.analyzer = analyzer
        self.failures: list[tuple[ModuleFile, ModuleIndexError]] = []

    def build(self, module_files: list[ModuleFile]) -> dict[str, list[str]]:
        """Analyze module files and map each executable to its modules.

        Args:
            module_files: Module files to analyze

        Returns:
            Dict from executable name to the names of the modules providing
            it, in the order the modules were given, without duplicates

        Example:
            >>> with ModuleAnalyzer() as analyzer:
            ...     index = ModuleIndexer(analyzer).build(ModuleFileScanner().scan(roots))
            >>> index["gcc"]
            ['gcc/9.2.0', 'gcc/10.1.0']
        """
        index: dict[str, list[str]] = {}
        self.failures = []

        for module_file in module_files:
            try:
                result = self.analyzer.analyze(module_file.path, module_file.dialect)
            except ModuleIndexError as e:
                logger.warning(f"Failed to analyze {module_file.path}: {e}")
                self.failures.append((module_file, e))
                continue

            for name in result.executables:
                providers = index.setdefault(name, [])
                if module_file.name not in providers:
                    providers.append(module_file.name)

        return index
