"""Extraction of PATH directories from Lmod (Lua dialect) module files."""

from collections.abc import Mapping
from pathlib import Path

from module_index.discovery.scanner import DirectoryScanner
from module_index.exec.sandbox import SandboxProvider
from module_index.expansion.expander import WordExpander
from module_index.models import ModuleFile
from module_index.parsing.common import read_module_text, scan_expression


class LuaModuleExtractor:
    """Finds executables provided by a Lua-dialect module file.

    The file is evaluated in the sandbox, which reports the directories the
    module prepends or appends to PATH. Each directory is expanded and
    scanned for executables.
    """

    def __init__(
        self,
        sandbox: SandboxProvider,
        scanner: DirectoryScanner,
        environ: Mapping[str, str] | None = None,
    ):
        self.sandbox = sandbox
        self.scanner = scanner
        self.environ = environ

    def extract(self, module_file: ModuleFile) -> list[str]:
        """Evaluate a module file and scan the PATH entries it adds.

        Args:
            module_file: Lua-dialect module file to analyze

        Returns:
            Base names of the executables found, duplicates included

        Raises:
            FileUnreadableError: If the module file cannot be read
            SandboxEvaluationError: If the module fails inside the sandbox
        """
        path = Path(module_file.path)
        code = read_module_text(path)

        bin_paths = self.sandbox.run(code, filename=str(path), full_name=module_file.name)

        expander = WordExpander(environ=self.environ)
        executables = []
        for bin_path in bin_paths.split(":"):
            if not bin_path:
                continue
            executables.extend(scan_expression(bin_path, expander, self.scanner))

        return executables
