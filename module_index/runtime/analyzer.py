"""Dispatching module files to the extractor for their dialect.

This module provides the ModuleAnalyzer class, the main entry point for
analysis. It owns the Lua sandbox for its lifetime, selects an extractor by
dialect tag, and reports the executables each module file provides.
"""

from collections.abc import Mapping
from datetime import datetime
from pathlib import Path

from loguru import logger

from module_index.discovery.scanner import DirectoryScanner
from module_index.exceptions import (
    FileUnreadableError,
    SandboxError,
    UnknownDialectError,
)
from module_index.exec.lua_sandbox import LuaSandbox
from module_index.exec.sandbox import SandboxProvider
from module_index.models import (
    AnalysisPolicy,
    AnalysisResult,
    AuditEvent,
    ModuleDialect,
    ModuleFile,
)
from module_index.observability.audit import AuditSink
from module_index.parsing.lua import LuaModuleExtractor
from module_index.parsing.tcl import TclModuleExtractor


class ModuleAnalyzer:
    """Finds the executables a module file would put on PATH.

    ModuleAnalyzer is the main entry point for analysis. Lua-dialect files
    need the sandbox, which is created by ``initialize_sandbox()`` and
    released by ``shutdown_sandbox()``; the analyzer can also be used as a
    context manager that does both. Tcl-dialect files need no setup.

    Only unreadable module files and sandbox failures are reported as
    errors. Missing directories, failed expansions and unreadable entries
    are logged and analysis continues with partial results.

    Example:
        >>> from pathlib import Path
        >>> from module_index import ModuleAnalyzer, ModuleDialect
        >>>
        >>> with ModuleAnalyzer() as analyzer:
        ...     result = analyzer.analyze(Path("/opt/modules/gcc/9.2.0.lua"), ModuleDialect.LUA)
        ...     print(f"{result.count} executables: {result.executables}")
    """

    def __init__(
        self,
        policy: AnalysisPolicy | None = None,
        audit_sink: AuditSink | None = None,
        sandbox: SandboxProvider | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        """Initialize analyzer with configuration.

        Args:
            policy: Optional AnalysisPolicy. If None, uses default policy.
            audit_sink: Optional AuditSink for recording analyses.
                        If None, audit logging is disabled.
            sandbox: Optional sandbox to evaluate Lua-dialect files with.
                     If None, a LuaSandbox is built from the policy.
            environ: Optional mapping used for variable lookups during
                     expansion. If None, os.environ is read.
        """
        self._policy = policy or AnalysisPolicy()
        self._audit_sink = audit_sink
        self._sandbox = sandbox or LuaSandbox(self._policy)
        self._sandbox_ready = False

        self._scanner = DirectoryScanner(timeout_s=self._policy.scan_timeout_s)
        self._lua = LuaModuleExtractor(self._sandbox, self._scanner, environ)
        self._tcl = TclModuleExtractor(
            self._scanner,
            max_line_length=self._policy.max_line_length,
            environ=environ,
        )

    @property
    def policy(self) -> AnalysisPolicy:
        return self._policy

    def initialize_sandbox(self) -> None:
        """Load the Lua sandbox. Must be called before analyzing Lua-dialect files.

        Raises:
            SandboxInitError: If the sandbox support script cannot be loaded
        """
        self._sandbox.open()
        self._sandbox_ready = True

    def shutdown_sandbox(self) -> None:
        """Release the Lua sandbox."""
        self._sandbox.close()
        self._sandbox_ready = False

    def __enter__(self) -> "ModuleAnalyzer":
        self.initialize_sandbox()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown_sandbox()

    def analyze(self, module_file_path: Path | str, dialect: ModuleDialect | str) -> AnalysisResult:
        """Analyze one module file.

        Args:
            module_file_path: Path to the module file
            dialect: Dialect tag of the file

        Returns:
            AnalysisResult with the executables found (duplicates kept) and
            their count. Unknown dialect tags yield an empty result unless
            the policy sets strict_dialects.

        Raises:
            FileUnreadableError: If the module file cannot be read
            SandboxError: If the sandbox is not initialized or the module
                          fails inside it
            UnknownDialectError: If the dialect is unknown and the policy
                                 sets strict_dialects
        """
        module = ModuleFile(Path(module_file_path), dialect)
        resolved = ModuleDialect.parse(dialect)

        if resolved is None:
            if self._policy.strict_dialects:
                raise UnknownDialectError(f"Unknown module dialect {dialect!r} for {module.path}")
            logger.warning(f"Unknown module dialect {dialect!r} for {module.path}, skipping")
            return AnalysisResult(module=module)

        try:
            if resolved is ModuleDialect.LUA:
                if not self._sandbox_ready:
                    raise SandboxError("Lua sandbox is not initialized")
                executables = self._lua.extract(module)
            else:
                executables = self._tcl.extract(module)
        except (FileUnreadableError, SandboxError) as e:
            self._emit("error", module, resolved, detail={"error": str(e), "type": type(e).__name__})
            raise

        result = AnalysisResult(module=module, executables=executables)
        self._emit("analyze", module, resolved, count=result.count)
        return result

    def _emit(
        self,
        kind: str,
        module: ModuleFile,
        dialect: ModuleDialect,
        count: int | None = None,
        detail: dict | None = None,
    ) -> None:
        if self._audit_sink is None:
            return

        self._audit_sink.log(
            AuditEvent(
                ts=datetime.now(),
                kind=kind,
                module=module.name,
                dialect=dialect.value,
                path=str(module.path),
                count=count,
                detail=detail or {},
            )
        )
