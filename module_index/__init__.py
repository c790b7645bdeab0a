"""module-index - find the executables environment modules put on PATH.

This library interprets Lmod (Lua) and Environment Modules (Tcl) module
files without applying their side effects, recovers the directories they add
to PATH, and scans those directories for executables.
"""

from module_index.exceptions import (
    ModuleIndexError,
    ConfigError,
    FileUnreadableError,
    ExpansionError,
    UnknownDialectError,
    SandboxError,
    SandboxInitError,
    SandboxEvaluationError,
)

from module_index.models import (
    ModuleDialect,
    ModuleFile,
    AnalysisResult,
    AnalysisPolicy,
    AuditEvent,
)

from module_index.config import load_policy
from module_index.expansion import WordExpander
from module_index.discovery import DirectoryScanner, ModuleFileScanner, roots_from_modulepath
from module_index.discovery.index import ModuleIndexer
from module_index.exec import LuaSandbox, SandboxProvider
from module_index.observability import AuditSink, JSONLAuditSink, StdoutAuditSink
from module_index.runtime import ModuleAnalyzer

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "ModuleIndexError",
    "ConfigError",
    "FileUnreadableError",
    "ExpansionError",
    "UnknownDialectError",
    "SandboxError",
    "SandboxInitError",
    "SandboxEvaluationError",
    # Models
    "ModuleDialect",
    "ModuleFile",
    "AnalysisResult",
    "AnalysisPolicy",
    "AuditEvent",
    # Configuration
    "load_policy",
    # Components
    "WordExpander",
    "DirectoryScanner",
    "ModuleFileScanner",
    "roots_from_modulepath",
    "ModuleIndexer",
    "LuaSandbox",
    "SandboxProvider",
    # Runtime
    "ModuleAnalyzer",
    # Observability
    "AuditSink",
    "JSONLAuditSink",
    "StdoutAuditSink",
]
