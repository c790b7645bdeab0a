"""Exception classes for module-index."""


class ModuleIndexError(Exception):
    """Base exception for all module-index errors."""
    pass


class ConfigError(ModuleIndexError):
    """Raised when an analysis policy file cannot be loaded."""
    pass


class FileUnreadableError(ModuleIndexError):
    """Raised when a module file cannot be opened or read."""
    pass


class ExpansionError(ModuleIndexError):
    """Raised when word expansion rejects its input."""
    pass


class UnknownDialectError(ModuleIndexError):
    """Raised for unknown dialect tags when strict dialects are enabled."""
    pass


class SandboxError(ModuleIndexError):
    """Raised when the Lua sandbox is unavailable or misused."""
    pass


class SandboxInitError(SandboxError):
    """Raised when the Lua sandbox cannot be created or its support script fails to load."""
    pass


class SandboxEvaluationError(SandboxError):
    """Raised when a module file fails inside the Lua sandbox."""
    pass
