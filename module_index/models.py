"""Data models for module-index."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class ModuleDialect(Enum):
    """Syntax family of a module file."""
    LUA = "lua"
    TCL = "tcl"

    @classmethod
    def parse(cls, tag: "ModuleDialect | str | None") -> "ModuleDialect | None":
        """Resolve a dialect tag, returning None when it is not recognised.

        Accepts enum members, their values (case-insensitive) and the
        ``lmod`` alias for the Lua dialect.
        """
        if isinstance(tag, cls):
            return tag
        if not isinstance(tag, str):
            return None
        value = tag.strip().lower()
        if value == "lmod":
            return cls.LUA
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class ModuleFile:
    """A module file on disk together with its dialect tag."""
    path: Path
    dialect: ModuleDialect | str

    @property
    def name(self) -> str:
        """Module name as ``<package>/<version>``, e.g. ``gcc/9.2.0``."""
        path = Path(self.path)
        version = path.stem if path.suffix == ".lua" else path.name
        if path.parent.name:
            return f"{path.parent.name}/{version}"
        return version

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        dialect = self.dialect.value if isinstance(self.dialect, ModuleDialect) else self.dialect
        return {
            "path": str(self.path),
            "dialect": dialect,
            "name": self.name,
        }


@dataclass
class AnalysisResult:
    """Executables discovered for one module file."""
    module: ModuleFile
    executables: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.executables)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "module": self.module.to_dict(),
            "executables": list(self.executables),
            "count": self.count,
        }


@dataclass
class AuditEvent:
    """Record of an analysis operation."""
    ts: datetime
    kind: str  # "analyze", "index", "error"
    module: str
    dialect: str | None = None
    path: str | None = None
    count: int | None = None
    detail: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "ts": self.ts.isoformat(),
            "kind": self.kind,
            "module": self.module,
            "dialect": self.dialect,
            "path": self.path,
            "count": self.count,
            "detail": self.detail,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEvent":
        """Deserialize from dict."""
        return cls(
            ts=datetime.fromisoformat(data["ts"]),
            kind=data["kind"],
            module=data["module"],
            dialect=data.get("dialect"),
            path=data.get("path"),
            count=data.get("count"),
            detail=data.get("detail", {}),
        )


@dataclass
class AnalysisPolicy:
    """Configuration for module analysis limits and behaviour."""
    max_line_length: int = 4096
    sandbox_script: Path | None = None
    lua_max_memory: int | None = 64 * 1024 * 1024
    lua_instruction_limit: int = 10_000_000
    scan_timeout_s: float | None = None
    strict_dialects: bool = False

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "max_line_length": self.max_line_length,
            "sandbox_script": str(self.sandbox_script) if self.sandbox_script else None,
            "lua_max_memory": self.lua_max_memory,
            "lua_instruction_limit": self.lua_instruction_limit,
            "scan_timeout_s": self.scan_timeout_s,
            "strict_dialects": self.strict_dialects,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisPolicy":
        """Deserialize from dict."""
        sandbox_script = data.get("sandbox_script")
        return cls(
            max_line_length=data.get("max_line_length", 4096),
            sandbox_script=Path(sandbox_script).expanduser() if sandbox_script else None,
            lua_max_memory=data.get("lua_max_memory", 64 * 1024 * 1024),
            lua_instruction_limit=data.get("lua_instruction_limit", 10_000_000),
            scan_timeout_s=data.get("scan_timeout_s"),
            strict_dialects=data.get("strict_dialects", False),
        )
