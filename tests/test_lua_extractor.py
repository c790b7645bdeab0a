"""Unit tests for LuaModuleExtractor."""

from pathlib import Path

import pytest

from module_index.discovery import DirectoryScanner
from module_index.exceptions import FileUnreadableError, SandboxEvaluationError
from module_index.exec import SandboxProvider
from module_index.models import ModuleDialect, ModuleFile
from module_index.parsing import LuaModuleExtractor


class FakeSandbox(SandboxProvider):
    """Sandbox that returns a fixed PATH string and records what it ran."""

    def __init__(self, bin_paths: str = "", error: Exception | None = None):
        self.bin_paths = bin_paths
        self.error = error
        self.calls: list[tuple[str, str, str | None]] = []

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def run(self, code: str, filename: str = "modulefile", full_name: str | None = None) -> str:
        self.calls.append((code, filename, full_name))
        if self.error is not None:
            raise self.error
        return self.bin_paths


def lua(path: Path) -> ModuleFile:
    return ModuleFile(path, ModuleDialect.LUA)


def test_only_existing_directories_contribute(temp_dir: Path, make_bin_dir, write_module):
    existing = make_bin_dir("usr/local/bin", executables=["run"])
    missing = temp_dir / "opt" / "tool" / "bin"
    module = write_module("tool/1.0.lua", "-- module text")

    sandbox = FakeSandbox(f"{existing}:{missing}")
    extractor = LuaModuleExtractor(sandbox, DirectoryScanner(), environ={})

    assert extractor.extract(lua(module)) == ["run"]


def test_module_text_and_names_are_passed_to_sandbox(write_module):
    module = write_module("gcc/9.2.0.lua", 'prepend_path("PATH", "/x")\n')

    sandbox = FakeSandbox("")
    LuaModuleExtractor(sandbox, DirectoryScanner(), environ={}).extract(lua(module))

    assert sandbox.calls == [('prepend_path("PATH", "/x")\n', str(module), "gcc/9.2.0")]


def test_segments_are_expanded(temp_dir: Path, make_bin_dir, write_module):
    make_bin_dir("apps/bin", executables=["app"])
    module = write_module("apps/1.0.lua", "")

    sandbox = FakeSandbox("$APPS_ROOT/bin")
    extractor = LuaModuleExtractor(sandbox, DirectoryScanner(), environ={"APPS_ROOT": str(temp_dir / "apps")})

    assert extractor.extract(lua(module)) == ["app"]


def test_failed_expansion_skips_segment(make_bin_dir, write_module, log_messages):
    bin_dir = make_bin_dir("bin", executables=["run"])
    module = write_module("x/1.0.lua", "")

    sandbox = FakeSandbox(f"$(id):{bin_dir}")
    extractor = LuaModuleExtractor(sandbox, DirectoryScanner(), environ={})

    assert extractor.extract(lua(module)) == ["run"]
    assert any(m.startswith("DEBUG: Expansion failed") for m in log_messages)


def test_empty_result(write_module):
    module = write_module("empty/1.0.lua", "")

    extractor = LuaModuleExtractor(FakeSandbox(""), DirectoryScanner(), environ={})

    assert extractor.extract(lua(module)) == []


def test_unreadable_file_raises(temp_dir: Path):
    sandbox = FakeSandbox("/bin")
    extractor = LuaModuleExtractor(sandbox, DirectoryScanner())

    with pytest.raises(FileUnreadableError):
        extractor.extract(lua(temp_dir / "missing.lua"))

    assert sandbox.calls == []


def test_sandbox_error_propagates(write_module):
    module = write_module("broken/1.0.lua", "this is not lua")
    sandbox = FakeSandbox(error=SandboxEvaluationError("syntax error"))

    extractor = LuaModuleExtractor(sandbox, DirectoryScanner())

    with pytest.raises(SandboxEvaluationError):
        extractor.extract(lua(module))
