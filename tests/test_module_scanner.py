"""Unit tests for ModuleFileScanner."""

from pathlib import Path

from module_index.discovery import ModuleFileScanner, roots_from_modulepath
from module_index.models import ModuleDialect


def test_scanner_finds_both_dialects(write_module, temp_dir: Path):
    lua = write_module("gcc/9.2.0.lua", 'prepend_path("PATH", "/x")\n')
    tcl = write_module("python/3.11", "#%Module1.0\nprepend-path PATH /y\n")

    modules = ModuleFileScanner().scan([temp_dir / "modules"])

    assert [(m.path, m.dialect) for m in modules] == [
        (lua, ModuleDialect.LUA),
        (tcl, ModuleDialect.TCL),
    ]


def test_scanner_ignores_non_module_files(write_module, temp_dir: Path):
    write_module("gcc/.version", "#%Module\nset ModulesVersion 9.2.0\n")
    write_module("gcc/README", "Compilers\n")
    write_module("gcc/.hidden.lua", "")
    kept = write_module("gcc/9.2.0", "#%Module\n")

    modules = ModuleFileScanner().scan([temp_dir / "modules"])

    assert [m.path for m in modules] == [kept]


def test_scanner_handles_nonexistent_root(temp_dir: Path):
    assert ModuleFileScanner().scan([temp_dir / "missing"]) == []


def test_scanner_supports_multiple_roots(temp_dir: Path):
    first = temp_dir / "core"
    second = temp_dir / "apps"
    (first / "a").mkdir(parents=True)
    (second / "b").mkdir(parents=True)
    (first / "a" / "1.lua").write_text("")
    (second / "b" / "2").write_text("#%Module\n")

    modules = ModuleFileScanner().scan([first, second])

    assert [m.name for m in modules] == ["a/1", "b/2"]


def test_detect_dialect(write_module):
    scanner = ModuleFileScanner()

    assert scanner.detect_dialect(write_module("a/1.lua", "")) is ModuleDialect.LUA
    assert scanner.detect_dialect(write_module("a/2", "#%Module1.0\n")) is ModuleDialect.TCL
    assert scanner.detect_dialect(write_module("a/3", "echo hi\n")) is None


def test_detect_dialect_of_missing_file(temp_dir: Path):
    assert ModuleFileScanner().detect_dialect(temp_dir / "missing") is None


def test_roots_from_modulepath(monkeypatch):
    assert roots_from_modulepath("/a::/b") == [Path("/a"), Path("/b")]

    monkeypatch.setenv("MODULEPATH", "/opt/modules:/usr/share/modules")
    assert roots_from_modulepath() == [Path("/opt/modules"), Path("/usr/share/modules")]

    monkeypatch.delenv("MODULEPATH")
    assert roots_from_modulepath() == []
