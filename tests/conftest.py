"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest
from loguru import logger


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def log_messages() -> Generator[list[str], None, None]:
    """Capture loguru output as "LEVEL: message" strings."""
    messages: list[str] = []

    def sink(message):
        record = message.record
        messages.append(f"{record['level'].name}: {record['message']}")

    handler_id = logger.add(sink, level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def make_bin_dir(temp_dir: Path) -> Callable[..., Path]:
    """Factory creating a directory with executable and plain files.

    Usage: make_bin_dir("opt/tool/bin", executables=["run"], plain=["README"])
    """

    def factory(relpath: str, executables=(), plain=()) -> Path:
        bin_dir = temp_dir / relpath
        bin_dir.mkdir(parents=True, exist_ok=True)
        for name in executables:
            exe = bin_dir / name
            exe.write_text("#!/bin/sh\nexit 0\n")
            exe.chmod(0o755)
        for name in plain:
            data = bin_dir / name
            data.write_text("not executable\n")
            data.chmod(0o644)
        return bin_dir

    return factory


@pytest.fixture
def write_module(temp_dir: Path) -> Callable[[str, str], Path]:
    """Factory writing a module file below temp_dir/modules."""

    def factory(relpath: str, content: str) -> Path:
        module_path = temp_dir / "modules" / relpath
        module_path.parent.mkdir(parents=True, exist_ok=True)
        module_path.write_text(content)
        return module_path

    return factory
