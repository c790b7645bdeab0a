"""Lua sandbox implementation backed by lupa.

The sandbox evaluates Lmod module files inside an embedded Lua runtime.
Module code only sees the functions listed in the packaged ``sandbox.lua``
support script; PATH additions are recorded and returned rather than
applied.
"""

import os
import threading
from importlib import resources
from pathlib import Path

import lupa
from loguru import logger

from module_index.exceptions import SandboxError, SandboxEvaluationError, SandboxInitError
from module_index.exec.sandbox import SandboxProvider
from module_index.models import AnalysisPolicy

ENTRY_POINT = "sandbox_run"

# Undoes what an aborted sandbox_run may leave behind.
RESET_CODE = """
function()
    debug.sethook()
    getmetatable("").__index = string
end
"""


def default_sandbox_script() -> str:
    """Return the text of the packaged sandbox support script."""
    return resources.files("module_index.exec").joinpath("sandbox.lua").read_text(encoding="utf-8")


class LuaSandbox(SandboxProvider):
    """Evaluate Lmod module files in a restricted Lua runtime.

    One LuaSandbox owns one Lua state. The state is not reentrant, so every
    call to ``run`` is serialized by an internal lock; callers that need
    parallel Lua evaluation should create one sandbox per worker.

    Example:
        >>> with LuaSandbox() as sandbox:
        ...     sandbox.run('prepend_path("PATH", "/opt/tool/bin")')
        '/opt/tool/bin'
    """

    def __init__(self, policy: AnalysisPolicy | None = None):
        self.policy = policy or AnalysisPolicy()
        self._runtime: lupa.LuaRuntime | None = None
        self._entry = None
        self._reset = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._runtime is not None

    def open(self) -> None:
        if self._runtime is not None:
            return

        script_path = self.policy.sandbox_script
        try:
            if script_path is not None:
                script = Path(script_path).read_text(encoding="utf-8")
            else:
                script = default_sandbox_script()
        except OSError as e:
            raise SandboxInitError(f"Failed to read Lua sandbox script: {e}") from e

        options = {
            "unpack_returned_tuples": True,
            "register_eval": False,
            "register_builtins": False,
        }
        if self.policy.lua_max_memory is not None:
            options["max_memory"] = self.policy.lua_max_memory

        try:
            runtime = lupa.LuaRuntime(**options)
            lua_globals = runtime.globals()
            lua_globals.host_is_dir = os.path.isdir
            lua_globals.host_is_file = os.path.isfile
            runtime.execute(script)
            reset = runtime.eval(RESET_CODE)
        except lupa.LuaError as e:
            raise SandboxInitError(f"Failed to load Lua helper files: {e}") from e

        entry = runtime.globals()[ENTRY_POINT]
        if entry is None:
            raise SandboxInitError(f"Lua sandbox script does not define {ENTRY_POINT}()")

        self._runtime = runtime
        self._entry = entry
        self._reset = reset
        logger.debug("Lua sandbox initialized")

    def close(self) -> None:
        with self._lock:
            self._entry = None
            self._reset = None
            self._runtime = None

    def run(self, code: str, filename: str = "modulefile", full_name: str | None = None) -> str:
        with self._lock:
            if self._runtime is None:
                raise SandboxError("Lua sandbox is not initialized")

            try:
                result = self._entry(
                    code,
                    filename,
                    full_name or filename,
                    self.policy.lua_instruction_limit,
                )
            except (lupa.LuaError, UnicodeDecodeError) as e:
                raise SandboxEvaluationError(f"Error evaluating {filename}: {e}") from e
            finally:
                self._reset()

        if result is None:
            return ""
        return str(result)
