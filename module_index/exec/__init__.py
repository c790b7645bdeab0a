"""Execution module for sandboxed module file evaluation."""

from module_index.exec.sandbox import SandboxProvider
from module_index.exec.lua_sandbox import LuaSandbox

__all__ = ["SandboxProvider", "LuaSandbox"]
