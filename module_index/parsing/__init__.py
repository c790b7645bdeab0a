"""Parsing module for Lua- and Tcl-dialect module files."""

from module_index.parsing.lua import LuaModuleExtractor
from module_index.parsing.tcl import TclModuleExtractor

__all__ = ["LuaModuleExtractor", "TclModuleExtractor"]
