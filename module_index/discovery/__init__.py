"""Discovery module for module files, search-path scanning and indexing."""

from module_index.discovery.scanner import DirectoryScanner
from module_index.discovery.modules import ModuleFileScanner, roots_from_modulepath

__all__ = ["DirectoryScanner", "ModuleFileScanner", "roots_from_modulepath"]
