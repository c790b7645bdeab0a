"""Runtime module for module file analysis."""

from module_index.runtime.analyzer import ModuleAnalyzer

__all__ = ["ModuleAnalyzer"]
