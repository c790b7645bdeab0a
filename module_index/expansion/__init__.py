"""Shell-style word expansion without command substitution."""

from module_index.expansion.expander import WordExpander

__all__ = ["WordExpander"]
