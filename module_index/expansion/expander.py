"""Shell-style word expansion for module path expressions.

Module files come from arbitrary sources, so expansion is restricted to
variable references, tilde prefixes, quoting and globbing. Command and
arithmetic substitution are rejected outright; nothing in this module
ever starts a process.
"""

import glob
import os
import re
from collections.abc import Mapping

from module_index.exceptions import ExpansionError

# Characters a POSIX shell would treat as operators when unquoted.
_BAD_CHARS = frozenset("|&;<>(){}\n")
_IFS = " \t\n"
_GLOB_CHARS = re.compile(r"[*?[]")
_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_LOGIN = re.compile(r"[A-Za-z0-9._-]*")


class _Word:
    """A word under construction.

    Keeps the literal text alongside a glob pattern in which quoted
    characters are escaped, so only unquoted metacharacters can match.
    """

    def __init__(self):
        self.text: list[str] = []
        self.pattern: list[str] = []
        self.magic = False

    def __bool__(self) -> bool:
        return bool(self.text)

    def add_literal(self, s: str) -> None:
        self.text.append(s)
        self.pattern.append(glob.escape(s))

    def add_unquoted(self, s: str) -> None:
        self.text.append(s)
        self.pattern.append(s)
        if _GLOB_CHARS.search(s):
            self.magic = True

    def fields(self) -> list[str]:
        text = "".join(self.text)
        if self.magic:
            matches = sorted(glob.glob("".join(self.pattern)))
            if matches:
                return matches
        return [text]


class WordExpander:
    """Expands path expressions the way ``wordexp(3)`` with WRDE_NOCMD would.

    Variable lookups consult the call-scoped ``bindings`` first and then
    ``environ``. Neither mapping is ever modified.

    Example:
        >>> expander = WordExpander({"ROOT": "/opt/tool"})
        >>> expander.expand("$ROOT/bin")
        '/opt/tool/bin'
    """

    def __init__(
        self,
        bindings: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self.bindings = bindings if bindings is not None else {}
        self.environ = environ if environ is not None else os.environ

    def expand(self, expr: str) -> str:
        """Expand ``expr`` and concatenate the resulting words.

        Raises:
            ExpansionError: If the expression is malformed or asks for
                            command or arithmetic substitution
        """
        return "".join(self.expand_words(expr))

    def expand_words(self, expr: str) -> list[str]:
        """Expand ``expr`` into its list of words after field splitting and globbing."""
        words: list[str] = []
        word = _Word()

        def finish() -> None:
            nonlocal word
            if word:
                words.extend(word.fields())
            word = _Word()

        i = 0
        n = len(expr)
        while i < n:
            ch = expr[i]

            if ch in " \t":
                finish()
                i += 1
            elif ch in _BAD_CHARS:
                raise ExpansionError(f"Illegal unquoted character {ch!r} in {expr!r}")
            elif ch == "\\":
                if i + 1 >= n:
                    raise ExpansionError(f"Trailing backslash in {expr!r}")
                word.add_literal(expr[i + 1])
                i += 2
            elif ch == "'":
                end = expr.find("'", i + 1)
                if end < 0:
                    raise ExpansionError(f"Unterminated single quote in {expr!r}")
                # '' still produces an (empty) word
                word.add_literal(expr[i + 1:end])
                i = end + 1
            elif ch == '"':
                i = self._double_quoted(expr, i + 1, word)
            elif ch == "`":
                raise ExpansionError(f"Command substitution is not allowed: {expr!r}")
            elif ch == "$":
                value, i = self._parameter(expr, i)
                if value is None:
                    word.add_unquoted("$")
                    continue
                # Field splitting applies to unquoted expansion results
                if value[:1] in _IFS:
                    finish()
                for index, piece in enumerate(value.split()):
                    if index:
                        finish()
                    word.add_unquoted(piece)
                if value[-1:] in _IFS:
                    finish()
            elif ch == "~" and not word:
                i = self._tilde(expr, i, word)
            else:
                word.add_unquoted(ch)
                i += 1

        finish()
        return words

    def lookup(self, name: str) -> str:
        """Return the value bound to ``name``, or an empty string."""
        if name in self.bindings:
            return self.bindings[name]
        return self.environ.get(name, "")

    def _double_quoted(self, expr: str, i: int, word: _Word) -> int:
        n = len(expr)
        word.add_literal("")
        while i < n:
            ch = expr[i]
            if ch == '"':
                return i + 1
            if ch == "\\" and i + 1 < n and expr[i + 1] in '$`"\\\n':
                word.add_literal(expr[i + 1])
                i += 2
            elif ch == "`":
                raise ExpansionError(f"Command substitution is not allowed: {expr!r}")
            elif ch == "$":
                value, i = self._parameter(expr, i)
                word.add_literal("$" if value is None else value)
            else:
                word.add_literal(ch)
                i += 1
        raise ExpansionError(f"Unterminated double quote in {expr!r}")

    def _parameter(self, expr: str, i: int) -> tuple[str | None, int]:
        """Expand the parameter reference starting at ``expr[i] == '$'``.

        Returns (value, next index). The value is None when the ``$`` does
        not start a reference and should stay literal.
        """
        nxt = expr[i + 1:i + 2]

        if nxt == "(":
            raise ExpansionError(f"Command or arithmetic substitution is not allowed: {expr!r}")

        if nxt == "{":
            end = expr.find("}", i + 2)
            if end < 0:
                raise ExpansionError(f"Unterminated parameter expansion in {expr!r}")
            name = expr[i + 2:end]
            if not _NAME.fullmatch(name):
                raise ExpansionError(f"Unsupported parameter expansion ${{{name}}} in {expr!r}")
            return self.lookup(name), end + 1

        match = _NAME.match(expr, i + 1)
        if match:
            return self.lookup(match.group()), match.end()

        # Positional and special parameters ($1, $$, $?) stay literal, unlike wordexp(3)
        return None, i + 1

    def _tilde(self, expr: str, i: int, word: _Word) -> int:
        end = expr.find("/", i)
        if end < 0:
            end = len(expr)
        login = expr[i + 1:end]

        if not _LOGIN.fullmatch(login):
            # Quoted or expanded characters in the prefix: no tilde expansion
            word.add_unquoted("~")
            return i + 1

        if login:
            home = os.path.expanduser("~" + login)
            if home.startswith("~"):
                home = None
        else:
            home = self.lookup("HOME") or os.path.expanduser("~")

        if home is None:
            word.add_unquoted(expr[i:end])
        else:
            word.add_literal(home)
        return end
