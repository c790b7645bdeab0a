"""Sandbox provider interface for module file evaluation.

This module defines the abstract base class for sandboxes that evaluate
untrusted module file code. A sandbox records the directories the code
would add to PATH instead of performing any of the code's side effects.
"""

from abc import ABC, abstractmethod


class SandboxProvider(ABC):
    """Abstract interface for module evaluation sandboxes.

    A sandbox is a long-lived resource: it is opened once, used for any
    number of evaluations, and closed at shutdown. Implementations must
    serialize ``run`` if their interpreter state is not reentrant.

    The sandbox is responsible for:
    - Intercepting PATH mutations and reporting their arguments
    - Denying every operation it does not explicitly allow
    - Bounding the resources one evaluation may consume

    Example implementations:
    - LuaSandbox: Evaluate Lmod module files with an embedded Lua runtime
    """

    @abstractmethod
    def open(self) -> None:
        """Create the interpreter state and load support code.

        Raises:
            SandboxInitError: If the interpreter or its support code
                              cannot be loaded
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the interpreter state. Safe to call more than once."""
        pass

    @abstractmethod
    def run(self, code: str, filename: str = "modulefile", full_name: str | None = None) -> str:
        """Evaluate module code and return the PATH additions.

        Args:
            code: Full text of the module file
            filename: Name reported to the module as its file name
            full_name: Module name reported to the module (``name/version``)

        Returns:
            Directories added to PATH, joined with ':'

        Raises:
            SandboxError: If the sandbox has not been opened
            SandboxEvaluationError: If evaluation fails
        """
        pass

    def __enter__(self) -> "SandboxProvider":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
