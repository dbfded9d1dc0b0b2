"""
Adapter base — the contract between the fixture engine and external tools.

The engine only talks to the compiler and the runtime harness through
adapters: they know the tool's argument vector, the engine knows what
to compile and which outcome is acceptable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from compile_fixture.adapters.shell.process import ProcessRunner


class ToolAdapter(ABC):
    """Abstract base class for external tool adapters.

    To create a new adapter:
        1. Subclass ToolAdapter
        2. Implement name and executable
        3. Register it in the AdapterRegistry
    """

    def __init__(self, runner: ProcessRunner | None = None):
        self.runner = runner or ProcessRunner()

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'compiler', 'runtime')."""

    @property
    @abstractmethod
    def executable(self) -> str:
        """Path or command name of the underlying tool."""

    def is_available(self) -> bool:
        """Check that the tool exists on disk. Fast, never raises."""
        return Path(self.executable).is_file()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
