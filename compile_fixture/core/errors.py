"""
Fixture failures.

Every failure the fixture detects is an AssertionError subclass, so
the test harness reports it as a failed assertion carrying the raw
compiler or runtime diagnostics. Nothing here is retried or recovered.
"""

from __future__ import annotations

from compile_fixture.core.models.process import ProcessResult


class FixtureError(AssertionError):
    """Base class for all fixture failures."""


class PreconditionError(FixtureError):
    """A required file or tool is missing."""


class CacheError(FixtureError):
    """Invalid use of the artifact cache."""


class GenerationError(FixtureError):
    """The binding generator failed or produced nothing."""


class ProcessFailure(FixtureError):
    """An external process finished with diagnostics or a bad exit code."""

    label = "Process"

    def __init__(self, result: ProcessResult, context: str = ""):
        self.result = result
        self.context = context
        super().__init__(self._format())

    def _format(self) -> str:
        head = f"{self.label} failed"
        if self.context:
            head += f" ({self.context})"
        head += f": exit code {self.result.exit_code}"
        if self.result.diagnostics:
            head += "\n" + self.result.diagnostics.rstrip("\n")
        return head


class CompilationError(ProcessFailure):
    """The compiler reported diagnostics or exited non-zero."""

    label = "Compilation"


class RuntimeTestError(ProcessFailure):
    """The emulated-runtime run wrote to its diagnostic stream."""

    label = "Emulated run"
