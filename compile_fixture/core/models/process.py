"""
Process models — the result contract of every external tool invocation.

The process runner sends an argument vector, the child process writes
to stdout/stderr, and the runner hands back a ProcessResult. Lines are
sorted into two streams: informational output and diagnostics.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class LineKind(str, Enum):
    """Classification of a single line of subprocess output."""

    INFO = "info"
    DIAGNOSTIC = "diagnostic"


class ProcessResult(BaseModel):
    """Outcome of one subprocess invocation.

    ``output`` and ``diagnostics`` hold every classified line, each
    terminated by a newline. Immutable once returned.
    """

    model_config = ConfigDict(frozen=True)

    args: tuple[str, ...] = ()
    output: str = ""
    diagnostics: str = ""
    exit_code: int = 0
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Exit code 0 and nothing on the diagnostic stream."""
        return self.exit_code == 0 and self.diagnostics == ""

    @property
    def command(self) -> str:
        """The argument vector as a single display string."""
        return " ".join(self.args)
