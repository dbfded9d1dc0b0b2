"""
Process runner — launch an external tool and capture classified output.

This is the most fundamental piece of the fixture: every compiler and
emulated-runtime invocation goes through it. Both pipes are drained
concurrently so a chatty child can never block on a full stderr
buffer while we are still reading stdout.
"""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from collections.abc import Sequence
from typing import IO

from compile_fixture.core.models.process import LineKind, ProcessResult

logger = logging.getLogger(__name__)

DEFAULT_DIAGNOSTIC_MARKER = "ERROR"


def classify_line(
    line: str,
    compiler: bool,
    marker: str = DEFAULT_DIAGNOSTIC_MARKER,
) -> LineKind:
    """Decide which stream a line of output belongs to.

    Only compiler invocations produce diagnostics: a line that starts
    with the marker token. Everything else is informational.
    """
    if compiler and line.startswith(marker):
        return LineKind.DIAGNOSTIC
    return LineKind.INFO


class _StreamReader(threading.Thread):
    """Drain one pipe line by line into memory."""

    def __init__(self, stream: IO[str], label: str):
        super().__init__(name=f"process-{label}", daemon=True)
        self._stream = stream
        self.lines: list[str] = []
        self.error: BaseException | None = None

    def run(self) -> None:
        try:
            with self._stream:
                for raw in self._stream:
                    self.lines.append(raw.rstrip("\r\n"))
        except BaseException as e:  # re-raised in the caller's thread
            self.error = e


class ProcessRunner:
    """Run external processes to completion and classify their output.

    No timeout and no retry: a hung tool blocks the caller, and a
    launch failure (``OSError``) propagates unchanged.
    """

    def __init__(self, diagnostic_marker: str = DEFAULT_DIAGNOSTIC_MARKER):
        self.diagnostic_marker = diagnostic_marker

    def run(
        self,
        args: Sequence[str],
        compiler: bool = False,
        cwd: str | None = None,
    ) -> ProcessResult:
        """Execute ``args`` and block until the process exits.

        Args:
            args: Full argument vector, executable first.
            compiler: Route marker-prefixed lines to the diagnostic stream.
            cwd: Optional working directory for the child.

        Returns:
            ProcessResult with informational text, diagnostic text and
            the exit code.
        """
        argv = [str(a) for a in args]
        logger.info("Exec process: %s", argv)
        start = time.monotonic()

        proc = subprocess.Popen(
            argv,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        assert proc.stdout is not None and proc.stderr is not None

        readers = [
            _StreamReader(proc.stdout, "stdout"),
            _StreamReader(proc.stderr, "stderr"),
        ]
        for reader in readers:
            reader.start()
        for reader in readers:
            reader.join()
        exit_code = proc.wait()

        for reader in readers:
            if reader.error is not None:
                raise reader.error

        output: list[str] = []
        diagnostics: list[str] = []
        # stdout lines first, then stderr; order within each pipe is kept
        for reader in readers:
            for line in reader.lines:
                kind = classify_line(line, compiler, self.diagnostic_marker)
                target = diagnostics if kind is LineKind.DIAGNOSTIC else output
                target.append(line + "\n")

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Process %s exited with %d in %dms", argv[0], exit_code, elapsed_ms)

        return ProcessResult(
            args=tuple(argv),
            output="".join(output),
            diagnostics="".join(diagnostics),
            exit_code=exit_code,
            duration_ms=elapsed_ms,
        )
