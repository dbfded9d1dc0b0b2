"""Shell-level process execution."""

from compile_fixture.adapters.shell.process import ProcessRunner, classify_line

__all__ = ["ProcessRunner", "classify_line"]
