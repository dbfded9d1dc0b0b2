"""
Compiler adapter — drive the external compiler.

Invocation shape:

    <compiler> -d <output archive> -classpath <classpath> <source>...

Runs in compiler mode, so marker-prefixed lines land on the
diagnostic stream of the returned ProcessResult.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from compile_fixture.adapters.base import ToolAdapter
from compile_fixture.adapters.shell.process import ProcessRunner
from compile_fixture.core.models.process import ProcessResult


class CompilerAdapter(ToolAdapter):
    """Compile source files into a single output archive."""

    def __init__(self, compiler_path: Path, runner: ProcessRunner | None = None):
        super().__init__(runner)
        self.compiler_path = Path(compiler_path)

    @property
    def name(self) -> str:
        return "compiler"

    @property
    def executable(self) -> str:
        return str(self.compiler_path.absolute())

    def build_args(
        self,
        output: Path,
        classpath: str,
        sources: Sequence[Path],
    ) -> list[str]:
        """Assemble the full compiler argument vector."""
        args = [
            self.executable,
            "-d", str(Path(output).absolute()),
            "-classpath", classpath,
        ]
        args.extend(str(Path(s).absolute()) for s in sources)
        return args

    def compile(
        self,
        output: Path,
        classpath: str,
        sources: Sequence[Path],
    ) -> ProcessResult:
        """Compile ``sources`` into ``output``; the caller judges the result."""
        return self.runner.run(self.build_args(output, classpath, sources), compiler=True)
