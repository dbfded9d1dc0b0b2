"""
Mock tools — test doubles for the process runner and the generator.

Used to exercise the fixture engine without a real compiler or
generator on disk. Configurable to return success, diagnostics, or a
custom result per call.
"""

from __future__ import annotations

import tempfile
from collections.abc import Mapping, Sequence
from pathlib import Path

from compile_fixture.adapters.shell.process import ProcessRunner
from compile_fixture.adapters.toolchain.generator import (
    BindingGenerator,
    GeneratedSources,
    GenerationRequest,
)
from compile_fixture.core.models.process import ProcessResult


class ScriptedRunner(ProcessRunner):
    """Process runner double.

    By default every call succeeds. When the argument vector carries a
    ``-d <path>`` pair, the output archive is created so callers see a
    real file, as they would after a real compile.
    """

    def __init__(self, create_outputs: bool = True):
        super().__init__()
        self.create_outputs = create_outputs
        self._queue: list[ProcessResult] = []
        self._calls: list[tuple[list[str], bool]] = []

    @property
    def calls(self) -> list[tuple[list[str], bool]]:
        """Every (argv, compiler) pair this runner has received."""
        return self._calls

    @property
    def call_count(self) -> int:
        return len(self._calls)

    def enqueue(self, result: ProcessResult) -> None:
        """Return ``result`` from the next call instead of success."""
        self._queue.append(result)

    def fail_next(self, diagnostics: str = "ERROR: mock failure\n", exit_code: int = 1) -> None:
        """Make the next call report diagnostics and a non-zero exit code."""
        self.enqueue(ProcessResult(diagnostics=diagnostics, exit_code=exit_code))

    def run(
        self,
        args: Sequence[str],
        compiler: bool = False,
        cwd: str | None = None,
    ) -> ProcessResult:
        argv = [str(a) for a in args]
        self._calls.append((argv, compiler))

        if self.create_outputs and "-d" in argv:
            index = argv.index("-d")
            if index + 1 < len(argv):
                Path(argv[index + 1]).touch()

        if self._queue:
            queued = self._queue.pop(0)
            return queued.model_copy(update={"args": tuple(argv)})
        return ProcessResult(args=tuple(argv))

    def reset(self) -> None:
        """Clear call log and queued results."""
        self._calls.clear()
        self._queue.clear()


class StaticBindingGenerator(BindingGenerator):
    """Generator double that writes a fixed set of sources.

    Files named in the request's exclusions are not written.
    """

    def __init__(self, sources: Mapping[str, str], temp_dir: Path | None = None):
        self.sources = dict(sources)
        self.temp_dir = temp_dir
        self.requests: list[GenerationRequest] = []
        self.outputs: list[GeneratedSources] = []

    def generate(self, request: GenerationRequest) -> GeneratedSources:
        self.requests.append(request)
        workdir = Path(tempfile.mkdtemp(prefix=f"gen-{request.version}-", dir=self.temp_dir))
        files = []
        for name, content in sorted(self.sources.items()):
            if name in request.excluded_files:
                continue
            path = workdir / name
            path.write_text(content, encoding="utf-8")
            files.append(path)
        generated = GeneratedSources(files=files, workdir=workdir)
        self.outputs.append(generated)
        return generated
